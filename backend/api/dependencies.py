"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations from settings. Each module exposes its service through an
interface, and this file creates the concrete implementations.

The storage backend (Supabase or in-memory) and the email transport are
chosen here, once, from configuration.
"""

import logging
from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IUserRepository
    from modules.auth.passwords import PasswordHasher
    from modules.auth.policy import AdminPolicy
    from modules.auth.tokens import TokenService
    from modules.auth.verification import VerificationManager
    from modules.catalog.interfaces import IProductRepository
    from modules.catalog.service import CatalogService
    from modules.grants.interfaces import IGrantRepository
    from modules.grants.service import GrantService
    from modules.notifications.mailer import Mailer
    from modules.profile.service import ProfileService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.reset()

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @property
    def uses_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def db(self):
        """Supabase client; only available with STORAGE_BACKEND=supabase."""
        from shared.database import get_supabase_client
        return get_supabase_client()

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._users is None:
            from modules.auth.repository import InMemoryUserRepository, UserRepository
            self._users = UserRepository(self.db) if self.uses_supabase else InMemoryUserRepository()
        return self._users

    @property
    def products(self) -> "IProductRepository":
        """Get the product repository instance."""
        if self._products is None:
            from modules.catalog.repository import InMemoryProductRepository, ProductRepository
            self._products = (
                ProductRepository(self.db) if self.uses_supabase else InMemoryProductRepository()
            )
        return self._products

    @property
    def grant_repository(self) -> "IGrantRepository":
        """Get the grant repository instance."""
        if self._grant_repository is None:
            from modules.grants.repository import GrantRepository, InMemoryGrantRepository
            self._grant_repository = (
                GrantRepository(self.db) if self.uses_supabase else InMemoryGrantRepository()
            )
        return self._grant_repository

    def check_storage(self) -> None:
        """
        Fail fast when the configured store is unreachable.

        Raises:
            RuntimeError: Missing Supabase configuration
            Exception: Whatever the client raises on the check query
        """
        if not self.uses_supabase:
            logger.warning("Using in-memory storage; data is lost on restart")
            return
        from shared.database import check_connection
        check_connection(self.db)
        logger.info("Supabase connection OK")

    # -------------------------------------------------------------------------
    # Auth building blocks
    # -------------------------------------------------------------------------

    @property
    def hasher(self) -> "PasswordHasher":
        if self._hasher is None:
            from modules.auth.passwords import PasswordHasher
            self._hasher = PasswordHasher(self.settings.bcrypt_rounds)
        return self._hasher

    @property
    def tokens(self) -> "TokenService":
        if self._tokens is None:
            from modules.auth.tokens import TokenService
            self._tokens = TokenService(
                secret=self.settings.jwt_secret,
                issuer=self.settings.jwt_issuer,
                audience=self.settings.jwt_audience,
                default_ttl=timedelta(seconds=self.settings.token_ttl_seconds),
            )
        return self._tokens

    @property
    def admin_policy(self) -> "AdminPolicy":
        if self._admin_policy is None:
            from modules.auth.policy import AdminPolicy
            self._admin_policy = AdminPolicy(self.settings.admin_email_list)
        return self._admin_policy

    @property
    def mailer(self) -> "Mailer":
        """Get the mailer, with the transport selected by EMAIL_TRANSPORT."""
        if self._mailer is None:
            from modules.notifications import LogEmailTransport, Mailer, ResendEmailTransport
            if self.settings.email_transport == "resend":
                transport = ResendEmailTransport(
                    api_key=self.settings.resend_api_key,
                    sender=self.settings.email_from,
                )
            elif self.settings.is_production:
                raise ValueError("EMAIL_TRANSPORT=log is not allowed when ENVIRONMENT=production")
            else:
                transport = LogEmailTransport()
            logger.info(f"Email transport: {transport.name}")
            self._mailer = Mailer(
                transport,
                public_base_url=self.settings.public_base_url,
                verification_ttl_minutes=self.settings.verification_ttl_minutes,
            )
        return self._mailer

    @property
    def verification(self) -> "VerificationManager":
        if self._verification is None:
            from modules.auth.verification import VerificationManager
            self._verification = VerificationManager(
                users=self.users,
                mailer=self.mailer,
                ttl_minutes=self.settings.verification_ttl_minutes,
            )
        return self._verification

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                hasher=self.hasher,
                tokens=self.tokens,
                verification=self.verification,
                admin_policy=self.admin_policy,
            )
        return self._auth_service

    @property
    def catalog(self) -> "CatalogService":
        """Get the catalog service instance."""
        if self._catalog_service is None:
            from modules.catalog.service import CatalogService
            self._catalog_service = CatalogService(self.products)
        return self._catalog_service

    @property
    def grants(self) -> "GrantService":
        """Get the grant service instance."""
        if self._grant_service is None:
            from modules.grants.service import GrantService
            self._grant_service = GrantService(self.grant_repository, self.catalog)
        return self._grant_service

    @property
    def profile(self) -> "ProfileService":
        """Get the profile service instance."""
        if self._profile_service is None:
            from modules.profile.service import ProfileService
            self._profile_service = ProfileService(self.users)
        return self._profile_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._users = None
        self._products = None
        self._grant_repository = None
        self._hasher = None
        self._tokens = None
        self._admin_policy = None
        self._mailer = None
        self._verification = None
        self._auth_service = None
        self._catalog_service = None
        self._grant_service = None
        self._profile_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def set_container(container: ServiceContainer) -> None:
    """Install a pre-built container (tests, scripts)."""
    global _container
    _container = container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_token_service() -> "TokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_admin_policy() -> "AdminPolicy":
    """FastAPI dependency for the admin policy."""
    return get_container().admin_policy


def get_catalog_service() -> "CatalogService":
    """FastAPI dependency for catalog service."""
    return get_container().catalog


def get_grant_service() -> "GrantService":
    """FastAPI dependency for grant service."""
    return get_container().grants


def get_profile_service() -> "ProfileService":
    """FastAPI dependency for profile service."""
    return get_container().profile
