"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with the in-memory store and
swapping the storage backend without touching the services.
"""

from datetime import datetime
from typing import Any, Protocol, Optional, runtime_checkable

from shared.models import IdentityClaims

from .models import AuthResponse, ReissueStatus, UserRecord


@runtime_checkable
class IUserRepository(Protocol):
    """
    Keyed, uniquely-constrained user collection.

    Emails passed in are already normalized. Implementations must enforce
    email uniqueness and the atomicity of `consume_verification` at the
    storage layer.
    """

    def create(self, user: UserRecord) -> UserRecord:
        """
        Insert a new user.

        Raises:
            EmailInUseError: If the email is already registered
        """
        ...

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """Get a user by normalized email, None if absent."""
        ...

    def list_all(self) -> list[UserRecord]:
        """All users, newest first."""
        ...

    def set_verification(self, email: str, token: str, expires_at: datetime) -> bool:
        """
        Store a verification token on an unverified user.

        Returns:
            False if the user is missing or already verified
        """
        ...

    def consume_verification(self, token: str, now: datetime) -> Optional[UserRecord]:
        """
        Atomically verify the user holding `token` if it has not expired.

        Sets is_verified and clears the token fields in one operation.

        Returns:
            The updated user, or None if no live token matched
        """
        ...

    def update_profile(self, email: str, changes: dict[str, Any]) -> Optional[UserRecord]:
        """Apply profile field changes; None if the user is missing."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer.
    """

    async def signup(self, name: str, email: str, password: str) -> AuthResponse:
        """
        Register a user, start email verification and issue a token.

        Raises:
            EmailInUseError: If the email is already registered
        """
        ...

    async def login(self, email: str, password: str) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        ...

    async def get_current_user(self, claims: IdentityClaims) -> UserRecord:
        """
        Load the user behind verified claims.

        Raises:
            UserNotFoundError: If the account no longer exists
        """
        ...

    async def list_users(self) -> list[UserRecord]:
        """All users, newest first."""
        ...

    async def verify_email(self, token: str) -> bool:
        """Consume a verification token."""
        ...

    async def resend_verification(self, email: str) -> ReissueStatus:
        """Issue and deliver a fresh verification token."""
        ...
