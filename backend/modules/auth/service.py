"""
Authentication service implementation.

Signup, login, current-user lookup and the verification endpoints. Identity
is always the normalized email; password hashing and storage calls run in
the threadpool.
"""

import logging
import uuid
from typing import Optional

from starlette.concurrency import run_in_threadpool

from shared.models import IdentityClaims, normalize_email, utc_now

from .exceptions import InvalidCredentialsError, UserNotFoundError
from .interfaces import IAuthService, IUserRepository
from .models import AuthResponse, PublicUser, ReissueStatus, UserRecord
from .passwords import PasswordHasher
from .policy import AdminPolicy
from .tokens import TokenService
from .verification import VerificationManager

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    All collaborators are injected; the API layer builds them from settings
    in the service container.
    """

    def __init__(
        self,
        users: IUserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
        verification: VerificationManager,
        admin_policy: AdminPolicy,
    ):
        self._users = users
        self._hasher = hasher
        self._tokens = tokens
        self._verification = verification
        self._admin_policy = admin_policy

    async def signup(self, name: str, email: str, password: str) -> AuthResponse:
        email = normalize_email(email)
        password_hash = await run_in_threadpool(self._hasher.hash, password)

        user = UserRecord(
            id=str(uuid.uuid4()),
            name=name.strip(),
            email=email,
            password_hash=password_hash,
            is_verified=False,
            created_at=utc_now(),
        )
        user = await run_in_threadpool(self._users.create, user)
        logger.info(f"User signed up: {user.email}")

        await self._verification.issue(user)
        return self._authenticated(user)

    async def login(self, email: str, password: str) -> AuthResponse:
        email = normalize_email(email)
        user = await run_in_threadpool(self._users.get_by_email, email)
        if user is None:
            # Same bcrypt cost as a wrong password
            await run_in_threadpool(self._hasher.verify_dummy, password)
            raise InvalidCredentialsError()

        ok =await run_in_threadpool(self._hasher.verify, password, user.password_hash)
        if not ok:
            logger.info(f"Failed login for {email}")
            raise InvalidCredentialsError()

        return self._authenticated(user)

    async def get_current_user(self, claims: IdentityClaims) -> UserRecord:
        user = await self.find_user(claims.identity)
        if user is None:
            raise UserNotFoundError(claims.identity)
        return user

    async def find_user(self, email: str) -> Optional[UserRecord]:
        return await run_in_threadpool(self._users.get_by_email, normalize_email(email))

    async def list_users(self) -> list[UserRecord]:
        return await run_in_threadpool(self._users.list_all)

    async def verify_email(self, token: str) -> bool:
        return await self._verification.consume(token)

    async def resend_verification(self, email: str) -> ReissueStatus:
        return await self._verification.reissue(email)

    def _authenticated(self, user: UserRecord) -> AuthResponse:
        token = self._tokens.issue({
            "sub": user.email,
            "name": user.name,
            "is_admin": self._admin_policy.is_admin_email(user.email),
        })
        return AuthResponse(token=token, user=PublicUser.from_record(user))
