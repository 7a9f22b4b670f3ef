"""
Authentication module.

Handles accounts, password hashing, token issuance/verification, email
verification and the admin policy.

Public API:
- IAuthService, IUserRepository: Interfaces for auth operations and storage
- AuthService: Signup, login, current user, verification
- TokenService, PasswordHasher, AdminPolicy, VerificationManager
- Models: UserRecord, PublicUser, AuthResponse, ReissueStatus
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IUserRepository
from .models import (
    Address,
    AuthResponse,
    PublicUser,
    ReissueStatus,
    UserRecord,
)
from .exceptions import (
    AdminOnlyError,
    EmailInUseError,
    ExpiredTokenError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    UnauthenticatedError,
    UserInsertFailedError,
    UserNotFoundError,
)
from .passwords import PasswordHasher
from .policy import AdminPolicy
from .tokens import TokenService
from .verification import VerificationManager
from .service import AuthService
from .repository import InMemoryUserRepository, UserRepository

__all__ = [
    # Interfaces
    "IAuthService",
    "IUserRepository",
    # Models
    "Address",
    "AuthResponse",
    "PublicUser",
    "ReissueStatus",
    "UserRecord",
    # Implementations
    "AuthService",
    "AdminPolicy",
    "PasswordHasher",
    "TokenService",
    "VerificationManager",
    "UserRepository",
    "InMemoryUserRepository",
    # Exceptions
    "AdminOnlyError",
    "EmailInUseError",
    "ExpiredTokenError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "UnauthenticatedError",
    "UserInsertFailedError",
    "UserNotFoundError",
]
