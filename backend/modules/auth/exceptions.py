"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StorageError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid, malformed or tampered with."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="invalid_token")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="token_expired")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="missing_token")


class UnauthenticatedError(AuthenticationError):
    """Raised when a handler needs an identity and the request carries none."""

    def __init__(self, message: str = "Unauthenticated"):
        super().__init__(message, code="unauthenticated")


class InvalidCredentialsError(AuthenticationError):
    """
    Raised on a failed login.

    Unknown email and wrong password raise the same error so the
    response does not reveal which emails are registered.
    """

    def __init__(self):
        super().__init__("Invalid email or password", code="invalid_credentials")


class AdminOnlyError(AuthorizationError):
    """Raised when an authenticated caller is not an administrator."""

    def __init__(self):
        super().__init__("Administrator access required", code="forbidden")


class EmailInUseError(ConflictError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self, email: str):
        super().__init__(
            "Email already registered",
            code="email_in_use",
            details={"email": email},
        )


class UserNotFoundError(NotFoundError):
    """Raised when the user doesn't exist in the store."""

    def __init__(self, email: str):
        super().__init__(
            f"User not found: {email}",
            code="user_not_found",
            details={"email": email},
        )


class UserInsertFailedError(StorageError):
    """Raised when the store accepted an insert but returned no row."""

    def __init__(self, email: str):
        super().__init__(
            "User insert returned no record",
            code="insert_failed",
            details={"email": email},
        )
