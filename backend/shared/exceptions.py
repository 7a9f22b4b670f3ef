"""
Base exception classes for the Stacks backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class StacksError(Exception):
    """
    Base exception for all Stacks errors.

    All custom exceptions should inherit from this class.
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(StacksError):
    """Resource not found."""

    status_code = 404


class ValidationError(StacksError):
    """Input validation failed."""

    status_code = 400

    def __init__(
        self,
        message: str,
        code: Optional[str] = "validation_error",
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)


class ConflictError(StacksError):
    """Resource already exists."""

    status_code = 409


class AuthenticationError(StacksError):
    """Authentication failed (invalid or missing credentials)."""

    status_code = 401


class AuthorizationError(StacksError):
    """Authorization failed (insufficient permissions)."""

    status_code = 403


class StorageError(StacksError):
    """
    Storage layer invariant violation.

    Details are logged server-side and never returned to the client.
    """

    status_code = 500


class ExternalServiceError(StacksError):
    """Error communicating with an external service."""

    status_code = 502

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
