"""
Shared infrastructure for Stacks backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base class for Supabase repositories

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, check_connection, reset_client_cache
from .exceptions import (
    StacksError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    StorageError,
    ExternalServiceError,
)
from .models import ApiModel, IdentityClaims, normalize_email, utc_now

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "check_connection",
    "reset_client_cache",
    "StacksError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "StorageError",
    "ExternalServiceError",
    "ApiModel",
    "IdentityClaims",
    "normalize_email",
    "utc_now",
]
