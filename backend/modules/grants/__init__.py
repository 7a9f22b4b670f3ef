"""
Grants module.

Per-user product entitlements.

Public API:
- IGrantRepository: Interface for grant storage
- GrantService: Grant, revoke and entitlement queries
- GrantRecord: Grant model
- Grant exceptions: GrantNotFoundError, GrantUpsertFailedError
"""

from .interfaces import IGrantRepository
from .models import (
    GrantRecord,
    CreateGrantRequest,
    GrantResponse,
    GrantListResponse,
    grant_id,
)
from .exceptions import GrantNotFoundError, GrantUpsertFailedError
from .service import GrantService
from .repository import GrantRepository, InMemoryGrantRepository

__all__ = [
    # Interface
    "IGrantRepository",
    # Models
    "GrantRecord",
    "CreateGrantRequest",
    "GrantResponse",
    "GrantListResponse",
    "grant_id",
    # Implementations
    "GrantService",
    "GrantRepository",
    "InMemoryGrantRepository",
    # Exceptions
    "GrantNotFoundError",
    "GrantUpsertFailedError",
]
