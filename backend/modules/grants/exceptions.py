"""
Grants module exceptions.
"""

from shared.exceptions import NotFoundError, StorageError


class GrantNotFoundError(NotFoundError):
    """Raised when revoking a grant that does not exist."""

    def __init__(self, email: str, product_id: str):
        super().__init__(
            "Grant not found",
            code="grant_not_found",
            details={"email": email, "product_id": product_id},
        )


class GrantUpsertFailedError(StorageError):
    """Raised when a grant cannot be read back after insert-if-absent."""

    def __init__(self, grant_id: str):
        super().__init__(
            "Grant upsert returned no record",
            code="upsert_failed",
            details={"grant_id": grant_id},
        )
