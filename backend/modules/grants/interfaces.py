"""
Grants module interface.
"""

from datetime import datetime
from typing import Optional, Protocol, runtime_checkable

from .models import GrantRecord


@runtime_checkable
class IGrantRepository(Protocol):
    """
    Grant storage keyed by (normalized email, product id).

    Emails passed in are already normalized. `upsert` must be a single
    insert-if-absent so concurrent grants of the same pair converge on
    one record.
    """

    def upsert(
        self,
        email: str,
        product_id: str,
        expires_at: Optional[datetime],
        now: datetime,
    ) -> GrantRecord:
        """
        Create the grant unless it exists, then return the stored record.

        An existing grant is returned unchanged.

        Raises:
            GrantUpsertFailedError: If the record cannot be read back
        """
        ...

    def delete(self, email: str, product_id: str) -> bool:
        """Remove a grant; False if it did not exist."""
        ...

    def list_for_email(self, email: str) -> list[GrantRecord]:
        """Grants of one user, newest first."""
        ...

    def list_all(self) -> list[GrantRecord]:
        """Every grant, newest first."""
        ...
