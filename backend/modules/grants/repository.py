"""
Grant repositories.

`GrantRepository` relies on the `grants` primary key (`id`, derived from
email and product id) and the UNIQUE (email, product_id) constraint:
insert-if-absent is an `ON CONFLICT DO NOTHING` upsert followed by a read.
`InMemoryGrantRepository` does the same check-and-insert under a lock.
"""

import threading
from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository

from .exceptions import GrantUpsertFailedError
from .models import GrantRecord, grant_id

TABLE = "grants"


class GrantRepository(BaseRepository[GrantRecord]):
    """Repository for grant data access."""

    def upsert(
        self,
        email: str,
        product_id: str,
        expires_at: Optional[datetime],
        now: datetime,
    ) -> GrantRecord:
        key = grant_id(email, product_id)
        row = {
            "id": key,
            "email": email,
            "product_id": product_id,
            "created_at": now.isoformat(),
            "expires_at": expires_at.isoformat() if expires_at else None,
        }
        self._db.table(TABLE).upsert(row, on_conflict="id", ignore_duplicates=True).execute()

        result = self._db.table(TABLE).select("*").eq("id", key).execute()
        if not result.data:
            raise GrantUpsertFailedError(key)
        return self._map_to_grant(result.data[0])

    def delete(self, email: str, product_id: str) -> bool:
        result = self._db.table(TABLE).delete().eq("id", grant_id(email, product_id)).execute()
        return bool(result.data)

    def list_for_email(self, email: str) -> list[GrantRecord]:
        result = (
            self._db.table(TABLE)
            .select("*")
            .eq("email", email)
            .order("created_at", desc=True)
            .execute()
        )
        return [self._map_to_grant(row) for row in result.data]

    def list_all(self) -> list[GrantRecord]:
        result = self._db.table(TABLE).select("*").order("created_at", desc=True).execute()
        return [self._map_to_grant(row) for row in result.data]

    def _map_to_grant(self, data: dict[str, Any]) -> GrantRecord:
        """Map a database row to a GrantRecord."""
        return GrantRecord(
            id=data["id"],
            email=data["email"],
            product_id=str(data["product_id"]),
            created_at=self._parse_datetime(data["created_at"]),
            expires_at=self._parse_datetime(data.get("expires_at")),
        )


class InMemoryGrantRepository:
    """Lock-guarded in-memory grant store."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._grants: dict[str, GrantRecord] = {}

    def upsert(
        self,
        email: str,
        product_id: str,
        expires_at: Optional[datetime],
        now: datetime,
    ) -> GrantRecord:
        key = grant_id(email, product_id)
        with self._lock:
            existing = self._grants.get(key)
            if existing is not None:
                return existing
            record = GrantRecord(
                id=key,
                email=email,
                product_id=product_id,
                created_at=now,
                expires_at=expires_at,
            )
            self._grants[key] = record
            return record

    def delete(self, email: str, product_id: str) -> bool:
        with self._lock:
            return self._grants.pop(grant_id(email, product_id), None) is not None

    def list_for_email(self, email: str) -> list[GrantRecord]:
        with self._lock:
            grants = [g for g in self._grants.values() if g.email == email]
        return sorted(grants, key=lambda g: g.created_at, reverse=True)

    def list_all(self) -> list[GrantRecord]:
        with self._lock:
            grants = list(self._grants.values())
        return sorted(grants, key=lambda g: g.created_at, reverse=True)
