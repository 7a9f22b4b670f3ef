"""
User repositories.

`UserRepository` talks to the Supabase `users` table, whose UNIQUE
constraint on `email` is what makes duplicate signups fail. Verification
consume is a single conditional UPDATE so two concurrent submissions of the
same token cannot both succeed.

`InMemoryUserRepository` implements the same contract behind a lock, for
tests and local development.
"""

import threading
from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.repository import BaseRepository, UNIQUE_VIOLATION

from .exceptions import EmailInUseError, UserInsertFailedError
from .models import Address, UserRecord

TABLE = "users"


class UserRepository(BaseRepository[UserRecord]):
    """
    Repository for user data access.

    Note: This repository does NOT perform authorization checks.
    The service layer is responsible for deciding who may call what.
    """

    def create(self, user: UserRecord) -> UserRecord:
        """Insert a user; the email UNIQUE constraint rejects duplicates."""
        row = self._to_row(user)
        try:
            result = self._db.table(TABLE).insert(row).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise EmailInUseError(user.email)
            raise

        if not result.data:
            raise UserInsertFailedError(user.email)
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._db.table(TABLE).select("*").eq("email", email).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def list_all(self) -> list[UserRecord]:
        result = self._db.table(TABLE).select("*").order("created_at", desc=True).execute()
        return [self._map_to_user(row) for row in result.data]

    def set_verification(self, email: str, token: str, expires_at: datetime) -> bool:
        result = (
            self._db.table(TABLE)
            .update({
                "verification_token": token,
                "verification_expires": expires_at.isoformat(),
                "updated_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("email", email)
            .eq("is_verified", False)
            .execute()
        )
        return bool(result.data)

    def consume_verification(self, token: str, now: datetime) -> Optional[UserRecord]:
        # UPDATE ... WHERE token = $1 AND expires > now RETURNING *
        # Postgres re-evaluates the WHERE clause after acquiring the row lock,
        # so a concurrent second submission matches zero rows.
        result = (
            self._db.table(TABLE)
            .update({
                "is_verified": True,
                "verification_token": None,
                "verification_expires": None,
                "updated_at": now.isoformat(),
            })
            .eq("verification_token", token)
            .gt("verification_expires", now.isoformat())
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def update_profile(self, email: str, changes: dict[str, Any]) -> Optional[UserRecord]:
        data = dict(changes)
        if isinstance(data.get("address"), Address):
            data["address"] = data["address"].model_dump(exclude_none=True)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        result = self._db.table(TABLE).update(data).eq("email", email).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def ensure_user(self, user: UserRecord) -> bool:
        """
        Insert the user unless the email is already taken.

        Returns:
            True if a new row was created
        """
        row = self._to_row(user)
        result = (
            self._db.table(TABLE)
            .upsert(row, on_conflict="email", ignore_duplicates=True)
            .execute()
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping
    # -------------------------------------------------------------------------

    def _to_row(self, user: UserRecord) -> dict[str, Any]:
        return user.model_dump(mode="json", exclude_none=True)

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map a database row to a UserRecord."""
        return UserRecord(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            is_verified=bool(data.get("is_verified", False)),
            verification_token=data.get("verification_token"),
            verification_expires=self._parse_datetime(data.get("verification_expires")),
            phone=data.get("phone"),
            birthdate=data.get("birthdate"),
            document=data.get("document"),
            address=Address(**data["address"]) if data.get("address") else None,
            created_at=self._parse_datetime(data["created_at"]),
            updated_at=self._parse_datetime(data.get("updated_at")),
        )


class InMemoryUserRepository:
    """Lock-guarded in-memory user store with the same contract."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_email: dict[str, UserRecord] = {}

    def create(self, user: UserRecord) -> UserRecord:
        with self._lock:
            if user.email in self._by_email:
                raise EmailInUseError(user.email)
            self._by_email[user.email] = user
            return user

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        with self._lock:
            return self._by_email.get(email)

    def list_all(self) -> list[UserRecord]:
        with self._lock:
            users = list(self._by_email.values())
        return sorted(users, key=lambda u: u.created_at, reverse=True)

    def set_verification(self, email: str, token: str, expires_at: datetime) -> bool:
        with self._lock:
            user = self._by_email.get(email)
            if user is None or user.is_verified:
                return False
            self._by_email[email] = user.model_copy(update={
                "verification_token": token,
                "verification_expires": expires_at,
                "updated_at": datetime.now(timezone.utc),
            })
            return True

    def consume_verification(self, token: str, now: datetime) -> Optional[UserRecord]:
        with self._lock:
            for email, user in self._by_email.items():
                if user.verification_token != token:
                    continue
                if user.verification_expires is None or user.verification_expires <= now:
                    return None
                verified = user.model_copy(update={
                    "is_verified": True,
                    "verification_token": None,
                    "verification_expires": None,
                    "updated_at": now,
                })
                self._by_email[email] = verified
                return verified
        return None

    def update_profile(self, email: str, changes: dict[str, Any]) -> Optional[UserRecord]:
        with self._lock:
            user = self._by_email.get(email)
            if user is None:
                return None
            updated = user.model_copy(update={
                **changes,
                "updated_at": datetime.now(timezone.utc),
            })
            self._by_email[email] = updated
            return updated

    def ensure_user(self, user: UserRecord) -> bool:
        try:
            self.create(user)
        except EmailInUseError:
            return False
        return True
