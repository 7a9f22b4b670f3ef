"""
Grants module data models.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from shared.models import ApiModel, normalize_email


def grant_id(email: str, product_id: str) -> str:
    """Deterministic grant key: `<normalized email>::<product id>`."""
    return f"{normalize_email(email)}::{product_id}"


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GrantRecord(ApiModel):
    """
    Entitlement of one user to one product.

    There is at most one grant per (email, product_id). A grant without
    `expires_at` never expires.
    """

    id: str
    email: str
    product_id: str
    created_at: datetime
    expires_at: Optional[datetime] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return normalize_email(value)

    @field_validator("created_at", "expires_at")
    @classmethod
    def _utc(cls, value):
        return as_utc(value)

    def is_active(self, now: datetime) -> bool:
        return self.expires_at is None or self.expires_at > now


class CreateGrantRequest(ApiModel):
    """Body of POST /admin/grants."""

    email: EmailStr
    product_id: str = Field(..., min_length=1)
    expires_at: Optional[datetime] = None

    @field_validator("email", "product_id", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value


class GrantResponse(ApiModel):
    grant: GrantRecord


class GrantListResponse(ApiModel):
    grants: list[GrantRecord]
