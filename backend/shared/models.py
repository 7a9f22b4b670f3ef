"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime, timezone
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def normalize_email(email: Any) -> str:
    """Canonical form of an email address: trimmed and lowercased."""
    if email is None:
        return ""
    return str(email).strip().lower()


class ApiModel(BaseModel):
    """Base for models serialized on the HTTP surface with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class IdentityClaims(BaseModel):
    """
    Verified identity carried by an access token.

    Populated by the token service and attached to the request by the
    auth middleware. `sub` and `email` are always normalized; read the
    caller's identity through `identity`.
    """

    sub: str = Field(..., description="Normalized email (subject)")
    email: str = Field(..., description="Normalized email, mirrors sub")
    name: Optional[str] = Field(None, description="Display name")
    is_admin: Optional[bool] = Field(
        None, description="Client-side hint only, never used for authorization"
    )
    iat: Optional[datetime] = Field(None, description="Issued at")
    exp: Optional[datetime] = Field(None, description="Expires at")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra fields from JWT
    }

    @field_validator("sub", "email", mode="before")
    @classmethod
    def _normalize(cls, value: Any) -> str:
        return normalize_email(value)

    @property
    def identity(self) -> str:
        """The one canonical identity of the caller."""
        return self.sub
