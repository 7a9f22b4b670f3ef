"""
Profile module data models.
"""

import re
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from shared.models import ApiModel
from modules.auth.models import Address, UserRecord


class AddressUpdate(ApiModel):
    """Partial address; only provided fields are changed."""

    cep: Optional[str] = Field(None, min_length=1)
    street: Optional[str] = Field(None, min_length=1)
    number: Optional[str] = Field(None, min_length=1)
    complement: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = Field(None, min_length=2, max_length=2)

    @field_validator("*", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("state")
    @classmethod
    def _upper_state(cls, value: Optional[str]) -> Optional[str]:
        return value.upper() if value else value


class ProfileUpdate(ApiModel):
    """Body of PUT /profile/me."""

    name: Optional[str] = Field(None, min_length=2, max_length=80)
    phone: Optional[str] = Field(None, min_length=8, max_length=20)
    birthdate: Optional[str] = None
    document: Optional[str] = None
    address: Optional[AddressUpdate] = None

    @field_validator("name", "phone", "birthdate", "document", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("name", "phone", mode="before")
    @classmethod
    def _not_null(cls, value):
        # May be omitted, never cleared
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("phone")
    @classmethod
    def _digits_only(cls, value: Optional[str]) -> Optional[str]:
        # Length is validated on the raw input, storage keeps digits only
        return re.sub(r"\D", "", value) if value else value


class Profile(ApiModel):
    """Profile returned to the owner."""

    name: str
    email: str
    phone: Optional[str] = None
    birthdate: Optional[str] = None
    document: Optional[str] = None
    address: Optional[Address] = None
    is_verified: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    @classmethod
    def from_record(cls, user: UserRecord) -> "Profile":
        return cls(
            name=user.name,
            email=user.email,
            phone=user.phone,
            birthdate=user.birthdate,
            document=user.document,
            address=user.address,
            is_verified=user.is_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class ProfileResponse(ApiModel):
    profile: Profile
