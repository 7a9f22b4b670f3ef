"""
Authentication module data models.

These models define the user record, the request/response bodies of the
auth endpoints, and the values exchanged with other modules.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from shared.models import ApiModel, normalize_email


class Address(ApiModel):
    """Postal address stored on the user profile."""

    cep: Optional[str] = None
    street: Optional[str] = None
    number: Optional[str] = None
    complement: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


class UserRecord(BaseModel):
    """
    User as persisted in the store.

    `verification_token` and `verification_expires` are owned by this
    record and are cleared once verification succeeds.
    """

    id: str
    name: str
    email: str
    password_hash: str
    is_verified: bool = False
    verification_token: Optional[str] = None
    verification_expires: Optional[datetime] = None
    phone: Optional[str] = None
    birthdate: Optional[str] = None
    document: Optional[str] = None
    address: Optional[Address] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return normalize_email(value)


class PublicUser(ApiModel):
    """User data returned to clients (no secrets)."""

    id: str
    name: str
    email: str
    is_verified: bool
    created_at: datetime

    @classmethod
    def from_record(cls, user: UserRecord) -> "PublicUser":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            is_verified=user.is_verified,
            created_at=user.created_at,
        )


class SignupRequest(BaseModel):
    """Body of POST /auth/signup."""

    name: str = Field(..., min_length=2, max_length=60)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class ResendVerificationRequest(BaseModel):
    """Body of POST /auth/resend-verification."""

    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def _strip_email(cls, value):
        return value.strip() if isinstance(value, str) else value


class AuthResponse(ApiModel):
    """Token plus the public user it was issued for."""

    token: str
    user: PublicUser


class MeResponse(ApiModel):
    user: PublicUser


class VerifyResponse(ApiModel):
    verified: bool


class ReissueStatus(str, Enum):
    """Outcome of a verification reissue request."""

    SENT = "sent"
    ALREADY_VERIFIED = "already_verified"
    UNKNOWN_EMAIL = "unknown_email"


class ReissueResponse(ApiModel):
    status: ReissueStatus
