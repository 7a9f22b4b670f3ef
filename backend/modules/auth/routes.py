"""
Authentication API endpoints.

Signup, login, current user and email verification.
"""

import logging

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_auth_service
from api.middleware.auth import get_current_claims
from shared.exceptions import ValidationError
from shared.models import IdentityClaims

from .interfaces import IAuthService
from .models import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    PublicUser,
    ReissueResponse,
    ReissueStatus,
    ResendVerificationRequest,
    SignupRequest,
    VerifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    request: SignupRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    """
    Create an account and return a token for it.

    A verification email is sent in the background.
    """
    return await service.signup(request.name, request.email, request.password)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> AuthResponse:
    return await service.login(request.email, request.password)


@router.get("/me", response_model=MeResponse)
async def me(
    claims: IdentityClaims = Depends(get_current_claims),
    service: IAuthService = Depends(get_auth_service),
) -> MeResponse:
    """Get the user behind the presented token."""
    user = await service.get_current_user(claims)
    return MeResponse(user=PublicUser.from_record(user))


@router.get("/verify", response_model=VerifyResponse)
async def verify_email(
    token: str = Query(default="", description="Verification token from the email link"),
    service: IAuthService = Depends(get_auth_service),
) -> VerifyResponse:
    """
    Consume a verification token.

    Unknown, expired and already used tokens all answer 400.
    """
    if not await service.verify_email(token):
        raise ValidationError("Invalid or expired verification token", code="invalid_verification_token")
    return VerifyResponse(verified=True)


@router.post("/resend-verification", response_model=ReissueResponse)
async def resend_verification(
    request: ResendVerificationRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ReissueResponse:
    """
    Send a fresh verification email.

    Unknown emails get the same answer as a successful send so the
    endpoint cannot be used to discover accounts.
    """
    status = await service.resend_verification(request.email)
    if status == ReissueStatus.UNKNOWN_EMAIL:
        logger.info("Verification resend requested for an unknown email")
        status = ReissueStatus.SENT
    return ReissueResponse(status=status)
