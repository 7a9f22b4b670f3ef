"""
Profile API endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_profile_service
from api.middleware.auth import get_current_claims
from shared.models import IdentityClaims

from .models import ProfileResponse, ProfileUpdate
from .service import ProfileService

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    claims: IdentityClaims = Depends(get_current_claims),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    return ProfileResponse(profile=await service.get_profile(claims.identity))


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    patch: ProfileUpdate,
    claims: IdentityClaims = Depends(get_current_claims),
    service: ProfileService = Depends(get_profile_service),
) -> ProfileResponse:
    """
    Update the caller's profile.

    Only fields present in the body change; `address` is merged into the
    stored address.
    """
    return ProfileResponse(profile=await service.update_profile(claims.identity, patch))
