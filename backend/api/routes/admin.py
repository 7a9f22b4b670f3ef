"""
Admin endpoints.

Every route requires a valid token whose identity is on the admin
allow-list.
"""

from fastapi import APIRouter, Depends, Query, Response
from pydantic import BaseModel

from modules.auth.models import PublicUser
from modules.auth.interfaces import IAuthService
from modules.grants import (
    CreateGrantRequest,
    GrantListResponse,
    GrantResponse,
    GrantService,
)
from shared.models import ApiModel, IdentityClaims

from ..dependencies import get_auth_service, get_grant_service
from ..middleware.auth import require_admin

router = APIRouter()


class PingResponse(BaseModel):
    ok: bool
    role: str
    email: str


class UserListResponse(ApiModel):
    users: list[PublicUser]


@router.get("/ping", response_model=PingResponse)
async def ping(claims: IdentityClaims = Depends(require_admin)) -> PingResponse:
    return PingResponse(ok=True, role="admin", email=claims.identity)


@router.get("/users", response_model=UserListResponse)
async def list_users(
    _: IdentityClaims = Depends(require_admin),
    auth: IAuthService = Depends(get_auth_service),
) -> UserListResponse:
    """All users, newest first."""
    users = await auth.list_users()
    return UserListResponse(users=[PublicUser.from_record(u) for u in users])


@router.get("/grants", response_model=GrantListResponse)
async def list_grants(
    email: str = Query(default="", description="Only grants of this email"),
    _: IdentityClaims = Depends(require_admin),
    grants: GrantService = Depends(get_grant_service),
) -> GrantListResponse:
    """Grants of one user when `email` is given, otherwise all grants."""
    if email.strip():
        return GrantListResponse(grants=await grants.list_for_email(email))
    return GrantListResponse(grants=await grants.list_all())


@router.post("/grants", response_model=GrantResponse, status_code=201)
async def create_grant(
    request: CreateGrantRequest,
    _: IdentityClaims = Depends(require_admin),
    grants: GrantService = Depends(get_grant_service),
) -> GrantResponse:
    """
    Grant a product to a user.

    Repeating the call returns the existing grant unchanged.
    """
    grant = await grants.grant(request.email, request.product_id, request.expires_at)
    return GrantResponse(grant=grant)


@router.delete("/grants", status_code=204)
async def revoke_grant(
    email: str = Query(..., min_length=1),
    product_id: str = Query(..., min_length=1, alias="productId"),
    _: IdentityClaims = Depends(require_admin),
    grants: GrantService = Depends(get_grant_service),
) -> Response:
    await grants.require_revoke(email, product_id)
    return Response(status_code=204)
