"""
Library endpoints.

The public catalog of active products and the caller's entitled products.
"""

from fastapi import APIRouter, Depends

from modules.catalog import CatalogService, ProductListResponse
from modules.grants import GrantService
from shared.models import IdentityClaims

from ..dependencies import get_catalog_service, get_grant_service
from ..middleware.auth import get_current_claims

router = APIRouter()


@router.get("/products", response_model=ProductListResponse)
async def list_products(
    catalog: CatalogService = Depends(get_catalog_service),
) -> ProductListResponse:
    """Active products, newest first."""
    return ProductListResponse(products=await catalog.list_active())


@router.get("/me/products", response_model=ProductListResponse)
async def list_my_products(
    claims: IdentityClaims = Depends(get_current_claims),
    grants: GrantService = Depends(get_grant_service),
) -> ProductListResponse:
    """
    Products the caller is entitled to.

    Only active products covered by an unexpired grant are returned.
    """
    return ProductListResponse(products=await grants.entitled_products(claims.identity))
