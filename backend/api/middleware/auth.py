"""
JWT Authentication middleware.

Extracts the bearer token, verifies it and exposes the identity claims.
No storage round-trip happens here; handlers that need the user record
load it themselves.
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.auth.exceptions import (
    AdminOnlyError,
    MissingTokenError,
    UnauthenticatedError,
)
from modules.auth.policy import AdminPolicy
from modules.auth.tokens import TokenService
from shared.models import IdentityClaims

from ..dependencies import get_admin_policy, get_token_service

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> IdentityClaims:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(claims: IdentityClaims = Depends(get_current_claims)):
            return {"email": claims.identity}

    Raises:
        MissingTokenError: No `Authorization: Bearer` header
        InvalidTokenError / ExpiredTokenError: From the token service
    """
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    claims = tokens.verify(credentials.credentials)
    if not claims.identity:
        raise UnauthenticatedError()

    request.state.claims = claims
    return claims


async def require_admin(
    claims: IdentityClaims = Depends(get_current_claims),
    policy: AdminPolicy = Depends(get_admin_policy),
) -> IdentityClaims:
    """
    Dependency for admin-only endpoints.

    Runs after authentication, so a missing token is 401 and a valid
    non-admin token is 403.
    """
    if not policy.is_admin(claims):
        logger.info(f"Admin access denied for {claims.identity}")
        raise AdminOnlyError()
    return claims

