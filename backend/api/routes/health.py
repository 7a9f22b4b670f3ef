"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel

from shared.models import utc_now

from ..dependencies import get_container

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    time: datetime


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="ok", version=get_container().settings.app_version, time=utc_now())
