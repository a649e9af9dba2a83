"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter, Depends

from framegen.api.dependencies import get_current_settings, get_provider_client
from framegen.config.settings import Settings
from framegen.core.rendering.provider_client import CloudinaryClient
from framegen.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(
    settings: Settings = Depends(get_current_settings),
    client: CloudinaryClient = Depends(get_provider_client),
) -> HealthStatus:
    """
    Report service health.

    The provider is not contacted; the status is degraded when its
    credentials are missing, since every render would then fail.
    """
    configured = client.credentials.configured
    return HealthStatus(
        status="healthy" if configured else "degraded",
        version=settings.app_version,
        provider_configured=configured,
    )
