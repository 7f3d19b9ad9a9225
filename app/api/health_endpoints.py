"""
Health check endpoint.

Reports service liveness, version and the number of open viewer sessions.
Upstream collaborators are not checked; their failures degrade individual
requests, not the service.
"""

from fastapi import APIRouter, Depends
import logging

from app.config.settings import get_settings
from app.core.dependencies import get_session_registry
from app.models.api_models import HealthCheckResponse
from app.viewer.registry import SessionRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Basic health check",
)
async def health_check(
    registry: SessionRegistry = Depends(get_session_registry),
) -> HealthCheckResponse:
    return HealthCheckResponse(
        status="healthy",
        version=get_settings().app_version,
        active_sessions=len(registry),
    )
