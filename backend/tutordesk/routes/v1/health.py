# backend/tutordesk/routes/v1/health.py
"""
Health check endpoint for monitoring and load balancer probes.
"""

from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Response

from ... import __version__
from ...core.config import settings
from ...schemas.base import StandardizedModel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(StandardizedModel):
    status: str
    service: str
    version: str
    environment: str
    timestamp: datetime


@router.get("/health", response_model=HealthResponse)
def health_check(response: Response) -> HealthResponse:
    """Liveness probe. Never touches the database."""
    response.headers["Cache-Control"] = "no-store"
    return HealthResponse(
        status="healthy",
        service="tutordesk-api",
        version=__version__,
        environment=settings.environment,
        timestamp=datetime.now(timezone.utc),
    )
