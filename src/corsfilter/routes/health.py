"""
Health Check Endpoints

Liveness endpoint for load balancers and monitoring.
"""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter, Request

from corsfilter.models.health import HealthResponse

router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Report service health and whether the CORS filter is active."""
    provider = getattr(request.app.state, "cors_config", None)
    return HealthResponse(
        status="healthy",
        version=request.app.version,
        timestamp=datetime.now(UTC).isoformat(),
        cors_enabled=provider.current().enabled if provider else False,
    )
