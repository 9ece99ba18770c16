"""Health check endpoint.

Always 200 so load balancers keep routing; reports whether the provider
credential is configured without calling the provider (its quota is small).
"""

from __future__ import annotations

from fastapi import APIRouter

from mytrip.config import current_tour_api_key, settings
from mytrip.models.contracts import HealthResponse

router = APIRouter(tags=["health"])

VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        version=VERSION,
        environment=settings.environment,
        tour_api="configured" if current_tour_api_key() else "missing",
    )
