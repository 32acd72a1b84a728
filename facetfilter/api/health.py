"""
Health check endpoints.

Provides liveness and readiness probes with a catalog availability check.
"""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from facetfilter.services.catalog import catalog_available

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    catalog: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response) -> HealthResponse:
    """
    Readiness probe.

    Returns ready once the catalog has been indexed.
    Returns 503 if the catalog is missing or malformed.
    """
    if catalog_available():
        return HealthResponse(status="ready", catalog="loaded")
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", catalog="unavailable")
