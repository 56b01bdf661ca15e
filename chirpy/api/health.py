"""Health check endpoints.

All health endpoints are accessible without authentication.
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from chirpy.core import Database, check_db_connection, get_db, settings

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    database: str


@router.get("/healthz", response_class=PlainTextResponse)
def healthz() -> str:
    """Liveness probe. Always ``OK`` while the process serves requests."""
    return "OK"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        status.HTTP_200_OK: {"description": "Service is healthy"},
        status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Record store is unreadable"},
    },
)
def health_check(response: Response, db: Database = Depends(get_db)) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 if the record store cannot be read.
    """
    db_healthy = check_db_connection(db)

    if not db_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        version=settings.app_version,
        database="connected" if db_healthy else "disconnected",
    )
