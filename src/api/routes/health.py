"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text

from api.v1.dependencies import get_directory_controller
from core.config import settings
from domain.services.directory_controller import DirectoryController
from infrastructure.database.session import get_session_factory

router = APIRouter(tags=["health"])

VERSION = "1.0.0"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    environment: str
    database: str | None = None
    directory: dict | None = None


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse, summary="Basic health check")
async def health_check() -> HealthResponse:
    """
    Basic health check for load balancers.

    Returns service status without checking dependencies. Fast and lightweight.
    """
    return HealthResponse(
        status="healthy",
        version=VERSION,
        timestamp=_timestamp(),
        environment=settings.app_env,
    )


@router.get(
    "/health/detailed",
    response_model=HealthResponse,
    summary="Detailed health check",
)
async def detailed_health_check(
    controller: DirectoryController = Depends(get_directory_controller),
) -> HealthResponse:
    """
    Detailed health check including backend connectivity and directory state.

    Use for monitoring dashboards that need to verify all dependencies.
    """
    db_status = "unknown"

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
        db_status = "healthy"
    except Exception as e:
        db_status = f"unhealthy: {str(e)}"

    directory = controller.state()
    healthy = db_status == "healthy" and not directory["error"]

    return HealthResponse(
        status="healthy" if healthy else "degraded",
        version=VERSION,
        timestamp=_timestamp(),
        environment=settings.app_env,
        database=db_status,
        directory=directory,
    )
