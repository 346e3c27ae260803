# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# Neither endpoint touches the database; readiness reports the state of the
# background connection attempt.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI
from pydantic import BaseModel

from app.dependencies import ContextDep
from lib.database import ConnectionState

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    database_error: str | None = None
    environment: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(
        status="alive",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(context: ContextDep):
    """
    Readiness check endpoint.

    Reports "ready" once the database connection succeeded and "degraded"
    while it is pending or after it failed.
    """
    database = context.database.status()

    return ReadinessResponse(
        status="ready" if database["state"] == ConnectionState.CONNECTED.value else "degraded",
        database=database["state"],
        database_error=database.get("error"),
        environment=context.settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


class HealthRoutes:
    """Mounts the health endpoints under `prefix`."""

    def __init__(self, prefix: str = "/api"):
        self.prefix = prefix

    def register(self, app: FastAPI) -> None:
        app.include_router(router, prefix=self.prefix, tags=["Health"])
