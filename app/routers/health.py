# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import Settings
from lib.database import Database, DatabaseError


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


# =============================================================================
# Endpoints
# =============================================================================

def create_router(db: Database, settings: Settings) -> APIRouter:
    """Build the health router."""
    router = APIRouter()

    @router.get("/health", response_model=HealthResponse)
    async def health_check():
        """
        Health check endpoint.

        Returns basic health status for load balancers and monitoring.
        """
        return HealthResponse(
            status="healthy",
            timestamp=_now(),
            environment=settings.ENVIRONMENT,
        )

    @router.get("/health/ready", response_model=ReadinessResponse)
    async def readiness_check():
        """
        Readiness check endpoint.

        Returns whether the service can reach its database.
        """
        try:
            await db.query("SELECT 1")
            database = "healthy"
        except DatabaseError as e:
            database = f"unhealthy: {e.kind.value}"

        return ReadinessResponse(
            status="ready" if database == "healthy" else "degraded",
            database=database,
            timestamp=_now(),
        )

    return router
