# =============================================================================
# Health Check Routes
# =============================================================================
"""
Health check endpoint for monitoring and container orchestration.
"""

from datetime import datetime
from typing import Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from resume_api.api.dependencies import get_database
from resume_api.database import DatabaseManager
from resume_api.database.models import utcnow


# -----------------------------------------------------------------------------
# Router Setup
# -----------------------------------------------------------------------------
router = APIRouter(prefix="/health", tags=["Health"])


# -----------------------------------------------------------------------------
# Response Models
# -----------------------------------------------------------------------------
class HealthStatus(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "ok" when the database answers, "error" otherwise.
        timestamp: Time of the health check.
        database: Database connectivity.
    """

    status: Literal["ok", "error"] = Field(
        description="Overall health status"
    )
    timestamp: datetime = Field(
        description="Time of the health check"
    )
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity"
    )


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@router.get(
    "",
    response_model=HealthStatus,
    summary="Health Check",
    description="Reports whether the API can reach its database.",
)
async def health_check(db: DatabaseManager = Depends(get_database)) -> HealthStatus:
    """
    Perform a health check.

    Used by load balancers and container health checks. The endpoint
    always answers 200; the body tells whether the database is reachable.

    Returns:
        HealthStatus with the database check result.
    """
    connected = await db.health_check()

    return HealthStatus(
        status="ok" if connected else "error",
        timestamp=utcnow(),
        database="connected" if connected else "disconnected",
    )
