"""Health check API schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")
    version: str = Field(..., description="Application version")


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    status: Literal["ok", "not_ready"] = Field(default="ok", description="Readiness status")
    database: Literal["ok", "not_configured", "unavailable"] = Field(
        ..., description="SQL database state"
    )
    pending_notifications: int = Field(default=0, ge=0)
