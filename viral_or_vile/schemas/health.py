"""
Pydantic schemas for health check endpoints.
"""

from datetime import datetime
from typing import Dict, Optional, Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response model for the liveness probe."""
    status: Literal["ok"] = Field(
        description="Health status indicator"
    )
    timestamp: datetime = Field(
        description="Current UTC timestamp"
    )


class HealthCheckDetail(BaseModel):
    """
    Individual dependency check result.

    Attributes:
        healthy: Whether this specific check passed
        latency_ms: Time taken to perform the check
        error: Error message if check failed
    """
    healthy: bool
    latency_ms: Optional[float] = None
    error: Optional[str] = None


class ReadinessResponse(BaseModel):
    """Response model for the readiness probe."""
    status: Literal["ready", "not_ready"] = Field(
        description="Overall readiness status"
    )
    checks: Dict[str, HealthCheckDetail] = Field(
        description="Individual dependency checks (ollama)"
    )
    timestamp: datetime = Field(
        description="Current UTC timestamp"
    )
