"""
Health check endpoints for monitoring and readiness probes.

- Liveness: /health ("is the server running")
- Readiness: /health/ready (is the Ollama server reachable)
"""

import time
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status, Response

from viral_or_vile.schemas.health import (
    HealthResponse,
    ReadinessResponse,
    HealthCheckDetail,
)
from viral_or_vile.core.probes import check_ollama


router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    """
    Basic liveness probe.

    Always 200 while the application is running.
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc)
    )


@router.get(
    "/health/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness probe with dependency checks.

    Returns 200 when the model server answers, 503 otherwise.

    Example response (unhealthy):
        {
            "status": "not_ready",
            "checks": {
                "ollama": {"healthy": false, "latency_ms": 3001.2,
                           "error": "Ollama server unreachable or timed out"}
            },
            "timestamp": "2025-11-24T10:30:00.123456Z"
        }
    """
    ollama_start = time.perf_counter()
    ollama_healthy = await check_ollama()
    ollama_latency = (time.perf_counter() - ollama_start) * 1000

    checks: Dict[str, HealthCheckDetail] = {
        "ollama": HealthCheckDetail(
            healthy=ollama_healthy,
            latency_ms=round(ollama_latency, 2),
            error=None if ollama_healthy else "Ollama server unreachable or timed out"
        ),
    }

    all_healthy = all(check.healthy for check in checks.values())
    if not all_healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return ReadinessResponse(
        status="ready" if all_healthy else "not_ready",
        checks=checks,
        timestamp=datetime.now(timezone.utc)
    )
