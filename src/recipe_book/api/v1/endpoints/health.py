"""Health check endpoints.

Provides liveness and readiness probes.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from recipe_book.schemas.common import HealthResponse, ReadinessResponse


router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
)
async def health_check() -> HealthResponse:
    """Report that the service is running. Dependencies are not checked."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
)
async def readiness_check(request: Request) -> ReadinessResponse:
    """Report whether the store is reachable."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        dependencies = {"database": "not_initialized"}
    else:
        dependencies = await database.check_health()

    all_healthy = all(state == "healthy" for state in dependencies.values())
    return ReadinessResponse(
        status="ok" if all_healthy else "degraded",
        dependencies=dependencies,
    )
