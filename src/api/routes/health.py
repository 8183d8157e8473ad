"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from src.application.dto.responses import ComponentHealthResponse, HealthResponse

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness: the process is up."""
    return HealthResponse(
        status="healthy",
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Readiness: the database answers and its schema is current.

    Reports ``degraded`` when migrations are pending and ``unhealthy``
    when the database cannot be queried.
    """
    from src.infrastructure.storage.sqlite import get_connection
    from src.infrastructure.storage.sqlite.migrations.migrator import (
        discover_migrations,
        get_current_version,
    )

    start = time.perf_counter()
    try:
        async with get_connection() as conn:
            version = await get_current_version(conn)
    except Exception as e:
        database = ComponentHealthResponse(name="sqlite", available=False, error=str(e))
        overall = "unhealthy"
    else:
        latest = max((m.version for m in discover_migrations()), default=None)
        database = ComponentHealthResponse(
            name=f"sqlite (schema v{version or '000'})",
            available=True,
            latency_ms=(time.perf_counter() - start) * 1000,
            error=None if version == latest else f"schema behind: latest is v{latest}",
        )
        overall = "healthy" if version == latest else "degraded"

    return HealthResponse(
        status=overall,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
