"""
Health check endpoints.
"""

import time

from fastapi import APIRouter

from retail_pos.application.dto.responses import HealthResponse
from retail_pos.config import get_settings

router = APIRouter(prefix="/api/health", tags=["health"])

# Track startup time
_start_time = time.time()


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns service status and uptime.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """
    Database health check.

    Runs a trivial query on a pooled connection.
    """
    from retail_pos.infrastructure.storage.sqlite import get_pool

    try:
        pool = await get_pool()
        start = time.time()
        async with pool.acquire() as conn:
            await conn.execute("SELECT 1")
        latency = (time.time() - start) * 1000
        database = f"sqlite ok ({latency:.1f}ms)"
        status_str = "healthy"
    except Exception as e:
        database = f"sqlite error: {e}"
        status_str = "unhealthy"

    return HealthResponse(
        status=status_str,
        version=get_settings().app_version,
        uptime_seconds=time.time() - _start_time,
        database=database,
    )
