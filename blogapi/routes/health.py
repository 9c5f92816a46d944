"""
Blog API — Health and Landing Routes
======================================

What:  GET /health for container health checks, GET / as a small landing banner.
How:   Health runs `SELECT 1` through the app's Database handle.

Status levels:
    healthy:    database reachable
    unhealthy:  database unreachable (still HTTP 200; the body says so)
"""

import logging
import time

from fastapi import APIRouter, Request

from blogapi import __version__
from blogapi.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", summary="API landing banner")
async def read_root() -> dict:
    return {"message": "Blog API is running", "version": __version__}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Ping the database and report aggregate status with uptime."""
    connected = await request.app.state.database.ping()
    if not connected:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if connected else "unhealthy",
        version=__version__,
        database="connected" if connected else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
