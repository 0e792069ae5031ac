"""
Portfolio API - Health Check Route
===================================

What:  Liveness/readiness probe for Docker health checks and uptime monitors.
How:   Runs SELECT 1 against the database and reports the result with the
       service version and uptime. Always answers 200 so the probe itself
       never fails; `status` says whether the data store is reachable.
"""

import logging
import time

from fastapi import APIRouter

from portfolio_api import __version__
from portfolio_api.database import ping
from portfolio_api.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/", summary="Service banner")
async def root() -> dict:
    return {"status": "ok", "service": "portfolio-api"}


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    db_ok = await ping()
    if not db_ok:
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
