"""
Boutique Backend — Health Check Route
======================================

What:  GET /health for container health checks and load balancer probes.
How:   Runs SELECT 1 against the store and reports uptime.
       Always answers 200; the body says whether the database is reachable.
"""

import logging
import time

from fastapi import APIRouter, Request

from boutique import __version__
from boutique.database import ping
from boutique.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check(request: Request) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await ping(request.app.state.engine)
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
