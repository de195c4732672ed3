"""
AskBoard Backend: Health Check Route
=====================================

What:  Liveness/readiness probe for load balancers and Docker.
How:   Round-trips `SELECT 1` through the Store. The service is healthy only
       when the database answers.

    healthy:   database reachable (HTTP 200)
    unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from askboard import __version__
from askboard.exceptions import StoreError
from askboard.schemas.api import HealthResponse
from askboard.services.store import Store, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    store: Store = Depends(get_store),
) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        await store.ping()
    except StoreError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", e.message)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
