"""
QuickNotes — Health Check Route
================================

What:  Health check endpoint for monitoring and container liveness checks.
How:   Runs `SELECT 1` against the store and reports aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring.

Status levels:
    - healthy:   Store reachable (HTTP 200)
    - unhealthy: Store unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from quicknotes import __version__
from quicknotes.database import engine
from quicknotes.schemas.note import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Store unreachable", "model": HealthResponse}},
)
async def health_check(response: Response) -> HealthResponse:
    """
    Report service health.

    What:  Version, uptime and whether the store answers `SELECT 1`.
    How:   A failed database check turns the response into 503 so load balancers stop
           routing here; the body still describes what failed.
    """
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
