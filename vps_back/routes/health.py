"""
vps-back — Root & Health Check Routes
======================================

What:  Greeting at `/` and a health probe at `/health`.
How:   /health runs `SELECT 1` against the database; the service is only
       healthy if that succeeds.

    Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from vps_back import __version__
from vps_back.database import engine
from vps_back.schemas.common import DataResponse, HealthResponse, MessagePayload

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/",
    response_model=DataResponse[MessagePayload],
    summary="Greeting",
)
async def root() -> DataResponse[MessagePayload]:
    logger.info("GET `/` endpoint called")
    return DataResponse[MessagePayload](data=MessagePayload(message="Hello, I'm Tom Planche!"))


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend and its database. "
        "Answers 503 when the database cannot be reached."
    ),
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
