"""
City Explorer Backend — Health and Index Routes
=================================================

What:  GET /health for probes, GET / pointing people at the front-end.
How:   The health check runs `SELECT 1` against the location database.
       Providers are not probed: each call costs quota, and a provider
       outage only affects its own endpoint.

    healthy    database reachable   (HTTP 200)
    unhealthy  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy import text

from city_explorer import __version__
from city_explorer.database import engine
from city_explorer.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

FRONTEND_URL = (
    "https://codefellows.github.io/code-301-guide/curriculum/city-explorer-app/front-end/"
)

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
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


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
async def index() -> str:
    return f"Frontend here --> {FRONTEND_URL}"
