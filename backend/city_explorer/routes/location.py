"""
City Explorer Backend — Location Route
========================================

What:  GET /location?city=<name> — geocode a city, reading through the cache.
How:   Builds a SqlLocationStore on the request's session and hands it to the
       shared LocationResolver. The session dependency commits the insert
       after the handler returns.
"""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from city_explorer.database import get_db_session
from city_explorer.schemas.common import ErrorResponse
from city_explorer.schemas.entities import Location
from city_explorer.services.location_service import location_resolver
from city_explorer.services.location_store import LocationStore, SqlLocationStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Location"])


async def get_location_store(
    db: AsyncSession = Depends(get_db_session),
) -> LocationStore:
    """Dependency: the location cache bound to this request's session."""
    return SqlLocationStore(db)


@router.get(
    "/location",
    response_model=Location,
    responses={
        200: {"description": "Geocoded city", "model": Location},
        400: {"description": "Missing or empty city", "model": ErrorResponse},
        404: {"description": "No match for the city", "model": ErrorResponse},
        500: {"description": "Location cache failure", "model": ErrorResponse},
        502: {"description": "Geocoding provider failed", "model": ErrorResponse},
    },
    summary="Geocode a city",
    description=(
        "Returns the formatted name and coordinates for `city`. Results are "
        "cached by the exact query string; repeated lookups do not call the "
        "geocoding provider."
    ),
)
async def get_location(
    city: str = Query(
        default="",
        description="City as typed by the user; used verbatim as the cache key",
    ),
    store: LocationStore = Depends(get_location_store),
) -> Location:
    return await location_resolver.resolve(store, city)
