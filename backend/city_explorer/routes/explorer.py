"""
City Explorer Backend — Explorer Routes
=========================================

What:  GET /weather, /parks, /movies and /yelp.
How:   Pass query parameters through to ExplorerService untouched; it owns
       validation so bad input comes back as a 400 with our error envelope
       rather than FastAPI's 422.

All four take `search_query`, the formatted city name the front-end got
from GET /location.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query

from city_explorer.schemas.common import ErrorResponse
from city_explorer.schemas.entities import Movie, Park, Restaurant, WeatherDay
from city_explorer.services.explorer_service import explorer_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Explorer"])

_ERROR_RESPONSES = {
    400: {"description": "Missing or invalid query parameter", "model": ErrorResponse},
    502: {"description": "Upstream provider failed", "model": ErrorResponse},
}

_SEARCH_QUERY = Query(default="", description="City to search for")


@router.get(
    "/weather",
    response_model=List[WeatherDay],
    responses=_ERROR_RESPONSES,
    summary="Daily forecast (up to 8 days)",
)
async def get_weather(
    search_query: str = _SEARCH_QUERY,
    latitude: Optional[str] = Query(default=None, description="Latitude in decimal degrees"),
    longitude: Optional[str] = Query(default=None, description="Longitude in decimal degrees"),
) -> List[WeatherDay]:
    return await explorer_service.get_weather(search_query, latitude, longitude)


@router.get(
    "/parks",
    response_model=List[Park],
    responses=_ERROR_RESPONSES,
    summary="National parks matching the city (up to 10)",
)
async def get_parks(search_query: str = _SEARCH_QUERY) -> List[Park]:
    return await explorer_service.get_parks(search_query)


@router.get(
    "/movies",
    response_model=List[Movie],
    responses=_ERROR_RESPONSES,
    summary="Movies whose title matches the city",
)
async def get_movies(search_query: str = _SEARCH_QUERY) -> List[Movie]:
    return await explorer_service.get_movies(search_query)


@router.get(
    "/yelp",
    response_model=List[Restaurant],
    responses=_ERROR_RESPONSES,
    summary="Restaurants in the city, 5 per page",
)
async def get_restaurants(
    search_query: str = _SEARCH_QUERY,
    page: Optional[str] = Query(default=None, description="1-based page number"),
) -> List[Restaurant]:
    """
    Example:
        GET /yelp?search_query=Seattle&page=1   → results 1-5
        GET /yelp?search_query=Seattle&page=3   → results 11-15
    """
    return await explorer_service.get_restaurants(search_query, page)
