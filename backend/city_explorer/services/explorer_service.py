"""
City Explorer Backend — Explorer Service
==========================================

What:  Weather, parks, movies and restaurants for an already-resolved city.
How:   Validate the query parameters, make one provider call, pull the item
       list out of the payload and map each item through its normalizer.
Who:   Called by the routes in routes/explorer.py.

Nothing here touches the database; every result is request-scoped.

    operation         provider     list key      max items
    ───────────────   ──────────   ───────────   ─────────
    get_weather       Weatherbit   data          8
    get_parks         NPS          data          10
    get_movies        TMDB         results       (provider page)
    get_restaurants   Yelp         businesses    5 per page
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, TypeVar, Union

from city_explorer.exceptions import ProviderError, ValidationError
from city_explorer.schemas.entities import Movie, Park, Restaurant, WeatherDay
from city_explorer.services.normalizers import (
    extract_items,
    normalize_movie,
    normalize_park,
    normalize_restaurant,
    normalize_weather_day,
)
from city_explorer.services.provider_client import ProviderClient
from city_explorer.services.providers import (
    MOVIES,
    PARKS,
    PARKS_LIMIT,
    RESTAURANT_PAGE_SIZE,
    RESTAURANTS,
    WEATHER,
    WEATHER_DAYS,
    provider_clients,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ── Parameter validation ──────────────────────────────────────────────────

def require_search_query(search_query: Optional[str]) -> str:
    """Returns the query unchanged, or raises ValidationError if it is blank."""
    if search_query is None or not search_query.strip():
        raise ValidationError(
            message="search_query is required",
            field="search_query",
        )
    return search_query


def parse_page(page: Union[str, int, None]) -> int:
    """
    Parse a 1-based page number.

    Only plain ASCII digits are accepted, so "1_0" and non-Latin digits
    are rejected.

    Raises:
        ValidationError: missing, non-numeric, or less than 1.
    """
    value: Optional[int] = None
    if isinstance(page, int) and not isinstance(page, bool):
        value = page
    elif isinstance(page, str):
        text = page.strip()
        if text.isascii() and text.isdigit():
            value = int(text)
    if value is None or value < 1:
        raise ValidationError(
            message="page must be a positive integer",
            field="page",
            context={"value": None if page is None else str(page)},
        )
    return value


def restaurant_offset(page: int, page_size: int = RESTAURANT_PAGE_SIZE) -> int:
    """Zero-based result offset for a 1-based page: page 1 → 0, page 3 → 10."""
    return (page - 1) * page_size


def parse_coordinate(value: Optional[str], field: str, bound: float) -> Optional[float]:
    """Parse latitude/longitude; blank means absent, out of range is invalid."""
    if value is None or not str(value).strip():
        return None
    try:
        number = float(value)
    except ValueError:
        number = None
    if number is None or not -bound <= number <= bound:
        raise ValidationError(
            message=f"{field} must be a number between {-bound:g} and {bound:g}",
            field=field,
        )
    return number


# ── Service ───────────────────────────────────────────────────────────────

class ExplorerService:
    """
    Stateless composition of provider calls and normalizers.

    Each method makes exactly one provider call. A provider failure fails
    that request only.
    """

    def __init__(self, clients: Mapping[str, ProviderClient]):
        self.clients = clients

    async def get_weather(
        self,
        search_query: Optional[str],
        latitude: Optional[str] = None,
        longitude: Optional[str] = None,
    ) -> List[WeatherDay]:
        """
        Daily forecast, up to 8 days.

        When both coordinates are supplied they are sent as lat/lon;
        otherwise the forecast is looked up by city name within the US.
        """
        query = require_search_query(search_query)
        lat = parse_coordinate(latitude, "latitude", 90)
        lon = parse_coordinate(longitude, "longitude", 180)

        if lat is not None and lon is not None:
            params = {"lat": lat, "lon": lon}
        else:
            params = {"city": query, "country": "US"}

        days = await self._fetch_normalized(WEATHER, params, "data", normalize_weather_day)
        return days[:WEATHER_DAYS]

    async def get_parks(self, search_query: Optional[str]) -> List[Park]:
        query = require_search_query(search_query)
        parks = await self._fetch_normalized(PARKS, {"q": query}, "data", normalize_park)
        return parks[:PARKS_LIMIT]

    async def get_movies(self, search_query: Optional[str]) -> List[Movie]:
        query = require_search_query(search_query)
        return await self._fetch_normalized(MOVIES, {"query": query}, "results", normalize_movie)

    async def get_restaurants(
        self,
        search_query: Optional[str],
        page: Union[str, int, None],
    ) -> List[Restaurant]:
        """One page of restaurants (5 per page) for the searched city."""
        query = require_search_query(search_query)
        offset = restaurant_offset(parse_page(page))
        restaurants = await self._fetch_normalized(
            RESTAURANTS,
            {"location": query, "offset": offset},
            "businesses",
            normalize_restaurant,
        )
        return restaurants[:RESTAURANT_PAGE_SIZE]

    async def _fetch_normalized(
        self,
        provider_name: str,
        params: Mapping[str, Any],
        list_key: str,
        normalize: Callable[[Any], T],
    ) -> List[T]:
        client = self.clients[provider_name]
        payload = await client.fetch(params)
        try:
            items = extract_items(payload, list_key)
        except ValueError as e:
            logger.warning("%s payload has an unexpected shape: %s", client.config.display_name, e)
            raise ProviderError(
                provider=client.name,
                display_name=client.config.display_name,
                detail=str(e),
            ) from e
        return [normalize(item) for item in items]


# ── Singleton Instance ────────────────────────────────────────────────────
explorer_service = ExplorerService(provider_clients)
