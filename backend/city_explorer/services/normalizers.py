"""
City Explorer Backend — Response Normalizers
==============================================

What:  Pure functions mapping one raw provider item to one result record.
How:   Every nested lookup is guarded. A missing list, object or scalar
       becomes an empty string or zero, so a single malformed item never
       aborts the list it belongs to.

    provider item                         → record
    ───────────────────────────────────     ──────────
    LocationIQ candidate                  → Location
    Weatherbit `data[]` entry             → WeatherDay
    NPS `data[]` park                     → Park
    TMDB `results[]` movie                → Movie
    Yelp `businesses[]` business          → Restaurant

normalize_location is the exception to the best-effort rule: a candidate
without usable coordinates raises ValueError, because the result is cached
permanently.
"""

from typing import Any, Dict, List, Mapping

from city_explorer.schemas.entities import Location, Movie, Park, Restaurant, WeatherDay

# TMDB image host for w500 posters; poster_path values start with "/"
MOVIE_IMAGE_BASE_URL = "https://image.tmdb.org/t/p/w500"


# ── Guarded access helpers ────────────────────────────────────────────────

def _as_dict(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _first(value: Any) -> Mapping[str, Any]:
    """First element of a list as a mapping, or an empty mapping."""
    if isinstance(value, list) and value:
        return _as_dict(value[0])
    return {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_float(value: Any, default: float = 0.0) -> float:
    if isinstance(value, bool):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _to_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


# ── Normalizers ───────────────────────────────────────────────────────────

def normalize_location(raw: Any, search_query: str) -> Location:
    """
    Build a Location from a geocoding candidate and the original query.

    Raises:
        ValueError: the candidate has no parseable `lat` / `lon`.
    """
    item = _as_dict(raw)
    try:
        latitude = float(item["lat"])
        longitude = float(item["lon"])
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError("geocoding candidate has no usable coordinates") from e

    return Location(
        search_query=search_query,
        formatted_query=_text(item.get("display_name")),
        latitude=latitude,
        longitude=longitude,
    )


def normalize_weather_day(raw: Any) -> WeatherDay:
    item = _as_dict(raw)
    return WeatherDay(
        forecast=_text(_as_dict(item.get("weather")).get("description")),
        time=_text(item.get("valid_date")),
    )


def format_park_address(address: Mapping[str, Any]) -> str:
    """Joins line1, city, stateCode and postalCode, skipping blank parts."""
    parts = [
        _text(address.get(key)).strip()
        for key in ("line1", "city", "stateCode", "postalCode")
    ]
    return ", ".join(part for part in parts if part)


def normalize_park(raw: Any) -> Park:
    item = _as_dict(raw)
    return Park(
        name=_text(item.get("fullName")),
        address=format_park_address(_first(item.get("addresses"))),
        fee=_to_float(_first(item.get("entranceFees")).get("cost")),
        description=_text(item.get("description")),
        url=_text(item.get("url")),
    )


def normalize_movie(raw: Any) -> Movie:
    """
    Map a TMDB search result.

    A missing poster_path leaves image_url as the bare image host URL; the
    front-end treats that as "no poster".
    """
    item = _as_dict(raw)
    return Movie(
        title=_text(item.get("title")),
        overview=_text(item.get("overview")),
        average_votes=_to_float(item.get("vote_average")),
        total_votes=_to_int(item.get("vote_count")),
        image_url=MOVIE_IMAGE_BASE_URL + _text(item.get("poster_path")),
        popularity=_to_float(item.get("popularity")),
        released_on=_text(item.get("release_date")),
    )


def normalize_restaurant(raw: Any) -> Restaurant:
    item = _as_dict(raw)
    return Restaurant(
        name=_text(item.get("name")),
        image_url=_text(item.get("image_url")),
        price=_text(item.get("price")),
        rating=_to_float(item.get("rating")),
        url=_text(item.get("url")),
    )


def extract_items(payload: Any, key: str) -> List[Dict[str, Any]]:
    """
    Return `payload[key]` when it is a list.

    Raises:
        ValueError: the payload is not an object or `key` is not a list.
    """
    if not isinstance(payload, Mapping):
        raise ValueError(f"expected a JSON object with '{key}'")
    items = payload.get(key)
    if not isinstance(items, list):
        raise ValueError(f"expected '{key}' to be a list")
    return items
