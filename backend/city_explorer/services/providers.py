"""
City Explorer Backend — Provider Registry
===========================================

What:  The five provider configurations and their client singletons.
How:   Configs are built from settings once at import, like the other
       service singletons.

    name         provider        endpoint
    ──────────   ─────────────   ─────────────────────────────────────────
    geocode      LocationIQ      us1.locationiq.com/v1/search.php
    weather      Weatherbit      api.weatherbit.io/v2.0/forecast/daily
    parks        NPS             developer.nps.gov/api/v1/parks
    movies       The Movie DB    api.themoviedb.org/3/search/movie
    restaurants  Yelp            api.yelp.com/v3/businesses/search
"""

from typing import Dict

from city_explorer.config import Settings, settings
from city_explorer.services.provider_client import ProviderClient, ProviderConfig

GEOCODE = "geocode"
WEATHER = "weather"
PARKS = "parks"
MOVIES = "movies"
RESTAURANTS = "restaurants"

# Upper bounds for each list endpoint; also requested from the provider
WEATHER_DAYS = 8
PARKS_LIMIT = 10
RESTAURANT_PAGE_SIZE = 5


def build_provider_configs(config: Settings) -> Dict[str, ProviderConfig]:
    """Returns the provider configs keyed by registry name."""
    return {
        GEOCODE: ProviderConfig(
            name=GEOCODE,
            display_name="LocationIQ",
            url="https://us1.locationiq.com/v1/search.php",
            api_key=config.geocode_api_key,
            api_key_param="key",
            fixed_params={"format": "json"},
        ),
        WEATHER: ProviderConfig(
            name=WEATHER,
            display_name="Weatherbit",
            url="https://api.weatherbit.io/v2.0/forecast/daily",
            api_key=config.weather_api_key,
            api_key_param="key",
            fixed_params={"days": WEATHER_DAYS},
        ),
        PARKS: ProviderConfig(
            name=PARKS,
            display_name="National Parks",
            url="https://developer.nps.gov/api/v1/parks",
            api_key=config.parks_api_key,
            api_key_param="api_key",
            fixed_params={"limit": PARKS_LIMIT},
        ),
        MOVIES: ProviderConfig(
            name=MOVIES,
            display_name="MovieDB",
            url="https://api.themoviedb.org/3/search/movie",
            api_key=config.movie_api_key,
            api_key_param="api_key",
            fixed_params={"language": "en-US"},
        ),
        RESTAURANTS: ProviderConfig(
            name=RESTAURANTS,
            display_name="Yelp",
            url="https://api.yelp.com/v3/businesses/search",
            api_key=config.yelp_api_key,
            bearer=True,
            fixed_params={
                "term": "restaurants",
                "locale": "en_US",
                "limit": RESTAURANT_PAGE_SIZE,
            },
        ),
    }


def build_provider_clients(config: Settings) -> Dict[str, ProviderClient]:
    return {
        name: ProviderClient(provider_config, timeout=config.provider_timeout_seconds)
        for name, provider_config in build_provider_configs(config).items()
    }


# ── Singleton Instances ───────────────────────────────────────────────────
provider_clients = build_provider_clients(settings)
