"""
City Explorer Backend — Result Records
========================================

What:  The five fixed-shape records every endpoint returns.
How:   Frozen Pydantic models. Normalizers build them from raw provider
       items; FastAPI serializes them as the response body.

Field names are the wire contract the front-end reads, so they keep the
snake_case names of the original API (`formatted_query`, `average_votes`,
`released_on`, ...).
"""

from pydantic import BaseModel, Field


class Location(BaseModel):
    """
    A geocoded city.

    Identity is `search_query`, the string exactly as the client sent it.
    Returned by GET /location; persisted in the `location` table.
    """
    search_query: str = Field(description="City string as entered by the user")
    formatted_query: str = Field(description="Provider display name for the match")
    latitude: float = Field(description="Latitude in decimal degrees")
    longitude: float = Field(description="Longitude in decimal degrees")

    model_config = {"frozen": True, "from_attributes": True}


class WeatherDay(BaseModel):
    """One day of the daily forecast."""
    forecast: str = Field(description="Textual weather description")
    time: str = Field(description="Forecast date as reported by the provider")

    model_config = {"frozen": True}


class Park(BaseModel):
    """
    A national park near the searched city.

    `address` is "line1, city, stateCode, postalCode" of the first address
    the provider lists; `fee` is the cost of the first entrance fee.
    """
    name: str
    address: str
    fee: float
    description: str
    url: str

    model_config = {"frozen": True}


class Movie(BaseModel):
    """A movie whose title matches the searched city."""
    title: str
    overview: str
    average_votes: float
    total_votes: int
    image_url: str = Field(description="Poster URL on the TMDB image host")
    popularity: float
    released_on: str

    model_config = {"frozen": True}


class Restaurant(BaseModel):
    """A restaurant returned by the Yelp business search."""
    name: str
    image_url: str
    price: str = Field(description="Price tier, e.g. '$$'")
    rating: float
    url: str

    model_config = {"frozen": True}
