"""
City Explorer Backend — Normalizer Tests
==========================================

What:  Raw provider item → record mapping, including malformed items.

What we test:
    ✅ Field mapping for each provider layout
    ✅ Movie poster URL = image host + poster_path
    ✅ Missing nested lists/objects give empty or zero values
    ✅ Same input, same output (no hidden state)
    ✅ extract_items rejects payloads without the list key
"""

import pytest

from city_explorer.services.normalizers import (
    MOVIE_IMAGE_BASE_URL,
    extract_items,
    normalize_location,
    normalize_movie,
    normalize_park,
    normalize_restaurant,
    normalize_weather_day,
)

MOVIE_RAW = {
    "title": "X",
    "poster_path": "/abc.jpg",
    "vote_average": 7.1,
    "vote_count": 10,
    "popularity": 5.0,
    "release_date": "2020-01-01",
    "overview": "...",
}

PARK_RAW = {
    "fullName": "Klondike Gold Rush - Seattle Unit National Historical Park",
    "addresses": [
        {"line1": "319 Second Ave S.", "city": "Seattle", "stateCode": "WA", "postalCode": "98104"},
        {"line1": "PO Box 517", "city": "Skagway", "stateCode": "AK", "postalCode": "99840"},
    ],
    "entranceFees": [{"cost": "0.00"}, {"cost": "15.00"}],
    "description": "Seattle flourished during and after the Klondike Gold Rush.",
    "url": "https://www.nps.gov/klse/index.htm",
}


class TestNormalizeLocation:

    def test_maps_candidate_and_keeps_query(self):
        raw = {"display_name": "Seattle, WA, USA", "lat": "47.6", "lon": "-122.3"}

        location = normalize_location(raw, "Seattle")

        assert location.search_query == "Seattle"
        assert location.formatted_query == "Seattle, WA, USA"
        assert location.latitude == 47.6
        assert location.longitude == -122.3

    @pytest.mark.parametrize("raw", [{}, {"lat": "47.6"}, {"lat": "north", "lon": "-122.3"}, None])
    def test_missing_coordinates_raise(self, raw):
        with pytest.raises(ValueError):
            normalize_location(raw, "Seattle")


class TestNormalizeWeatherDay:

    def test_maps_description_and_date(self):
        raw = {"weather": {"description": "Light rain", "code": 500}, "valid_date": "2024-01-15"}

        day = normalize_weather_day(raw)

        assert day.forecast == "Light rain"
        assert day.time == "2024-01-15"

    def test_missing_weather_object(self):
        day = normalize_weather_day({"valid_date": "2024-01-15"})
        assert day.forecast == ""
        assert day.time == "2024-01-15"


class TestNormalizePark:

    def test_uses_first_address_and_fee(self):
        park = normalize_park(PARK_RAW)

        assert park.name == PARK_RAW["fullName"]
        assert park.address == "319 Second Ave S., Seattle, WA, 98104"
        assert park.fee == 0.0
        assert park.url == "https://www.nps.gov/klse/index.htm"

    def test_no_addresses_or_fees(self):
        park = normalize_park({"fullName": "Mount Rainier", "addresses": [], "description": "d", "url": "u"})

        assert park.address == ""
        assert park.fee == 0.0
        assert park.name == "Mount Rainier"

    def test_partial_address_skips_blank_parts(self):
        park = normalize_park({"addresses": [{"line1": "", "city": "Ashford", "stateCode": "WA"}]})
        assert park.address == "Ashford, WA"


class TestNormalizeMovie:

    def test_poster_url_is_base_plus_path(self):
        movie = normalize_movie(MOVIE_RAW)

        assert movie.image_url == MOVIE_IMAGE_BASE_URL + "/abc.jpg"
        assert movie.image_url == "https://image.tmdb.org/t/p/w500/abc.jpg"
        assert movie.title == "X"
        assert movie.average_votes == 7.1
        assert movie.total_votes == 10
        assert movie.popularity == 5.0
        assert movie.released_on == "2020-01-01"

    def test_missing_poster_path_leaves_bare_base(self):
        movie = normalize_movie({**MOVIE_RAW, "poster_path": None})
        assert movie.image_url == MOVIE_IMAGE_BASE_URL

    def test_is_pure(self):
        assert normalize_movie(MOVIE_RAW) == normalize_movie(MOVIE_RAW)
        assert MOVIE_RAW["poster_path"] == "/abc.jpg"


class TestNormalizeRestaurant:

    def test_maps_business(self):
        raw = {
            "name": "Pike Place Chowder",
            "image_url": "https://s3-media.yelpcdn.com/bphoto/x/o.jpg",
            "price": "$$",
            "rating": 4.5,
            "url": "https://www.yelp.com/biz/pike-place-chowder-seattle",
        }

        restaurant = normalize_restaurant(raw)

        assert restaurant.name == "Pike Place Chowder"
        assert restaurant.price == "$$"
        assert restaurant.rating == 4.5

    def test_missing_price_tier(self):
        restaurant = normalize_restaurant({"name": "Cafe", "rating": "4"})
        assert restaurant.price == ""
        assert restaurant.rating == 4.0


class TestBatchTolerance:

    def test_malformed_item_does_not_drop_batch(self):
        items = [PARK_RAW, {"fullName": "Broken"}, "not-an-object", PARK_RAW]

        parks = [normalize_park(item) for item in items]

        assert len(parks) == 4
        assert parks[1].name == "Broken"
        assert parks[2].name == ""


class TestExtractItems:

    def test_returns_list(self):
        assert extract_items({"data": [1, 2]}, "data") == [1, 2]

    @pytest.mark.parametrize("payload", [{"data": None}, {}, [], "oops", {"data": {"a": 1}}])
    def test_rejects_unexpected_shape(self, payload):
        with pytest.raises(ValueError):
            extract_items(payload, "data")
