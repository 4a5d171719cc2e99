"""
City Explorer Backend — Explorer Service Tests
================================================

What:  Parameter handling and result shaping for weather, parks, movies
       and restaurants.
How:   Provider clients with AsyncMock fetch(); assertions on the params
       each client was called with and on the returned records.
"""

import pytest

from city_explorer.exceptions import ProviderError, ValidationError
from city_explorer.services.explorer_service import (
    ExplorerService,
    parse_coordinate,
    parse_page,
    restaurant_offset,
)


def weather_payload(days):
    return {
        "city_name": "Seattle",
        "data": [
            {"weather": {"description": f"Day {i}"}, "valid_date": f"2024-01-{i + 1:02d}"}
            for i in range(days)
        ],
    }


@pytest.fixture
def build_service(make_client):
    def _build(**responses):
        clients = {
            name: make_client(name, return_value=responses.get(name))
            for name in ("geocode", "weather", "parks", "movies", "restaurants")
        }
        return ExplorerService(clients), clients

    return _build


class TestPaging:

    @pytest.mark.parametrize("page,offset", [(1, 0), (2, 5), (3, 10)])
    def test_restaurant_offset(self, page, offset):
        assert restaurant_offset(page) == offset

    def test_custom_page_size(self):
        assert restaurant_offset(4, page_size=20) == 60

    @pytest.mark.parametrize("raw,expected", [("1", 1), ("3", 3), (" 2 ", 2), (7, 7)])
    def test_parse_page_valid(self, raw, expected):
        assert parse_page(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "0", "-1", "two", "1.5", "1_0", "٣", True, 0])
    def test_parse_page_invalid(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            parse_page(raw)
        assert exc_info.value.field == "page"


class TestCoordinates:

    def test_blank_is_absent(self):
        assert parse_coordinate(None, "latitude", 90) is None
        assert parse_coordinate("  ", "latitude", 90) is None

    def test_parses_number(self):
        assert parse_coordinate("-122.3", "longitude", 180) == -122.3

    @pytest.mark.parametrize("raw", ["north", "91", "-90.5"])
    def test_rejects_invalid_latitude(self, raw):
        with pytest.raises(ValidationError):
            parse_coordinate(raw, "latitude", 90)


class TestWeather:

    @pytest.mark.asyncio
    async def test_caps_forecast_at_eight_days(self, build_service):
        service, clients = build_service(weather=weather_payload(16))

        days = await service.get_weather("Seattle")

        assert len(days) == 8
        assert days[0].forecast == "Day 0"
        assert days[0].time == "2024-01-01"
        clients["weather"].fetch.assert_awaited_once_with({"city": "Seattle", "country": "US"})

    @pytest.mark.asyncio
    async def test_uses_coordinates_when_both_present(self, build_service):
        service, clients = build_service(weather=weather_payload(3))

        days = await service.get_weather("Seattle", latitude="47.6", longitude="-122.3")

        assert len(days) == 3
        clients["weather"].fetch.assert_awaited_once_with({"lat": 47.6, "lon": -122.3})

    @pytest.mark.asyncio
    async def test_single_coordinate_falls_back_to_city(self, build_service):
        service, clients = build_service(weather=weather_payload(1))

        await service.get_weather("Seattle", latitude="47.6")

        clients["weather"].fetch.assert_awaited_once_with({"city": "Seattle", "country": "US"})

    @pytest.mark.asyncio
    async def test_missing_data_key_is_provider_error(self, build_service):
        service, _ = build_service(weather={"error": "API key not valid"})

        with pytest.raises(ProviderError) as exc_info:
            await service.get_weather("Seattle")

        assert exc_info.value.message == "Weatherbit failed"


class TestParks:

    @pytest.mark.asyncio
    async def test_caps_at_ten(self, build_service):
        payload = {"total": "12", "data": [{"fullName": f"Park {i}"} for i in range(12)]}
        service, clients = build_service(parks=payload)

        parks = await service.get_parks("Seattle")

        assert [p.name for p in parks] == [f"Park {i}" for i in range(10)]
        clients["parks"].fetch.assert_awaited_once_with({"q": "Seattle"})

    @pytest.mark.asyncio
    async def test_empty_result_is_empty_list(self, build_service):
        service, _ = build_service(parks={"total": "0", "data": []})
        assert await service.get_parks("Nowhere") == []


class TestMovies:

    @pytest.mark.asyncio
    async def test_maps_results(self, build_service):
        payload = {"page": 1, "results": [{"title": "Sleepless in Seattle", "poster_path": "/s.jpg"}]}
        service, clients = build_service(movies=payload)

        movies = await service.get_movies("Seattle")

        assert movies[0].title == "Sleepless in Seattle"
        assert movies[0].image_url.endswith("/w500/s.jpg")
        clients["movies"].fetch.assert_awaited_once_with({"query": "Seattle"})


class TestRestaurants:

    @pytest.mark.asyncio
    async def test_page_three_uses_offset_ten(self, build_service):
        payload = {"businesses": [{"name": f"R{i}", "rating": 4} for i in range(5)]}
        service, clients = build_service(restaurants=payload)

        restaurants = await service.get_restaurants("Seattle", "3")

        assert len(restaurants) == 5
        clients["restaurants"].fetch.assert_awaited_once_with({"location": "Seattle", "offset": 10})

    @pytest.mark.asyncio
    async def test_invalid_page_makes_no_call(self, build_service):
        service, clients = build_service(restaurants={"businesses": []})

        with pytest.raises(ValidationError):
            await service.get_restaurants("Seattle", "0")

        clients["restaurants"].fetch.assert_not_awaited()


class TestCommonErrors:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get_weather", "get_parks", "get_movies"])
    async def test_blank_search_query_rejected(self, build_service, method):
        service, clients = build_service()

        with pytest.raises(ValidationError) as exc_info:
            await getattr(service, method)("  ")

        assert exc_info.value.field == "search_query"
        for client in clients.values():
            client.fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, make_client):
        error = ProviderError("movies", detail="HTTP 401", display_name="MovieDB", status_code=401)
        service = ExplorerService({"movies": make_client("movies", side_effect=error)})

        with pytest.raises(ProviderError) as exc_info:
            await service.get_movies("Seattle")

        assert exc_info.value is error
