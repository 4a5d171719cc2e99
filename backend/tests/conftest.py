"""
City Explorer Backend — Test Configuration (conftest.py)
==========================================================

What:  Shared fixtures: environment overrides, an in-memory location store,
       provider clients with mocked fetch(), a SQLite-backed session and an
       HTTPX client bound to the app.

Fixture Inventory:
    memory_store      in-memory LocationStore recording every call
    make_client       factory: ProviderClient with fetch() replaced by AsyncMock
    sql_session       AsyncSession on a fresh in-memory SQLite database
    test_client       HTTPX AsyncClient routed straight into the ASGI app
"""

import os
import tempfile

# Must run before any city_explorer import: settings and the engine are built at import
os.environ["DATABASE_URL"] = (
    "sqlite+aiosqlite:///" + os.path.join(tempfile.mkdtemp(prefix="city_explorer_test_"), "test.db")
)
for _key in ("GEOCODE_API_KEY", "WEATHER_API_KEY", "PARKS_API_KEY", "MOVIE_API_KEY", "YELP_API_KEY"):
    os.environ[_key] = "test-key-not-real"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, Dict, List, Optional  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from city_explorer.database import Base  # noqa: E402
from city_explorer.models.location import LocationRecord  # noqa: E402,F401
from city_explorer.schemas.entities import Location  # noqa: E402
from city_explorer.services.location_store import LocationStore  # noqa: E402
from city_explorer.services.provider_client import ProviderClient, ProviderConfig  # noqa: E402
from city_explorer.services.providers import build_provider_configs  # noqa: E402
from city_explorer.config import settings  # noqa: E402


# ══════════════════════════════════════════════════════════════════════════
# Test Doubles
# ══════════════════════════════════════════════════════════════════════════

class InMemoryLocationStore(LocationStore):
    """
    Dict-backed LocationStore.

    `events` records ("get", query) / ("add", query) in call order so tests
    can assert that lookups precede inserts.
    """

    def __init__(self, rows: Optional[Dict[str, Location]] = None):
        self.rows: Dict[str, Location] = dict(rows or {})
        self.events: List[tuple] = []

    async def get(self, search_query: str) -> Optional[Location]:
        self.events.append(("get", search_query))
        return self.rows.get(search_query)

    async def add_if_absent(self, location: Location) -> Location:
        self.events.append(("add", location.search_query))
        return self.rows.setdefault(location.search_query, location)

    @property
    def add_count(self) -> int:
        return sum(1 for kind, _ in self.events if kind == "add")


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def memory_store():
    return InMemoryLocationStore()


@pytest.fixture
def provider_configs() -> Dict[str, ProviderConfig]:
    return build_provider_configs(settings)


@pytest.fixture
def make_client(provider_configs):
    """
    Factory for provider clients whose fetch() is an AsyncMock.

    Usage:
        client = make_client("geocode", return_value=[...])
        client = make_client("parks", side_effect=ProviderError("parks"))
    """

    def _make(name: str, return_value: Any = None, side_effect: Any = None) -> ProviderClient:
        client = ProviderClient(provider_configs[name])
        client.fetch = AsyncMock(return_value=return_value, side_effect=side_effect)
        return client

    return _make


@pytest.fixture
def seattle_candidates():
    return [{"display_name": "Seattle, WA, USA", "lat": "47.6", "lon": "-122.3"}]


@pytest_asyncio.fixture
async def sql_session():
    """AsyncSession on an isolated in-memory SQLite database with the schema created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to the FastAPI app via ASGITransport.

    Dependency overrides set by a test are cleared afterwards.
    """
    from city_explorer.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
