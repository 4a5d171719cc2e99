"""
City Explorer Backend — Geocode Cache Resolver
================================================

What:  Resolves a city string to a Location, reading through the location
       cache before calling the geocoding provider.
Who:   Called by GET /location with a per-request LocationStore.

Resolution Flow (cache-aside):
    ┌──────────┐   hit    ┌──────────────┐
    │  Store   │────────▶ │ return row   │
    │  lookup  │          └──────────────┘
    └────┬─────┘
         │ miss
         ▼
    ┌──────────┐  first   ┌──────────────┐   ┌──────────────┐
    │ LocationIQ│───────▶ │ normalize    │──▶│ add_if_absent│
    └──────────┘ candidate└──────────────┘   └──────────────┘

    The store lookup always happens before the provider call, and the
    provider call always happens before the insert.

In-flight collapsing:
    Concurrent resolutions of the same query in this process share one
    pending future. The first caller (the leader) does the lookup and the
    provider call; everyone else awaits its result or its error. The entry
    is dropped as soon as the leader finishes. If the leader's request is
    cancelled, its provider call is abandoned, nothing is written, and the
    next waiter takes over.

Errors:
    ValidationError  empty query (before any store or provider access)
    NotFoundError    provider has no candidate for the query
    ProviderError    provider call failed, or the candidate is unusable
    StoreError       cache read/write failed
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from city_explorer.exceptions import NotFoundError, ProviderError, ValidationError
from city_explorer.schemas.entities import Location
from city_explorer.services.location_store import LocationStore
from city_explorer.services.normalizers import normalize_location
from city_explorer.services.provider_client import ProviderClient
from city_explorer.services.providers import GEOCODE, provider_clients

logger = logging.getLogger(__name__)


def _consume_exception(future: "asyncio.Future[Location]") -> None:
    # Waiters re-raise the error themselves; with no waiters nobody else reads it
    if not future.cancelled():
        future.exception()


class LocationResolver:
    """
    Cache-aside geocoding with per-key collapsing of concurrent misses.

    The resolver itself holds no database state; the store is passed to
    every call, so one resolver instance serves all requests.
    """

    def __init__(self, provider: ProviderClient):
        self.provider = provider
        self._in_flight: Dict[str, "asyncio.Future[Location]"] = {}

    async def resolve(self, store: LocationStore, query: Optional[str]) -> Location:
        """
        Return the Location for `query`.

        Args:
            store: Location cache for this request
            query: City string exactly as the client sent it

        Raises:
            ValidationError, NotFoundError, ProviderError, StoreError
        """
        if query is None or not query.strip():
            raise ValidationError(
                message="Sorry, please enter a valid U.S. city",
                field="city",
            )

        while True:
            pending = self._in_flight.get(query)
            if pending is None:
                break
            # Raises CancelledError only when this task is cancelled; never cancels `pending`
            await asyncio.wait({pending})
            if pending.cancelled():
                # Leader was abandoned; try again, possibly as the new leader
                continue
            return pending.result()

        future: "asyncio.Future[Location]" = asyncio.get_running_loop().create_future()
        future.add_done_callback(_consume_exception)
        self._in_flight[query] = future
        try:
            location = await self._resolve_uncollapsed(store, query)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            raise
        else:
            future.set_result(location)
            return location
        finally:
            if self._in_flight.get(query) is future:
                del self._in_flight[query]

    async def _resolve_uncollapsed(self, store: LocationStore, query: str) -> Location:
        cached = await store.get(query)
        if cached is not None:
            logger.info("Location cache hit for %r", query)
            return cached

        logger.info("Location cache miss for %r; calling %s", query, self.provider.config.display_name)
        candidates = await self._fetch_candidates(query)
        if not candidates:
            raise NotFoundError(resource="location", query=query)

        # First candidate wins
        try:
            location = normalize_location(candidates[0], query)
        except ValueError as e:
            raise ProviderError(
                provider=self.provider.name,
                display_name=self.provider.config.display_name,
                detail=str(e),
            ) from e

        stored = await store.add_if_absent(location)
        logger.info(
            "Location stored for %r: %s (%s, %s)",
            query,
            stored.formatted_query,
            stored.latitude,
            stored.longitude,
        )
        return stored

    async def _fetch_candidates(self, query: str) -> list:
        try:
            payload: Any = await self.provider.fetch({"q": query})
        except ProviderError as e:
            # LocationIQ answers "Unable to geocode" with a 404
            if e.status_code == 404:
                raise NotFoundError(resource="location", query=query) from e
            raise

        if not isinstance(payload, list):
            raise ProviderError(
                provider=self.provider.name,
                display_name=self.provider.config.display_name,
                detail="expected a JSON list of candidates",
            )
        return payload


# ── Singleton Instance ────────────────────────────────────────────────────
# Shared so that the in-flight map spans all concurrent requests
location_resolver = LocationResolver(provider_clients[GEOCODE])
