"""
City Explorer Backend — Provider Client
=========================================

What:  Issues one outbound HTTP GET to a third-party API and returns the
       decoded JSON payload.
How:   A ProviderConfig describes the provider (URL, credential placement,
       fixed query parameters); a ProviderClient wraps one config and turns
       every failure into a ProviderError.
Who:   LocationResolver (geocoding) and ExplorerService (everything else).

Call contract:
    - Exactly one request per fetch(); nothing is retried.
    - Every call carries an explicit timeout (PROVIDER_TIMEOUT_SECONDS).
    - Cancelling the calling task cancels the in-flight request.
    - httpx exceptions never escape; callers only see ProviderError.

Credential placement:
    api_key_param set  → key sent as a query parameter (LocationIQ, NPS, ...)
    bearer=True        → key sent as `Authorization: Bearer <key>` (Yelp)
"""

import logging
import time
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel, Field

from city_explorer.exceptions import ProviderError
from city_explorer.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class ProviderConfig(BaseModel):
    """
    Static description of one external provider.

    Attributes:
        name:          Registry key ("geocode", "weather", ...)
        display_name:  Name used in user-facing error messages
        url:           Endpoint receiving the GET request
        api_key:       Credential; excluded from repr so it never hits a log
        api_key_param: Query parameter carrying the key, if any
        bearer:        Send the key as a bearer Authorization header instead
        fixed_params:  Query parameters sent on every call
    """
    name: str
    display_name: str
    url: str
    api_key: str = Field(default="", repr=False)
    api_key_param: Optional[str] = None
    bearer: bool = False
    fixed_params: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class ProviderClient:
    """
    Async HTTP client bound to a single provider.

    A fresh httpx.AsyncClient is opened per fetch so that a failure in one
    call leaves nothing behind for the next. Tests pass an
    `httpx.MockTransport` through `transport`.
    """

    def __init__(
        self,
        config: ProviderConfig,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return self.config.name

    def build_params(self, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Merges fixed params, per-call params and the key parameter. None values are dropped."""
        merged: Dict[str, Any] = dict(self.config.fixed_params)
        if params:
            merged.update(params)
        if self.config.api_key_param:
            merged[self.config.api_key_param] = self.config.api_key
        return {key: value for key, value in merged.items() if value is not None}

    def build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.bearer:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def fetch(self, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Perform the request and return the decoded JSON body.

        Args:
            params: Per-call query parameters (search text, offset, ...)

        Returns:
            Whatever JSON the provider sent (dict or list).

        Raises:
            ProviderError: transport failure, timeout, non-2xx status or a
                body that is not valid JSON.
        """
        rid = request_id_var.get("")
        start_time = time.perf_counter()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    self.config.url,
                    params=self.build_params(params),
                    headers=self.build_headers(),
                )
                response.raise_for_status()
                payload = response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self._log_failure(rid, start_time, f"HTTP {status}")
            raise ProviderError(
                provider=self.config.name,
                display_name=self.config.display_name,
                detail=f"{self.config.display_name} responded with HTTP {status}",
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            self._log_failure(rid, start_time, "timeout")
            raise ProviderError(
                provider=self.config.name,
                display_name=self.config.display_name,
                detail=f"Request timed out after {self.timeout:g}s",
            ) from e
        except httpx.HTTPError as e:
            self._log_failure(rid, start_time, str(e) or type(e).__name__)
            raise ProviderError(
                provider=self.config.name,
                display_name=self.config.display_name,
                detail=str(e) or type(e).__name__,
            ) from e
        except ValueError as e:
            # response.json() raises json.JSONDecodeError, a ValueError subclass
            self._log_failure(rid, start_time, "invalid JSON body")
            raise ProviderError(
                provider=self.config.name,
                display_name=self.config.display_name,
                detail="Response body is not valid JSON",
            ) from e

        logger.info(
            "[%s] %s call completed in %.0fms",
            rid,
            self.config.display_name,
            (time.perf_counter() - start_time) * 1000,
        )
        return payload

    def _log_failure(self, rid: str, start_time: float, reason: str) -> None:
        logger.warning(
            "[%s] %s call failed after %.0fms: %s",
            rid,
            self.config.display_name,
            (time.perf_counter() - start_time) * 1000,
            reason,
        )
