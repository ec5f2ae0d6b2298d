"""
OpenWeather Client

Issues the two requests a lookup needs:
1. `GET /weather` for current conditions
2. `GET /forecast` for the 5-day / 3-hour feed

Both run concurrently. Any transport error, non-success status, or
non-JSON body raises a LookupFailed subtype; there is no retry.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .config import (
    HTTP_TIMEOUT_SECONDS,
    OPENWEATHER_API_KEY,
    OPENWEATHER_BASE_URL,
    WEATHER_UNITS,
)
from .errors import ConfigurationError, MalformedPayload, TransportFailure, UpstreamFailure
from .models import LocationQuery

logger = logging.getLogger(__name__)

SUPPORTED_UNITS = ("standard", "metric", "imperial")

CURRENT_PATH = "/weather"
FORECAST_PATH = "/forecast"


class OpenWeatherClient:
    """
    Thin async client for the OpenWeather 2.5 API.

    The underlying httpx client is created lazily and must be closed
    with `close()` when the application shuts down.
    """

    def __init__(
        self,
        base_url: str = OPENWEATHER_BASE_URL,
        api_key: str = OPENWEATHER_API_KEY,
        units: str = WEATHER_UNITS,
        timeout: float = HTTP_TIMEOUT_SECONDS,
    ):
        if units not in SUPPORTED_UNITS:
            raise ConfigurationError(
                f"Unsupported units {units!r}; expected one of {', '.join(SUPPORTED_UNITS)}"
            )
        if not api_key:
            logger.warning("No OpenWeather API key configured; lookups will be rejected upstream")

        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.units = units
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Clean up HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def _build_params(self, query: LocationQuery) -> dict[str, Any]:
        return {**query.to_params(), "appid": self.api_key, "units": self.units}

    async def _get_json(self, path: str, query: LocationQuery) -> Any:
        logger.debug("GET %s for %s", path, query.describe())

        try:
            response = await self.client.get(path, params=self._build_params(query))
        except httpx.HTTPError as e:
            logger.error("Transport error on %s for %s: %s", path, query.describe(), e)
            raise TransportFailure(f"HTTP error: {e!s}", cause=e) from e

        if not response.is_success:
            raise UpstreamFailure(
                f"OpenWeather {path} returned {response.status_code}: {self._error_message(response)}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedPayload(f"OpenWeather {path} returned a non-JSON body", cause=e) from e

    def _error_message(self, response: httpx.Response) -> str:
        """Pull the provider's `message` field out of an error body if there is one."""
        try:
            data = response.json()
        except ValueError:
            return response.text[:200]
        if isinstance(data, dict) and "message" in data:
            return str(data["message"])
        return response.text[:200]

    async def fetch_current(self, query: LocationQuery) -> Any:
        """Raw current-conditions body."""
        return await self._get_json(CURRENT_PATH, query)

    async def fetch_forecast(self, query: LocationQuery) -> Any:
        """Raw 5-day / 3-hour forecast body."""
        return await self._get_json(FORECAST_PATH, query)

    async def fetch_both(self, query: LocationQuery) -> tuple[Any, Any]:
        """
        Fetch current conditions and forecast concurrently.

        Fails as a unit: if either request fails, its error propagates,
        the other request is cancelled, and neither body is returned.
        """
        tasks = [
            asyncio.ensure_future(self.fetch_current(query)),
            asyncio.ensure_future(self.fetch_forecast(query)),
        ]
        try:
            current, forecast = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
        logger.info("Fetched current conditions and forecast for %s", query.describe())
        return current, forecast
