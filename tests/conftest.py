"""
Shared test fixtures for weather dashboard tests.

Provides a mock OpenWeather transport, sample payloads, and
pre-wired clients and orchestrators.
"""

from __future__ import annotations

from datetime import timezone
from typing import Any

import httpx
import pytest

from weather_dashboard.client import OpenWeatherClient
from weather_dashboard.orchestrator import SearchOrchestrator
from weather_dashboard.storage import MemoryStore, RecentSearches

BASE_URL = "https://api.test/data/2.5"
CURRENT_PATH = "/data/2.5/weather"
FORECAST_PATH = "/data/2.5/forecast"

# 2024-01-15 00:00:00 UTC, a Monday
JAN_15_2024 = 1705276800
HOUR = 3600


# -----------------------------------------------------------------------------
# Mock HTTP Transport
# -----------------------------------------------------------------------------


class MockTransport(httpx.AsyncBaseTransport):
    """
    Mock transport that returns predefined responses.

    Useful for testing HTTP interactions without hitting the real provider.
    """

    def __init__(self, responses: dict[str, tuple[int, Any]]):
        """
        Initialize mock transport with predefined responses.

        Args:
            responses: Dict mapping URL paths to (status_code, response_data) tuples.
                String response data is sent as a raw text body.
        """
        self.responses = responses
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async request by returning a predefined response."""
        self.requests.append(request)

        path = request.url.path
        if path in self.responses:
            status, data = self.responses[path]
            if isinstance(data, str):
                return httpx.Response(status, text=data)
            return httpx.Response(status, json=data)

        return httpx.Response(404, json={"cod": "404", "message": "city not found"})


# -----------------------------------------------------------------------------
# Test Data
# -----------------------------------------------------------------------------


def make_current(**overrides: Any) -> dict[str, Any]:
    """A `GET /weather` body, in imperial units."""
    data: dict[str, Any] = {
        "coord": {"lon": 2.35, "lat": 48.85},
        "weather": [
            {"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}
        ],
        "base": "stations",
        "main": {
            "temp": 61.5,
            "feels_like": 60.2,
            "temp_min": 58.1,
            "temp_max": 64.0,
            "pressure": 1013,
            "humidity": 72,
        },
        "visibility": 10000,
        "wind": {"speed": 8.4, "deg": 220},
        "clouds": {"all": 75},
        "dt": JAN_15_2024 + 12 * HOUR,
        "sys": {"country": "FR", "sunrise": 1705303500, "sunset": 1705335300},
        "timezone": 3600,
        "id": 2988507,
        "name": "Paris",
        "cod": 200,
    }
    data.update(overrides)
    return data


def make_entry(
    dt: int,
    temp_min: float = 50.0,
    temp_max: float = 60.0,
    main: str = "Clear",
    description: str = "clear sky",
    icon: str = "01d",
) -> dict[str, Any]:
    """One 3-hour slice of a `GET /forecast` body."""
    return {
        "dt": dt,
        "main": {"temp": (temp_min + temp_max) / 2, "temp_min": temp_min, "temp_max": temp_max},
        "weather": [{"id": 800, "main": main, "description": description, "icon": icon}],
        "dt_txt": "",
    }


def make_forecast(start: int = JAN_15_2024 + 9 * HOUR, count: int = 40) -> dict[str, Any]:
    """
    A `GET /forecast` body of `count` entries, 3 hours apart.

    The default starts at 09:00 UTC on Jan 15, so the first day is
    partial and the feed spans six calendar days.
    """
    entries = [
        make_entry(start + i * 3 * HOUR, temp_min=40.0 + i, temp_max=50.0 + i)
        for i in range(count)
    ]
    return {"cod": "200", "message": 0, "cnt": len(entries), "list": entries, "city": {"name": "Paris"}}


# -----------------------------------------------------------------------------
# Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def current_payload() -> dict[str, Any]:
    return make_current()


@pytest.fixture
def forecast_payload() -> dict[str, Any]:
    return make_forecast()


@pytest.fixture
def mock_transport(current_payload, forecast_payload) -> MockTransport:
    """Create a mock transport where both endpoints succeed."""
    return MockTransport({
        CURRENT_PATH: (200, current_payload),
        FORECAST_PATH: (200, forecast_payload),
    })


def make_client(transport: httpx.AsyncBaseTransport) -> OpenWeatherClient:
    """Create a client whose HTTP traffic goes to `transport`."""
    client = OpenWeatherClient(base_url=BASE_URL, api_key="test-key", units="imperial")

    # Inject mock transport
    client._client = httpx.AsyncClient(base_url=BASE_URL, transport=transport)
    return client


@pytest.fixture
def weather_client(mock_transport: MockTransport) -> OpenWeatherClient:
    return make_client(mock_transport)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def orchestrator(weather_client: OpenWeatherClient, store: MemoryStore) -> SearchOrchestrator:
    """Create an orchestrator with mock HTTP client and in-memory storage."""
    orchestrator = SearchOrchestrator(
        client=weather_client,
        recent=RecentSearches(store),
        tz=timezone.utc,
    )
    orchestrator.start()
    return orchestrator
