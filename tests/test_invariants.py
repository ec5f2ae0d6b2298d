"""
Invariant Enforcement Tests

These tests exist ONLY to verify that the dashboard's invariants hold.
They are NOT feature tests.

Each test asserts one of:
- Failures below the orchestrator are typed and never escape it
- Forecasts hold at most five distinct days in first-seen order
- The recent-search list holds at most five distinct places
"""

from datetime import timezone

import pytest

from weather_dashboard.errors import (
    ConfigurationError,
    GeolocationUnavailable,
    LookupFailed,
    MalformedPayload,
    TransportFailure,
    UpstreamFailure,
    WeatherFailure,
)
from weather_dashboard.normalizer import normalize_forecast
from weather_dashboard.orchestrator import SearchOrchestrator
from weather_dashboard.storage import RecentSearches, push_recent

from conftest import HOUR, JAN_15_2024, MockTransport, make_client, make_entry, make_forecast


# -----------------------------------------------------------------------------
# Failure Authority
# No raw exception may escape the orchestrator boundary.
# -----------------------------------------------------------------------------


class TestFailureAuthority:
    """Verify all lookup failures are typed WeatherFailure instances."""

    @pytest.mark.parametrize(
        "failure_type",
        [UpstreamFailure, TransportFailure, MalformedPayload],
    )
    def test_lookup_failures(self, failure_type):
        assert issubclass(failure_type, LookupFailed)
        assert issubclass(failure_type, WeatherFailure)

    def test_other_failures_are_not_lookup_failures(self):
        assert not issubclass(GeolocationUnavailable, LookupFailed)
        assert not issubclass(ConfigurationError, LookupFailed)

    def test_categories_distinct(self):
        categories = {
            cls.failure_category
            for cls in (
                UpstreamFailure,
                TransportFailure,
                MalformedPayload,
                GeolocationUnavailable,
                ConfigurationError,
            )
        }
        assert len(categories) == 5

    @pytest.mark.asyncio
    async def test_orchestrator_never_raises(self, store):
        orchestrator = SearchOrchestrator(
            client=make_client(MockTransport({})),
            recent=RecentSearches(store),
            tz=timezone.utc,
        )

        # Must not raise
        assert await orchestrator.search("Atlantis") is False
        assert await orchestrator.search_coordinates(0.0, 0.0) is False
        assert len(orchestrator.state.notifications) == 2


# -----------------------------------------------------------------------------
# Forecast Shape
# -----------------------------------------------------------------------------


class TestForecastShape:
    """Verify forecast length and ordering hold for varied feeds."""

    @pytest.mark.parametrize("count", [0, 1, 8, 9, 40, 80])
    def test_at_most_five_distinct_days(self, count):
        days = normalize_forecast(make_forecast(count=count), tz=timezone.utc)

        assert len(days) <= 5
        assert len({d.day for d in days}) == len(days)

    @pytest.mark.parametrize("start_hour", [0, 3, 21])
    def test_order_is_first_seen(self, start_hour):
        raw = make_forecast(start=JAN_15_2024 + start_hour * HOUR)
        days = normalize_forecast(raw, tz=timezone.utc)

        assert [d.day for d in days] == sorted(d.day for d in days)

    def test_later_same_day_entries_never_merge(self):
        raw = {"list": [
            make_entry(JAN_15_2024 + h * HOUR, temp_min=58 - h, temp_max=71 + h)
            for h in range(0, 24, 3)
        ]}
        (day,) = normalize_forecast(raw, tz=timezone.utc)

        assert (day.temp_min, day.temp_max) == (58, 71)


# -----------------------------------------------------------------------------
# Recent Searches
# -----------------------------------------------------------------------------


class TestRecentSearchBounds:
    """Verify the recent list stays bounded and duplicate-free."""

    def test_bounded_and_unique(self):
        searches: list[str] = []
        for place in ["A", "B", "A", "C", "D", "E", "F", "B", "G"]:
            searches = push_recent(searches, place)
            assert len(searches) <= 5
            assert len(set(searches)) == len(searches)
            assert searches[0] == place
