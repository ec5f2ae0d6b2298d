"""
Search Orchestrator

Single entry point for every lookup the page can trigger:
place-name search, current location, refresh, and recent-search replay.

Flow:
    lookup
      → mark loading
      → fetch current + forecast concurrently
      → normalize both
      → commit both (or nothing) and record the search
      → clear loading

Failures never escape: each failed lookup becomes exactly one
notification on the dashboard state.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime, tzinfo
from typing import Any

from pydantic import ValidationError

from .client import OpenWeatherClient
from .config import (
    CITY_NOT_FOUND_MESSAGE,
    DEFAULT_PLACE,
    FETCH_FAILED_MESSAGE,
    RECENT_SEARCHES_PATH,
)
from .errors import GeolocationUnavailable, LookupFailed
from .geolocation import GeolocationProvider
from .models import DashboardState, LocationQuery, Notification
from .normalizer import normalize_current, normalize_forecast
from .storage import JsonFileStore, RecentSearches

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """
    Owns the dashboard state and is its only writer.

    State is an immutable DashboardState swapped wholesale, so current
    conditions and forecast always change together. Each lookup takes a
    sequence number; a lookup that finishes after a newer one started is
    discarded instead of overwriting the newer result.
    """

    def __init__(
        self,
        client: OpenWeatherClient,
        recent: RecentSearches,
        *,
        default_place: str = DEFAULT_PLACE,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._client = client
        self._recent = recent
        self._default_place = default_place
        self._tz = tz
        self._clock = clock

        self._state = DashboardState()
        self._sequence = 0
        self._in_flight = 0
        self._save_lock = asyncio.Lock()

    @property
    def state(self) -> DashboardState:
        return self._state

    def _update(self, **changes: Any) -> None:
        self._state = self._state.model_copy(update=changes)

    def start(self) -> None:
        """Load the persisted recent searches. Called once at startup."""
        searches = self._recent.load()
        self._update(recent_searches=tuple(searches))
        logger.info("Loaded %d recent searches", len(searches))

    async def close(self) -> None:
        await self._client.close()

    def snapshot(self) -> DashboardState:
        """Return the current state and hand off its pending notifications."""
        state = self._state
        if state.notifications:
            self._update(notifications=())
        return state

    def _notify(self, description: str) -> None:
        notification = Notification(title="Error", description=description, variant="destructive")
        self._update(notifications=(*self._state.notifications, notification))

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    async def search(self, place: str) -> bool:
        """
        Look up a place by name.

        Blank input is ignored: no request, no state change.
        Returns True if new results were committed.
        """
        place = place.strip()
        if not place:
            return False
        return await self._lookup(LocationQuery.for_place(place), CITY_NOT_FOUND_MESSAGE)

    async def select_recent(self, place: str) -> bool:
        """Replay a recent search."""
        return await self.search(place)

    async def search_coordinates(self, latitude: float, longitude: float) -> bool:
        """Look up a coordinate pair. Never touches recent searches."""
        try:
            query = LocationQuery.for_coordinates(latitude, longitude)
        except ValidationError as e:
            logger.warning("Rejected coordinates (%s, %s): %s", latitude, longitude, e)
            self._notify(FETCH_FAILED_MESSAGE)
            return False
        return await self._lookup(query, FETCH_FAILED_MESSAGE)

    async def use_current_location(self, provider: GeolocationProvider) -> bool:
        """Look up the device position, falling back to the default place."""
        try:
            coordinates = await provider.locate()
        except GeolocationUnavailable as e:
            logger.info("Geolocation unavailable (%s); using %s", e, self._default_place)
            return await self.search(self._default_place)
        return await self.search_coordinates(coordinates.latitude, coordinates.longitude)

    async def refresh(self) -> bool:
        """Re-run the last successful place-name lookup, or the displayed place."""
        place = self._state.last_query
        if place is None and self._state.current is not None:
            place = self._state.current.name
        if place is None:
            return False
        return await self.search(place)

    async def _lookup(self, query: LocationQuery, failure_message: str) -> bool:
        self._sequence += 1
        sequence = self._sequence
        self._in_flight += 1
        self._update(loading=True)

        try:
            raw_current, raw_forecast = await self._client.fetch_both(query)
            current = normalize_current(raw_current)
            forecast = tuple(normalize_forecast(raw_forecast, tz=self._tz))

            if sequence != self._sequence:
                logger.info("Discarding stale lookup for %s", query.describe())
                return False

            changes: dict[str, Any] = {
                "current": current,
                "forecast": forecast,
                "last_updated": self._clock(),
            }
            if query.place is not None:
                searches = self._recent.push(self._state.recent_searches, query.place)
                changes["recent_searches"] = tuple(searches)
                changes["last_query"] = query.place

            self._update(**changes)
            logger.info("Committed %s: %d forecast days", query.describe(), len(forecast))

        except LookupFailed as e:
            logger.warning("Lookup failed for %s: %s", query.describe(), e)
            self._notify(failure_message)
            return False
        except Exception:
            logger.exception("Unexpected error during lookup for %s", query.describe())
            self._notify(failure_message)
            return False
        finally:
            self._in_flight -= 1
            self._update(loading=self._in_flight > 0)

        if query.place is not None:
            await self._save_recent()
        return True

    async def _save_recent(self) -> None:
        """
        Persist the recent-search list as it stands now.

        Saves are serialized and always write the latest list, so overlapping
        lookups cannot leave an older list on disk. A failed write is logged
        and the in-memory list stays as committed.
        """
        async with self._save_lock:
            searches = list(self._state.recent_searches)
            try:
                await asyncio.to_thread(self._recent.save, searches)
            except OSError as e:
                logger.warning("Could not save recent searches: %s", e)


# -----------------------------------------------------------------------------
# Factory Functions
# -----------------------------------------------------------------------------


def create_orchestrator() -> SearchOrchestrator:
    """Create an orchestrator wired to the live provider and on-disk store."""
    return SearchOrchestrator(
        client=OpenWeatherClient(),
        recent=RecentSearches(JsonFileStore(RECENT_SEARCHES_PATH)),
    )
