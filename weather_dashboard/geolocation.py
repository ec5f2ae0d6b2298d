"""
Geolocation Providers

The dashboard never resolves a position itself: the browser asks
`navigator.geolocation` and reports the outcome. Providers adapt that
report (or any other position source) to one async contract.
"""

from __future__ import annotations

from typing import Protocol

from .errors import GeolocationUnavailable
from .models import Coordinates


class GeolocationProvider(Protocol):
    """Async source of the device position."""

    async def locate(self) -> Coordinates:
        """
        Return the current position.

        Raises:
            GeolocationUnavailable: if the position was denied or unavailable
        """
        ...


class ReportedPosition:
    """A position already obtained by the browser, or its absence."""

    def __init__(self, coordinates: Coordinates | None, reason: str = "Geolocation denied"):
        self.coordinates = coordinates
        self.reason = reason

    async def locate(self) -> Coordinates:
        if self.coordinates is None:
            raise GeolocationUnavailable(self.reason)
        return self.coordinates
