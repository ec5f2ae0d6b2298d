"""
Dashboard Failure Types

Canonical failure taxonomy. Every lookup failure raised below the
orchestrator is one of these types; the orchestrator converts them
into user notifications and never lets them escape.
"""

from __future__ import annotations


class WeatherFailure(Exception):
    """Base class for all dashboard failures."""

    failure_category: str = "unknown"

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class LookupFailed(WeatherFailure):
    """
    A lookup could not produce both current conditions and a forecast.

    Failure is all-or-nothing: if either fetch fails, nothing is committed.
    """

    failure_category = "lookup_failed"


class UpstreamFailure(LookupFailed):
    """The weather provider answered with a non-success status."""

    failure_category = "upstream_failure"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.status_code = status_code


class TransportFailure(LookupFailed):
    """Communication with the provider failed at the transport layer."""

    failure_category = "transport_failure"


class MalformedPayload(LookupFailed):
    """The provider answered, but the body is not the shape we normalize."""

    failure_category = "malformed_payload"


class GeolocationUnavailable(WeatherFailure):
    """Device position was denied, timed out, or is not supported."""

    failure_category = "geolocation_unavailable"


class ConfigurationError(WeatherFailure):
    """The system is misconfigured and cannot operate correctly."""

    failure_category = "configuration_error"
