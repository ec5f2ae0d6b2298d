"""Weather dashboard package."""

from .client import OpenWeatherClient
from .config import (
    DEFAULT_PLACE,
    HPA_TO_INHG,
    HTTP_TIMEOUT_SECONDS,
    MAX_FORECAST_DAYS,
    MAX_RECENT_SEARCHES,
    METERS_PER_MILE,
    OPENWEATHER_BASE_URL,
    RECENT_SEARCHES_KEY,
    SERVER_NAME,
    SERVER_VERSION,
    configure_logging,
)
from .errors import (
    ConfigurationError,
    GeolocationUnavailable,
    LookupFailed,
    MalformedPayload,
    TransportFailure,
    UpstreamFailure,
    WeatherFailure,
)
from .geolocation import GeolocationProvider, ReportedPosition
from .models import (
    ConditionCategory,
    Coordinates,
    CurrentConditions,
    DailySummary,
    DashboardState,
    LocationQuery,
    Notification,
    resolve_icon,
)
from .normalizer import (
    condition_category,
    is_daytime,
    normalize_current,
    normalize_forecast,
    round_half_up,
)
from .orchestrator import SearchOrchestrator, create_orchestrator
from .storage import JsonFileStore, KeyValueStore, MemoryStore, RecentSearches, push_recent

__all__ = [
    # Client
    "OpenWeatherClient",
    # Normalizer
    "normalize_current",
    "normalize_forecast",
    "condition_category",
    "is_daytime",
    "round_half_up",
    # Orchestrator
    "SearchOrchestrator",
    "create_orchestrator",
    # Storage
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "RecentSearches",
    "push_recent",
    # Geolocation
    "GeolocationProvider",
    "ReportedPosition",
    # Models
    "ConditionCategory",
    "Coordinates",
    "CurrentConditions",
    "DailySummary",
    "DashboardState",
    "LocationQuery",
    "Notification",
    "resolve_icon",
    # Errors
    "WeatherFailure",
    "LookupFailed",
    "UpstreamFailure",
    "TransportFailure",
    "MalformedPayload",
    "GeolocationUnavailable",
    "ConfigurationError",
    # Config
    "OPENWEATHER_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
    "DEFAULT_PLACE",
    "RECENT_SEARCHES_KEY",
    "MAX_RECENT_SEARCHES",
    "MAX_FORECAST_DAYS",
    "HPA_TO_INHG",
    "METERS_PER_MILE",
    "SERVER_NAME",
    "SERVER_VERSION",
    "configure_logging",
]
