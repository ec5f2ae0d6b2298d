"""
Centralized configuration for the weather dashboard.

All magic values, API URLs, and constants in one place.
Supports environment variable overrides for deployment flexibility.
"""

from __future__ import annotations

import logging
import os

# -----------------------------------------------------------------------------
# Provider
# -----------------------------------------------------------------------------

OPENWEATHER_BASE_URL = os.environ.get(
    "OPENWEATHER_BASE_URL",
    "https://api.openweathermap.org/data/2.5",
)

OPENWEATHER_API_KEY = os.environ.get("WEATHERMAP_API_KEY", "")

# Display units for temperature and wind speed
WEATHER_UNITS = os.environ.get("WEATHER_UNITS", "imperial")

# -----------------------------------------------------------------------------
# HTTP Configuration
# -----------------------------------------------------------------------------

HTTP_TIMEOUT_SECONDS = float(os.environ.get("HTTP_TIMEOUT_SECONDS", "10.0"))

# -----------------------------------------------------------------------------
# Lookup Behavior
# -----------------------------------------------------------------------------

# Used when device geolocation is denied or unavailable
DEFAULT_PLACE = os.environ.get("DEFAULT_PLACE", "New York")

RECENT_SEARCHES_KEY = "recentSearches"
RECENT_SEARCHES_PATH = os.environ.get(
    "RECENT_SEARCHES_PATH",
    os.path.join(os.path.expanduser("~"), ".weather_dashboard", "storage.json"),
)
MAX_RECENT_SEARCHES = 5

MAX_FORECAST_DAYS = 5

CITY_NOT_FOUND_MESSAGE = "City not found. Please check the spelling and try again."
FETCH_FAILED_MESSAGE = "Failed to fetch weather data. Please try again."

# -----------------------------------------------------------------------------
# Unit Conversion
# -----------------------------------------------------------------------------

HPA_TO_INHG = 0.02953
METERS_PER_MILE = 1609.34

# -----------------------------------------------------------------------------
# Server Configuration
# -----------------------------------------------------------------------------

SERVER_NAME = "weather-dashboard"
SERVER_VERSION = "0.1.0"

LOG_LEVEL = os.environ.get("WEATHER_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Install the root handler used by the server process."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
