"""
Dashboard Models

Pydantic schemas for three things:
- Raw OpenWeather payloads, validated before normalization
- The display model (current conditions, daily summaries) the page renders
- The dashboard state the orchestrator owns and hands to the page

Reference: https://openweathermap.org/current, https://openweathermap.org/forecast5
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


# -----------------------------------------------------------------------------
# Condition Category
# -----------------------------------------------------------------------------


class ConditionCategory(str, Enum):
    """Coarse weather classification driving icon selection."""

    CLEAR = "clear"
    CLOUDS = "clouds"
    RAIN = "rain"
    DRIZZLE = "drizzle"
    SNOW = "snow"
    OTHER = "other"


def resolve_icon(category: ConditionCategory, is_day: bool) -> str:
    """
    Pick the display icon for a condition.

    Unrecognized conditions fall back on the day/night indicator:
    a sun by day, a cloud by night.
    """
    match category:
        case ConditionCategory.CLEAR:
            return "sun"
        case ConditionCategory.CLOUDS:
            return "cloud"
        case ConditionCategory.RAIN | ConditionCategory.DRIZZLE:
            return "cloud-rain"
        case ConditionCategory.SNOW:
            return "cloud-snow"
        case _:
            return "sun" if is_day else "cloud"


# -----------------------------------------------------------------------------
# Location Query
# -----------------------------------------------------------------------------


class Coordinates(BaseModel):
    """A device position in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class LocationQuery(BaseModel):
    """
    What a lookup resolves: either a place name or a coordinate pair.

    Exactly one of the two must be set.
    """

    model_config = ConfigDict(frozen=True)

    place: str | None = None
    coordinates: Coordinates | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> LocationQuery:
        if (self.place is None) == (self.coordinates is None):
            raise ValueError("LocationQuery needs exactly one of place or coordinates")
        return self

    @classmethod
    def for_place(cls, place: str) -> LocationQuery:
        return cls(place=place)

    @classmethod
    def for_coordinates(cls, latitude: float, longitude: float) -> LocationQuery:
        return cls(coordinates=Coordinates(latitude=latitude, longitude=longitude))

    def to_params(self) -> dict[str, Any]:
        """Query-string parameters identifying the location."""
        if self.coordinates is not None:
            return {"lat": self.coordinates.latitude, "lon": self.coordinates.longitude}
        return {"q": self.place}

    def describe(self) -> str:
        if self.coordinates is not None:
            return f"({self.coordinates.latitude}, {self.coordinates.longitude})"
        return repr(self.place)


# -----------------------------------------------------------------------------
# Raw Provider Payloads
# -----------------------------------------------------------------------------


class WeatherDescriptor(BaseModel):
    """One element of the provider's `weather` list."""

    main: str
    description: str
    icon: str


class CurrentMainBlock(BaseModel):
    temp: float
    feels_like: float
    humidity: int
    pressure: float


class WindBlock(BaseModel):
    speed: float


class SysBlock(BaseModel):
    country: str = ""


class CurrentPayload(BaseModel):
    """Body of `GET /weather`."""

    name: str
    sys: SysBlock = Field(default_factory=SysBlock)
    main: CurrentMainBlock
    wind: WindBlock
    visibility: float
    weather: list[WeatherDescriptor] = Field(min_length=1)


class ForecastMainBlock(BaseModel):
    temp_min: float
    temp_max: float


class ForecastEntry(BaseModel):
    """One 3-hour slice of the forecast feed."""

    dt: int
    main: ForecastMainBlock
    weather: list[WeatherDescriptor] = Field(min_length=1)


class ForecastPayload(BaseModel):
    """Body of `GET /forecast`."""

    entries: list[ForecastEntry] = Field(alias="list")


# -----------------------------------------------------------------------------
# Display Model
# -----------------------------------------------------------------------------


class CurrentConditions(BaseModel):
    """Normalized current conditions, in display units."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    temp: int
    feels_like: int
    description: str
    humidity: int
    wind_speed: int
    pressure: int  # inHg
    visibility: int  # miles
    icon: str
    main: str
    category: ConditionCategory
    is_day: bool

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon_name(self) -> str:
        return resolve_icon(self.category, self.is_day)


class DailySummary(BaseModel):
    """One forecast day, taken from the first feed entry seen for that date."""

    model_config = ConfigDict(frozen=True)

    date_label: str
    day: date
    temp_min: int
    temp_max: int
    description: str
    icon: str
    main: str
    category: ConditionCategory
    is_day: bool

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon_name(self) -> str:
        return resolve_icon(self.category, self.is_day)


# -----------------------------------------------------------------------------
# Dashboard State
# -----------------------------------------------------------------------------


class Notification(BaseModel):
    """A non-blocking message shown to the user."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class DashboardState(BaseModel):
    """
    Everything the page renders.

    Immutable: the orchestrator swaps in a new instance on every change,
    so current conditions and forecast are always replaced together.
    """

    model_config = ConfigDict(frozen=True)

    current: CurrentConditions | None = None
    forecast: tuple[DailySummary, ...] = ()
    recent_searches: tuple[str, ...] = ()
    loading: bool = False
    last_query: str | None = None
    last_updated: datetime | None = None
    notifications: tuple[Notification, ...] = ()


# -----------------------------------------------------------------------------
# HTTP Request Bodies
# -----------------------------------------------------------------------------


class SearchRequest(BaseModel):
    """Body of a place-name lookup."""

    query: str


class LocationRequest(BaseModel):
    """
    Body of a geolocated lookup, as reported by the browser.

    `denied` is set when the browser refused or could not produce a position.
    """

    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    denied: bool = False

    def coordinates(self) -> Coordinates | None:
        if self.denied or self.latitude is None or self.longitude is None:
            return None
        return Coordinates(latitude=self.latitude, longitude=self.longitude)
