"""
Forecast Normalizer

Pure transforms from OpenWeather payloads into the display model.
No network or storage side effects.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date, datetime, tzinfo
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .config import HPA_TO_INHG, MAX_FORECAST_DAYS, METERS_PER_MILE
from .errors import MalformedPayload
from .models import (
    ConditionCategory,
    CurrentConditions,
    CurrentPayload,
    DailySummary,
    ForecastPayload,
    WeatherDescriptor,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)

_WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def hpa_to_inhg(pressure_hpa: float) -> int:
    return round_half_up(pressure_hpa * HPA_TO_INHG)


def meters_to_miles(visibility_m: float) -> int:
    return round_half_up(visibility_m / METERS_PER_MILE)


def condition_category(main: str) -> ConditionCategory:
    """Map the provider's `main` label onto the closed category set."""
    match main.lower():
        case "clear":
            return ConditionCategory.CLEAR
        case "clouds":
            return ConditionCategory.CLOUDS
        case "rain":
            return ConditionCategory.RAIN
        case "drizzle":
            return ConditionCategory.DRIZZLE
        case "snow":
            return ConditionCategory.SNOW
        case _:
            return ConditionCategory.OTHER


def is_daytime(icon: str) -> bool:
    """Icon codes end in `d` by day and `n` by night, e.g. `04d`."""
    return "d" in icon


def date_label(day: date) -> str:
    """Short en-US label, e.g. `Mon, Jan 15`."""
    return f"{_WEEKDAYS[day.weekday()]}, {_MONTHS[day.month - 1]} {day.day}"


def _parse(schema: type[PayloadT], raw: Any) -> PayloadT:
    if not isinstance(raw, Mapping):
        raise MalformedPayload(f"Expected a JSON object for {schema.__name__}, got {type(raw).__name__}")
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        raise MalformedPayload(f"Invalid {schema.__name__}: {e}", cause=e) from e


def normalize_current(raw: Any) -> CurrentConditions:
    """
    Normalize a `GET /weather` body.

    The first `weather` descriptor is authoritative. Temperatures and wind
    are rounded, pressure converted to inHg, visibility to miles.

    Raises:
        MalformedPayload: if required fields are missing or the
            descriptor list is empty
    """
    payload = _parse(CurrentPayload, raw)
    descriptor = payload.weather[0]

    return CurrentConditions(
        name=payload.name,
        country=payload.sys.country,
        temp=round_half_up(payload.main.temp),
        feels_like=round_half_up(payload.main.feels_like),
        description=descriptor.description,
        humidity=payload.main.humidity,
        wind_speed=round_half_up(payload.wind.speed),
        pressure=hpa_to_inhg(payload.main.pressure),
        visibility=meters_to_miles(payload.visibility),
        icon=descriptor.icon,
        main=descriptor.main,
        category=condition_category(descriptor.main),
        is_day=is_daytime(descriptor.icon),
    )


def _summary(day: date, descriptor: WeatherDescriptor, temp_min: float, temp_max: float) -> DailySummary:
    return DailySummary(
        date_label=date_label(day),
        day=day,
        temp_min=round_half_up(temp_min),
        temp_max=round_half_up(temp_max),
        description=descriptor.description,
        icon=descriptor.icon,
        main=descriptor.main,
        category=condition_category(descriptor.main),
        is_day=is_daytime(descriptor.icon),
    )


def normalize_forecast(
    raw: Any,
    *,
    tz: tzinfo | None = None,
    max_days: int = MAX_FORECAST_DAYS,
) -> list[DailySummary]:
    """
    Collapse a 3-hour forecast feed into one summary per calendar day.

    The first entry seen for a date decides that day's summary; later
    entries for the same date are ignored, not merged. A partial first
    day counts like any other. Accumulation stops after `max_days`
    distinct days.

    Args:
        raw: Body of `GET /forecast`
        tz: Zone used to derive calendar dates (platform local time if None)
        max_days: Maximum number of summaries returned

    Raises:
        MalformedPayload: if the feed or any entry is malformed
    """
    payload = _parse(ForecastPayload, raw)

    summaries: list[DailySummary] = []
    seen: set[date] = set()

    for entry in payload.entries:
        if len(summaries) >= max_days:
            break
        day = datetime.fromtimestamp(entry.dt, tz=tz).date()
        if day in seen:
            continue
        seen.add(day)
        summaries.append(
            _summary(day, entry.weather[0], entry.main.temp_min, entry.main.temp_max)
        )

    return summaries
