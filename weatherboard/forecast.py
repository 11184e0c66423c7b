"""Turn an API forecast into the per-day rows shown on the forecast page."""

from __future__ import annotations

import dataclasses
import math
from datetime import datetime
from decimal import Decimal
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from weatherboard.blocks import WeatherResponse
from weatherboard.config import Location
from weatherboard.datapoints import DailyDataPoint

EXCLUDED_BLOCKS = "currently,minutely,alerts,hourly"


class ForecastError(Exception):
    """A forecast response lacks something the page needs."""


@dataclasses.dataclass(frozen=True)
class TemplateDay:
    """One day of forecast, ready for the page template."""

    date: str
    week_day: str
    is_weekend: bool
    icon: str
    summary: str
    apparent_temperature_low: float
    apparent_temperature_high: float
    temperature_low: float
    temperature_high: float
    precip_probability: float
    wind_speed: float


@dataclasses.dataclass
class TemplateForecast:
    """The daily forecast for one configured location."""

    days: list[TemplateDay]
    location: Location

    def to_dict(self) -> dict[str, Any]:
        """Return the plain-data form handed to templates."""
        return dataclasses.asdict(self)


def _coordinate(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == int(value):
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _timezone(weather: WeatherResponse) -> ZoneInfo:
    if weather.timezone is None:
        raise ForecastError("No timezone in response")
    try:
        return ZoneInfo(weather.timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ForecastError(f"Unknown time zone {weather.timezone!r}") from exc


def _required(day: DailyDataPoint, name: str) -> Any:
    value = getattr(day, name)
    if value is None:
        raise ForecastError(f"No {name} in daily data")
    return value


def _template_day(day: DailyDataPoint, tz: ZoneInfo) -> TemplateDay:
    if day.time is None:
        raise ForecastError("No day time")
    try:
        moment = datetime.fromtimestamp(day.time, tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise ForecastError("Time zone conversion failed") from exc
    return TemplateDay(
        date=moment.strftime("%b %d"),
        week_day=moment.strftime("%a"),
        is_weekend=moment.weekday() >= 5,
        icon=_required(day, "icon"),
        summary=_required(day, "summary"),
        apparent_temperature_low=_required(day, "apparent_temperature_low"),
        apparent_temperature_high=_required(day, "apparent_temperature_high"),
        temperature_low=_required(day, "temperature_low"),
        temperature_high=_required(day, "temperature_high"),
        precip_probability=_required(day, "precip_probability"),
        wind_speed=_required(day, "wind_speed"),
    )


def build_forecast(weather: WeatherResponse, location: Location) -> TemplateForecast:
    """Build the page forecast for ``location`` from an API response."""
    tz = _timezone(weather)
    if weather.daily is None:
        raise ForecastError("No daily object in response")
    if weather.daily.data is None:
        raise ForecastError("No daily data in response")
    return TemplateForecast(
        days=[_template_day(day, tz) for day in weather.daily.data],
        location=location,
    )


async def get_forecast(client: Any, key: str, location: Location) -> TemplateForecast:
    """Fetch the daily forecast for ``location`` and prepare it for the page."""
    coordinates = f"{_coordinate(location.latitude)},{_coordinate(location.longitude)}"
    weather = await client.weather(key, coordinates, exclude=EXCLUDED_BLOCKS)
    return build_forecast(weather, location)