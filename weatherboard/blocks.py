"""Forecast blocks and the complete forecast response.

The current conditions, weather alerts, the per-minute, per-hour and
per-day blocks, and the top-level :class:`WeatherResponse` that holds them.
"""

from __future__ import annotations

import dataclasses

from weatherboard.datapoints import (
    DailyDataPoint,
    HourlyDataPoint,
    JsonModel,
    MinutelyDataPoint,
)
from weatherboard.flags import Flags


@dataclasses.dataclass(kw_only=True)
class Currently(JsonModel):
    """The current weather at the requested location."""

    time: int | None = None
    summary: str | None = None
    icon: str | None = None
    nearest_storm_distance: float | None = None
    nearest_storm_bearing: int | None = None
    precip_intensity: float | None = None
    precip_probability: float | None = None
    precip_intensity_error: float | None = None
    precip_type: str | None = None
    temperature: float | None = None
    apparent_temperature: float | None = None
    dew_point: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    wind_bearing: float | None = None
    cloud_cover: float | None = None
    uv_index: float | None = None
    visibility: float | None = None
    ozone: float | None = None
    smoke: float | None = None
    fire_index: float | None = None
    feels_like: float | None = None
    current_day_ice: float | None = None
    current_day_liquid: float | None = None
    current_day_snow: float | None = None
    station_pressure: float | None = None
    solar: float | None = None
    cape: int | None = None


@dataclasses.dataclass(kw_only=True)
class Alert(JsonModel):
    """A severe weather alert covering the requested location."""

    title: str | None = None
    regions: list[str] | None = None
    severity: str | None = None
    time: int | None = None
    expires: int | None = None
    description: str | None = None
    uri: str | None = None


@dataclasses.dataclass(kw_only=True)
class Daily(JsonModel):
    """Day-by-day forecast conditions for the coming week."""

    summary: str | None = None
    icon: str | None = None
    data: list[DailyDataPoint] | None = None


@dataclasses.dataclass(kw_only=True)
class Hourly(JsonModel):
    """Hour-by-hour forecast conditions (48 hours, or 168 when extended)."""

    summary: str | None = None
    icon: str | None = None
    data: list[HourlyDataPoint] | None = None


@dataclasses.dataclass(kw_only=True)
class Minutely(JsonModel):
    """Minute-by-minute precipitation for the next hour."""

    summary: str | None = None
    icon: str | None = None
    data: list[MinutelyDataPoint] | None = None


@dataclasses.dataclass(kw_only=True)
class WeatherResponse(JsonModel):
    """A complete forecast or historical weather response."""

    latitude: float | None = None
    longitude: float | None = None
    timezone: str | None = None
    offset: float | None = None
    elevation: float | None = None
    currently: Currently | None = None
    minutely: Minutely | None = None
    hourly: Hourly | None = None
    daily: Daily | None = None
    alerts: list[Alert] | None = None
    flags: Flags | None = None