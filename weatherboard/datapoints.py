"""Forecast data points: the per-day, per-hour and per-minute entries of a forecast.

Also holds :class:`JsonModel`, the base that maps the API's camel-case JSON
objects onto dataclasses with snake-case attributes.
"""

import dataclasses
import types
import typing
from collections.abc import Mapping
from functools import cache
from typing import Any, Self

WIRE = "wire"
"""Field metadata key that overrides the JSON name derived from the attribute."""

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _unwrap_optional(tp: Any) -> Any:
    if typing.get_origin(tp) in (typing.Union, types.UnionType):
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) != 1:
            raise TypeError(f"unsupported field type {tp!r}")
        return args[0]
    return tp


def _field_type(cls: type, field: dataclasses.Field) -> Any:
    if isinstance(field.type, str):
        raise TypeError(
            f"{cls.__name__}.{field.name}: field types must be real types, not strings"
        )
    return _unwrap_optional(field.type)


@cache
def _schema(cls: type) -> tuple[tuple[str, str, Any], ...]:
    return tuple(
        (f.name, f.metadata.get(WIRE, _camel(f.name)), _field_type(cls, f))
        for f in dataclasses.fields(cls)
    )


def _decode(tp: Any, value: Any, where: str) -> Any:
    if tp is Any:
        return value
    if value is None:
        raise TypeError(f"{where}: null is not allowed here")
    if tp is list or typing.get_origin(tp) is list:
        if not isinstance(value, list):
            raise TypeError(f"{where}: expected a list, got {type(value).__name__}")
        (item_type,) = typing.get_args(tp) or (Any,)
        return [_decode(item_type, item, f"{where}[{i}]") for i, item in enumerate(value)]
    if isinstance(tp, type) and issubclass(tp, JsonModel):
        return tp.from_dict(value)
    if tp is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{where}: expected an integer, got {value!r}")
        if not _I32_MIN <= value <= _I32_MAX:
            raise ValueError(f"{where}: {value} is out of range for a 32-bit integer")
        return value
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{where}: expected a number, got {value!r}")
        return float(value)
    if tp is str:
        if not isinstance(value, str):
            raise TypeError(f"{where}: expected a string, got {value!r}")
        return value
    if tp is bool:
        if not isinstance(value, bool):
            raise TypeError(f"{where}: expected a boolean, got {value!r}")
        return value
    raise TypeError(f"{where}: unsupported field type {tp!r}")


def _encode(value: Any) -> Any:
    if isinstance(value, JsonModel):
        return value.to_dict()
    if isinstance(value, list):
        return [_encode(item) for item in value]
    return value


class JsonModel:
    """Base for dataclasses read from and written to API JSON objects.

    Every field is optional. The JSON key is the camel-case form of the
    attribute name unless the field's metadata sets ``WIRE``. Unknown keys
    are ignored on input and ``None`` fields are left out on output.
    """

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build an instance from a decoded JSON object."""
        if not isinstance(data, Mapping):
            raise TypeError(f"{cls.__name__}: expected an object, got {type(data).__name__}")
        kwargs = {}
        for attr, wire, tp in _schema(cls):
            value = data.get(wire)
            kwargs[attr] = None if value is None else _decode(tp, value, f"{cls.__name__}.{wire}")
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form, omitting unset fields."""
        return {
            wire: _encode(getattr(self, attr))
            for attr, wire, _ in _schema(type(self))
            if getattr(self, attr) is not None
        }


@dataclasses.dataclass(kw_only=True)
class DailyDataPoint(JsonModel):
    """Forecast conditions for one day."""

    time: int | None = None
    summary: str | None = None
    icon: str | None = None
    dawn_time: int | None = None
    sunrise_time: int | None = None
    sunset_time: int | None = None
    dusk_time: int | None = None
    moon_phase: float | None = None
    precip_intensity: float | None = None
    precip_intensity_max: float | None = None
    precip_intensity_max_time: int | None = None
    precip_probability: float | None = None
    precip_accumulation: float | None = None
    precip_type: str | None = None
    temperature_high: float | None = None
    temperature_high_time: int | None = None
    temperature_low: float | None = None
    temperature_low_time: int | None = None
    apparent_temperature_high: float | None = None
    apparent_temperature_high_time: int | None = None
    apparent_temperature_low: float | None = None
    apparent_temperature_low_time: int | None = None
    dew_point: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    wind_gust_time: int | None = None
    wind_bearing: float | None = None
    cloud_cover: float | None = None
    uv_index: float | None = None
    uv_index_time: int | None = None
    visibility: float | None = None
    temperature_min: float | None = None
    temperature_min_time: int | None = None
    temperature_max: float | None = None
    temperature_max_time: int | None = None
    apparent_temperature_min: float | None = None
    apparent_temperature_min_time: int | None = None
    apparent_temperature_max: float | None = None
    apparent_temperature_max_time: int | None = None
    smoke_max: float | None = None
    smoke_max_time: int | None = None
    liquid_accumulation: float | None = None
    snow_accumulation: float | None = None
    ice_accumulation: float | None = None
    fire_index_max: float | None = None
    fire_index_max_time: int | None = None
    solar: float | None = None
    solar_max: float | None = None
    cape: int | None = None
    cape_max: int | None = None


@dataclasses.dataclass(kw_only=True)
class HourlyDataPoint(JsonModel):
    """Forecast conditions for one hour."""

    time: int | None = None
    summary: str | None = None
    icon: str | None = None
    precip_intensity: float | None = None
    precip_probability: float | None = None
    precip_intensity_error: float | None = None
    precip_accumulation: float | None = None
    precip_type: str | None = None
    temperature: float | None = None
    apparent_temperature: float | None = None
    dew_point: float | None = None
    humidity: float | None = None
    pressure: float | None = None
    station_pressure: float | None = None
    wind_speed: float | None = None
    wind_gust: float | None = None
    wind_bearing: float | None = None
    cloud_cover: float | None = None
    uv_index: float | None = None
    visibility: float | None = None
    ozone: float | None = None
    smoke: float | None = None
    liquid_accumulation: float | None = None
    snow_accumulation: float | None = None
    ice_accumulation: float | None = None
    nearest_storm_distance: float | None = None
    nearest_storm_bearing: int | None = None
    fire_index: float | None = None
    feels_like: float | None = None
    solar: float | None = None
    cape: int | None = None


@dataclasses.dataclass(kw_only=True)
class MinutelyDataPoint(JsonModel):
    """Precipitation forecast for one minute."""

    time: int | None = None
    precip_intensity: float | None = None
    precip_probability: float | None = None
    precip_intensity_error: float | None = None
    precip_type: str | None = None