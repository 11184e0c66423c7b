"""Server configuration loaded from a TOML file."""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Mapping
from typing import Any

DEFAULT_LISTEN_ADDR = "0.0.0.0:3000"


def _require(table: Mapping[str, Any], key: str, where: str) -> Any:
    if key not in table:
        raise ValueError(f"missing field `{key}` in {where}")
    return table[key]


def _string(value: Any, key: str, where: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{where}.{key}: expected a string, got {value!r}")
    return value


def _number(value: Any, key: str, where: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{where}.{key}: expected a number, got {value!r}")
    return float(value)


@dataclasses.dataclass(frozen=True)
class Location:
    """A place to show a forecast for."""

    name: str
    latitude: float
    longitude: float
    link: str | None = None

    @classmethod
    def _from_table(cls, table: Any, where: str) -> Location:
        if not isinstance(table, Mapping):
            raise ValueError(f"{where}: expected a table, got {table!r}")
        link = table.get("link")
        return cls(
            name=_string(_require(table, "name", where), "name", where),
            latitude=_number(_require(table, "latitude", where), "latitude", where),
            longitude=_number(_require(table, "longitude", where), "longitude", where),
            link=None if link is None else _string(link, "link", where),
        )


@dataclasses.dataclass
class Config:
    """Server settings: listen address, API key and the locations to show."""

    listen_addr: str = DEFAULT_LISTEN_ADDR
    pirate_weather_key: str = ""
    locations: list[Location] = dataclasses.field(default_factory=list)

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> Config:
        """Load the configuration from a TOML file; every top-level key is required."""
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
        where = "config"
        locations = _require(data, "locations", where)
        if not isinstance(locations, list):
            raise ValueError(f"{where}.locations: expected an array, got {locations!r}")
        return cls(
            listen_addr=_string(_require(data, "listen_addr", where), "listen_addr", where),
            pirate_weather_key=_string(
                _require(data, "pirate_weather_key", where), "pirate_weather_key", where
            ),
            locations=[
                Location._from_table(item, f"{where}.locations[{index}]")
                for index, item in enumerate(locations)
            ],
        )