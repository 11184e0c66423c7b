"""Request metadata returned with a forecast, and the bodies of error responses."""

from __future__ import annotations

import dataclasses

from weatherboard.datapoints import WIRE, JsonModel


def _wire(name: str) -> dataclasses.Field:
    return dataclasses.field(default=None, metadata={WIRE: name})


@dataclasses.dataclass(kw_only=True)
class ModelGridPoint(JsonModel):
    """Grid indices and coordinates of the cell one forecast model used."""

    x: int | None = None
    y: int | None = None
    lat: float | None = None
    long: float | None = None


@dataclasses.dataclass(kw_only=True)
class FlagsSourceIdx(JsonModel):
    """The grid point each model used to build the forecast."""

    hrrr: ModelGridPoint | None = None
    nbm: ModelGridPoint | None = None
    gfs: ModelGridPoint | None = None
    etopo: ModelGridPoint | None = None


@dataclasses.dataclass(kw_only=True)
class FlagsSourceTimes(JsonModel):
    """The UTC times at which each model was last updated."""

    hrrr_0_18: str | None = _wire("hrrr_0-18")
    hrrr_subh: str | None = _wire("hrrr_subh")
    nbm: str | None = _wire("nbm")
    nbm_fire: str | None = _wire("nbm_fire")
    hrrr_18_48: str | None = _wire("hrrr_18-48")
    gfs: str | None = _wire("gfs")
    gefs: str | None = _wire("gefs")


@dataclasses.dataclass(kw_only=True)
class Flags(JsonModel):
    """Miscellaneous data about the forecast request."""

    sources: list[str] | None = None
    source_times: FlagsSourceTimes | None = None
    nearest_station: int | None = _wire("nearest-station")
    units: str | None = None
    version: str | None = None
    source_idx: FlagsSourceIdx | None = _wire("sourceIDX")
    process_time: int | None = None
    ingest_version: str | None = None
    nearest_city: str | None = None
    nearest_country: str | None = None
    nearest_sub_national: str | None = None


@dataclasses.dataclass(kw_only=True)
class ErrorDetail(JsonModel):
    """Body of a bad-request response."""

    detail: str | None = None


@dataclasses.dataclass(kw_only=True)
class ErrorMessage(JsonModel):
    """Body of a not-found, internal-error or bad-gateway response."""

    message: str | None = None