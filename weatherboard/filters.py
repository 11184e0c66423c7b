"""Template filters used by the forecast page."""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from typing import Any

import jinja2


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"Filter `{name}` expects a number, got {value!r}")
    return float(value)


def _round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    whole = math.floor(abs(x))
    if abs(x) - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), x)


def _display_whole(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x == 0:
        return "-0" if math.copysign(1.0, x) < 0 else "0"
    return str(int(x))


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // b
    return quotient if a >= 0 else -quotient


def temperature_class(value: Any) -> str:
    """CSS class for how a Fahrenheit temperature feels."""
    f = _as_float("temperature_class", value)
    if f < 62.0:
        return "cold"
    if f < 68.0:
        return "cool"
    if f < 74.0:
        return "good"
    if f < 84.0:
        return "warm"
    return "hot"


def probability(value: Any) -> str:
    """A 0..1 probability as a whole-number percentage, e.g. ``"95"``."""
    f = _as_float("probability", value)
    return _display_whole(_round_half_away(f * 100.0))


def precip_class(value: Any) -> str:
    """CSS class for a precipitation amount: ``"wet"`` above zero, else ``"dry"``."""
    amount = _as_float("precip_class", value)
    if amount > 0.0:
        return "wet"
    return "dry"


def time_ago(value: Any) -> str:
    """How long ago a unix timestamp was, in words."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Filter `time_ago` expects an integer timestamp, got {value!r}")
    try:
        then = datetime.fromtimestamp(value, timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise ValueError(f"timestamp {value} is out of range") from exc

    delta = datetime.now(timezone.utc) - then
    seconds = _trunc_div(delta // timedelta(microseconds=1), 1_000_000)
    minutes = _trunc_div(seconds, 60)
    hours = _trunc_div(seconds, 3600)

    if minutes < 1:
        return "less than 1 minute"
    if minutes == 1:
        return "1 minute"
    if minutes < 60:
        return f"{minutes} minutes"
    if hours == 1:
        return "1 hour"
    if hours <= 48:
        return f"{hours} hours"
    return "ages"


def register_all(environment: jinja2.Environment) -> None:
    """Add every filter in this module to a Jinja environment."""
    environment.filters.update(
        temperature_class=temperature_class,
        probability=probability,
        precip_class=precip_class,
        time_ago=time_ago,
    )