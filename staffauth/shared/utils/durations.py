# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Parsing of short duration strings such as ``15m`` or ``3650d``."""

from __future__ import annotations

import re
from datetime import timedelta

_UNITS: dict[str, float] = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 60 * 60 * 24,
    "w": 60 * 60 * 24 * 7,
    "y": 60 * 60 * 24 * 365.25,
}

_ALIASES: dict[str, str] = {
    "msec": "ms",
    "msecs": "ms",
    "millisecond": "ms",
    "milliseconds": "ms",
    "sec": "s",
    "secs": "s",
    "second": "s",
    "seconds": "s",
    "min": "m",
    "mins": "m",
    "minute": "m",
    "minutes": "m",
    "hr": "h",
    "hrs": "h",
    "hour": "h",
    "hours": "h",
    "day": "d",
    "days": "d",
    "week": "w",
    "weeks": "w",
    "yr": "y",
    "yrs": "y",
    "year": "y",
    "years": "y",
}

_DURATION_RE = re.compile(r"^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[a-zA-Z]*)\s*$")


def parse_duration(value: str | int | float) -> timedelta:
    """Parse ``value`` into a positive :class:`~datetime.timedelta`.

    A bare number is read as seconds. Raises ``ValueError`` when the value
    cannot be parsed or is not positive.
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        match = _DURATION_RE.match(value)
        if not match:
            raise ValueError(f"invalid duration: {value!r}")
        unit = match.group("unit").lower() or "s"
        unit = _ALIASES.get(unit, unit)
        if unit not in _UNITS:
            raise ValueError(f"unknown duration unit in {value!r}")
        seconds = float(match.group("value")) * _UNITS[unit]

    if seconds <= 0:
        raise ValueError(f"duration must be positive: {value!r}")
    return timedelta(seconds=seconds)


__all__ = ["parse_duration"]
