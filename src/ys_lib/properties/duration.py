# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Parsing of durations used by timeout options (e.g. `pekko.ask.timeout`).
"""

import re
from datetime import timedelta

from ys_lib.core.error import YSError

# keyword arguments of timedelta for each accepted unit
_UNITS = {
    "d": "days",
    "day": "days",
    "days": "days",
    "h": "hours",
    "hour": "hours",
    "hours": "hours",
    "min": "minutes",
    "m": "minutes",
    "minute": "minutes",
    "minutes": "minutes",
    "s": "seconds",
    "sec": "seconds",
    "secs": "seconds",
    "second": "seconds",
    "seconds": "seconds",
    "ms": "milliseconds",
    "milli": "milliseconds",
    "millis": "milliseconds",
    "millisecond": "milliseconds",
    "milliseconds": "milliseconds",
    "us": "microseconds",
    "micro": "microseconds",
    "micros": "microseconds",
    "microsecond": "microseconds",
    "microseconds": "microseconds",
}


def parse_duration(s: str) -> timedelta:
    """
    Convert a duration such as "5 min", "10s" or "500" into a timedelta.

    A number without a unit is interpreted as milliseconds.
    The unit is case-insensitive.

    Args:
        s (str): The duration to parse.

    Returns:
        timedelta: The parsed duration.

    Raises:
        YSError: If the string is not a number optionally followed by a known unit.
    """
    match = re.match(r"^\s*(\d+)\s*([a-zA-Z]*)\s*$", s)
    if not match:
        raise YSError(f"Invalid duration: '{s}'.")

    number, unit = match.groups()
    unit = unit.lower() or "ms"
    if unit not in _UNITS:
        raise YSError(f"Unsupported unit '{match.group(2)}' in duration '{s}'.")

    return timedelta(**{_UNITS[unit]: int(number)})


def format_duration(duration: timedelta) -> str:
    """
    Format a timedelta using the largest unit that represents it exactly.

    Examples:
        timedelta(minutes=5)        -> "5 min"
        timedelta(seconds=90)       -> "90 s"
        timedelta(milliseconds=250) -> "250 ms"
    """
    micros = duration // timedelta(microseconds=1)
    for unit, factor in (
        ("d", 86_400_000_000),
        ("h", 3_600_000_000),
        ("min", 60_000_000),
        ("s", 1_000_000),
        ("ms", 1_000),
    ):
        if micros and micros % factor == 0:
            return f"{micros // factor} {unit}"

    return f"{micros} us"
