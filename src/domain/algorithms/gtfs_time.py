from __future__ import annotations

import math
from datetime import datetime


def time_to_minutes(raw: str | None) -> float:
    """Convert a GTFS "HH:MM:SS" time into fractional minutes since midnight.

    Hours may exceed 23 (service past midnight on the same service day); no
    wraparound is applied. Seconds are optional. Blank or malformed values
    yield `nan`, which makes every comparison against them false.
    """

    if raw is None:
        return math.nan
    parts = raw.strip().split(":")
    if len(parts) not in (2, 3):
        return math.nan
    try:
        numbers = [int(p) for p in parts]
    except ValueError:
        return math.nan
    hours, minutes = numbers[0], numbers[1]
    seconds = numbers[2] if len(numbers) == 3 else 0
    return hours * 60 + minutes + seconds / 60


def minutes_between(start: str, end: str) -> float:
    return time_to_minutes(end) - time_to_minutes(start)


def format_time(raw: str) -> str:
    """Format a GTFS time for display as HH:MM, wrapping hours past 24."""

    parts = raw.strip().split(":")
    try:
        hours = int(parts[0])
        minutes = int(parts[1])
    except (IndexError, ValueError):
        return raw.strip()[:5]
    return f"{((hours % 24) + 24) % 24:02d}:{minutes:02d}"


def minutes_since_midnight(dt: datetime) -> int:
    # Treat provided datetime as local service time.
    return dt.hour * 60 + dt.minute
