from __future__ import annotations

import math
from datetime import datetime

import pytest

from src.domain.algorithms.gtfs_time import (
    format_time,
    minutes_between,
    minutes_since_midnight,
    time_to_minutes,
)


def test_time_to_minutes_includes_fractional_seconds() -> None:
    assert time_to_minutes("08:10:30") == 8 * 60 + 10 + 0.5


def test_time_to_minutes_keeps_post_midnight_hours() -> None:
    # 25:10 is 01:10 on the next calendar day but the same service day.
    assert time_to_minutes("25:10:00") == 25 * 60 + 10


@pytest.mark.parametrize("raw", ["", "   ", "ab:cd:ef", "8", None])
def test_time_to_minutes_malformed_is_nan(raw: str | None) -> None:
    assert math.isnan(time_to_minutes(raw))


def test_nan_time_never_compares_true() -> None:
    bad = time_to_minutes("")
    assert not bad >= 0
    assert not bad < 0


def test_minutes_between() -> None:
    assert minutes_between("08:20:00", "08:30:00") == 10
    assert minutes_between("08:30:00", "08:20:00") == -10


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("08:05:00", "08:05"),
        ("23:59:59", "23:59"),
        ("24:10:00", "00:10"),
        ("25:45:00", "01:45"),
    ],
)
def test_format_time_wraps_hours_for_display(raw: str, expected: str) -> None:
    assert format_time(raw) == expected


def test_minutes_since_midnight_ignores_seconds() -> None:
    assert minutes_since_midnight(datetime(2026, 1, 8, 7, 30, 59)) == 450
