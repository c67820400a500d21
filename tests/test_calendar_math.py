from __future__ import annotations

import pytest

from wheel_picker.calendar_math import (
    clock_face,
    days_in_month,
    fold_hour,
    half_day_hours,
    is_leap_year,
    is_pm,
)


@pytest.mark.parametrize(
    ("year", "expected"),
    [(2024, True), (2023, False), (1900, False), (2000, True), (2100, False)],
)
def test_leap_year_rule(year: int, expected: bool) -> None:
    assert is_leap_year(year) is expected


def test_february_day_counts() -> None:
    assert days_in_month(2024, 2) == 29
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29


def test_long_and_short_months() -> None:
    assert [days_in_month(2023, m) for m in range(1, 13)] == [
        31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31,
    ]


@pytest.mark.parametrize(
    ("hour", "minute", "pm", "expected"),
    [
        (0, 0, False, 0),
        (0, 0, True, 12),
        (0, 30, False, 12),
        (0, 30, True, 0),
        (12, 0, False, 0),
        (12, 0, True, 12),
        (12, 30, False, 0),
        (12, 30, True, 0),
    ],
)
def test_midnight_and_noon_fold(hour: int, minute: int, pm: bool, expected: int) -> None:
    assert fold_hour(hour, minute, pm) == expected


def test_ordinary_hours_keep_their_clock_face() -> None:
    assert fold_hour(9, 15, True) == 21
    assert fold_hour(21, 0, False) == 9
    assert fold_hour(15, 0, True) == 15
    assert fold_hour(4, 0, False) == 4


def test_clock_helpers() -> None:
    assert [clock_face(h) for h in (0, 1, 11, 12, 13, 23)] == [12, 1, 11, 12, 1, 11]
    assert is_pm(12) and not is_pm(11)


def test_half_day_hours_are_in_clock_order_and_bounded() -> None:
    assert half_day_hours(False) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 0]
    assert half_day_hours(True)[-1] == 12
    assert half_day_hours(False, min_hour=8, max_hour=17) == [8, 9, 10, 11]
    assert half_day_hours(True, min_hour=8, max_hour=17) == [13, 14, 15, 16, 17, 12]
