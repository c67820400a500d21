"""Calendar and 12-hour clock arithmetic used by the calendar adapter."""

from __future__ import annotations

from typing import List, Optional

_LONG_MONTHS = frozenset({1, 3, 5, 7, 8, 10, 12})


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule.

    >>> is_leap_year(2024), is_leap_year(1900), is_leap_year(2000)
    (True, False, True)
    """
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    if month in _LONG_MONTHS:
        return 31
    if month == 2:
        return 29 if is_leap_year(year) else 28
    return 30


def fold_hour(hour: int, minute: int, pm: bool) -> int:
    """Move ``hour`` into the AM or PM half while keeping its clock face.

    The midnight/noon cases are not symmetric between the two halves:

    ======  ======  ======  ======
    hour    minute  AM      PM
    ======  ======  ======  ======
    0       0       0       12
    0       > 0     12      0
    12      0       0       12
    12      > 0     0       0
    ======  ======  ======  ======
    """
    if not pm:
        if hour == 12:
            hour = 0
        elif hour == 0 and minute > 0:
            hour = 12
        if hour > 12:
            hour -= 12
    else:
        if 0 < hour < 12:
            hour += 12
        if hour == 12 and minute > 0:
            hour = 0
        elif hour == 0 and minute == 0:
            hour = 12
    return hour


def is_pm(hour: int) -> bool:
    return hour >= 12


def clock_face(hour: int) -> int:
    """12-hour clock value (1-12) shown for a 24-hour ``hour``."""
    face = hour % 12
    return 12 if face == 0 else face


def half_day_hours(pm: bool, min_hour: Optional[int] = None, max_hour: Optional[int] = None) -> List[int]:
    """24-hour values listed by a 12-hour column for one half of the day.

    Hours are ordered by clock face 1, 2, ..., 11, 12, so the midnight/noon
    hour comes last. ``min_hour``/``max_hour`` remove hours outside the
    configured bounds.

    >>> half_day_hours(False)[:2], half_day_hours(False)[-1]
    ([1, 2], 0)
    >>> half_day_hours(True, min_hour=8, max_hour=17)
    [13, 14, 15, 16, 17, 12]
    """
    base = 12 if pm else 0
    hours = [base + face for face in range(1, 12)] + [base]
    lo = 0 if min_hour is None else min_hour
    hi = 23 if max_hour is None else max_hour
    return [h for h in hours if lo <= h <= hi]


def two_digits(value: int) -> str:
    return f"{value:02d}"
