"""Date/time adapter: one ``datetime`` spread over configurable columns.

A *layout* is an ordered sequence of :class:`ColumnKind` tags; column ``i``
shows the calendar field ``layout[i]``. The adapter owns a single naive
``datetime`` value. Every ``select`` call builds a new value from the
previous one, clamps the day into the new month, clamps the result into
``[min_value, max_value]`` and reports through :class:`SelectOutcome` how much
of the display went stale.

Two layout-dependent flags are computed once at construction:

``needs_prev_rebuild``
    The day column sits left of the month or year column. Scrolling month or
    year into February changes the day count of a column that is already
    painted, so the host must rebuild every column.
``ampm_before_hour12``
    The AM/PM column sits left of the 12-hour column, whose rows depend on
    the AM/PM selection when hour bounds are configured.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from enum import IntEnum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .ColumnAdapter import BaseColumnAdapter, SelectOutcome
from .calendar_math import (
    clock_face,
    days_in_month,
    fold_hour,
    half_day_hours,
    is_pm,
    two_digits,
)
from .picker_localizations import localizations_for, validate_ampm, validate_months

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


class ColumnKind(IntEnum):
    """Calendar field shown by a column."""

    YEAR = 0
    MONTH = 1
    DAY = 2
    HOUR = 3
    MINUTE = 4
    SECOND = 5
    AMPM = 6
    HOUR_12 = 7

    @classmethod
    def parse(cls, value: Union["ColumnKind", int, str]) -> "ColumnKind":
        """Accept a member, its integer code or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace("-", "_")
            key = _KIND_ALIASES.get(key, key)
            try:
                return cls[key]
            except KeyError:
                raise ValueError(f"Unknown column kind: {value!r}") from None
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            raise ValueError(f"Unknown column kind: {value!r}") from None


_KIND_ALIASES = {"HOUR12": "HOUR_12", "AP": "AMPM", "AM_PM": "AMPM"}

Y, M, D = ColumnKind.YEAR, ColumnKind.MONTH, ColumnKind.DAY
H, MI, S = ColumnKind.HOUR, ColumnKind.MINUTE, ColumnKind.SECOND
AP, H12 = ColumnKind.AMPM, ColumnKind.HOUR_12

#: Named layouts.
LAYOUTS: Dict[str, Tuple[ColumnKind, ...]] = {
    "MDY": (M, D, Y),
    "HM": (H, MI),
    "HMS": (H, MI, S),
    "HM_AP": (H12, MI, AP),
    "MDYHM": (M, D, Y, H, MI),
    "MDYHM_AP": (M, D, Y, H12, MI, AP),
    "MDYHMS": (M, D, Y, H, MI, S),
    "YMD": (Y, M, D),
    "YMDHM": (Y, M, D, H, MI),
    "YMDHMS": (Y, M, D, H, MI, S),
    "YMD_AP_HM": (Y, M, D, AP, H12, MI),
    "YM": (Y, M),
    "DMY": (D, M, Y),
    "Y": (Y,),
}

LayoutSpec = Union[str, Sequence[Union[ColumnKind, int, str]]]


def resolve_layout(layout: LayoutSpec) -> Tuple[ColumnKind, ...]:
    """Turn a layout name or a sequence of kinds into a validated tuple.

    Raises
    ------
    ValueError
        For unknown names, unknown kinds, empty layouts or repeated kinds.
    """
    if isinstance(layout, str):
        key = layout.strip().upper()
        if key not in LAYOUTS:
            raise ValueError(
                f"Unknown layout {layout!r}; expected one of {sorted(LAYOUTS)} "
                "or a sequence of column kinds."
            )
        return LAYOUTS[key]
    kinds = tuple(ColumnKind.parse(k) for k in layout)
    if not kinds:
        raise ValueError("layout must contain at least one column kind")
    if len(set(kinds)) != len(kinds):
        raise ValueError(f"layout repeats a column kind: {[k.name for k in kinds]}")
    return kinds


def _normalize_datetime(value: Union[datetime, date], name: str = "value") -> datetime:
    if isinstance(value, datetime):
        return value.replace(microsecond=0, tzinfo=None)
    if isinstance(value, date):
        return datetime.combine(value, time())
    raise TypeError(f"{name} must be a datetime or date, got {type(value).__name__}")


def _raise_into_hours(value: datetime, first: int, last: int) -> datetime:
    """Earliest moment at or after ``value`` whose hour lies in ``first..last``."""
    if value.hour < first:
        return value.replace(hour=first, minute=0, second=0)
    if value.hour > last:
        return (value + timedelta(days=1)).replace(hour=first, minute=0, second=0)
    return value


def _lower_into_hours(value: datetime, first: int, last: int) -> datetime:
    """Latest moment at or before ``value`` whose hour lies in ``first..last``."""
    if value.hour > last:
        return value.replace(hour=last, minute=59, second=59)
    if value.hour < first:
        return (value - timedelta(days=1)).replace(hour=last, minute=59, second=59)
    return value


def _clamp_index(index: int, count: int) -> int:
    if count <= 0:
        return 0
    return max(0, min(index, count - 1))


class CalendarColumnAdapter(BaseColumnAdapter):
    """Picker columns for a single ``datetime`` value.

    Parameters
    ----------
    layout : str or sequence, default="YMD"
        A name from :data:`LAYOUTS` or a sequence of :class:`ColumnKind`
        members (or their names/codes). Kinds may not repeat.
    value : datetime or date, optional
        Initial value; ``now()`` when omitted. Clamped into the bounds.
    min_value, max_value : datetime, optional
        Explicit bounds. When absent they default to
        ``year_begin-01-01 min_hour:00:00`` and
        ``year_end-12-31 max_hour:59:59``. Explicit bounds whose hour
        falls outside ``min_hour..max_hour`` are moved inward to the
        nearest allowed moment.
    year_begin, year_end : int
        Year column range when no explicit bound overrides it.
    min_hour, max_hour : int, optional
        Hour bounds (0-23) applied to the hour columns and default bounds.
    minute_interval : int, optional
        Minute step; must divide 60 and lie in 1..30.
    numeric_month : bool, default=False
        Show months as numbers instead of names.
    months, ampm : sequence[str], optional
        Month names (12 entries) and AM/PM strings (2 entries). Default to
        the tables of ``locale``.
    two_digit_year : bool, default=False
        Show ``2019`` as ``19``.
    suffixes : mapping, optional
        ``ColumnKind -> str`` appended to numeric labels.
    formatters : mapping, optional
        ``ColumnKind -> callable(int) -> str`` replacing the built-in label.
        The callable receives the field value (year, month 1-12, day, hour,
        minute, second, AM/PM index, or 12-hour clock face).
    locale : str, default="en"
        Locale used for default month and AM/PM tables.
    now : callable, optional
        Clock used when ``value`` is omitted (``datetime.now`` by default).

    Raises
    ------
    ValueError
        For invalid layouts, tables, hour bounds, minute intervals, or
        bounds where the minimum exceeds the maximum.

    Examples
    --------
    >>> from datetime import datetime
    >>> cal = CalendarColumnAdapter(layout="DMY", value=datetime(2024, 1, 15))
    >>> sel = cal.initial_selection()
    >>> sel
    [14, 0, 124]
    >>> cal.select(1, 1, sel)
    <SelectOutcome.DAY_CHANGED: 'day_changed'>
    >>> cal.value.month, cal.needs_rebuild(1), cal.needs_rebuild(2)
    (2, True, True)
    """

    def __init__(
        self,
        *,
        layout: LayoutSpec = "YMD",
        value: Optional[Union[datetime, date]] = None,
        min_value: Optional[Union[datetime, date]] = None,
        max_value: Optional[Union[datetime, date]] = None,
        year_begin: int = 1900,
        year_end: int = 2100,
        min_hour: Optional[int] = None,
        max_hour: Optional[int] = None,
        minute_interval: Optional[int] = None,
        numeric_month: bool = False,
        months: Optional[Sequence[str]] = None,
        ampm: Optional[Sequence[str]] = None,
        two_digit_year: bool = False,
        suffixes: Optional[Mapping[Any, str]] = None,
        formatters: Optional[Mapping[Any, Callable[[int], Any]]] = None,
        locale: str = "en",
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._kinds = resolve_layout(layout)
        self._positions: Dict[ColumnKind, int] = {k: i for i, k in enumerate(self._kinds)}

        for name, hour in (("min_hour", min_hour), ("max_hour", max_hour)):
            if hour is not None and not 0 <= int(hour) <= 23:
                raise ValueError(f"{name} must lie in 0..23, got {hour!r}")
        if min_hour is not None and max_hour is not None and min_hour > max_hour:
            raise ValueError(f"min_hour ({min_hour}) must not exceed max_hour ({max_hour})")
        if minute_interval is not None:
            if not 1 <= int(minute_interval) <= 30 or 60 % int(minute_interval):
                raise ValueError(
                    f"minute_interval must lie in 1..30 and divide 60, got {minute_interval!r}"
                )
        self._min_hour = None if min_hour is None else int(min_hour)
        self._max_hour = None if max_hour is None else int(max_hour)
        self._minute_interval = int(minute_interval) if minute_interval else 1

        tables = localizations_for(locale)
        self._months = tables.months if months is None else validate_months(months)
        self._ampm = tables.ampm if ampm is None else validate_ampm(ampm)
        self._numeric_month = bool(numeric_month)
        self._two_digit_year = bool(two_digit_year)
        self._suffixes = {ColumnKind.parse(k): str(v) for k, v in (suffixes or {}).items()}
        self._formatters = {ColumnKind.parse(k): f for k, f in (formatters or {}).items()}

        first, last = self._hour_range()
        if min_value is not None:
            lo = _normalize_datetime(min_value, "min_value")
            self._min_value = _raise_into_hours(lo, first, last)
            self._year_begin = self._min_value.year
        else:
            self._min_value = datetime(int(year_begin), 1, 1, first)
            self._year_begin = int(year_begin)
        if max_value is not None:
            hi = _normalize_datetime(max_value, "max_value")
            self._max_value = _lower_into_hours(hi, first, last)
            self._year_end = self._max_value.year
        else:
            self._max_value = datetime(int(year_end), 12, 31, last, 59, 59)
            self._year_end = int(year_end)
        if self._min_value > self._max_value:
            raise ValueError(
                f"minimum {self._min_value} is later than maximum {self._max_value}"
            )

        day = self._positions.get(ColumnKind.DAY, -1)
        month = self._positions.get(ColumnKind.MONTH, -1)
        year = self._positions.get(ColumnKind.YEAR, -1)
        self._needs_prev_rebuild = day >= 0 and (
            (month >= 0 and day < month) or (year >= 0 and day < year)
        )
        ap = self._positions.get(ColumnKind.AMPM, -1)
        h12 = self._positions.get(ColumnKind.HOUR_12, -1)
        self._ampm_before_hour12 = ap >= 0 and h12 >= 0 and ap < h12
        self._has_seconds = ColumnKind.SECOND in self._positions

        if value is None:
            value = (now or datetime.now)()
        initial = _normalize_datetime(value)
        self._value = self._clamp(initial)
        if self._value != initial:
            logger.debug(f"initial value {initial} clamped to {self._value}")

    # --- Configuration -------------------------------------------------------

    @property
    def value(self) -> datetime:
        """Current value (replaced wholesale on every change)."""
        return self._value

    @property
    def layout(self) -> Tuple[ColumnKind, ...]:
        return self._kinds

    @property
    def min_value(self) -> datetime:
        return self._min_value

    @property
    def max_value(self) -> datetime:
        return self._max_value

    @property
    def year_begin(self) -> int:
        return self._year_begin

    @property
    def year_end(self) -> int:
        return self._year_end

    @property
    def needs_prev_rebuild(self) -> bool:
        return self._needs_prev_rebuild

    @property
    def ampm_before_hour12(self) -> bool:
        return self._ampm_before_hour12

    @property
    def hour_bounded(self) -> bool:
        return self._min_hour is not None or self._max_hour is not None

    def kind_at(self, column: int) -> Optional[ColumnKind]:
        if 0 <= column < len(self._kinds):
            return self._kinds[column]
        return None

    def column_of(self, kind: Union[ColumnKind, int, str]) -> int:
        """Column showing ``kind`` or ``-1``."""
        return self._positions.get(ColumnKind.parse(kind), -1)

    def set_value(self, value: Union[datetime, date]) -> datetime:
        """Replace the value (clamped into the bounds) and return it."""
        self._value = self._clamp(_normalize_datetime(value))
        return self._value

    # --- Helpers --------------------------------------------------------------

    def _clamp(self, value: datetime) -> datetime:
        # Both bounds have hours inside [min_hour, max_hour], so the final
        # bound clamp cannot move the hour back out of that range.
        value = min(max(value, self._min_value), self._max_value)
        lo, hi = self._hour_range()
        if not lo <= value.hour <= hi:
            value = value.replace(hour=min(max(value.hour, lo), hi))
        return min(max(value, self._min_value), self._max_value)

    def _hour_range(self) -> Tuple[int, int]:
        lo = 0 if self._min_hour is None else self._min_hour
        hi = 23 if self._max_hour is None else self._max_hour
        return lo, hi

    def _pm_selected(self, selected: Sequence[int]) -> bool:
        col = self._positions.get(ColumnKind.AMPM, -1)
        if 0 <= col < len(selected):
            return selected[col] == 1
        return is_pm(self._value.hour)

    def _hour12_hours(self, selected: Sequence[int]) -> List[int]:
        return half_day_hours(self._pm_selected(selected), self._min_hour, self._max_hour)

    def _field_value(self, kind: ColumnKind, index: int, selected: Sequence[int]) -> Optional[int]:
        if kind is ColumnKind.YEAR:
            return self._year_begin + index
        if kind in (ColumnKind.MONTH, ColumnKind.DAY):
            return index + 1
        if kind is ColumnKind.HOUR:
            return index + self._hour_range()[0]
        if kind is ColumnKind.MINUTE:
            return index * self._minute_interval
        if kind is ColumnKind.HOUR_12:
            hours = self._hour12_hours(selected)
            return clock_face(hours[index]) if 0 <= index < len(hours) else None
        return index

    # --- ColumnAdapter --------------------------------------------------------

    def column_count(self) -> int:
        return len(self._kinds)

    def item_count(self, column: int, selected: Sequence[int]) -> int:
        kind = self.kind_at(column)
        if kind is None:
            return 0
        if kind is ColumnKind.YEAR:
            return max(0, self._year_end - self._year_begin + 1)
        if kind is ColumnKind.MONTH:
            return 12
        if kind is ColumnKind.DAY:
            return days_in_month(self._value.year, self._value.month)
        if kind is ColumnKind.HOUR:
            if self.hour_bounded:
                lo, hi = self._hour_range()
                return hi - lo + 1
            return 24
        if kind is ColumnKind.MINUTE:
            return 60 // self._minute_interval
        if kind is ColumnKind.SECOND:
            return 60
        if kind is ColumnKind.AMPM:
            return 2
        return len(self._hour12_hours(selected))

    def label_at(self, column: int, index: int, selected: Sequence[int]) -> str:
        kind = self.kind_at(column)
        if kind is None or not 0 <= index < self.item_count(column, selected):
            return ""
        number = self._field_value(kind, index, selected)
        if number is None:
            return ""
        formatter = self._formatters.get(kind)
        if formatter is not None:
            return str(formatter(number))

        if kind is ColumnKind.AMPM:
            return self._ampm[index]
        if kind is ColumnKind.MONTH and not self._numeric_month:
            return self._months[index]
        if kind is ColumnKind.YEAR:
            text = two_digits(number % 100) if self._two_digit_year else str(number)
        elif kind in (ColumnKind.MONTH, ColumnKind.DAY):
            text = str(number)
        else:
            text = two_digits(number)
        return f"{text}{self._suffixes.get(kind, '')}"

    def initial_selection(self) -> List[int]:
        return self.sync_from_value()

    def sync_selection(self, selected: Sequence[int]) -> List[int]:
        return self.sync_from_value()

    def sync_from_value(self) -> List[int]:
        """Compute every column's selected row from the current value.

        When a minute interval is configured the value's minute is first
        snapped down to the interval.
        """
        v = self._value
        step = self._minute_interval
        if step > 1 and v.minute % step:
            snapped = v.replace(
                minute=v.minute - v.minute % step,
                second=v.second if self._has_seconds else 0,
            )
            v = self._value = self._clamp(snapped)

        lo, _ = self._hour_range()
        selection = []
        for column, kind in enumerate(self._kinds):
            if kind is ColumnKind.YEAR:
                idx = v.year - self._year_begin
            elif kind is ColumnKind.MONTH:
                idx = v.month - 1
            elif kind is ColumnKind.DAY:
                idx = v.day - 1
            elif kind is ColumnKind.HOUR:
                idx = v.hour - lo
            elif kind is ColumnKind.MINUTE:
                idx = v.minute // step
            elif kind is ColumnKind.SECOND:
                idx = v.second
            elif kind is ColumnKind.AMPM:
                idx = 1 if is_pm(v.hour) else 0
            else:
                hours = half_day_hours(is_pm(v.hour), self._min_hour, self._max_hour)
                idx = hours.index(v.hour) if v.hour in hours else 0
            selection.append(idx)

        return [
            _clamp_index(idx, self.item_count(column, selection))
            for column, idx in enumerate(selection)
        ]

    def select(self, column: int, index: int, selected: Sequence[int]) -> SelectOutcome:
        """Apply a row change in ``column`` to the value.

        Returns
        -------
        SelectOutcome
            ``RESYNC`` when the new value had to be clamped into the bounds
            (or the AM/PM change could not be honoured as requested),
            ``DAY_CHANGED`` when the day count of the displayed month changed
            or the day had to be clamped into it, ``NONE`` otherwise.
        """
        kind = self.kind_at(column)
        if kind is None:
            return SelectOutcome.NONE
        count = self.item_count(column, selected)
        if count <= 0:
            return SelectOutcome.NONE
        index = _clamp_index(index, count)

        old = self._value
        year, month, day = old.year, old.month, old.day
        hour, minute = old.hour, old.minute
        second = old.second if self._has_seconds else 0
        forced = False
        pm: Optional[bool] = None

        if kind is ColumnKind.YEAR:
            year = self._year_begin + index
        elif kind is ColumnKind.MONTH:
            month = index + 1
        elif kind is ColumnKind.DAY:
            day = index + 1
        elif kind is ColumnKind.HOUR:
            hour = index + self._hour_range()[0]
        elif kind is ColumnKind.MINUTE:
            minute = index * self._minute_interval
        elif kind is ColumnKind.SECOND:
            second = index
        elif kind is ColumnKind.AMPM:
            pm = index == 1
            hour = fold_hour(hour, minute, pm)
            if self._max_hour is not None and hour > self._max_hour:
                hour = self._max_hour
                forced = True
            if self._min_hour is not None and hour < self._min_hour:
                hour = self._min_hour
                forced = True
            # the 12-hour column lists different hours for each half
            forced = forced or self.hour_bounded
        else:
            hour = self._hour12_hours(selected)[index]

        day_count = days_in_month(year, month)
        if day > day_count:
            day = day_count

        candidate = datetime(year, month, day, hour, minute, second)
        self._value = self._clamp(candidate)

        if self._value != candidate:
            logger.debug(f"value {candidate} clamped to {self._value}")
            return SelectOutcome.RESYNC
        if forced or (pm is not None and is_pm(hour) != pm):
            return SelectOutcome.RESYNC
        if ColumnKind.DAY in self._positions and (
            day != old.day or day_count != days_in_month(old.year, old.month)
        ):
            if kind is not ColumnKind.DAY:
                return SelectOutcome.DAY_CHANGED
        return SelectOutcome.NONE

    def needs_rebuild(self, changed_column: int) -> bool:
        """Whether a change in ``changed_column`` invalidates painted columns.

        True when the day column precedes month/year, the current month is
        February and the change came from the month or year column; or when
        the AM/PM column precedes the 12-hour column and the change came from
        the AM/PM column.
        """
        kind = self.kind_at(changed_column)
        if kind is None:
            return False
        if (
            self._needs_prev_rebuild
            and self._value.month == 2
            and kind in (ColumnKind.MONTH, ColumnKind.YEAR)
        ):
            return True
        return self._ampm_before_hour12 and kind is ColumnKind.AMPM

    def stale_columns(self, changed_column: int, outcome: SelectOutcome) -> Sequence[int]:
        day = self._positions.get(ColumnKind.DAY, -1)
        if outcome is SelectOutcome.DAY_CHANGED and day >= 0 and day != changed_column:
            return (day,)
        return ()

    def selected_values(self, selected: Sequence[int]) -> List[datetime]:
        return [self._value]

    def column_flex(self, column: int) -> int:
        return 3 if self.kind_at(column) is ColumnKind.YEAR else 2

    def text(self, selected: Sequence[int]) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        kinds = ",".join(k.name for k in self._kinds)
        return f"CalendarColumnAdapter(layout={kinds!r}, value={self._value!s})"
