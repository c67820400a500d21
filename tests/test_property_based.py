"""Property-based checks for column ranges and calendar selection bounds.

These complement the example-based tests by driving the adapters through
arbitrary inputs and scroll sequences.
"""

from __future__ import annotations

import calendar
from datetime import datetime

import pytest

from wheel_picker import CalendarColumnAdapter, ColumnRange, SelectionController
from wheel_picker.calendar_math import days_in_month

try:
    from hypothesis import given, settings
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


@given(
    begin=st.integers(min_value=-1000, max_value=1000),
    length=st.integers(min_value=1, max_value=200),
    data=st.data(),
)
def test_unit_step_range_round_trips(begin: int, length: int, data) -> None:
    col = ColumnRange(begin=begin, end=begin + length - 1)
    index = data.draw(st.integers(min_value=0, max_value=length - 1))

    assert col.count() == length
    assert col.index_of(col.value_at(index)) == index


@given(
    begin=st.integers(min_value=-100, max_value=100),
    end=st.integers(min_value=-100, max_value=100),
    step=st.integers(min_value=1, max_value=7),
)
def test_range_count_is_never_negative(begin: int, end: int, step: int) -> None:
    col = ColumnRange(begin=begin, end=end, step=step)

    assert col.count() == len(range(begin, end + 1, step))


@given(year=st.integers(min_value=1, max_value=9999), month=st.integers(min_value=1, max_value=12))
def test_days_in_month_matches_gregorian_calendar(year: int, month: int) -> None:
    assert days_in_month(year, month) == calendar.monthrange(year, month)[1]


LAYOUT_NAMES = st.sampled_from(["YMDHMS", "DMY", "MDYHM_AP", "YMD_AP_HM", "HM_AP", "YM"])
SCROLLS = st.lists(
    st.tuples(st.integers(min_value=0, max_value=5), st.integers(min_value=0, max_value=300)),
    max_size=25,
)


@settings(max_examples=60, deadline=None)
@given(layout=LAYOUT_NAMES, scrolls=SCROLLS, bounded=st.booleans())
def test_scrolling_keeps_value_in_bounds_and_selection_in_range(layout, scrolls, bounded) -> None:
    kwargs = {"min_hour": 7, "max_hour": 19} if bounded else {}
    cal = CalendarColumnAdapter(
        layout=layout,
        value=datetime(2021, 7, 14, 9, 30),
        min_value=datetime(2020, 2, 10, 7, 0),
        max_value=datetime(2023, 11, 20, 19, 45),
        **kwargs,
    )
    ctl = SelectionController(cal)

    for column, index in scrolls:
        request = ctl.on_column_changed(column % ctl.column_count, index)
        if request.columns:
            assert column % ctl.column_count in request

        assert cal.min_value <= cal.value <= cal.max_value
        for col in range(ctl.column_count):
            assert 0 <= ctl.selected[col] < ctl.item_count(col)
