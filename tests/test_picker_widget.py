from __future__ import annotations

import importlib
from datetime import datetime

import ipywidgets as widgets

from wheel_picker import ArrayColumnAdapter, CalendarColumnAdapter, PickerDelimiter, PickerWidget

TREE = {"A": {"B": ["x", "y"]}, "C": {"D": ["z"]}}


def test_widget_builds_one_select_per_column() -> None:
    picker = PickerWidget(ArrayColumnAdapter(TREE), title="Pick")

    assert len(picker.columns) == 3
    assert all(isinstance(col, widgets.Select) for col in picker.columns)
    assert [col.label for col in picker.columns] == ["A", "B", "x"]
    assert len(picker.columns[2].options) == 2
    assert picker.selected == [0, 0, 0]
    assert picker.title_label.value == "Pick"


def test_changing_a_parent_column_redraws_descendants() -> None:
    picker = PickerWidget(ArrayColumnAdapter(TREE))

    picker.columns[0].index = 1

    assert picker.selected == [1, 0, 0]
    assert picker.columns[2].label == "z"
    assert len(picker.columns[2].options) == 1
    assert picker.values == ["C", "D", "z"]


def test_calendar_month_change_redraws_day_column() -> None:
    picker = PickerWidget(CalendarColumnAdapter(layout="DMY", value=datetime(2024, 1, 31)))

    assert len(picker.columns[0].options) == 31

    picker.columns[1].index = 1

    assert len(picker.columns[0].options) == 29
    assert picker.columns[0].index == 28
    assert picker.selected == [28, 1, 124]
    assert picker.text == "2024-02-29 00:00:00"


def test_reversed_order_and_delimiters_shape_the_column_row() -> None:
    picker = PickerWidget(
        ArrayColumnAdapter([["a", "b"], ["1", "2"]], independent=True),
        reversed_order=True,
        delimiters=[PickerDelimiter(1, "/")],
    )

    children = picker.column_row.children
    assert children[0] is picker.columns[1]
    assert isinstance(children[1], widgets.Label)
    assert children[1].value == "/"
    assert children[2] is picker.columns[0]


def test_header_uses_locale_and_can_be_hidden() -> None:
    picker = PickerWidget(ArrayColumnAdapter(["a"]), locale="zh", show_header=False)

    assert picker.btn_cancel.description == "取消"
    assert picker.btn_confirm.description == "确定"
    assert picker.header.layout.display == "none"


def test_confirm_and_cancel_callbacks() -> None:
    picker = PickerWidget(ArrayColumnAdapter(TREE))
    confirmed: list[object] = []
    cancelled: list[object] = []
    picker.on_confirm(lambda values, widget: confirmed.append((values, widget)))
    picker.on_cancel(cancelled.append)

    picker.columns[2].index = 1
    picker.btn_confirm.click()
    picker.btn_cancel.click()

    assert confirmed == [(["A", "B", "y"], picker)]
    assert cancelled == [picker]


def test_controller_options_are_forwarded() -> None:
    picker = PickerWidget(
        ArrayColumnAdapter(TREE),
        selected=[1, 0, 0],
        item_builder=lambda text, column, index, is_selected: f"[{text}]" if is_selected else None,
    )

    assert picker.selected == [1, 0, 0]
    assert picker.columns[0].label == "[C]"


def test_notify_data_changed_redraws_every_column() -> None:
    cal = CalendarColumnAdapter(layout="YMD", value=datetime(2024, 3, 5))
    picker = PickerWidget(cal)

    cal.set_value(datetime(2023, 2, 10))
    picker.notify_data_changed()

    assert picker.selected == [123, 1, 9]
    assert len(picker.columns[2].options) == 28


def test_show_displays_the_widget(monkeypatch) -> None:
    module = importlib.import_module("wheel_picker.PickerWidget")
    shown: list[object] = []
    monkeypatch.setattr(module, "display", shown.append)
    picker = PickerWidget(ArrayColumnAdapter(TREE))

    picker.show()

    assert shown == [picker]
    assert not hasattr(picker, "_has_been_displayed")
