"""Top-level public API for the ``wheel_picker`` package.

This module re-exports the picker core so users can import from a single
namespace, for example:

>>> from wheel_picker import CalendarColumnAdapter, SelectionController  # doctest: +SKIP

It exposes the column adapters, the selection controller with its event and
snapshot types, the locale registry, and the notebook rendering host.
"""

from .array_adapter import ArrayColumnAdapter
from .calendar_adapter import LAYOUTS, CalendarColumnAdapter, ColumnKind, resolve_layout
from .calendar_math import days_in_month, fold_hour, is_leap_year
from .ColumnAdapter import BaseColumnAdapter, ColumnAdapter, SelectOutcome
from .number_columns import NOT_FOUND, ColumnRange, NumberColumnAdapter
from .option_tree import OptionNode, max_level, parse_columns, parse_tree
from .picker_localizations import (
    PickerLocalizations,
    available_locales,
    localizations_for,
    register_locale,
    unregister_locale,
)
from .PickerSnapshot import PickerSnapshot
from .PickerWidget import PickerDelimiter, PickerWidget
from .SelectionEvent import SelectionEvent
from .selection_controller import RebuildRequest, SelectionController

__all__ = [
    "ArrayColumnAdapter",
    "BaseColumnAdapter",
    "CalendarColumnAdapter",
    "ColumnAdapter",
    "ColumnKind",
    "ColumnRange",
    "LAYOUTS",
    "NOT_FOUND",
    "NumberColumnAdapter",
    "OptionNode",
    "PickerDelimiter",
    "PickerLocalizations",
    "PickerSnapshot",
    "PickerWidget",
    "RebuildRequest",
    "SelectOutcome",
    "SelectionController",
    "SelectionEvent",
    "available_locales",
    "days_in_month",
    "fold_hour",
    "is_leap_year",
    "localizations_for",
    "max_level",
    "parse_columns",
    "parse_tree",
    "register_locale",
    "resolve_layout",
    "unregister_locale",
]
