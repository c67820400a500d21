"""Standardized column-change event payloads.

This module defines ``SelectionEvent``, the immutable structure emitted by
:class:`~wheel_picker.selection_controller.SelectionController` after every
column change and consumed by controller hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    from .ColumnAdapter import SelectOutcome
    from .selection_controller import RebuildRequest, SelectionController


@dataclass(frozen=True)
class SelectionEvent:
    """Normalized column change event emitted by the selection controller.

    Parameters
    ----------
    column : int
        Column whose selection was changed by the host.
    old : int
        Selected row of ``column`` before the change.
    new : int
        Selected row of ``column`` after clamping into the column's range.
    selected : tuple[int, ...]
        Full selection vector after the adapter recomputed its model.
    outcome : SelectOutcome
        Signal returned by the adapter's ``select`` call.
    rebuild : RebuildRequest
        Columns the host must recreate before the next paint.
    controller : SelectionController
        Controller that produced the event.
    raw : Any, optional
        Host payload that triggered the change (or ``None`` when synthesized).

    Notes
    -----
    Consumers should prefer ``column``, ``new`` and ``selected`` for stable
    semantics, and use ``raw`` only for debugging.

    Examples
    --------
    >>> from wheel_picker import ArrayColumnAdapter, SelectionController  # doctest: +SKIP
    >>> ctl = SelectionController(ArrayColumnAdapter(["a", "b"]))  # doctest: +SKIP
    >>> ctl.add_hook(lambda event: print(event.column, event.new))  # doctest: +SKIP
    >>> ctl.on_column_changed(0, 1)  # doctest: +SKIP
    0 1
    """
    column: int
    old: int
    new: int
    selected: Tuple[int, ...]
    outcome: "SelectOutcome"
    rebuild: "RebuildRequest"
    controller: "SelectionController"
    raw: Any = None
