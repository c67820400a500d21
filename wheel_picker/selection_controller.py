"""Selection controller for multi-column pickers."""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Dict,
    Hashable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
)

from .ColumnAdapter import ColumnAdapter, SelectOutcome
from .PickerSnapshot import PickerSnapshot
from .SelectionEvent import SelectionEvent

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

ItemBuilder = Callable[[str, int, int, bool], Optional[str]]


@dataclass(frozen=True)
class RebuildRequest:
    """Columns the host must recreate after a selection change.

    Parameters
    ----------
    columns : tuple[int, ...]
        Column indices to rebuild, ascending.
    full : bool, default=False
        ``True`` when the adapter's model was replaced wholesale; the host
        should re-read every column and jump every column to its selection.
    """

    columns: Tuple[int, ...] = ()
    full: bool = False

    def __contains__(self, column: object) -> bool:
        return column in self.columns

    def __iter__(self) -> Iterator[int]:
        return iter(self.columns)

    def __len__(self) -> int:
        return len(self.columns)


# SECTION: SelectionController (The Model for Column Selection) [id: SelectionController]
# =============================================================================

class SelectionController:
    """
    Owns the selection vector of a picker and routes column changes.

    Responsibilities:
    - Holding one selected row per column.
    - Forwarding scroll-settle events to the adapter.
    - Telling the host which column widgets must be rebuilt.
    - Executing hooks after every change.

    Design Note:
    ------------
    ``on_column_changed`` is the only mutating entry point. When the adapter
    reports that a change invalidated already-painted columns, the rebuild
    request covers every column, including the one the user just scrolled.

    Parameters
    ----------
    adapter : ColumnAdapter
        Data source for the columns.
    selected : sequence[int], optional
        Initial selection; defaults to ``adapter.initial_selection()``. Only
        meant for initialization before the first render.
    reset_descendants : bool, default=False
        When true, a change in column ``i`` resets every column right of
        ``i`` to row 0.
    item_builder : callable, optional
        ``item_builder(text, column, index, is_selected)`` may return a
        replacement label; ``None`` or ``""`` keeps the adapter's label.
    column_flex : sequence[int], optional
        Per-column width hints overriding the adapter's.
    reversed_order : bool, default=False
        Display columns right to left. Selection indices are never reversed.
    debug : bool, default=False
        Log every change at INFO instead of DEBUG.
    """

    def __init__(
        self,
        adapter: ColumnAdapter,
        *,
        selected: Optional[Sequence[int]] = None,
        reset_descendants: bool = False,
        item_builder: Optional[ItemBuilder] = None,
        column_flex: Optional[Sequence[int]] = None,
        reversed_order: bool = False,
        debug: bool = False,
    ) -> None:
        self._adapter = adapter
        self._reset_descendants = bool(reset_descendants)
        self._item_builder = item_builder
        self._column_flex = list(column_flex) if column_flex is not None else None
        self._reversed_order = bool(reversed_order)
        self._debug = bool(debug)
        self._hooks: Dict[Hashable, Callable[[SelectionEvent], Any]] = {}
        self._hook_counter: int = 0

        count = adapter.column_count()
        if selected is None:
            initial = list(adapter.initial_selection())
            self._selected: List[int] = (initial + [0] * count)[:count]
        else:
            if len(selected) != count:
                raise ValueError(
                    f"selected has {len(selected)} entries but the adapter has {count} columns"
                )
            self._selected = [int(i) for i in selected]
        self._last_rebuild = RebuildRequest(tuple(range(count)), full=True)

    # --- State ----------------------------------------------------------------

    @property
    def adapter(self) -> ColumnAdapter:
        return self._adapter

    @property
    def column_count(self) -> int:
        return len(self._selected)

    @property
    def selected(self) -> Tuple[int, ...]:
        """Detached copy of the selection vector."""
        return tuple(self._selected)

    @property
    def last_rebuild(self) -> RebuildRequest:
        """Rebuild request produced by the most recent change."""
        return self._last_rebuild

    @property
    def reset_descendants(self) -> bool:
        return self._reset_descendants

    @property
    def reversed_order(self) -> bool:
        return self._reversed_order

    # --- Host reads -----------------------------------------------------------

    def item_count(self, column: int) -> int:
        return self._adapter.item_count(column, self._selected)

    def is_selected(self, column: int, index: int) -> bool:
        return self._adapter.is_selected(column, index, self._selected)

    def label_at(self, column: int, index: int) -> str:
        """Label for a row, honouring the custom item builder."""
        text = self._adapter.label_at(column, index, self._selected)
        if self._item_builder is not None:
            override = self._item_builder(text, column, index, self.is_selected(column, index))
            if override:
                return str(override)
        return text

    def labels(self, column: int) -> List[str]:
        return [self.label_at(column, i) for i in range(self.item_count(column))]

    def column_flex(self, column: int) -> int:
        if self._column_flex is not None and column < len(self._column_flex):
            return self._column_flex[column]
        return self._adapter.column_flex(column)

    def display_columns(self) -> List[int]:
        """Column indices in left-to-right display order."""
        order = list(range(self.column_count))
        return order[::-1] if self._reversed_order else order

    def selected_values(self) -> List[Any]:
        return self._adapter.selected_values(self._selected)

    def text(self) -> str:
        return self._adapter.text(self._selected)

    # --- Mutation -------------------------------------------------------------

    def on_column_changed(self, column: int, new_index: int, *, raw: Any = None) -> RebuildRequest:
        """Apply a scroll-settle event and return the columns to rebuild.

        Parameters
        ----------
        column : int
            Column that settled.
        new_index : int
            Row it settled on; clamped into the column's current range.
        raw : Any, optional
            Host payload forwarded to hooks.

        Returns
        -------
        RebuildRequest
            Also stored as :attr:`last_rebuild`.
        """
        count = self.column_count
        if not 0 <= column < count:
            logger.warning(f"ignoring change for unknown column {column} (have {count})")
            self._last_rebuild = RebuildRequest()
            return self._last_rebuild
        length = self.item_count(column)
        if length <= 0:
            self._last_rebuild = RebuildRequest()
            return self._last_rebuild

        index = max(0, min(int(new_index), length - 1))
        old = self._selected[column]
        self._selected[column] = index
        outcome = self._adapter.select(column, index, tuple(self._selected))

        if self._reset_descendants:
            for j in range(column + 1, count):
                self._selected[j] = 0
                outcome = outcome.merge(self._adapter.select(j, 0, tuple(self._selected)))

        if outcome is not SelectOutcome.NONE:
            synced = list(self._adapter.sync_selection(self._selected))
            self._selected = (synced + [0] * count)[:count]

        if outcome is SelectOutcome.RESYNC:
            request = RebuildRequest(tuple(range(count)), full=True)
        elif self._adapter.needs_rebuild(column):
            request = RebuildRequest(tuple(range(count)))
        else:
            columns = {column}
            columns.update(self._adapter.stale_columns(column, outcome))
            if self._adapter.is_linkage or self._reset_descendants:
                columns.update(range(column + 1, count))
                if not self._reset_descendants:
                    self._clamp_from(column + 1)
            request = RebuildRequest(tuple(sorted(columns)))

        self._last_rebuild = request
        level = logging.INFO if self._debug else logging.DEBUG
        if logger.isEnabledFor(level):
            logger.log(
                level,
                f"column {column}: {old} -> {index} outcome={outcome.value} "
                f"rebuild={list(request.columns)} full={request.full}",
            )

        self._emit(
            SelectionEvent(
                column=column,
                old=old,
                new=index,
                selected=tuple(self._selected),
                outcome=outcome,
                rebuild=request,
                controller=self,
                raw=raw,
            )
        )
        return request

    def _clamp_from(self, start: int) -> List[int]:
        changed = []
        for j in range(start, self.column_count):
            length = self.item_count(j)
            idx = self._selected[j]
            fixed = 0 if length <= 0 else max(0, min(idx, length - 1))
            if fixed != idx:
                self._selected[j] = fixed
                changed.append(j)
        return changed

    def clamp_selection(self) -> Tuple[int, ...]:
        """Pull stale indices back into range; return the columns changed.

        Columns are processed left to right because a linked column's range
        depends on the (possibly just clamped) columns before it.
        """
        return tuple(self._clamp_from(0))

    def notify_data_changed(self) -> RebuildRequest:
        """Re-read the adapter after the host replaced its data or value."""
        count = self._adapter.column_count()
        synced = list(self._adapter.sync_selection(self._selected))
        self._selected = (synced + [0] * count)[:count]
        self._clamp_from(0)
        self._last_rebuild = RebuildRequest(tuple(range(count)), full=True)
        return self._last_rebuild

    # --- Hooks ----------------------------------------------------------------

    def add_hook(
        self, callback: Callable[[SelectionEvent], Any], hook_id: Optional[Hashable] = None
    ) -> Hashable:
        """Register a callback run after every column change.

        Parameters
        ----------
        callback : callable
            ``callback(event)`` receiving a :class:`SelectionEvent`.
        hook_id : hashable, optional
            Identifier; an id that already exists is replaced. Auto ids are
            ``"hook:1"``, ``"hook:2"``, ...

        Returns
        -------
        Hashable
            The hook id.

        Raises
        ------
        TypeError
            If ``hook_id`` is not hashable.
        """
        if hook_id is None:
            self._hook_counter += 1
            hook_id = f"hook:{self._hook_counter}"
            while hook_id in self._hooks:
                self._hook_counter += 1
                hook_id = f"hook:{self._hook_counter}"
        else:
            hash(hook_id)
            if isinstance(hook_id, str) and hook_id.startswith("hook:"):
                suffix = hook_id[len("hook:"):]
                if suffix.isdigit():
                    self._hook_counter = max(self._hook_counter, int(suffix))
        self._hooks[hook_id] = callback
        return hook_id

    def remove_hook(self, hook_id: Hashable) -> None:
        """Unregister a hook; raises ``KeyError`` for unknown ids."""
        if hook_id not in self._hooks:
            raise KeyError(f"Unknown hook id: {hook_id!r}")
        del self._hooks[hook_id]

    def get_hooks(self) -> Dict[Hashable, Callable[[SelectionEvent], Any]]:
        """Return a shallow copy of the registered hooks."""
        return self._hooks.copy()

    def fire_hook(self, hook_id: Hashable, event: Optional[SelectionEvent]) -> None:
        callback = self._hooks.get(hook_id)
        if callback is None:
            return
        callback(event)

    def _emit(self, event: SelectionEvent) -> None:
        for hook_id, callback in list(self._hooks.items()):
            try:
                callback(event)
            except Exception as exc:
                warnings.warn(
                    f"Selection hook {hook_id!r} failed: {exc}",
                    RuntimeWarning,
                    stacklevel=2,
                )

    # --- Snapshots ------------------------------------------------------------

    def snapshot(self) -> PickerSnapshot:
        """Return an immutable copy of the selection state and labels."""
        columns = []
        for column in range(self.column_count):
            columns.append(
                {
                    "selected": self._selected[column],
                    "count": self.item_count(column),
                    "label": self.label_at(column, self._selected[column])
                    if self.item_count(column) > 0
                    else "",
                    "flex": self.column_flex(column),
                }
            )
        return PickerSnapshot(
            columns,
            values=self.selected_values(),
            text=self.text(),
            reversed_order=self._reversed_order,
        )

    def __repr__(self) -> str:
        return f"SelectionController({self._adapter!r}, selected={self._selected})"
