"""Column adapter protocol shared by every picker data source.

An adapter answers the questions a rendering host asks while painting a
column (how many rows, which label, which row is selected) and applies the
model update that follows a scroll-settle event. The column index and the
current selection vector are passed into every call, so adapters never keep a
"current column" cursor between calls.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Protocol, Sequence, runtime_checkable


class SelectOutcome(Enum):
    """Signal returned by :meth:`ColumnAdapter.select`.

    ``NONE``
        Only the changed column is affected.
    ``DAY_CHANGED``
        The number of days of the displayed month changed; the day column is
        stale and the selection vector must be resynchronized.
    ``RESYNC``
        The model was replaced wholesale (for example clamped into its
        bounds); every column must be resynchronized and redrawn.
    """

    NONE = "none"
    DAY_CHANGED = "day_changed"
    RESYNC = "resync"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def merge(self, other: "SelectOutcome") -> "SelectOutcome":
        """Return the stronger of two outcomes."""
        return self if self.severity >= other.severity else other


_SEVERITY = {
    SelectOutcome.NONE: 0,
    SelectOutcome.DAY_CHANGED: 1,
    SelectOutcome.RESYNC: 2,
}


@runtime_checkable
class ColumnAdapter(Protocol):
    @property
    def is_linkage(self) -> bool: ...

    def column_count(self) -> int: ...

    def item_count(self, column: int, selected: Sequence[int]) -> int: ...

    def label_at(self, column: int, index: int, selected: Sequence[int]) -> str: ...

    def is_selected(self, column: int, index: int, selected: Sequence[int]) -> bool: ...

    def initial_selection(self) -> List[int]: ...

    def sync_selection(self, selected: Sequence[int]) -> List[int]: ...

    def select(self, column: int, index: int, selected: Sequence[int]) -> SelectOutcome: ...

    def needs_rebuild(self, changed_column: int) -> bool: ...

    def stale_columns(self, changed_column: int, outcome: SelectOutcome) -> Sequence[int]: ...

    def selected_values(self, selected: Sequence[int]) -> List[Any]: ...

    def column_flex(self, column: int) -> int: ...

    def text(self, selected: Sequence[int]) -> str: ...


class BaseColumnAdapter:
    """Default ColumnAdapter behaviour for adapters without cross-column signals."""

    @property
    def is_linkage(self) -> bool:
        """Whether a column's items depend on the selection of earlier columns."""
        return False

    def column_count(self) -> int:
        raise NotImplementedError

    def item_count(self, column: int, selected: Sequence[int]) -> int:
        raise NotImplementedError

    def label_at(self, column: int, index: int, selected: Sequence[int]) -> str:
        raise NotImplementedError

    def selected_values(self, selected: Sequence[int]) -> List[Any]:
        raise NotImplementedError

    def is_selected(self, column: int, index: int, selected: Sequence[int]) -> bool:
        return 0 <= column < len(selected) and selected[column] == index

    def initial_selection(self) -> List[int]:
        return [0] * self.column_count()

    def sync_selection(self, selected: Sequence[int]) -> List[int]:
        """Return the selection vector that matches the adapter's model.

        Adapters whose state is the selection vector itself return a copy.
        """
        return list(selected)

    def select(self, column: int, index: int, selected: Sequence[int]) -> SelectOutcome:
        return SelectOutcome.NONE

    def needs_rebuild(self, changed_column: int) -> bool:
        return False

    def stale_columns(self, changed_column: int, outcome: SelectOutcome) -> Sequence[int]:
        """Columns other than ``changed_column`` made stale by ``outcome``."""
        return ()

    def column_flex(self, column: int) -> int:
        return 1

    def text(self, selected: Sequence[int]) -> str:
        return str(self.selected_values(selected))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(columns={self.column_count()})"
