"""Numeric picker columns.

``ColumnRange`` describes one numeric column (an arithmetic range or an
explicit value list) and maps values to row indices and back.
``NumberColumnAdapter`` presents a sequence of independent ranges as picker
columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from .ColumnAdapter import BaseColumnAdapter

#: Returned by :meth:`ColumnRange.index_of` for values that are not in the column.
NOT_FOUND = -1


@dataclass(frozen=True)
class ColumnRange:
    """Immutable description of a numeric column.

    Parameters
    ----------
    begin, end : int
        Inclusive bounds of the arithmetic range.
    step : int, default=1
        Distance between consecutive values; must be ``>= 1``.
    values : sequence[int], optional
        Explicit value list. When given it is the sole source of truth for
        counting and index mapping; ``begin``/``end``/``step`` are ignored.
    initial : int, optional
        Value selected when the adapter initializes its selection.
    prefix, suffix : str
        Text wrapped around every label.
    formatter : callable, optional
        ``formatter(value) -> str`` replacing the plain ``str(value)`` label.
    flex : int, default=1
        Relative column width hint for the host.

    Examples
    --------
    >>> col = ColumnRange(begin=0, end=10, step=5)
    >>> col.count(), col.value_at(1), col.index_of(10)
    (3, 5, 2)
    >>> ColumnRange(values=[10, 12, 14]).index_of(15)
    -1
    """

    begin: int = 0
    end: int = 9
    step: int = 1
    values: Optional[Tuple[int, ...]] = None
    initial: Optional[int] = None
    prefix: str = ""
    suffix: str = ""
    formatter: Optional[Callable[[int], str]] = field(default=None, compare=False)
    flex: int = 1

    def __post_init__(self) -> None:
        if int(self.step) < 1:
            raise ValueError(f"step must be >= 1, got {self.step!r}")
        if self.values is not None:
            object.__setattr__(self, "values", tuple(int(v) for v in self.values))

    def count(self) -> int:
        """Number of rows; never negative."""
        if self.values is not None:
            return len(self.values)
        n = (self.end - self.begin) // self.step + 1
        return n if n > 0 else 0

    def value_at(self, index: int) -> int:
        """Return the value displayed at row ``index``.

        Raises
        ------
        IndexError
            If ``index`` is outside ``[0, count())``.
        """
        if not 0 <= index < self.count():
            raise IndexError(f"row {index} out of range for {self!r}")
        if self.values is not None:
            return self.values[index]
        return self.begin + index * self.step

    def index_of(self, value: Optional[int]) -> int:
        """Return the row showing ``value`` or :data:`NOT_FOUND`."""
        if value is None:
            return NOT_FOUND
        if self.values is not None:
            try:
                return self.values.index(value)
            except ValueError:
                return NOT_FOUND
        if value < self.begin or value > self.end:
            return NOT_FOUND
        offset = value - self.begin
        if offset % self.step:
            return NOT_FOUND
        return offset // self.step

    def label(self, index: int) -> str:
        value = self.value_at(index)
        text = self.formatter(value) if self.formatter is not None else str(value)
        return f"{self.prefix}{text}{self.suffix}"

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.index_of(value) != NOT_FOUND

    def __len__(self) -> int:
        return self.count()


class NumberColumnAdapter(BaseColumnAdapter):
    """Independent numeric columns, one :class:`ColumnRange` each."""

    def __init__(self, columns: Sequence[ColumnRange]) -> None:
        self._columns: Tuple[ColumnRange, ...] = tuple(columns)
        for col in self._columns:
            if not isinstance(col, ColumnRange):
                raise TypeError(f"expected ColumnRange, got {type(col).__name__}")

    @property
    def columns(self) -> Tuple[ColumnRange, ...]:
        return self._columns

    def _column(self, column: int) -> Optional[ColumnRange]:
        if 0 <= column < len(self._columns):
            return self._columns[column]
        return None

    def column_count(self) -> int:
        return len(self._columns)

    def item_count(self, column: int, selected: Sequence[int]) -> int:
        col = self._column(column)
        return col.count() if col is not None else 0

    def label_at(self, column: int, index: int, selected: Sequence[int]) -> str:
        col = self._column(column)
        if col is None or not 0 <= index < col.count():
            return ""
        return col.label(index)

    def initial_selection(self) -> List[int]:
        out = []
        for col in self._columns:
            idx = col.index_of(col.initial)
            out.append(idx if idx >= 0 else 0)
        return out

    def selected_values(self, selected: Sequence[int]) -> List[int]:
        values: List[int] = []
        for col, idx in zip(self._columns, selected):
            if not 0 <= idx < col.count():
                break
            values.append(col.value_at(idx))
        return values

    def column_flex(self, column: int) -> int:
        col = self._column(column)
        return col.flex if col is not None else 1
