"""Immutable snapshots of picker selection state.

A snapshot captures a deep-copied mapping of ``column -> metadata`` so code can
inspect a selection without depending on the mutable controller.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from copy import deepcopy
from types import MappingProxyType
from typing import Any, Dict, List, Sequence, Tuple


class PickerSnapshot(Mapping[int, Mapping[str, Any]]):
    """Immutable ordered snapshot of per-column selection metadata.

    Parameters
    ----------
    columns : Sequence[Mapping[str, Any]]
        One entry per column; entries usually carry ``selected``, ``count``,
        ``label`` and ``flex``.
    values : Sequence[Any], optional
        Values reported by the adapter for the selection.
    text : str, default=""
        Joined display text of the selection.
    reversed_order : bool, default=False
        Whether the host displays the columns right to left.

    Examples
    --------
    >>> snap = PickerSnapshot([{"selected": 2, "label": "Mar"}], values=[3])
    >>> snap[0]["label"], snap.selection
    ('Mar', (2,))
    """

    def __init__(
        self,
        columns: Sequence[Mapping[str, Any]],
        *,
        values: Sequence[Any] = (),
        text: str = "",
        reversed_order: bool = False,
    ) -> None:
        self._entries: Dict[int, Dict[str, Any]] = {
            column: deepcopy(dict(entry)) for column, entry in enumerate(columns)
        }
        self._values: List[Any] = deepcopy(list(values))
        self._text = str(text)
        self._reversed_order = bool(reversed_order)

    def _resolve_column(self, key: int) -> int:
        """Resolve a column index (negative counts from the right) or raise KeyError."""
        if isinstance(key, bool) or not isinstance(key, int):
            raise KeyError(f"Unsupported key type {type(key).__name__}; use int.")
        column = key + len(self._entries) if key < 0 else key
        if column not in self._entries:
            raise KeyError(f"Unknown column {key!r}; snapshot has {len(self._entries)} columns.")
        return column

    def __getitem__(self, key: int) -> Mapping[str, Any]:
        """Return read-only metadata for a column."""
        return MappingProxyType(deepcopy(self._entries[self._resolve_column(key)]))

    def __iter__(self) -> Iterator[int]:
        """Iterate column indices in order."""
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def selection(self) -> Tuple[int, ...]:
        """Selected row of each column."""
        return tuple(entry.get("selected", 0) for entry in self._entries.values())

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(entry.get("label", "") for entry in self._entries.values())

    @property
    def selected_values(self) -> List[Any]:
        """Detached copy of the selected values."""
        return deepcopy(self._values)

    @property
    def text(self) -> str:
        return self._text

    @property
    def reversed_order(self) -> bool:
        return self._reversed_order

    def __eq__(self, other: object) -> bool:
        """Compare snapshots by ordered item content."""
        if not isinstance(other, Mapping):
            return NotImplemented
        return list(self.items()) == list(other.items())

    def __repr__(self) -> str:
        return f"PickerSnapshot({self._entries!r}, values={self._values!r})"
