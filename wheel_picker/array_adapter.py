"""Adapter over labelled option lists and option trees."""

from __future__ import annotations

from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .ColumnAdapter import BaseColumnAdapter
from .option_tree import OptionNode, max_level, parse_columns, parse_tree


class ArrayColumnAdapter(BaseColumnAdapter):
    """Picker columns backed by :class:`~wheel_picker.option_tree.OptionNode` data.

    Two shapes are supported:

    - **linked** (default): the nodes form a tree; column ``i`` lists the
      children of the node selected in column ``i - 1``. The column count is
      the depth of the tree.
    - **independent** (``independent=True``): each top-level node is a
      column and its children are that column's items. Columns do not affect
      each other.

    Parameters
    ----------
    source : Any, optional
        Nested literal data (lists, mappings, scalars, ``OptionNode``).
        Ignored when ``nodes`` is given.
    nodes : iterable[OptionNode], optional
        Pre-built nodes used as-is.
    independent : bool, default=False
        Select the independent-column shape.

    Examples
    --------
    >>> adapter = ArrayColumnAdapter({"Fruit": ["Apple", "Pear"], "Veg": ["Leek"]})
    >>> adapter.column_count()
    2
    >>> [adapter.label_at(1, i, [0, 0]) for i in range(adapter.item_count(1, [0, 0]))]
    ['Apple', 'Pear']
    >>> adapter.selected_values([1, 0])
    ['Veg', 'Leek']
    """

    def __init__(
        self,
        source: Any = None,
        *,
        nodes: Optional[Iterable[OptionNode]] = None,
        independent: bool = False,
    ) -> None:
        self._independent = bool(independent)
        if nodes is not None:
            self._nodes: Tuple[OptionNode, ...] = tuple(
                n for n in nodes if isinstance(n, OptionNode)
            )
        elif self._independent:
            self._nodes = parse_columns(source)
        else:
            self._nodes = parse_tree(source)

        if self._independent:
            self._max_level = len(self._nodes)
        else:
            self._max_level = max_level(self._nodes)

    @property
    def nodes(self) -> Tuple[OptionNode, ...]:
        return self._nodes

    @property
    def independent(self) -> bool:
        return self._independent

    @property
    def is_linkage(self) -> bool:
        return not self._independent

    def column_count(self) -> int:
        return self._max_level

    def column_items(self, column: int, selected: Sequence[int]) -> Tuple[OptionNode, ...]:
        """Return the nodes shown in ``column`` for the given selection.

        For linked data the tree is descended from the roots following
        ``selected[0:column]``; an out-of-range ancestor index yields an empty
        column instead of raising.
        """
        if column < 0:
            return ()
        if self._independent:
            if column < len(self._nodes):
                return self._nodes[column].children
            return ()

        level = self._nodes
        for i in range(column):
            if i >= len(selected):
                return ()
            j = selected[i]
            if not 0 <= j < len(level):
                return ()
            level = level[j].children
        return level

    def node_at(self, column: int, index: int, selected: Sequence[int]) -> Optional[OptionNode]:
        items = self.column_items(column, selected)
        if 0 <= index < len(items):
            return items[index]
        return None

    def item_count(self, column: int, selected: Sequence[int]) -> int:
        return len(self.column_items(column, selected))

    def label_at(self, column: int, index: int, selected: Sequence[int]) -> str:
        node = self.node_at(column, index, selected)
        return node.display_label if node is not None else ""

    def selected_values(self, selected: Sequence[int]) -> List[Any]:
        values: List[Any] = []
        if self._independent:
            for column, j in enumerate(selected):
                items = self.column_items(column, selected)
                if not 0 <= j < len(items):
                    break
                values.append(items[j].value)
            return values

        level = self._nodes
        for j in selected:
            if not 0 <= j < len(level):
                break
            values.append(level[j].value)
            level = level[j].children
            if not level:
                break
        return values
