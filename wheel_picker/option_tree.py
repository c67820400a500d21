"""Option trees built from nested picker data.

Picker data is usually written inline by developers as nested Python
literals::

    ["Apple", "Banana"]                              # one column
    {"Fruit": ["Apple", "Pear"], "Veg": ["Leek"]}    # two linked columns
    {"Europe": {"France": {"Paris": ["15e"]}}}       # any depth

Parsing happens in two passes. :func:`decode_source` turns the raw literal
into a tagged variant (:class:`Scalar`, :class:`ListSource`,
:class:`MapSource` or :class:`NodeSource`), dropping anything it cannot
classify. :func:`build_forest` then walks the variant recursively and produces
immutable :class:`OptionNode` objects. Both passes are total: malformed or
empty entries are skipped and never raise.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class OptionNode:
    """One selectable item, optionally owning the items of the next column.

    Parameters
    ----------
    value : Any
        Opaque value reported by ``selected_values``.
    label : str, optional
        Display text; defaults to ``str(value)``.
    children : iterable[OptionNode], optional
        Items of the next column when this node is selected. An empty
        sequence and ``None`` are equivalent.
    """

    value: Any = None
    label: Optional[str] = None
    children: Tuple["OptionNode", ...] = ()

    def __post_init__(self) -> None:
        kids = self.children
        if kids is None:
            kids = ()
        object.__setattr__(
            self, "children", tuple(k for k in kids if isinstance(k, OptionNode))
        )

    @property
    def has_children(self) -> bool:
        return len(self.children) > 0

    @property
    def display_label(self) -> str:
        if self.label is not None:
            return self.label
        return "" if self.value is None else str(self.value)


# SECTION: tagged source variants [id: SourceVariants]
# =============================================================================

@dataclass(frozen=True)
class Scalar:
    value: Any


@dataclass(frozen=True)
class ListSource:
    items: Tuple["SourceVariant", ...]


@dataclass(frozen=True)
class MapSource:
    entries: Tuple[Tuple[Any, "SourceVariant"], ...]


@dataclass(frozen=True)
class NodeSource:
    node: OptionNode


SourceVariant = Union[Scalar, ListSource, MapSource, NodeSource]

_SEQUENCE_TYPES = (list, tuple)
_REJECTED_TYPES = (set, frozenset, bytearray)


def decode_source(raw: Any) -> Optional[SourceVariant]:
    """Classify a raw literal, returning ``None`` for unusable input.

    Empty lists and mappings decode to ``None`` so they never produce nodes.
    """
    if raw is None or isinstance(raw, _REJECTED_TYPES):
        return None
    if isinstance(raw, OptionNode):
        return NodeSource(raw)
    if isinstance(raw, Mapping):
        entries = []
        for key, sub in raw.items():
            decoded = decode_source(sub)
            if decoded is not None:
                entries.append((key, decoded))
        return MapSource(tuple(entries)) if entries else None
    if isinstance(raw, _SEQUENCE_TYPES):
        items = tuple(d for d in (decode_source(x) for x in raw) if d is not None)
        return ListSource(items) if items else None
    return Scalar(raw)


def _leaf(variant: SourceVariant) -> Optional[OptionNode]:
    if isinstance(variant, Scalar):
        return OptionNode(value=variant.value)
    if isinstance(variant, NodeSource):
        return variant.node
    return None


def build_forest(variant: Optional[SourceVariant]) -> Tuple[OptionNode, ...]:
    """Build the nodes of one tree level from a decoded variant.

    A list contributes its scalars and nodes as siblings and splices in the
    entries of any mapping it contains. A mapping contributes one node per
    entry whose value is a non-empty list or mapping; the recursion has no
    depth limit. Lists nested directly inside lists and scalar-valued mapping
    entries are skipped.
    """
    if variant is None:
        return ()
    leaf = _leaf(variant)
    if leaf is not None:
        return (leaf,)
    if isinstance(variant, MapSource):
        nodes = []
        for key, sub in variant.entries:
            if not isinstance(sub, (ListSource, MapSource)):
                continue
            children = build_forest(sub)
            if children:
                nodes.append(OptionNode(value=key, children=children))
        return tuple(nodes)
    nodes = []
    for item in variant.items:
        if isinstance(item, ListSource):
            continue
        nodes.extend(build_forest(item))
    return tuple(nodes)


def parse_tree(raw: Any) -> Tuple[OptionNode, ...]:
    """Parse linked (hierarchical) picker data into the first column's nodes.

    Examples
    --------
    >>> roots = parse_tree({"A": {"B": ["x", "y"]}, "C": {"D": ["z"]}})
    >>> [n.display_label for n in roots]
    ['A', 'C']
    >>> max_level(roots)
    3
    """
    return build_forest(decode_source(raw))


def parse_columns(raw: Any) -> Tuple[OptionNode, ...]:
    """Parse independent-column data: a list whose elements are columns.

    Each non-empty list element becomes one column node whose children are
    that column's items. Non-list elements are skipped, as are entries inside
    a column that are neither scalars nor :class:`OptionNode` objects.
    """
    if not isinstance(raw, _SEQUENCE_TYPES):
        return ()
    columns = []
    for entry in raw:
        if not isinstance(entry, _SEQUENCE_TYPES) or len(entry) == 0:
            continue
        items = []
        for item in entry:
            decoded = decode_source(item)
            leaf = _leaf(decoded) if decoded is not None else None
            if leaf is not None:
                items.append(leaf)
        columns.append(OptionNode(children=tuple(items)))
    return tuple(columns)


def max_level(nodes: Iterable[OptionNode]) -> int:
    """Depth of the deepest chain of non-empty ``children`` links, plus one.

    An empty forest has depth ``0``.
    """
    depth = 0
    stack = [(node, 1) for node in nodes]
    while stack:
        node, level = stack.pop()
        if level > depth:
            depth = level
        for child in node.children:
            stack.append((child, level + 1))
    return depth


def iter_leaves(nodes: Iterable[OptionNode]) -> Iterable[OptionNode]:
    """Yield every node without children, depth-first, left to right."""
    for node in nodes:
        if node.has_children:
            yield from iter_leaves(node.children)
        else:
            yield node
