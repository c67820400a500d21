from __future__ import annotations

from wheel_picker import ArrayColumnAdapter, OptionNode, SelectionController

TREE = {"A": {"B": ["x", "y"]}, "C": {"D": ["z"]}}


def _column_labels(adapter: ArrayColumnAdapter, column: int, selected) -> list[str]:
    return [adapter.label_at(column, i, selected) for i in range(adapter.item_count(column, selected))]


def test_linked_columns_follow_ancestor_selection() -> None:
    adapter = ArrayColumnAdapter(TREE)

    assert adapter.is_linkage is True
    assert adapter.column_count() == 3
    assert _column_labels(adapter, 0, [0, 0, 0]) == ["A", "C"]
    assert _column_labels(adapter, 2, [0, 0, 0]) == ["x", "y"]
    assert _column_labels(adapter, 2, [1, 0, 0]) == ["z"]


def test_invalid_ancestor_index_yields_empty_column() -> None:
    adapter = ArrayColumnAdapter(TREE)

    assert adapter.item_count(1, [5, 0, 0]) == 0
    assert adapter.item_count(2, [0, 3, 0]) == 0
    assert adapter.item_count(2, [0]) == 0
    assert adapter.label_at(2, 0, [5, 0, 0]) == ""
    assert adapter.node_at(0, 9, [0, 0, 0]) is None


def test_selected_values_walk_the_tree() -> None:
    adapter = ArrayColumnAdapter(TREE)

    assert adapter.selected_values([0, 0, 1]) == ["A", "B", "y"]
    assert adapter.selected_values([1, 0, 0]) == ["C", "D", "z"]
    assert adapter.selected_values([1, 4, 0]) == ["C"]


def test_uneven_depth_leaves_trailing_columns_empty() -> None:
    adapter = ArrayColumnAdapter({"A": ["a1"], "B": {"B1": ["b"]}})

    assert adapter.column_count() == 3
    assert adapter.item_count(2, [0, 0, 0]) == 0
    assert adapter.item_count(2, [1, 0, 0]) == 1
    assert adapter.selected_values([0, 0, 0]) == ["A", "a1"]


def test_independent_columns_do_not_affect_each_other() -> None:
    adapter = ArrayColumnAdapter([["a", "b"], ["1", "2", "3"]], independent=True)

    assert adapter.is_linkage is False
    assert adapter.independent is True
    assert adapter.column_count() == 2
    assert adapter.item_count(1, [0, 0]) == 3
    assert adapter.item_count(1, [1, 0]) == 3
    assert adapter.item_count(2, [0, 0]) == 0
    assert adapter.selected_values([1, 2]) == ["b", "3"]


def test_independent_values_keep_one_entry_per_column() -> None:
    nodes = [
        OptionNode(children=[OptionNode(None, "x")]),
        OptionNode(children=[OptionNode(5)]),
    ]
    adapter = ArrayColumnAdapter(nodes=nodes, independent=True)

    assert adapter.label_at(0, 0, [0, 0]) == "x"
    assert adapter.selected_values([0, 0]) == [None, 5]


def test_prebuilt_nodes_are_used_as_is() -> None:
    nodes = [
        OptionNode("fr", "France", [OptionNode("par", "Paris")]),
        OptionNode("jp", "Japan", [OptionNode("tyo", "Tokyo"), OptionNode("osa", "Osaka")]),
    ]
    adapter = ArrayColumnAdapter(nodes=nodes)

    assert adapter.column_count() == 2
    assert _column_labels(adapter, 1, [1, 0]) == ["Tokyo", "Osaka"]
    assert adapter.selected_values([1, 1]) == ["jp", "osa"]


def test_empty_source_has_no_columns() -> None:
    adapter = ArrayColumnAdapter([])

    assert adapter.column_count() == 0
    assert adapter.initial_selection() == []


def test_scrolling_a_parent_rebuilds_and_clamps_descendants() -> None:
    ctl = SelectionController(ArrayColumnAdapter(TREE), selected=[0, 0, 1])

    request = ctl.on_column_changed(0, 1)

    assert request.columns == (0, 1, 2)
    assert ctl.selected == (1, 0, 0)
    assert ctl.selected_values() == ["C", "D", "z"]


def test_scrolling_the_last_column_only_rebuilds_itself() -> None:
    ctl = SelectionController(ArrayColumnAdapter(TREE))

    request = ctl.on_column_changed(2, 1)

    assert request.columns == (2,)
    assert ctl.selected == (0, 0, 1)
