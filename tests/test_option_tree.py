from __future__ import annotations

from wheel_picker import OptionNode, max_level, parse_columns, parse_tree
from wheel_picker.option_tree import ListSource, MapSource, Scalar, decode_source, iter_leaves


def _labels(nodes) -> list[str]:
    return [node.display_label for node in nodes]


def test_three_level_mapping_builds_linked_forest() -> None:
    roots = parse_tree({"A": {"B": ["x", "y"]}, "C": {"D": ["z"]}})

    assert max_level(roots) == 3
    assert _labels(roots) == ["A", "C"]
    assert _labels(roots[0].children) == ["B"]
    assert _labels(roots[0].children[0].children) == ["x", "y"]
    assert _labels(roots[1].children[0].children) == ["z"]


def test_four_level_nesting_keeps_every_leaf() -> None:
    source = {
        "Europe": {
            "France": {"Ile-de-France": ["Paris"], "PACA": ["Nice", "Marseille"]},
            "Germany": {"Bavaria": ["Munich"]},
        },
        "Asia": {"Japan": {"Kanto": ["Tokyo", "Yokohama"]}},
    }

    roots = parse_tree(source)

    assert max_level(roots) == 4
    assert _labels(iter_leaves(roots)) == [
        "Paris",
        "Nice",
        "Marseille",
        "Munich",
        "Tokyo",
        "Yokohama",
    ]


def test_single_level_list_is_one_column() -> None:
    roots = parse_tree(["Apple", "Banana", 3])

    assert max_level(roots) == 1
    assert _labels(roots) == ["Apple", "Banana", "3"]
    assert roots[2].value == 3


def test_malformed_entries_are_skipped_silently() -> None:
    roots = parse_tree(["a", None, {"k": []}, ["nested"], {1, 2}, {"m": ["v"]}])

    assert _labels(roots) == ["a", "m"]
    assert _labels(roots[1].children) == ["v"]
    assert max_level(roots) == 2


def test_scalar_valued_mapping_entries_are_skipped() -> None:
    roots = parse_tree({"a": 1, "b": ["x"], "c": None})

    assert _labels(roots) == ["b"]


def test_prebuilt_nodes_pass_through() -> None:
    node = OptionNode(value="v", label="Label", children=[OptionNode("child")])

    roots = parse_tree([node, "plain"])

    assert roots[0] is node
    assert roots[0].children[0].display_label == "child"
    assert max_level(roots) == 2


def test_option_node_normalizes_children_and_labels() -> None:
    assert OptionNode("x", children=None).children == ()
    assert OptionNode("x", children=["not a node"]).has_children is False
    assert OptionNode(None).display_label == ""
    assert OptionNode(7).display_label == "7"


def test_empty_sources_produce_an_empty_forest() -> None:
    assert parse_tree(None) == ()
    assert parse_tree([]) == ()
    assert parse_tree({}) == ()
    assert max_level(()) == 0


def test_decode_source_tags_variants() -> None:
    assert decode_source("a") == Scalar("a")
    assert isinstance(decode_source(["a"]), ListSource)
    assert isinstance(decode_source({"a": ["b"]}), MapSource)
    assert decode_source(frozenset({"a"})) is None


def test_parse_columns_makes_one_node_per_column() -> None:
    columns = parse_columns([["a", "b"], "skip", [], [1, 2, 3], [["deep"], "kept"]])

    assert len(columns) == 3
    assert _labels(columns[0].children) == ["a", "b"]
    assert [n.value for n in columns[1].children] == [1, 2, 3]
    assert _labels(columns[2].children) == ["kept"]
    assert parse_columns({"not": "a list"}) == ()
