"""Tests for the ASCII tree renderer."""

from cli.rendering import render_tree


def _node(node_id, first, rels=None, **data):
    return {"id": node_id, "data": {"first name": first, **data}, "rels": rels or {}}


def test_empty_tree():
    assert render_tree([]) == "(empty tree)"


def test_label_includes_year_and_gender():
    out = render_tree([_node("a", "Duddley", **{"last name": "Isaac", "birthday": "1920", "gender": "M"})])
    assert out == "Duddley Isaac (1920) [M]"


def test_shared_children_printed_once():
    nodes = [
        _node("a", "A", {"spouses": ["b"], "children": ["c", "d"]}),
        _node("b", "B", {"spouses": ["a"], "children": ["c"]}),
        _node("c", "C", {"parents": ["a", "b"]}),
        _node("d", "D", {"parents": ["a"]}),
    ]
    assert render_tree(nodes).splitlines() == [
        "A ⚭ B",
        "├── C",
        "└── D",
    ]


def test_spouse_marrying_in_hangs_under_partner():
    nodes = [
        _node("p", "Parent", {"children": ["k"]}),
        _node("in", "InLaw", {"spouses": ["k"]}),
        _node("k", "Kid", {"parents": ["p"], "spouses": ["in"]}),
    ]
    assert render_tree(nodes).splitlines() == [
        "Parent",
        "└── Kid ⚭ InLaw",
    ]


def test_repeated_node_is_referenced():
    # "c" is a child of two unrelated roots.
    nodes = [
        _node("a", "A", {"children": ["c"]}),
        _node("b", "B", {"children": ["c"]}),
        _node("c", "C", {"parents": ["a", "b"]}),
    ]
    assert render_tree(nodes).splitlines() == [
        "A",
        "└── C",
        "B",
        "└── ↺ C",
    ]


def test_parent_cycle_still_rendered():
    nodes = [
        _node("a", "A", {"parents": ["b"], "children": ["b"]}),
        _node("b", "B", {"parents": ["a"], "children": ["a"]}),
    ]
    assert render_tree(nodes).splitlines() == [
        "A",
        "└── B",
        "    └── ↺ A",
    ]
