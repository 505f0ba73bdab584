"""
Tests for the hierarchy data model.
"""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from cohort_tree.tree import (
    InternalNode,
    Leaf,
    PlantedTree,
    as_leaf,
    circles,
    extra_fields,
    field_of,
    internal,
    leaf,
    node_from_dict,
    with_children,
)


# ---------------------------------------------------------
# Node discrimination
# ---------------------------------------------------------
def test_children_key_marks_internal_node():
    node = node_from_dict({"name": "root", "children": [{"name": "a", "size": 2}]})

    assert isinstance(node, InternalNode)
    assert isinstance(node.children[0], Leaf)
    assert node.children[0].size == 2


def test_empty_children_stay_internal():
    node = node_from_dict({"name": "empty", "children": []})

    assert isinstance(node, InternalNode)
    assert node.children == []


def test_nested_dicts_validate_into_nodes():
    pt = PlantedTree.from_dict(
        {
            "tree": {
                "name": "root",
                "children": [{"name": "mid", "children": [{"name": "x", "size": 1}]}],
            },
            "circles": [{"meaning": "root"}, {"meaning": "mid"}, {"meaning": "leaf"}],
        }
    )

    mid = pt.tree.children[0]
    assert isinstance(mid, InternalNode)
    assert isinstance(mid.children[0], Leaf)


def test_negative_size_rejected():
    with pytest.raises(ValidationError):
        Leaf(name="bad", size=-1)


@pytest.mark.parametrize("size", [float("nan"), float("inf")])
def test_non_finite_size_rejected(size):
    with pytest.raises(ValidationError, match="finite"):
        Leaf(name="bad", size=size)


# ---------------------------------------------------------
# Extra fields
# ---------------------------------------------------------
def test_extra_fields_round_trip():
    pt = PlantedTree(
        tree=internal("root", [leaf("a", 3, owner="alice", sha="abc")], color="red"),
        circles=circles("root", "leaf"),
    )

    restored = PlantedTree.from_dict(json.loads(pt.to_json()))

    assert restored == pt
    assert field_of(restored.tree, "color") == "red"
    assert extra_fields(restored.tree.children[0]) == {"owner": "alice", "sha": "abc"}


def test_field_of_reads_declared_and_extra_fields():
    node = leaf("a", 2, owner="bob")

    assert field_of(node, "name") == "a"
    assert field_of(node, "owner") == "bob"
    assert field_of(node, "missing", "fallback") == "fallback"


def test_nodes_are_immutable():
    node = leaf("a")

    with pytest.raises(ValidationError):
        node.name = "b"


# ---------------------------------------------------------
# Rebuild helpers
# ---------------------------------------------------------
def test_with_children_keeps_original():
    original = internal("root", [leaf("a")], tag="t")

    changed = with_children(original, [leaf("b")])

    assert [c.name for c in original.children] == ["a"]
    assert [c.name for c in changed.children] == ["b"]
    assert field_of(changed, "tag") == "t"


def test_as_leaf_keeps_extra_fields():
    node = internal("dir", [leaf("a"), leaf("b")], owner="carol")

    converted = as_leaf(node, 2)

    assert isinstance(converted, Leaf)
    assert converted.size == 2
    assert field_of(converted, "owner") == "carol"


def test_with_tree_keeps_circles():
    pt = PlantedTree(tree=internal("root", [leaf("a")]), circles=circles("root", "leaf"))

    replaced = pt.with_tree(internal("root", [leaf("b")]))

    assert [c.meaning for c in replaced.circles] == ["root", "leaf"]
    assert replaced.tree.children[0].name == "b"
