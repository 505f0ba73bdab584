"""
Tests for merging hierarchies.
"""

from __future__ import annotations

import pytest

from cohort_tree.exceptions import TreeMergeError
from cohort_tree.tree import (
    PlantedTree,
    circles,
    field_of,
    internal,
    leaf,
    merge_planted_trees,
    merge_trees,
)


def test_disjoint_children_are_combined():
    left = internal("n", [leaf("a")])
    right = internal("n", [leaf("b")])

    forward = merge_trees(left, right)
    backward = merge_trees(right, left)

    assert [c.name for c in forward.children] == ["a", "b"]
    assert {c.name for c in backward.children} == {"a", "b"}


def test_overlapping_leaves_sum_sizes():
    left = internal("n", [internal("g", [leaf("a", 2, sha="x")])])
    right = internal("n", [internal("g", [leaf("a", 3), leaf("b", 1)])])
    third = internal("n", [leaf("c")])

    merged = merge_trees(left, right, third)

    g, c = merged.children
    assert [n.name for n in g.children] == ["a", "b"]
    assert g.children[0].size == 5
    assert field_of(g.children[0], "sha") == "x"
    assert c.name == "c"


def test_inputs_are_not_modified():
    left = internal("n", [leaf("a", 2)])
    right = internal("n", [leaf("a", 3)])

    merge_trees(left, right)

    assert left.children[0].size == 2


def test_different_root_names_raise():
    with pytest.raises(TreeMergeError, match="different root names"):
        merge_trees(internal("n", [leaf("a")]), internal("m", [leaf("a")]))


def test_leaf_and_internal_conflict_raises():
    with pytest.raises(TreeMergeError, match="leaf with an internal node"):
        merge_trees(internal("n", [leaf("a")]), internal("n", [internal("a", [leaf("x")])]))


def test_no_trees_raises():
    with pytest.raises(TreeMergeError):
        merge_trees()


class TestMergePlantedTrees:
    def test_merges_when_circles_agree(self):
        a = PlantedTree(tree=internal("n", [leaf("a")]), circles=circles("n", "leaf"))
        b = PlantedTree(tree=internal("n", [leaf("b")]), circles=circles("n", "leaf"))

        merged = merge_planted_trees(a, b)

        assert [c.name for c in merged.tree.children] == ["a", "b"]
        assert [c.meaning for c in merged.circles] == ["n", "leaf"]

    def test_circle_mismatch_raises(self):
        a = PlantedTree(tree=internal("n", [leaf("a")]), circles=circles("n", "leaf"))
        b = PlantedTree(tree=internal("n", [leaf("b")]), circles=circles("n", "file"))

        with pytest.raises(TreeMergeError, match="circles"):
            merge_planted_trees(a, b)
