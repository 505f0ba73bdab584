# cohort_tree/tree/__init__.py
"""
Hierarchy model, traversal and surgery.

Usage:
    from cohort_tree.tree import PlantedTree, introduce_classification_layer

    pt = introduce_classification_layer(
        pt,
        descendant_classifier=lambda n: field_of(n, "owner"),
        new_layer_depth=1,
        new_layer_meaning="owner",
    )
"""

from cohort_tree.tree.merge import merge_planted_trees, merge_trees
from cohort_tree.tree.models import (
    CircleMetadata,
    InternalNode,
    Leaf,
    Node,
    PlantedTree,
    as_leaf,
    circles,
    extra_fields,
    field_of,
    internal,
    is_internal,
    leaf,
    node_from_dict,
    with_children,
)
from cohort_tree.tree.surgery import (
    group_siblings,
    introduce_classification_layer,
    kill_children,
    prune_leaves,
    split_by,
    trim_outer_rim,
)
from cohort_tree.tree.traversal import (
    child_count,
    children_of,
    descendants,
    is_leaf_parent,
    leaf_depths,
    leaves_under,
    max_depth,
    visit,
    visit_async,
)
from cohort_tree.tree.validation import (
    check_null_children,
    is_valid_planted_tree,
    validate_planted_tree,
)

__all__ = [
    "CircleMetadata",
    "InternalNode",
    "Leaf",
    "Node",
    "PlantedTree",
    "as_leaf",
    "circles",
    "extra_fields",
    "field_of",
    "internal",
    "is_internal",
    "leaf",
    "node_from_dict",
    "with_children",
    "group_siblings",
    "introduce_classification_layer",
    "kill_children",
    "prune_leaves",
    "split_by",
    "trim_outer_rim",
    "merge_trees",
    "merge_planted_trees",
    "child_count",
    "children_of",
    "descendants",
    "is_leaf_parent",
    "leaf_depths",
    "leaves_under",
    "max_depth",
    "visit",
    "visit_async",
    "check_null_children",
    "is_valid_planted_tree",
    "validate_planted_tree",
]
