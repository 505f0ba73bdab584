# cohort_tree/tree/surgery.py
"""
Structural transformations of built hierarchies.

Every function here is pure: nodes are immutable, so each operation
rebuilds the path it changes and shares untouched subtrees with its input.
The input tree is never altered.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import SURGERY
from cohort_tree.tree.models import (
    CircleMetadata,
    InternalNode,
    Leaf,
    Node,
    PlantedTree,
    as_leaf,
    internal,
    is_internal,
    with_children,
)
from cohort_tree.tree.traversal import children_of, is_leaf_parent, leaves_under
from cohort_tree.tree.validation import validate_planted_tree

logger = get_logger(__name__)

Classifier = Callable[[Node], Optional[str]]


# =============================================================================
# Branch killing and leaf pruning
# =============================================================================


def kill_children(
    tree: InternalNode,
    should_eliminate: Callable[[Node, int], bool],
) -> InternalNode:
    """
    Suppress branches that meet a condition.

    Args:
        tree: Tree to transform.
        should_eliminate: Called with each child and the child's depth;
            a truthy result removes the child and everything under it.
    """

    def kill(node: InternalNode, depth: int) -> InternalNode:
        kept = [c for c in node.children if not should_eliminate(c, depth + 1)]
        return with_children(
            node, [kill(c, depth + 1) if is_internal(c) else c for c in kept]
        )

    return kill(tree, 0)


def prune_leaves(tree: InternalNode, to_prune: Callable[[Leaf], bool]) -> InternalNode:
    """
    Remove leaves matching `to_prune`.

    Only leaf-parents (internal nodes with no internal children) lose
    leaves, so a whole internal subtree is never removed in one pass.
    """

    def prune(node: InternalNode) -> InternalNode:
        if is_leaf_parent(node):
            return with_children(node, [c for c in node.children if not to_prune(c)])
        return with_children(
            node, [prune(c) if is_internal(c) else c for c in node.children]
        )

    return prune(tree)


# =============================================================================
# Sibling grouping
# =============================================================================


def group_siblings(
    tree: InternalNode,
    parent_selector: Callable[[InternalNode], bool],
    child_classifier: Callable[[Node], str],
    group_layer_decorator: Optional[Callable[[InternalNode], InternalNode]] = None,
    collapse_under_name: Optional[Callable[[str], bool]] = None,
) -> InternalNode:
    """
    Merge the children of selected parents into groups.

    Args:
        tree: Tree to transform.
        parent_selector: Selects parents whose children are grouped.
            Selected parents are not descended into.
        child_classifier: Group name for each child.
        group_layer_decorator: Returns a decorated copy of each new group
            node (e.g. with a "color" field).
        collapse_under_name: When true for a group name, the group holds its
            members' children rather than the members themselves.
    """
    collapse = collapse_under_name or (lambda _name: False)

    def group(node: InternalNode) -> InternalNode:
        if parent_selector(node):
            grouped: Dict[str, List[Node]] = {}
            for child in node.children:
                grouped.setdefault(str(child_classifier(child)), []).append(child)

            if all(len(members) == 1 for members in grouped.values()):
                # Nothing needs merged
                return node

            new_children: List[Node] = []
            for name, members in grouped.items():
                if collapse(name):
                    members = [gc for m in members for gc in children_of(m)]
                layer = internal(name, members)
                if group_layer_decorator:
                    layer = group_layer_decorator(layer)
                new_children.append(layer)
            return with_children(node, new_children)

        return with_children(
            node, [group(c) if is_internal(c) else c for c in node.children]
        )

    return group(tree)


# =============================================================================
# Outer rim trimming
# =============================================================================


def trim_outer_rim(
    tree: InternalNode,
    test: Optional[Callable[[InternalNode], bool]] = None,
) -> InternalNode:
    """
    Collapse the outermost ring into counts.

    Any non-root internal node with children, none of which holds more than
    one leaf, becomes a leaf whose size is its former child count. Nodes are
    considered top-down, so a converted node's subtree is not visited.

    Args:
        tree: Tree to transform. The root always stays internal.
        test: Optional extra condition an eligible node must meet.
    """
    eligible = test or (lambda _node: True)

    def trim(node: InternalNode) -> Node:
        if (
            node.children
            and all(len(leaves_under(c)) <= 1 for c in node.children)
            and eligible(node)
        ):
            return as_leaf(node, len(node.children))
        return with_children(
            node, [trim(c) if is_internal(c) else c for c in node.children]
        )

    return with_children(
        tree, [trim(c) if is_internal(c) else c for c in tree.children]
    )


# =============================================================================
# Classification layers
# =============================================================================


def _label(classifier: Classifier, node: Node) -> Optional[str]:
    value = classifier(node)
    if value is None or value == "":
        return None
    return str(value)


def introduce_classification_layer(
    pt: PlantedTree,
    descendant_classifier: Classifier,
    new_layer_depth: int,
    new_layer_meaning: str,
    descendant_finder: Optional[Callable[[Node], List[Node]]] = None,
) -> PlantedTree:
    """
    Insert a new ring at `new_layer_depth`, splitting by a classifier.

    For every internal node at depth `new_layer_depth - 1`, the descendants
    returned by `descendant_finder` (leaves by default) are classified.
    Each distinct label, in sorted order, becomes a new child holding the
    original children that have at least one descendant with that label.
    Leaves carrying a different label are pruned from each new subtree.
    Nodes without any labelled descendant are left as they are.

    Args:
        pt: Planted tree to transform.
        descendant_classifier: Label for a descendant; None means irrelevant.
        new_layer_depth: Depth of the new ring (1 = directly under the root).
        new_layer_meaning: Meaning recorded in the new circle.
        descendant_finder: Source of descendants to classify.

    Returns:
        A new planted tree, validated.
    """
    if new_layer_depth < 1:
        raise ValueError(f"new_layer_depth must be at least 1, got {new_layer_depth}")
    if not pt.tree.children:
        return pt

    circles = list(pt.circles)
    circles.insert(new_layer_depth, CircleMetadata(meaning=new_layer_meaning))
    tree = _classify(pt.tree, descendant_classifier, new_layer_depth, descendant_finder)
    result = PlantedTree(tree=tree, circles=circles)
    validate_planted_tree(result)
    return result


def split_by(
    tree: InternalNode,
    descendant_classifier: Classifier,
    new_layer_depth: int = 0,
    descendant_finder: Optional[Callable[[Node], List[Node]]] = None,
) -> InternalNode:
    """
    Tree-only form of introduce_classification_layer.

    Nodes at `new_layer_depth` receive the new classification children.
    """
    if new_layer_depth < 0:
        raise ValueError(f"new_layer_depth must not be negative, got {new_layer_depth}")
    if not tree.children:
        return tree
    return _classify(tree, descendant_classifier, new_layer_depth + 1, descendant_finder)


def _classify(
    tree: InternalNode,
    descendant_classifier: Classifier,
    new_layer_depth: int,
    descendant_finder: Optional[Callable[[Node], List[Node]]],
) -> InternalNode:
    finder = descendant_finder or leaves_under

    def picked(node: Node) -> List[Node]:
        return [d for d in finder(node) if _label(descendant_classifier, d) is not None]

    def matches(child: Node, name: str) -> bool:
        if is_internal(child):
            return any(_label(descendant_classifier, d) == name for d in picked(child))
        return _label(descendant_classifier, child) == name

    def keep_label(node: InternalNode, name: str) -> InternalNode:
        kept: List[Node] = []
        for child in node.children:
            if is_internal(child):
                pruned = keep_label(child, name)
                if pruned.children or not child.children:
                    kept.append(pruned)
            else:
                label = _label(descendant_classifier, child)
                if label is None or label == name:
                    kept.append(child)
        return with_children(node, kept)

    def split(node: InternalNode) -> InternalNode:
        found = picked(node)
        logger.debug(f"{SURGERY} Found {len(found)} descendants to classify under '{node.name}'")
        if not found:
            return node

        names = sorted({_label(descendant_classifier, d) for d in found})
        new_children: List[Node] = []
        for name in names:
            members = [k for k in node.children if matches(k, name)]
            if members:
                new_children.append(keep_label(internal(name, members), name))
        return with_children(node, new_children)

    def walk(node: InternalNode, depth: int) -> InternalNode:
        if depth == new_layer_depth - 1:
            return split(node)
        return with_children(
            node, [walk(c, depth + 1) if is_internal(c) else c for c in node.children]
        )

    return walk(tree, 0)
