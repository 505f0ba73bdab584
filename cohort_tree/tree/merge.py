# cohort_tree/tree/merge.py
"""
Merging of independently built trees.

Trees merge by child name: same-named leaves add their sizes, same-named
internal nodes merge recursively, everything else is concatenated in
order (left tree first). A leaf and an internal node sharing a name is an
ambiguous shape and raises TreeMergeError.
"""

from __future__ import annotations

from functools import reduce
from typing import Dict, List

from cohort_tree.exceptions import TreeMergeError
from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import SURGERY
from cohort_tree.tree.models import InternalNode, Node, PlantedTree, is_internal, with_children

logger = get_logger(__name__)


def merge_trees(*trees: InternalNode) -> InternalNode:
    """Left fold of pairwise merges. All roots must share a name."""
    if not trees:
        raise TreeMergeError("merge_trees requires at least one tree")
    logger.debug(f"{SURGERY} Merging {len(trees)} trees named '{trees[0].name}'")
    return reduce(_merge_pair, trees)


def merge_planted_trees(*planted: PlantedTree) -> PlantedTree:
    """Merge planted trees whose circles agree."""
    if not planted:
        raise TreeMergeError("merge_planted_trees requires at least one tree")
    meanings = [c.meaning for c in planted[0].circles]
    for pt in planted[1:]:
        other = [c.meaning for c in pt.circles]
        if other != meanings:
            raise TreeMergeError(f"Cannot merge trees with circles {meanings} and {other}")
    return planted[0].with_tree(merge_trees(*(pt.tree for pt in planted)))


def _merge_pair(left: InternalNode, right: InternalNode) -> InternalNode:
    if left.name != right.name:
        raise TreeMergeError(
            f"Cannot merge trees with different root names: '{left.name}' and '{right.name}'"
        )

    merged: List[Node] = list(left.children)
    positions: Dict[str, int] = {}
    for i, child in enumerate(merged):
        positions.setdefault(child.name, i)

    for child in right.children:
        i = positions.get(child.name)
        if i is None:
            positions[child.name] = len(merged)
            merged.append(child)
        else:
            merged[i] = _merge_nodes(merged[i], child)

    return with_children(left, merged)


def _merge_nodes(a: Node, b: Node) -> Node:
    if is_internal(a) and is_internal(b):
        return _merge_pair(a, b)
    if not is_internal(a) and not is_internal(b):
        return a.model_copy(update={"size": a.size + b.size})
    raise TreeMergeError(
        f"Cannot merge a leaf with an internal node under the name '{a.name}'"
    )
