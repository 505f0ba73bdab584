# cohort_tree/tree/validation.py
"""
Structural invariant checks for planted trees.

Two invariants matter to the rendering layer:

1. No internal node has a null children list (always fatal).
2. Every leaf sits at the same depth, and that depth + 1 equals the number
   of declared circles. Violations are logged, and raised in strict mode.

Trees without any leaf (empty cohorts) satisfy the depth invariant.
"""

from __future__ import annotations

from typing import List

from cohort_tree.config import get_settings
from cohort_tree.exceptions import TreeInvariantError
from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import VALIDATION
from cohort_tree.tree.models import InternalNode, Node, PlantedTree, is_internal
from cohort_tree.tree.traversal import leaf_depths, visit

logger = get_logger(__name__)


def validate_planted_tree(pt: PlantedTree, strict: bool | None = None) -> List[str]:
    """
    Check a planted tree's invariants.

    Args:
        pt: Tree to check.
        strict: Raise TreeInvariantError on depth problems. Defaults to the
            `validation.strict` setting.

    Returns:
        Descriptions of the depth problems found (empty when valid).

    Raises:
        TreeInvariantError: On null children, or on any problem in strict mode.
    """
    if strict is None:
        strict = get_settings().validation.strict

    check_null_children(pt.tree)

    problems = depth_problems(pt)
    if problems:
        logger.error(f"{VALIDATION} Invalid tree '{pt.tree.name}': {'; '.join(problems)}")
        logger.debug(f"{VALIDATION} Data: {pt.to_json(indent=2)}")
        if strict:
            raise TreeInvariantError("; ".join(problems))
    return problems


def check_null_children(tree: Node) -> None:
    null_parents: List[InternalNode] = []

    def collect(n: Node, _depth: int) -> bool:
        if is_internal(n) and n.children is None:
            null_parents.append(n)
        return True

    visit(tree, collect)
    if null_parents:
        names = ", ".join(repr(n.name) for n in null_parents)
        raise TreeInvariantError(f"{len(null_parents)} tree nodes have null children: {names}")


def depth_problems(pt: PlantedTree) -> List[str]:
    depths = leaf_depths(pt.tree)
    if not depths:
        return []

    problems: List[str] = []
    if len(depths) > 1:
        problems.append(f"Leaves found at mixed depths {sorted(depths)}")

    expected = len(pt.circles)
    seen = max(depths) + 1
    if seen != expected:
        problems.append(f"Expected a depth of {expected} but saw a tree of depth {seen}")
    return problems


def is_valid_planted_tree(pt: PlantedTree) -> bool:
    try:
        check_null_children(pt.tree)
    except TreeInvariantError:
        return False
    return not depth_problems(pt)
