# cohort_tree/tree/traversal.py
"""
Depth-first traversal primitives.

visit() and visit_async() call a visitor for each node, descending into an
internal node's children only while the visitor returns a truthy value.
Neither collects results: accumulation is the caller's business.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List

from cohort_tree.awaitables import gather_all
from cohort_tree.tree.models import InternalNode, Leaf, Node, is_internal

Visitor = Callable[[Node, int], bool]
AsyncVisitor = Callable[[Node, int], Awaitable[bool]]


def visit(node: Node, visitor: Visitor, depth: int = 0) -> None:
    keep_going = visitor(node, depth)
    if keep_going and is_internal(node):
        for child in node.children or []:
            visit(child, visitor, depth + 1)


async def visit_async(node: Node, visitor: AsyncVisitor, depth: int = 0) -> None:
    """
    Asynchronous visit.

    Children of a node are visited concurrently and joined before returning.
    """
    keep_going = await visitor(node, depth)
    if keep_going and is_internal(node):
        await gather_all(
            visit_async(child, visitor, depth + 1) for child in node.children or []
        )


def leaves_under(node: Node) -> List[Leaf]:
    """All terminal nodes at or below `node`."""
    leaves: List[Leaf] = []

    def collect(n: Node, _depth: int) -> bool:
        if not is_internal(n):
            leaves.append(n)
        return True

    visit(node, collect)
    return leaves


def descendants(node: Node) -> List[Node]:
    """`node` itself followed by every node below it, depth-first."""
    found: List[Node] = []

    def collect(n: Node, _depth: int) -> bool:
        found.append(n)
        return True

    visit(node, collect)
    return found


def child_count(node: Node) -> int:
    return len(node.children) if is_internal(node) else 0


def children_of(node: Node) -> List[Node]:
    return list(node.children) if is_internal(node) else []


def is_leaf_parent(node: Node) -> bool:
    """True for internal nodes with no internal children."""
    return is_internal(node) and not any(is_internal(c) for c in node.children)


def max_depth(node: Node) -> int:
    """Depth of the deepest node, counting `node` as depth 0."""
    deepest = 0

    def track(_n: Node, depth: int) -> bool:
        nonlocal deepest
        deepest = max(deepest, depth)
        return True

    visit(node, track)
    return deepest


def leaf_depths(node: Node) -> set[int]:
    """Distinct depths at which leaves occur."""
    depths: set[int] = set()

    def track(n: Node, depth: int) -> bool:
        if not is_internal(n):
            depths.add(depth)
        return True

    visit(node, track)
    return depths

