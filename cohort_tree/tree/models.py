# cohort_tree/tree/models.py
"""
Hierarchy data model.

A hierarchy is a tagged union of two node types:

- InternalNode: a named node with a (possibly empty) list of children
- Leaf: a named terminal node with a non-negative size

Both are immutable pydantic models that accept extra caller-defined fields
(e.g. "owner", "sha", "color"); those fields round-trip through JSON
unchanged. On the wire, the presence of a "children" key marks an internal
node and its absence marks a leaf.

A PlantedTree pairs a root InternalNode with one CircleMetadata per depth
level, describing what each ring of the sunburst means.
"""

from __future__ import annotations

import json
import math
from typing import Annotated, Any, Iterable, List, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator


class Leaf(BaseModel):
    """Terminal node. `size` proportions the radial area of the leaf."""

    name: str = Field(..., description="Display name")
    size: Union[int, float] = Field(..., description="Relative area")

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("size")
    @classmethod
    def check_size(cls, v: Union[int, float]) -> Union[int, float]:
        if not math.isfinite(v) or v < 0:
            raise ValueError(f"Leaf size must be a finite non-negative number, got {v}")
        return v


class InternalNode(BaseModel):
    """Named node whose children form the next ring."""

    name: str = Field(..., description="Display name")
    children: List[Node] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        return "internal" if "children" in value else "leaf"
    return "internal" if isinstance(value, InternalNode) else "leaf"


Node = Annotated[
    Union[
        Annotated[InternalNode, Tag("internal")],
        Annotated[Leaf, Tag("leaf")],
    ],
    Discriminator(_node_tag),
]

InternalNode.model_rebuild()


class CircleMetadata(BaseModel):
    """Meaning of one ring of the hierarchy."""

    meaning: str

    model_config = ConfigDict(frozen=True, extra="allow")


class PlantedTree(BaseModel):
    """
    A hierarchy together with per-depth meanings.

    circles[0] describes the root, circles[1] its children, and so on.
    """

    tree: InternalNode
    circles: List[CircleMetadata] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    def to_dict(self) -> dict:
        return self.model_dump()

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> "PlantedTree":
        return cls.model_validate(data)

    def with_tree(self, tree: InternalNode) -> "PlantedTree":
        return PlantedTree(tree=tree, circles=list(self.circles))


# =============================================================================
# Helpers
# =============================================================================


def is_internal(node: Node) -> bool:
    return isinstance(node, InternalNode)


def leaf(name: str, size: Union[int, float] = 1, **fields: Any) -> Leaf:
    return Leaf(name=name, size=size, **fields)


def internal(name: str, children: Iterable[Node] = (), **fields: Any) -> InternalNode:
    return InternalNode(name=name, children=list(children), **fields)


def node_from_dict(data: dict) -> Node:
    """Validate a raw dict into the matching node type."""
    if "children" in data:
        return InternalNode.model_validate(data)
    return Leaf.model_validate(data)


def extra_fields(node: Node) -> dict:
    """Caller-defined fields carried by a node."""
    return dict(node.model_extra or {})


def field_of(node: Node, key: str, default: Any = None) -> Any:
    """Read a declared or caller-defined field from a node."""
    if key in type(node).model_fields:
        return getattr(node, key)
    return (node.model_extra or {}).get(key, default)


def with_children(node: InternalNode, children: Iterable[Node]) -> InternalNode:
    """Copy of `node` with its children replaced."""
    return node.model_copy(update={"children": list(children)})


def as_leaf(node: Node, size: Union[int, float]) -> Leaf:
    """Turn a node into a leaf of the given size, keeping its extra fields."""
    return Leaf(name=node.name, size=size, **extra_fields(node))


def circles(*meanings: str) -> List[CircleMetadata]:
    return [CircleMetadata(meaning=m) for m in meanings]
