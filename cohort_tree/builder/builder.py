# cohort_tree/builder/builder.py
"""
Fluent tree builder.

Turns a flat cohort of records into a PlantedTree. Steps are declared up
front; nothing runs until the sealed ReportBuilder receives a source.

Usage:
    report = (
        tree_builder("repos")
        .group(name="owner", by=lambda r: r["owner"])
        .group(name="language", by=classify_language)
        .render_with(lambda r: {"name": r["name"], "size": 1})
    )
    pt = await report.to_planted_tree(lambda: records)

All calculations happen in memory once the cohort is materialized, because
later steps may need statistics over the whole cohort.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, List, Tuple

from cohort_tree.awaitables import gather_all, materialize, resolve
from cohort_tree.builder.steps import (
    CustomGroupStep,
    GroupStep,
    LayerContext,
    MapStep,
    SplitStep,
    TreeStep,
)
from cohort_tree.exceptions import StepError
from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import BUILDER
from cohort_tree.tree.models import CircleMetadata, InternalNode, Leaf, Node, PlantedTree
from cohort_tree.tree.traversal import leaves_under
from cohort_tree.tree.validation import validate_planted_tree

logger = get_logger(__name__)

RENDER_MEANING = "render"

Renderer = Callable[[Any], Any]


@dataclass
class _BuildState:
    """Which steps emitted or flattened their ring in some branch."""

    emitted: set = field(default_factory=set)
    flattened: set = field(default_factory=set)

    def record(self, index: int, emitted: bool) -> None:
        (self.emitted if emitted else self.flattened).add(index)

    def shows(self, index: int) -> bool:
        return index in self.emitted or index not in self.flattened


class TreeBuilder:
    """
    Accumulates build steps.

    Every method except render_with appends one step and returns the
    builder, so calls can be chained.
    """

    def __init__(self, root_name: str, root_meaning: str | None = None) -> None:
        self.root_name = root_name
        self.root_meaning = root_meaning or root_name
        self._steps: List[TreeStep] = []

    @property
    def steps(self) -> Tuple[TreeStep, ...]:
        return tuple(self._steps)

    def add(self, step: TreeStep) -> "TreeBuilder":
        if not isinstance(step, TreeStep):
            raise StepError(f"Unknown step type '{type(step).__name__}'")
        self._steps.append(step)
        return self

    def group(self, name: str, by: Callable[[Any], Any], flatten_single: bool = False) -> "TreeBuilder":
        """Group values in the present layer by classifying each one. None excludes."""
        return self.add(GroupStep(name=name, by=by, flatten_single=flatten_single))

    def custom_group(
        self, name: str, to: Callable[[List[Any]], Any], flatten_single: bool = False
    ) -> "TreeBuilder":
        """Group all values in the present layer in one go."""
        return self.add(CustomGroupStep(name=name, to=to, flatten_single=flatten_single))

    def split(
        self, splitter: Callable[[Any], Any], namer: Callable[[Any], Any], name: str = "split"
    ) -> "TreeBuilder":
        """Split each value into several, emitting a layer named per value."""
        return self.add(SplitStep(splitter=splitter, namer=namer, name=name))

    def map(self, mapping: Callable[[List[Any], List[Any]], Any]) -> "TreeBuilder":
        """Map or suppress values. Does not emit a layer."""
        return self.add(MapStep(mapping=mapping))

    def render_with(self, renderer: Renderer, meaning: str = RENDER_MEANING) -> "ReportBuilder":
        """Seal the pipeline with a leaf renderer. `meaning` labels the leaf ring."""
        return ReportBuilder(
            root_name=self.root_name,
            steps=self.steps,
            renderer=renderer,
            root_meaning=self.root_meaning,
            render_meaning=meaning,
        )


@dataclass(frozen=True)
class ReportBuilder:
    """Sealed pipeline. Its only job is to build planted trees from sources."""

    root_name: str
    steps: Tuple[TreeStep, ...]
    renderer: Renderer
    root_meaning: str = ""
    render_meaning: str = RENDER_MEANING

    async def to_planted_tree(self, source: Any) -> PlantedTree:
        """
        Build a planted tree from a record source.

        Args:
            source: Zero-argument callable returning records, or the records
                themselves. Lists, iterables, async iterables and awaitables
                of those are accepted.

        Returns:
            The validated planted tree.

        Raises:
            Whatever a classifier, splitter, mapper or the renderer raises.
            No partial tree is produced.
        """
        data = await materialize(source)
        logger.debug(f"{BUILDER} Building '{self.root_name}' from {len(data)} records")

        state = _BuildState()
        children = await self._layer(data, 0, data, state)
        tree = InternalNode(name=self.root_name, children=children)

        circles = [CircleMetadata(meaning=self.root_meaning or self.root_name)]
        circles.extend(
            CircleMetadata(meaning=step.meaning)
            for i, step in enumerate(self.steps)
            if step.emits_layer and state.shows(i)
        )
        circles.append(CircleMetadata(meaning=self.render_meaning))

        result = PlantedTree(tree=tree, circles=circles)
        validate_planted_tree(result)
        logger.info(
            f"{BUILDER} Built tree '{self.root_name}': "
            f"{len(leaves_under(tree))} leaves, {len(circles)} circles"
        )
        return result

    async def to_tree(self, source: Any) -> InternalNode:
        """Build only the hierarchy, without circles."""
        return (await self.to_planted_tree(source)).tree

    async def _layer(
        self, records: List[Any], index: int, source: List[Any], state: _BuildState
    ) -> List[Node]:
        if index == len(self.steps):
            rendered = await gather_all(resolve(self.renderer(r)) for r in records)
            return [_as_leaf(r) for r in rendered]

        step = self.steps[index]

        async def descend(members: List[Any]) -> List[Node]:
            return await self._layer(members, index + 1, source, state)

        outcome = await step.build(records, LayerContext(source=source, descend=descend))
        state.record(index, outcome.emitted)
        return outcome.nodes


def _as_leaf(rendered: Any) -> Leaf:
    if isinstance(rendered, Leaf):
        return rendered
    if isinstance(rendered, dict):
        return Leaf.model_validate(rendered)
    raise StepError(f"Renderer must return a Leaf or a dict, got {type(rendered).__name__}")


def tree_builder(root_name: str, root_meaning: str | None = None) -> TreeBuilder:
    return TreeBuilder(root_name, root_meaning)


def build_planted_tree(report: ReportBuilder, source: Any) -> PlantedTree:
    """Synchronous entry point for callers outside an event loop."""
    return asyncio.run(report.to_planted_tree(source))


__all__ = [
    "RENDER_MEANING",
    "ReportBuilder",
    "TreeBuilder",
    "build_planted_tree",
    "tree_builder",
]
