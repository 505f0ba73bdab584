# cohort_tree/builder/steps.py
"""
Tree build steps - declarative building blocks of the pipeline.

Each step describes one prospective layer of the hierarchy:

- GroupStep: classify each record into a named bucket (emits a ring)
- CustomGroupStep: bucket the whole layer at once (emits a ring)
- SplitStep: expand each record into child records (emits a ring)
- MapStep: reshape or filter the layer (no ring)

Each step:
- Takes the records of the current layer
- Delegates every bucket to the remaining steps via ctx.descend
- Returns the nodes it produced and whether it emitted its ring
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Dict, List, Mapping, Optional

from cohort_tree.awaitables import collect, gather_all, resolve
from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import BUILDER
from cohort_tree.tree.models import Node, internal

logger = get_logger(__name__)


@dataclass
class LayerContext:
    """What a step needs besides its records."""

    source: List[Any]  # the whole materialized cohort
    descend: Callable[[List[Any]], Awaitable[List[Node]]]  # build the remaining steps


@dataclass
class LayerOutcome:
    nodes: List[Node]
    emitted: bool


# =============================================================================
# Base Step
# =============================================================================


class TreeStep(ABC):
    """Base class for tree build steps."""

    emits_layer: ClassVar[bool] = True

    @abstractmethod
    async def build(self, records: List[Any], ctx: LayerContext) -> LayerOutcome:
        """Produce this layer's nodes from the current records."""
        ...

    @property
    def meaning(self) -> Optional[str]:
        """Meaning of the ring this step emits, if any."""
        return getattr(self, "name", None)


async def _emit_groups(
    step: TreeStep,
    groups: Mapping[str, List[Any]],
    flatten_single: bool,
    ctx: LayerContext,
) -> LayerOutcome:
    if flatten_single and len(groups) == 1:
        (members,) = groups.values()
        logger.debug(f"{BUILDER} {step.meaning!r}: single group flattened")
        return LayerOutcome(await ctx.descend(members), emitted=False)

    children = await gather_all(ctx.descend(members) for members in groups.values())
    nodes = [internal(name, kids) for name, kids in zip(groups, children)]
    return LayerOutcome(nodes, emitted=True)


# =============================================================================
# Step: Group
# =============================================================================


@dataclass
class GroupStep(TreeStep):
    """
    Group records by classifying each one.

    Args:
        name: Meaning of the emitted ring.
        by: Label for a record, sync or async. None excludes the record.
        flatten_single: Skip the ring when only one group results.
    """

    name: str
    by: Callable[[Any], Any]
    flatten_single: bool = False

    async def build(self, records: List[Any], ctx: LayerContext) -> LayerOutcome:
        labels = await gather_all(resolve(self.by(r)) for r in records)

        groups: Dict[str, List[Any]] = {}
        excluded = 0
        for record, label in zip(records, labels):
            if label is None:
                excluded += 1
                continue
            groups.setdefault(str(label), []).append(record)

        logger.debug(
            f"{BUILDER} GroupStep {self.name!r}: {len(records)} records -> "
            f"{len(groups)} groups ({excluded} excluded)"
        )
        return await _emit_groups(self, groups, self.flatten_single, ctx)


# =============================================================================
# Step: Custom Group
# =============================================================================


@dataclass
class CustomGroupStep(TreeStep):
    """
    Group the whole layer in one go.

    For algorithms that need to see every record before deciding groups.

    Args:
        name: Meaning of the emitted ring.
        to: Receives the layer's records and returns a mapping of group
            name to members (sync or async).
        flatten_single: Skip the ring when only one group results.
    """

    name: str
    to: Callable[[List[Any]], Any]
    flatten_single: bool = False

    async def build(self, records: List[Any], ctx: LayerContext) -> LayerOutcome:
        mapping = await resolve(self.to(records)) or {}
        groups: Dict[str, List[Any]] = {}
        for name, members in mapping.items():
            groups[str(name)] = await collect(members)

        logger.debug(f"{BUILDER} CustomGroupStep {self.name!r}: {len(groups)} groups")
        return await _emit_groups(self, groups, self.flatten_single, ctx)


# =============================================================================
# Step: Split
# =============================================================================


@dataclass
class SplitStep(TreeStep):
    """
    Split every record into child records of a different shape.

    One node is emitted per record, named by `namer`, whose children are the
    record's truthy expansions processed by the remaining steps.
    """

    splitter: Callable[[Any], Any]
    namer: Callable[[Any], Any]
    name: str = "split"

    async def build(self, records: List[Any], ctx: LayerContext) -> LayerOutcome:
        expansions = await gather_all(collect(self.splitter(r)) for r in records)
        names = await gather_all(resolve(self.namer(r)) for r in records)
        children = await gather_all(
            ctx.descend([x for x in expansion if x]) for expansion in expansions
        )

        logger.debug(f"{BUILDER} SplitStep {self.name!r}: {len(records)} records split")
        nodes = [internal(str(name), kids) for name, kids in zip(names, children)]
        return LayerOutcome(nodes, emitted=True)


# =============================================================================
# Step: Map
# =============================================================================


@dataclass
class MapStep(TreeStep):
    """
    Map or suppress the records of a layer. Does not emit a ring.

    `mapping(records, source)` receives the layer and the whole cohort and
    returns a list, iterable or async iterable (optionally awaitable).
    Falsy results are dropped.
    """

    mapping: Callable[[List[Any], List[Any]], Any]

    emits_layer: ClassVar[bool] = False

    async def build(self, records: List[Any], ctx: LayerContext) -> LayerOutcome:
        mapped = [x for x in await collect(self.mapping(records, ctx.source)) if x]
        logger.debug(f"{BUILDER} MapStep: {len(records)} records -> {len(mapped)}")
        return LayerOutcome(await ctx.descend(mapped), emitted=False)

