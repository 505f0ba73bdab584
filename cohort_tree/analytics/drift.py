# cohort_tree/analytics/drift.py
"""
Drift hierarchies.

A drift tree shows the kinds whose values are most inconsistent across a
cohort:

    drift -> entropy band -> type -> kind (leaf sized by variant count)

Kinds at or below the entropy percentile cut are left out, and so are kinds
that fall in no entropy band.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Sequence

from cohort_tree.analytics.bands import entropy_band, single_kind_entropy_band
from cohort_tree.analytics.cohort import KindAnalysis
from cohort_tree.builder import tree_builder
from cohort_tree.config import get_settings
from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import ANALYTICS
from cohort_tree.tree.models import Leaf, Node, PlantedTree, field_of, is_internal
from cohort_tree.tree.surgery import introduce_classification_layer, kill_children, prune_leaves

logger = get_logger(__name__)

BandClassifier = Callable[[float], Optional[str]]


def percentile_disc(values: Iterable[float], fraction: float) -> Optional[float]:
    """
    Discrete percentile: the first value whose cumulative position reaches
    `fraction` (0.0 - 1.0) of the sorted values. None for no values.
    """
    ordered = sorted(values)
    if not ordered:
        return None
    index = math.ceil(fraction * len(ordered)) - 1
    return ordered[min(max(index, 0), len(ordered) - 1)]


def above_percentile(analyses: Sequence[KindAnalysis], percentile: float) -> List[KindAnalysis]:
    """Kinds whose entropy is strictly above the given percentile (0 - 100)."""
    cut = percentile_disc((ka.analysis.entropy for ka in analyses), percentile / 100)
    if cut is None:
        return []
    return [ka for ka in analyses if ka.analysis.entropy > cut]


def render_kind(ka: KindAnalysis) -> Leaf:
    return Leaf(
        name=ka.kind.name,
        size=ka.analysis.variants,
        type=ka.kind.type,
        count=ka.analysis.count,
        variants=ka.analysis.variants,
        entropy=ka.analysis.entropy,
    )


def _by_entropy(analyses: List[KindAnalysis], percentile: float) -> List[KindAnalysis]:
    kept = above_percentile(analyses, percentile)
    return sorted(kept, key=lambda ka: ka.analysis.entropy, reverse=True)


def _band_layer(
    pt: PlantedTree, classifier: BandClassifier, meaning: str
) -> PlantedTree:
    def band(n: Node) -> Optional[str]:
        entropy = field_of(n, "entropy")
        return None if entropy is None else classifier(entropy)

    tree = prune_leaves(pt.tree, lambda leaf: band(leaf) is None)
    tree = kill_children(tree, lambda c, _depth: is_internal(c) and not c.children)
    return introduce_classification_layer(
        pt.with_tree(tree),
        descendant_classifier=band,
        new_layer_depth=1,
        new_layer_meaning=meaning,
    )


async def drift_tree(
    analyses: Sequence[KindAnalysis],
    percentile: Optional[float] = None,
    root_name: Optional[str] = None,
    classifier: Optional[BandClassifier] = None,
) -> PlantedTree:
    """
    Drift tree across all types.

    Awaitable, so it can be called from request handlers that already run
    in an event loop.

    Args:
        analyses: Per-kind cohort analyses.
        percentile: Entropy percentile cut-off, 0 - 100. Defaults to config.
        root_name: Root node name. Defaults to config.
        classifier: Entropy band for a kind; None leaves the kind out.
    """
    settings = get_settings().drift
    percentile = settings.percentile if percentile is None else percentile
    classifier = classifier or entropy_band

    report = (
        tree_builder(root_name or settings.root_name, root_meaning="report")
        .map(lambda kas, _source: _by_entropy(kas, percentile))
        .group(name="type", by=lambda ka: ka.kind.type)
        .render_with(render_kind, meaning="fingerprint name")
    )
    pt = await report.to_planted_tree(list(analyses))
    logger.debug(f"{ANALYTICS} Drift tree over {len(analyses)} kinds at percentile {percentile}")
    return _band_layer(pt, classifier, settings.band_meaning)


async def drift_tree_for_type(
    analyses: Sequence[KindAnalysis],
    type_name: str,
    percentile: float = 0,
    classifier: Optional[BandClassifier] = None,
) -> PlantedTree:
    """
    Drift tree for a single type, banded None / Low / Medium / High.

    Unlike drift_tree, no percentile cut applies by default, so stable kinds
    show up in the "None" band.
    """
    settings = get_settings().drift
    classifier = classifier or single_kind_entropy_band
    of_type = [ka for ka in analyses if ka.kind.type == type_name]
    if percentile > 0:
        of_type = above_percentile(of_type, percentile)

    report = (
        tree_builder(type_name, root_meaning="type")
        .map(lambda kas, _source: sorted(kas, key=lambda ka: ka.analysis.entropy, reverse=True))
        .render_with(render_kind, meaning="fingerprint entropy")
    )
    pt = await report.to_planted_tree(of_type)
    return _band_layer(pt, classifier, settings.band_meaning)
