# cohort_tree/builder/__init__.py
from cohort_tree.builder.builder import (
    RENDER_MEANING,
    ReportBuilder,
    TreeBuilder,
    build_planted_tree,
    tree_builder,
)
from cohort_tree.builder.steps import (
    CustomGroupStep,
    GroupStep,
    LayerContext,
    LayerOutcome,
    MapStep,
    SplitStep,
    TreeStep,
)

__all__ = [
    "RENDER_MEANING",
    "ReportBuilder",
    "TreeBuilder",
    "build_planted_tree",
    "tree_builder",
    "CustomGroupStep",
    "GroupStep",
    "LayerContext",
    "LayerOutcome",
    "MapStep",
    "SplitStep",
    "TreeStep",
]
