# cohort_tree/__init__.py
"""
cohort-tree: hierarchical aggregation of record cohorts into sunburst trees.

- cohort_tree.tree: node model, traversal, surgery, merge and validation
- cohort_tree.builder: async pipeline turning records into a planted tree
- cohort_tree.analytics: cohort entropy, bands and drift hierarchies
"""

from cohort_tree.analytics import analyze_cohort, analyze_kinds, drift_tree
from cohort_tree.builder import build_planted_tree, tree_builder
from cohort_tree.exceptions import (
    CohortTreeError,
    ConfigError,
    StepError,
    TreeInvariantError,
    TreeMergeError,
)
from cohort_tree.tree import (
    CircleMetadata,
    InternalNode,
    Leaf,
    PlantedTree,
    introduce_classification_layer,
    merge_trees,
    validate_planted_tree,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "analyze_cohort",
    "analyze_kinds",
    "drift_tree",
    "build_planted_tree",
    "tree_builder",
    "CohortTreeError",
    "ConfigError",
    "StepError",
    "TreeInvariantError",
    "TreeMergeError",
    "CircleMetadata",
    "InternalNode",
    "Leaf",
    "PlantedTree",
    "introduce_classification_layer",
    "merge_trees",
    "validate_planted_tree",
]
