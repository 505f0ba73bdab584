# cohort_tree/analytics/__init__.py
from cohort_tree.analytics.bands import (
    DEFAULT,
    ENTROPY_SIZE_BANDS,
    ENTROPY_SIZE_BANDS_DISPLAY,
    BandCasing,
    Exactly,
    UpTo,
    band_for,
    entropy_band,
    single_kind_entropy_band,
)
from cohort_tree.analytics.cohort import (
    CohortAnalysis,
    Kind,
    KindAnalysis,
    analyze_cohort,
    analyze_kinds,
    entropy_of,
)
from cohort_tree.analytics.drift import (
    above_percentile,
    drift_tree,
    drift_tree_for_type,
    percentile_disc,
)
from cohort_tree.analytics.partitions import Partition, Term, suggest_partitions

__all__ = [
    "DEFAULT",
    "ENTROPY_SIZE_BANDS",
    "ENTROPY_SIZE_BANDS_DISPLAY",
    "BandCasing",
    "Exactly",
    "UpTo",
    "band_for",
    "entropy_band",
    "single_kind_entropy_band",
    "CohortAnalysis",
    "Kind",
    "KindAnalysis",
    "analyze_cohort",
    "analyze_kinds",
    "entropy_of",
    "above_percentile",
    "drift_tree",
    "drift_tree_for_type",
    "percentile_disc",
    "Partition",
    "Term",
    "suggest_partitions",
]
