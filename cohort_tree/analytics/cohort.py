# cohort_tree/analytics/cohort.py
"""
Cohort entropy analysis.

A cohort is a set of records of one kind (a type + name pair). Records with
the same content hash are the same variant. The Shannon entropy (natural
log) of the variant distribution measures how far the cohort has drifted
apart.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Hashable, Iterable, List, Tuple

from cohort_tree.logging.logger import get_logger
from cohort_tree.logging.tags import ANALYTICS

logger = get_logger(__name__)


def _get(record: Any, key: str) -> Any:
    if isinstance(record, dict):
        return record.get(key)
    return getattr(record, key, None)


def sha_of(record: Any) -> Any:
    """Content hash of a record ("sha" key or attribute)."""
    return _get(record, "sha")


def kind_of(record: Any) -> Tuple[Any, Any]:
    """(type, name) pair of a record."""
    return _get(record, "type"), _get(record, "name")


@dataclass(frozen=True)
class CohortAnalysis:
    """
    Result of analyzing a cohort of records of the same kind.

    Attributes:
        count: Number of records.
        variants: Number of distinct content hashes.
        entropy: -sum(p * ln p) over the variant proportions.
    """

    count: int
    variants: int
    entropy: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Kind:
    type: str
    name: str


@dataclass(frozen=True)
class KindAnalysis:
    """Analysis of one kind, as persisted per workspace."""

    kind: Kind
    analysis: CohortAnalysis

    def to_dict(self) -> dict:
        return {"type": self.kind.type, "name": self.kind.name, **self.analysis.to_dict()}


def entropy_of(counts: Iterable[int]) -> float:
    """Shannon entropy (nats) of a categorical distribution given as counts."""
    counts = [c for c in counts if c > 0]
    total = sum(counts)
    if total == 0:
        return 0.0
    entropy = -sum((c / total) * math.log(c / total) for c in counts)
    # A single variant gives -0.0
    return entropy + 0.0


def analyze_cohort(
    records: Iterable[Any],
    key: Callable[[Any], Hashable] = sha_of,
) -> CohortAnalysis:
    """
    Analyze a cohort of the same kind of records.

    Args:
        records: Records of one kind.
        key: Content hash of a record.
    """
    groups: Dict[Hashable, int] = {}
    count = 0
    for record in records:
        k = key(record)
        groups[k] = groups.get(k, 0) + 1
        count += 1

    return CohortAnalysis(count=count, variants=len(groups), entropy=entropy_of(groups.values()))


def analyze_kinds(
    records: Iterable[Any],
    kind: Callable[[Any], Tuple[Any, Any]] = kind_of,
    key: Callable[[Any], Hashable] = sha_of,
) -> List[KindAnalysis]:
    """
    Analyze every kind present in a workspace cohort.

    Returns:
        One KindAnalysis per distinct kind, in first-seen order.
    """
    by_kind: Dict[Tuple[Any, Any], List[Any]] = {}
    for record in records:
        by_kind.setdefault(kind(record), []).append(record)

    results = [
        KindAnalysis(kind=Kind(type=str(t), name=str(n)), analysis=analyze_cohort(members, key))
        for (t, n), members in by_kind.items()
    ]
    logger.debug(f"{ANALYTICS} Analyzed {len(results)} kinds")
    return results
