# cohort_tree/analytics/partitions.py
"""
Partition suggestions.

Given named predicates over a cohort, rank them by how lopsided their split
is. Predicates matching almost all or almost none of the cohort come first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List, Sequence


@dataclass(frozen=True)
class Term:
    name: str
    predicate: Callable[[Any], bool]


@dataclass(frozen=True)
class Partition:
    term: Term
    matching: int
    total: int

    @property
    def balance(self) -> float:
        """Distance from an even split; 0 is perfectly even."""
        return abs(self.matching - self.total / 2)


def suggest_partitions(records: Sequence[Any], terms: Sequence[Term]) -> List[Partition]:
    """Partitions for each term, most lopsided split first."""
    partitions = [
        Partition(term=term, matching=sum(1 for r in records if term.predicate(r)), total=len(records))
        for term in terms
    ]
    return sorted(partitions, key=lambda p: p.balance, reverse=True)
