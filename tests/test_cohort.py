"""
Tests for cohort entropy analysis and partition suggestions.
"""

from __future__ import annotations

import math

import pytest

from cohort_tree.analytics import (
    Term,
    analyze_cohort,
    analyze_kinds,
    entropy_of,
    suggest_partitions,
)


# ---------------------------------------------------------
# Degenerate cohorts
# ---------------------------------------------------------
def test_empty_cohort():
    result = analyze_cohort([])

    assert result.to_dict() == {"count": 0, "variants": 0, "entropy": 0}


def test_single_record():
    result = analyze_cohort([{"sha": "abc"}])

    assert result.to_dict() == {"count": 1, "variants": 1, "entropy": 0}
    assert math.copysign(1, result.entropy) == 1


def test_two_variants():
    result = analyze_cohort([{"sha": "abc"}, {"sha": "bbc"}, {"sha": "abc"}])

    expected = -(2 / 3 * math.log(2 / 3) + 1 / 3 * math.log(1 / 3))
    assert result.count == 3
    assert result.variants == 2
    assert result.entropy == pytest.approx(expected)


def test_uniform_variants():
    result = analyze_cohort([{"sha": s} for s in "abcd"])

    assert result.entropy == pytest.approx(math.log(4))


def test_custom_key():
    result = analyze_cohort(["a", "A", "b"], key=str.lower)

    assert result.variants == 2


def test_entropy_ignores_zero_counts():
    assert entropy_of([0, 5]) == 0
    assert entropy_of([]) == 0


# ---------------------------------------------------------
# Kinds
# ---------------------------------------------------------
def test_analyze_kinds_groups_by_type_and_name():
    records = [
        {"type": "dependency", "name": "react", "sha": "1"},
        {"type": "dependency", "name": "react", "sha": "2"},
        {"type": "config", "name": "react", "sha": "1"},
        {"type": "dependency", "name": "lodash", "sha": "1"},
    ]

    results = analyze_kinds(records)

    assert [(ka.kind.type, ka.kind.name) for ka in results] == [
        ("dependency", "react"),
        ("config", "react"),
        ("dependency", "lodash"),
    ]
    assert results[0].analysis.variants == 2
    assert results[0].to_dict()["type"] == "dependency"
    assert results[0].to_dict()["count"] == 2


# ---------------------------------------------------------
# Partitions
# ---------------------------------------------------------
def test_partitions_most_lopsided_first():
    records = list(range(1, 11))
    terms = [
        Term("even", lambda r: r % 2 == 0),
        Term("over 8", lambda r: r > 8),
        Term("none", lambda r: False),
    ]

    partitions = suggest_partitions(records, terms)

    assert [p.term.name for p in partitions] == ["none", "over 8", "even"]
    assert partitions[0].matching == 0
    assert partitions[0].balance == 5
    assert partitions[2].balance == 0
    assert partitions[2].total == 10
