"""
Tests for value banding.
"""

from __future__ import annotations

import math

from cohort_tree.analytics import (
    DEFAULT,
    ENTROPY_SIZE_BANDS,
    BandCasing,
    Exactly,
    UpTo,
    band_for,
    entropy_band,
    single_kind_entropy_band,
)
from cohort_tree.config import EntropyThresholds


class TestBandFor:
    def test_exact_match_wins(self):
        assert band_for(ENTROPY_SIZE_BANDS, 0) == "zero"

    def test_smallest_up_to_wins(self):
        assert band_for(ENTROPY_SIZE_BANDS, 0.5) == "low"
        assert band_for(ENTROPY_SIZE_BANDS, 1.5) == "medium"

    def test_up_to_is_exclusive(self):
        assert band_for(ENTROPY_SIZE_BANDS, 1) == "medium"

    def test_default_catches_the_rest(self):
        assert band_for(ENTROPY_SIZE_BANDS, 7) == "high"

    def test_no_default_means_no_band(self):
        assert band_for({"small": UpTo(1)}, 3) is None

    def test_include_number(self):
        assert band_for(ENTROPY_SIZE_BANDS, 0.5, include_number=True) == "low (<1)"
        assert band_for({"one": Exactly(1)}, 1, include_number=True) == "one (=1)"
        assert band_for({"big": DEFAULT}, 9, include_number=True) == "big"

    def test_sentence_casing(self):
        assert band_for(ENTROPY_SIZE_BANDS, 1.5, casing=BandCasing.SENTENCE) == "Medium"


class TestEntropyBands:
    def test_default_thresholds(self):
        assert entropy_band(2.5) == "random (>2)"
        assert entropy_band(math.log(4)) == "wild (>1)"
        assert entropy_band(0.7) == "loose (>.5)"
        assert entropy_band(0.5) is None
        assert entropy_band(0) is None

    def test_custom_thresholds(self):
        thresholds = EntropyThresholds(loose=0.1, wild=0.2, random=0.3)

        assert entropy_band(0.25, thresholds) == "wild (>.2)"

    def test_single_kind_bands(self):
        assert single_kind_entropy_band(0) == "None"
        assert single_kind_entropy_band(0.3) == "Low"
        assert single_kind_entropy_band(1.2) == "Medium"
        assert single_kind_entropy_band(2.2) == "High"
