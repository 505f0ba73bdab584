# cohort_tree/analytics/bands.py
"""
Banding of numeric values into named ranges.

A band set maps names to one of:
- Exactly(n): the value equals n
- UpTo(n): the value is below n (the smallest matching bound wins)
- DEFAULT: anything else

Exact matches are checked first, then UpTo bounds in ascending order.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from cohort_tree.config import get_settings
from cohort_tree.config.schema import EntropyThresholds


@dataclass(frozen=True)
class Exactly:
    exactly: float


@dataclass(frozen=True)
class UpTo:
    up_to: float


DEFAULT = "default"

Band = Union[Exactly, UpTo, str]
Bands = Dict[str, Band]


class BandCasing(Enum):
    NO_CHANGE = "no_change"
    SENTENCE = "sentence"


ENTROPY_SIZE_BANDS: Bands = {
    "zero": Exactly(0),
    "low": UpTo(1),
    "medium": UpTo(2),
    "high": DEFAULT,
}

# Same ranges, named for display of a single type
ENTROPY_SIZE_BANDS_DISPLAY: Bands = {
    "none": Exactly(0),
    "low": UpTo(1),
    "medium": UpTo(2),
    "high": DEFAULT,
}


def band_for(
    bands: Bands,
    value: float,
    include_number: bool = False,
    casing: BandCasing = BandCasing.NO_CHANGE,
) -> Optional[str]:
    """Return the name of the band `value` falls in, or None if none matches."""
    for name, band in bands.items():
        if isinstance(band, Exactly) and band.exactly == value:
            return _format(name, band, include_number, casing)

    up_tos = sorted(
        ((name, band) for name, band in bands.items() if isinstance(band, UpTo)),
        key=lambda nb: nb[1].up_to,
    )
    for name, band in up_tos:
        if band.up_to > value:
            return _format(name, band, include_number, casing)

    for name, band in bands.items():
        if band == DEFAULT:
            return _format_name(name, casing)
    return None


def _format(name: str, band: Band, include_number: bool, casing: BandCasing) -> str:
    formatted = _format_name(name, casing)
    if include_number and isinstance(band, Exactly):
        return f"{formatted} (={band.exactly:g})"
    if include_number and isinstance(band, UpTo):
        return f"{formatted} (<{band.up_to:g})"
    return formatted


def _format_name(name: str, casing: BandCasing) -> str:
    if casing is BandCasing.SENTENCE:
        return name[:1].upper() + name[1:]
    return name


# =============================================================================
# Entropy classifiers for drift rings
# =============================================================================


def entropy_band(entropy: float, thresholds: Optional[EntropyThresholds] = None) -> Optional[str]:
    """
    Drift band of an entropy value. None for kinds that have not drifted.
    """
    t = thresholds or get_settings().drift.thresholds
    if entropy > t.random:
        return f"random (>{_bound(t.random)})"
    if entropy > t.wild:
        return f"wild (>{_bound(t.wild)})"
    if entropy > t.loose:
        return f"loose (>{_bound(t.loose)})"
    return None


def _bound(value: float) -> str:
    # 0.5 -> ".5"
    text = f"{value:g}"
    return text[1:] if text.startswith("0.") else text


def single_kind_entropy_band(entropy: float) -> str:
    """Coarse band used when a single type is shown: None, Low, Medium, High."""
    return band_for(ENTROPY_SIZE_BANDS_DISPLAY, entropy, casing=BandCasing.SENTENCE)

