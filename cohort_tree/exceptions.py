# cohort_tree/exceptions.py
"""
Exception hierarchy for cohort_tree.

Classifier and renderer failures are never wrapped: they propagate to the
caller unchanged. The classes below cover failures raised by the engine
itself.
"""

from __future__ import annotations


class CohortTreeError(Exception):
    """Base class for all engine errors."""


class TreeInvariantError(CohortTreeError):
    """A planted tree violates a structural invariant."""


class TreeMergeError(CohortTreeError):
    """Two trees cannot be merged (name or shape conflict)."""


class StepError(CohortTreeError):
    """A build pipeline step is unknown or malformed."""


class ConfigError(CohortTreeError):
    """Configuration could not be loaded or validated."""


__all__ = [
    "CohortTreeError",
    "TreeInvariantError",
    "TreeMergeError",
    "StepError",
    "ConfigError",
]
