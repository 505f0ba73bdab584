# cohort_tree/logging/logger.py
"""
Package-wide logger access.

All modules obtain their logger through get_logger(__name__) so that
configure_logging() can control the whole package from one place.
"""

from __future__ import annotations

import logging
import sys

_PACKAGE_LOGGER = "cohort_tree"
_HANDLER_ATTR = "_cohort_tree_handler"

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    """Return a named logger under the package hierarchy."""
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO", *, force: bool = False) -> logging.Logger:
    """
    Attach a single stderr handler to the package logger.

    Idempotent: a second call only updates the level unless force=True,
    in which case the handler is replaced.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or logging constant.
        force: Replace an existing handler.

    Returns:
        The package logger.
    """
    root = logging.getLogger(_PACKAGE_LOGGER)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    root.setLevel(level)

    existing = [h for h in root.handlers if getattr(h, _HANDLER_ATTR, False)]
    if existing and not force:
        for handler in existing:
            handler.setLevel(level)
        return root

    for handler in existing:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT, datefmt=_DATE_FORMAT))
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
    return root
