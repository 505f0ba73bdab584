# cohort_tree/logging/tags.py
"""
Subsystem tags prefixed to log messages.

Usage:
    logger.debug(f"{BUILDER} Grouped {n} records into {k} buckets")
"""

BUILDER = "[BUILDER]"
SURGERY = "[SURGERY]"
VALIDATION = "[VALIDATION]"
ANALYTICS = "[ANALYTICS]"
CONFIG = "[CONFIG]"
CLI = "[CLI]"
