# cohort_tree/config/__init__.py
from cohort_tree.config.loader import DEFAULT_CONFIG_PATH, get_settings, load_config
from cohort_tree.config.schema import (
    CohortTreeConfig,
    DriftConfig,
    EntropyThresholds,
    LoggingConfig,
    ValidationConfig,
)

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "get_settings",
    "load_config",
    "CohortTreeConfig",
    "DriftConfig",
    "EntropyThresholds",
    "LoggingConfig",
    "ValidationConfig",
]
