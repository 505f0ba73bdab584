# cohort_tree/logging/__init__.py
from cohort_tree.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
