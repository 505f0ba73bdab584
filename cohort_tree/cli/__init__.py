"""
cohort-tree CLI.

Provides the top-level `cohort-tree` command.
"""

from cohort_tree.cli.cli import app

__all__ = ["app", "main"]


def main() -> None:
    app()
