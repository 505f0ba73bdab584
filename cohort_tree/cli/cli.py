# cohort_tree/cli/cli.py
"""
cohort-tree command line.

Reads record cohorts and planted trees from JSON files and prints the
resulting hierarchies. With --json, the planted tree is written to stdout
as JSON instead of being drawn.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, List, Optional

import typer

from cohort_tree.analytics.cohort import analyze_kinds
from cohort_tree.analytics.drift import drift_tree, drift_tree_for_type
from cohort_tree.cli import ui
from cohort_tree.config import get_settings
from cohort_tree.exceptions import CohortTreeError
from cohort_tree.logging.logger import configure_logging, get_logger
from cohort_tree.logging.tags import CLI
from cohort_tree.tree.merge import merge_planted_trees
from cohort_tree.tree.models import PlantedTree
from cohort_tree.tree.surgery import trim_outer_rim
from cohort_tree.tree.validation import check_null_children, depth_problems

logger = get_logger(__name__)

app = typer.Typer(
    help="cohort-tree: hierarchies of cohort drift",
    no_args_is_help=True,
)


# ---------------------------------------------------------------------------
# helpers
# ---------------------------------------------------------------------------


def _read_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        ui.error(f"File not found: {path}")
        raise typer.Exit(code=1)
    except json.JSONDecodeError as e:
        ui.error(f"Invalid JSON in {path}: {e}")
        raise typer.Exit(code=1)


def _read_records(path: Path) -> List[Any]:
    data = _read_json(path)
    if not isinstance(data, list):
        ui.error(f"{path} must contain a JSON array of records")
        raise typer.Exit(code=1)
    return data


def _read_tree(path: Path) -> PlantedTree:
    data = _read_json(path)
    try:
        return PlantedTree.from_dict(data)
    except ValueError as e:
        ui.error(f"{path} is not a planted tree: {e}")
        raise typer.Exit(code=1)


def _show(pt: PlantedTree, as_json: bool) -> None:
    if as_json:
        typer.echo(pt.to_json(indent=2))
    else:
        ui.console.print(ui.planted_tree_view(pt))


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    configure_logging("DEBUG" if verbose else get_settings().logging.level, force=True)


# ---------------------------------------------------------------------------
# analytics
# ---------------------------------------------------------------------------


@app.command("analyze")
def analyze(records: Path = typer.Argument(..., help="JSON array of records")) -> None:
    """
    Print per-kind cohort analyses (count, variants, entropy).
    """
    analyses = analyze_kinds(_read_records(records))
    analyses.sort(key=lambda ka: ka.analysis.entropy, reverse=True)
    ui.console.print(ui.kinds_table(analyses))


@app.command("drift")
def drift(
    records: Path = typer.Argument(..., help="JSON array of records"),
    type_name: Optional[str] = typer.Option(None, "--type", "-t", help="Only this type"),
    percentile: Optional[float] = typer.Option(
        None, "--percentile", "-p", min=0, max=100, help="Entropy percentile cut-off"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the planted tree as JSON"),
) -> None:
    """
    Build the drift hierarchy of a cohort.
    """
    analyses = analyze_kinds(_read_records(records))
    logger.info(f"{CLI} Building drift tree for {len(analyses)} kinds")
    try:
        if type_name:
            pt = asyncio.run(drift_tree_for_type(analyses, type_name, percentile=percentile or 0))
        else:
            pt = asyncio.run(drift_tree(analyses, percentile=percentile))
    except CohortTreeError as e:
        ui.error(str(e))
        raise typer.Exit(code=1)

    if not as_json:
        ui.header("Drift", f"{len(analyses)} kinds")
        if not pt.tree.children:
            ui.warning("No kind has drifted past the entropy cut")
    _show(pt, as_json)


# ---------------------------------------------------------------------------
# trees
# ---------------------------------------------------------------------------


@app.command("validate")
def validate(tree: Path = typer.Argument(..., help="Planted tree JSON file")) -> None:
    """
    Check a planted tree's structural invariants.
    """
    pt = _read_tree(tree)
    try:
        check_null_children(pt.tree)
    except CohortTreeError as e:
        ui.error(str(e))
        raise typer.Exit(code=1)

    problems = depth_problems(pt)
    for problem in problems:
        ui.error(problem)
    if problems:
        raise typer.Exit(code=1)
    ui.success(f"Valid planted tree: {tree.name} ({len(pt.circles)} circles)")


@app.command("merge")
def merge(
    trees: List[Path] = typer.Argument(..., help="Planted tree JSON files"),
    as_json: bool = typer.Option(False, "--json", help="Print the planted tree as JSON"),
) -> None:
    """
    Merge planted trees with the same root name and circles.
    """
    try:
        merged = merge_planted_trees(*(_read_tree(t) for t in trees))
    except CohortTreeError as e:
        ui.error(str(e))
        raise typer.Exit(code=1)
    _show(merged, as_json)


@app.command("trim")
def trim(
    tree: Path = typer.Argument(..., help="Planted tree JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print the planted tree as JSON"),
) -> None:
    """
    Collapse the outermost ring where nodes hold at most one leaf per child.
    """
    pt = _read_tree(tree)
    _show(pt.with_tree(trim_outer_rim(pt.tree)), as_json)
