# cohort_tree/cli/ui.py
"""
Console output for the CLI.

One shared rich console plus the few styled printers the commands use.
"""

from __future__ import annotations

import sys
from typing import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from cohort_tree.analytics.cohort import KindAnalysis
from cohort_tree.tree.models import Node, PlantedTree, is_internal

CAN_USE_UNICODE = sys.platform != "win32" or (sys.stdout.encoding or "").lower() in (
    "utf-8",
    "utf8",
)

CHECK = "✓" if CAN_USE_UNICODE else "[OK]"
CROSS = "✗" if CAN_USE_UNICODE else "[X]"
WARN = "⚠" if CAN_USE_UNICODE else "[!]"

console = Console()


def header(title: str, subtitle: str = "") -> None:
    content = f"[bold]{title}[/bold]\n[dim]{subtitle}[/dim]" if subtitle else f"[bold]{title}[/bold]"
    console.print(Panel.fit(content, border_style="blue"))


def success(msg: str) -> None:
    console.print(f"[green]{CHECK}[/green] {msg}")


def error(msg: str) -> None:
    console.print(f"[red]{CROSS}[/red] {msg}")


def warning(msg: str) -> None:
    console.print(f"[yellow]{WARN}[/yellow] {msg}")


def kinds_table(analyses: Sequence[KindAnalysis]) -> Table:
    table = Table(title="Cohort analysis")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    table.add_column("Count", justify="right")
    table.add_column("Variants", justify="right")
    table.add_column("Entropy", justify="right", style="magenta")
    for ka in analyses:
        a = ka.analysis
        table.add_row(ka.kind.type, ka.kind.name, str(a.count), str(a.variants), f"{a.entropy:.3f}")
    return table


def planted_tree_view(pt: PlantedTree) -> Tree:
    """Rich tree of a planted tree, each ring labelled with its meaning."""
    meanings = [c.meaning for c in pt.circles]

    def label(node: Node, depth: int) -> str:
        meaning = f" [dim]({escape(meanings[depth])})[/dim]" if depth < len(meanings) else ""
        if is_internal(node):
            return f"[bold]{escape(node.name)}[/bold]{meaning}"
        return f"{escape(node.name)} [green]{node.size:g}[/green]{meaning}"

    def add(branch: Tree, node: Node, depth: int) -> None:
        sub = branch.add(label(node, depth))
        if is_internal(node):
            for child in node.children:
                add(sub, child, depth + 1)

    view = Tree(label(pt.tree, 0))
    for child in pt.tree.children:
        add(view, child, 1)
    return view
