"""Rich tables for timings and tool status."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ptrsg.preflight import ToolStatus
from ptrsg.workloads.base import Workload


def timings_table(timings: dict[str, int]) -> Table:
    """Per-language durations, sorted by language name."""
    table = Table(title="Timings (ns)", title_justify="left")
    table.add_column("Language", style="cyan")
    table.add_column("Elapsed (ns)", justify="right")
    table.add_column("Elapsed (ms)", justify="right", style="dim")
    for name in sorted(timings):
        ns = timings[name]
        table.add_row(name, str(ns), f"{ns / 1e6:.3f}")
    return table


def tools_table(statuses: list[ToolStatus]) -> Table:
    table = Table(title="Preflight", title_justify="left")
    table.add_column("Tool", style="cyan")
    table.add_column("OK", justify="center")
    table.add_column("Detail")
    for s in statuses:
        ok = "[green]✓[/green]" if s.available else "[red]✗[/red]"
        table.add_row(escape(s.tool), ok, escape(s.detail))
    return table


def workloads_table(workloads: list[Workload]) -> Table:
    table = Table(title="Workloads", title_justify="left")
    table.add_column("Language", style="cyan")
    table.add_column("Tool")
    table.add_column("Build", justify="center")
    table.add_column("Description")
    for w in workloads:
        table.add_row(w.name, w.probe.tool, "yes" if w.requires_build else "no", w.description)
    return table


def print_table(table: Table, console: Console | None = None) -> None:
    (console or Console()).print(table)
