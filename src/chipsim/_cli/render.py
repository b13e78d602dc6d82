"""Rich rendering utilities for CLI commands."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from rich.markup import escape
from rich.table import Table

from chipsim._chip import ChipKind
from chipsim._report import format_connection

if TYPE_CHECKING:
    from rich.console import Console

    from chipsim._eval import EvaluationResult
    from chipsim._graph import ChipGraph
    from chipsim._report import ConnectionEntry


def format_value(value: float) -> str:
    """Format a chip value the way the circuit protocol prints numbers."""
    return f"{value:g}"


def _get_kind_style(kind: ChipKind) -> str:
    """Get Rich style for a chip kind."""
    match kind:
        case ChipKind.INPUT:
            return "blue"
        case ChipKind.OUTPUT:
            return "green"
        case _:
            return "yellow"


def render_output(result: EvaluationResult, console: Console, err_console: Console) -> None:
    """Render the outcome of one evaluate command.

    Args:
        result: The evaluation to render.
        console: Rich Console for the value.
        err_console: Rich Console for division-by-zero diagnostics.

    """
    console.print("Computation Starts")
    for diagnostic in result.diagnostics:
        err_console.print(f"[red]Error:[/red] {escape(diagnostic.message)}")
    console.print(f"The output value from this circuit is {format_value(result.value)}")


def render_connection_table(entries: list[ConnectionEntry], console: Console) -> None:
    """Render the connection report as a Rich table.

    Args:
        entries: Report entries, in display order.
        console: Rich Console to output to.

    """
    if not entries:
        console.print("[dim]No chips in circuit[/dim]")
        return

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Chip", style="bold")
    table.add_column("Kind")
    table.add_column("Input 1")
    table.add_column("Input 2")
    table.add_column("Output")

    for entry in entries:
        inputs = [str(slot) for slot in entry.inputs]
        inputs += [""] * (2 - len(inputs))
        kind_style = _get_kind_style(entry.kind)
        table.add_row(
            escape(entry.identity),
            f"[{kind_style}]{entry.kind.name}[/{kind_style}]",
            *(escape(i) for i in inputs),
            escape(entry.consumer or "None") if entry.show_consumer else "",
        )

    console.print(table)


def render_connection_lines(entries: list[ConnectionEntry], console: Console) -> None:
    """Render the connection report one plain line per chip."""
    console.print("***** Showing the connections that were established")
    for entry in entries:
        console.print(format_connection(entry), markup=False, highlight=False)


def render_kind_table(graph: ChipGraph, console: Console) -> None:
    """Render the number of chips of each kind, and how many are fully wired.

    Args:
        graph: The circuit to summarize.
        console: Rich Console to output to.

    """
    totals: Counter[ChipKind] = Counter()
    wired: Counter[ChipKind] = Counter()
    for identity in graph:
        chip = graph.lookup(identity)
        totals[chip.kind] += 1
        if chip.is_fully_wired:
            wired[chip.kind] += 1

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="bold")
    table.add_column("Chips", justify="right")
    table.add_column("Wired", justify="right")

    for kind in ChipKind:
        if totals[kind]:
            table.add_row(kind.name, str(totals[kind]), str(wired[kind]))

    console.print(table)
