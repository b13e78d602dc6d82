import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from chipsim._errors import CircuitError, ScriptError
from chipsim._io import export_results_to_toml, load_script
from chipsim._report import build_connection_report
from chipsim._script import CircuitScript, ConnectCommand, EvaluateCommand, build_graph, run_script

from .config import ChipsimConfig, ConfigError, get_config
from .render import render_connection_lines, render_connection_table, render_kind_table, render_output

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Chip circuit simulator CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> ChipsimConfig:
    try:
        return get_config()
    except ConfigError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _load_script(script: Path | None, config: ChipsimConfig) -> CircuitScript:
    """Load the script given on the command line, falling back to [tool.chipsim].script."""
    if script is None:
        script = config.script
    if script is None:
        err_console.print("[red]Error: No script given and no \\[tool.chipsim].script configured[/red]")
        raise typer.Exit(code=1)

    err_console.print(f"[cyan]Loading script from:[/cyan] {script}")
    try:
        return load_script(script)
    except (ScriptError, OSError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


ScriptArgument = Annotated[
    Path | None,
    typer.Argument(help="Path to a command script (.txt token stream or .toml)"),
]


@app.command()
def run(
    script: ScriptArgument = None,
    *,
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Path to output TOML file for evaluated values"),
    ] = None,
) -> None:
    """Run a command script and show the evaluated values and final wiring."""
    config = _load_config()
    circuit_script = _load_script(script, config)

    try:
        result = run_script(circuit_script, max_depth=config.max_depth)
    except CircuitError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    for output_result in result.outputs:
        render_output(output_result, out_console, err_console)

    out_console.print()
    render_connection_table(build_connection_report(result.graph), out_console)

    if output is None:
        output = config.output
    if output is not None:
        err_console.print(f"[cyan]Exporting results to:[/cyan] {output}")
        export_results_to_toml(result, output)

    n_diagnostics = sum(len(o.diagnostics) for o in result.outputs)
    if n_diagnostics:
        err_console.print(f"[yellow]⚠ {n_diagnostics} division by zero diagnostic(s)[/yellow]")
    err_console.print("[green]✓ Run complete[/green]")


@app.command()
def check(script: ScriptArgument = None) -> None:
    """Apply a script's wiring without evaluating, and check the circuit for cycles."""
    config = _load_config()
    circuit_script = _load_script(script, config)

    # Only wiring and input commands; evaluation could recurse forever on a cycle
    wiring_only = circuit_script.model_copy(
        update={"commands": [c for c in circuit_script.commands if not isinstance(c, EvaluateCommand)]},
    )
    try:
        graph = run_script(wiring_only).graph
    except CircuitError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    err_console.print()
    render_kind_table(graph, err_console)

    unwired = [identity for identity in graph if not graph.lookup(identity).is_fully_wired]
    if unwired:
        err_console.print(f"[yellow]⚠ Chips with unwired inputs:[/yellow] {escape(', '.join(unwired))}")

    cycle = graph.find_cycle()
    if cycle is not None:
        err_console.print(
            Panel(
                escape(" -> ".join(cycle)),
                title="[bold red]Dependency cycle[/bold red]",
                border_style="red",
            ),
        )
        raise typer.Exit(code=1)

    err_console.print("[green]✓ Circuit is acyclic[/green]")


@app.command()
def report(script: ScriptArgument = None) -> None:
    """Print the connections established by a script's wiring commands."""
    config = _load_config()
    circuit_script = _load_script(script, config)

    try:
        graph = build_graph(circuit_script)
        for command in circuit_script.commands:
            if isinstance(command, ConnectCommand):
                graph.connect(command.source, command.target)
    except CircuitError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    render_connection_lines(build_connection_report(graph), out_console)


def main() -> None:
    app()
