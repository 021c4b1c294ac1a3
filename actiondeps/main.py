"""action-deps CLI - Which backend actions does each action file or view depend on?"""
from pathlib import Path
from typing import List, Optional
import typer
from rich.markup import escape
from rich.table import Table

from .analyzer.analysis import run_analysis
from .analyzer.dependency_filter import filter_dependencies
from .analyzer.file_finder import split_patterns
from .analyzer.graph_builder import DependencyGraph
from .analyzer.models import DependencyRecord
from .config import __version__, get_config
from .formatter import render_table, to_json, to_text
from .utils.logger import setup_logging
from .utils.safe_console import SafeConsole

app = typer.Typer(
    name="action-deps",
    help="Static analysis of action dependencies in action handlers and views",
    add_completion=False
)
console = SafeConsole()
err_console = SafeConsole(stderr=True)

OUTPUT_FORMATS = ('json', 'text', 'table')


def _parse_action_filter(actions: Optional[List[str]]) -> List[str]:
    """Flatten repeated and comma-separated --action values."""
    identifiers = []
    for value in actions or []:
        identifiers.extend(item.strip() for item in value.split(',') if item.strip())
    return identifiers


def _print_stats(graph: DependencyGraph):
    stats = graph.get_stats()
    table = Table(title="Graph Statistics", show_header=True, header_style="bold magenta", box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="yellow")
    table.add_row("Files analyzed", str(stats['total_files']))
    table.add_row("Dependency edges", str(stats['total_dependencies']))
    table.add_row("Files calling actions", str(stats['files_with_action_dependencies']))
    table.add_row("Action calls", str(stats['total_action_dependencies']))
    err_console.print(table)


def _emit(records: List[DependencyRecord], output_format: str, shape: str):
    if output_format == 'json':
        typer.echo(to_json(records, shape))
    elif output_format == 'text':
        typer.echo(to_text(records, shape))
    else:
        console.print(render_table(records))


def _run(target_type: str, directory: str, actions: Optional[List[str]], output_format: str,
         flat: bool, stats: bool, verbose: bool, entry_point_patterns: Optional[str] = None):
    """Shared flow for both commands: configure, analyze, filter, print."""
    try:
        config = get_config()
    except ValueError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    setup_logging("DEBUG" if verbose else config.log_level)

    if output_format not in OUTPUT_FORMATS:
        err_console.print(f"[bold red]Error:[/bold red] Unknown format '{escape(output_format)}' "
                          f"(choose from {', '.join(OUTPUT_FORMATS)})")
        raise typer.Exit(1)

    target_dir = Path(directory).resolve()
    if not target_dir.is_dir():
        err_console.print(f"[bold red]Error:[/bold red] Directory does not exist: {escape(str(target_dir))}")
        raise typer.Exit(1)

    patterns = split_patterns(entry_point_patterns) if entry_point_patterns else config.entry_point_patterns
    shape = 'flat' if flat else 'graph'

    try:
        records, graph = run_analysis(
            target_type,
            target_dir,
            entry_point_patterns=patterns,
            output_shape=shape,
            excluded_dirs=config.excluded_dirs,
        )
    except ValueError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    identifiers = _parse_action_filter(actions)
    result = filter_dependencies(target_type, records, identifiers)
    for warning in result.warnings:
        err_console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")

    if stats:
        _print_stats(graph)

    _emit(result.filtered, output_format, shape)


@app.command()
def action(
    directory: str = typer.Argument(..., help="Directory containing action handler files"),
    actions: Optional[List[str]] = typer.Option(None, "--action", "-a", help="Only show results involving these action identifiers (repeatable, comma-separated)"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json, text or table"),
    flat: bool = typer.Option(False, "--flat", help="List each action's own calls instead of direct/indirect dependencies"),
    stats: bool = typer.Option(False, "--stats", help="Print dependency graph statistics to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Analyze action handlers: which actions does each action call, directly or through other actions?"""
    _run('action', directory, actions, output_format, flat, stats, verbose)


@app.command()
def view(
    directory: str = typer.Argument(..., help="Directory containing view (UI) files"),
    entry_point_patterns: Optional[str] = typer.Option(None, "--entry-point-patterns", "-e", help="Comma-separated entry point globs (default: pages/**/*.{tsx,jsx,ts,js})"),
    actions: Optional[List[str]] = typer.Option(None, "--action", "-a", help="Only show results involving these action identifiers (repeatable, comma-separated)"),
    output_format: str = typer.Option("json", "--format", "-f", help="Output format: json, text or table"),
    stats: bool = typer.Option(False, "--stats", help="Print dependency graph statistics to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Analyze views: which actions does each entry point reach through its imports?"""
    _run('view', directory, actions, output_format, False, stats, verbose, entry_point_patterns)


def _version_callback(value: bool):
    if value:
        typer.echo(f"action-deps {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
):
    """action-deps - find the entry points that break when an action changes."""


if __name__ == "__main__":
    app()
