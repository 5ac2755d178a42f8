"""
CLI entry point for the gains-report application.
"""
import csv
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from gainsreport.config import Config, load_config
from gainsreport.data import read_rows
from gainsreport.ledger import build_ledger
from gainsreport.parsing import ParseError
from gainsreport.reporting import build_totals_table, render_report, term_totals

# Status and diagnostics go to stderr; the report itself goes to stdout.
app = typer.Typer(
    pretty_exceptions_show_locals=False,
    help="Quarterly capital gains report from a brokerage CSV export.",
)
console = Console(stderr=True)
stdout_console = Console()


def _configure_logging(verbose: bool) -> None:
    """Routes the package loggers through the stderr console."""
    pkg_log = logging.getLogger("gainsreport")
    pkg_log.handlers.clear()
    pkg_log.addHandler(RichHandler(console=console, show_time=False, show_path=False))
    pkg_log.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_config_or_exit(config_path: Optional[Path]) -> Config:
    """Helper to load config and exit on failure."""
    if config_path is None:
        return Config()
    try:
        return load_config(config_path)
    except (ValueError, FileNotFoundError) as e:
        console.print(f"[bold red]Configuration Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def report(
    csv_path: Path = typer.Argument(
        ..., help="Path to the brokerage realized gain/loss CSV export.",
        exists=True, dir_okay=False,
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to an optional YAML configuration file.", exists=True
    ),
    totals: bool = typer.Option(
        False, "--totals", help="Append short-term and long-term totals after the report."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
):
    """Print the quarterly capital gains report for a brokerage CSV export."""
    _configure_logging(verbose)
    config = _load_config_or_exit(config_path)

    try:
        rows = read_rows(csv_path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Error opening file:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)
    except csv.Error as e:
        console.print(f"[bold red]Error reading CSV:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    try:
        ledger = build_ledger(rows, config.parsing)
    except ParseError as e:
        console.print(f"[bold red]Malformed value in {csv_path}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    for line in render_report(ledger, config.report.currency):
        typer.echo(line)

    if totals or config.report.show_totals:
        table = build_totals_table(term_totals(ledger.sorted_by_sale_date()), config.report.currency)
        stdout_console.print(table)


if __name__ == "__main__":
    app()
