"""
CLI for fuzzgrep.

Provides the command-line interface for fuzzy-searching a directory tree.
"""

from pathlib import Path
from typing import Optional

import typer
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from fuzzgrep.core.config import configure_logging, load_config
from fuzzgrep.core.file_walker import parse_extensions
from fuzzgrep.services import (
    MISSING_PATTERN_MESSAGE,
    ResultReporter,
    SearchPipeline,
    default_worker_count,
)

# Initialize Rich Consoles
console = Console()
err_console = Console(stderr=True)

app = typer.Typer(
    name="fuzzgrep",
    help="fuzzgrep - concurrent fuzzy search over a directory tree",
    add_completion=False,
)

INVALID_WORKERS_MESSAGE = (
    "Number of workers must be greater than 0. Using default number of CPU cores."
)


@app.command()
def search(
    pattern: str = typer.Option(
        "", "--pattern", help="Pattern to search for (case-sensitive, fuzzy)"
    ),
    path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Root directory to search [default: .]"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", help="Number of concurrent workers [default: CPU count]"
    ),
    ext: Optional[str] = typer.Option(
        None,
        "--ext",
        "-e",
        help="Comma-separated list of file extensions to include (e.g. .go,.txt)",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML or JSON configuration file"
    ),
    stats: bool = typer.Option(False, "--stats", help="Print a run summary to stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Fuzzy-search every line of every file under a directory."""
    load_dotenv()

    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, ValueError, TypeError, yaml.YAMLError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    configure_logging(cfg.logging, verbose=verbose)

    if not pattern:
        console.print(MISSING_PATTERN_MESSAGE, soft_wrap=True)
        raise typer.Exit(1)

    # Use config values if not overridden by CLI
    actual_workers = workers if workers is not None else cfg.search.workers
    if actual_workers is not None and actual_workers <= 0:
        console.print(f"[yellow]{INVALID_WORKERS_MESSAGE}[/yellow]", soft_wrap=True)
        actual_workers = default_worker_count()

    root_path = path if path is not None else Path(cfg.search.root_path)
    extensions = parse_extensions(ext if ext is not None else cfg.search.extensions)

    try:
        pipeline = SearchPipeline(
            pattern,
            root_path=root_path,
            workers=actual_workers,
            extensions=extensions,
            reporter=ResultReporter(),
            path_queue_size=cfg.search.path_queue_size,
            result_queue_size=cfg.search.result_queue_size,
            encoding=cfg.scan.encoding,
            errors=cfg.scan.errors,
        )
        summary = pipeline.run()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if stats:
        table = Table.grid(padding=1)
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Workers:", str(summary.workers))
        table.add_row("Files Discovered:", str(summary.files_discovered))
        table.add_row("Files Scanned:", str(summary.files_scanned))
        if summary.files_failed:
            table.add_row("Failed Files:", f"[red]{summary.files_failed}[/red]")
        table.add_row("Matches:", str(summary.matches))
        table.add_row("Duration:", f"{summary.duration_seconds:.2f}s")

        err_console.print(
            Panel(
                table,
                title="[bold green]Search Complete[/bold green]",
                border_style="green",
                expand=False,
            )
        )


def main() -> None:
    app()
