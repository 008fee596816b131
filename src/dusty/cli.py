"""CLI interface for dusty."""

from pathlib import Path
from typing import Optional

import typer

from dusty import __version__
from dusty import logger as log_config
from dusty.catalog import build_catalog
from dusty.display import console, show_catalog, show_report, show_scanning_progress
from dusty.errors import ConfigurationError
from dusty.scanner import DEFAULT_MAX_WORKERS, scan_catalog

# Create Typer app
app = typer.Typer(
    name="dusty",
    help="Find and clean disk caches from the terminal",
    add_completion=False,
)

# Commands that own the terminal and must not log to it
INTERACTIVE_COMMANDS = {None, "tui"}


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"dusty version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        envvar="DUSTY_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        envvar="DUSTY_LOG_FILE",
        help="Write logs to this file. The TUI logs to the user log directory by default.",
    ),
) -> None:
    """dusty - find and clean disk caches."""
    interactive = ctx.invoked_subcommand in INTERACTIVE_COMMANDS
    if interactive and log_file is None:
        log_file = log_config.default_log_path()
    log_config.configure(log_level=log_level, log_file=log_file, console=not interactive)

    # If no command specified, launch the TUI
    if ctx.invoked_subcommand is None:
        ctx.invoke(tui, dry_run=False)


@app.command()
def scan(
    tree: bool = typer.Option(False, "--tree", help="Show the items inside each location"),
    workers: int = typer.Option(
        DEFAULT_MAX_WORKERS, "--workers", min=1, help="Locations to scan in parallel"
    ),
) -> None:
    """Scan cache locations and report reclaimable space."""
    try:
        catalog = build_catalog()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    with show_scanning_progress() as progress:
        task = progress.add_task("Scanning...", total=len(catalog))

        def update_progress(name: str, current: int, total: int):
            progress.update(task, completed=current, description=f"Scanned {name}")

        result = scan_catalog(catalog, progress_callback=update_progress, max_workers=workers)

    console.print()
    show_report(result, tree=tree)


@app.command(name="list")
def list_locations() -> None:
    """List the cache locations dusty scans."""
    try:
        catalog = build_catalog()
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    show_catalog(catalog)


@app.command()
def tui(
    dry_run: bool = typer.Option(False, "--dry-run", help="Simulate cleanup without deleting"),
) -> None:
    """Launch the interactive cleanup interface (default)."""
    from dusty.tui import run_tui

    run_tui(dry_run=dry_run)


if __name__ == "__main__":
    app()
