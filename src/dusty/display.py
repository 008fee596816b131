"""Rich terminal display for dusty."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from dusty.models import CatalogEntry, Entry, ScanResult

console = Console()

KB = 1024
MB = KB * 1024
GB = MB * 1024


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (binary units)."""
    if size_bytes >= GB:
        return f"{size_bytes / GB:.1f} GB"
    elif size_bytes >= MB:
        return f"{size_bytes / MB:.1f} MB"
    elif size_bytes >= KB:
        return f"{size_bytes / KB:.1f} KB"
    else:
        return f"{size_bytes} B"


def size_style(size_bytes: int) -> str:
    """Color for a size: green when small, yellow past 500 MB, red past 2 GB."""
    if size_bytes >= 2 * GB:
        return "red"
    elif size_bytes >= 500 * MB:
        return "yellow"
    return "green"


def styled_size(size_bytes: int) -> str:
    """Size wrapped in Rich markup for its color."""
    color = size_style(size_bytes)
    return f"[{color}]{format_size(size_bytes)}[/{color}]"


def shorten_path(path: str, home: Optional[Path] = None) -> str:
    """Replace the home directory prefix with ~."""
    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            return path
    home_str = str(home)
    if path == home_str:
        return "~"
    if home_str and path.startswith(home_str.rstrip("/") + "/"):
        return "~" + path[len(home_str.rstrip("/")):]
    return path


def format_date(when: Optional[datetime]) -> str:
    """Short month-day label, or a dash when unknown."""
    return when.strftime("%b %d") if when else "-"


def format_duration(seconds: float) -> str:
    """Scan duration label."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def _entry_row(entry: Entry, indent: bool = False) -> tuple[str, str, str, str]:
    name = f"  └ {escape(entry.name)}" if indent else escape(entry.name)
    if entry.is_category and not indent:
        name = f"{name} [dim]({len(entry.children)})[/dim]"
    return (
        name,
        styled_size(entry.size),
        str(entry.file_count),
        format_date(entry.newest_mod),
    )


def show_report(result: ScanResult, tree: bool = False) -> None:
    """Display scan results as a table."""
    if not result.entries:
        console.print("[dim]No items found.[/dim]")
        return

    table = Table(title="Reclaimable Space", show_header=True, header_style="bold")
    table.add_column("Item")
    table.add_column("Size", justify="right")
    table.add_column("Files", justify="right")
    table.add_column("Modified")
    table.add_column("Path", style="dim italic")

    for entry in result.entries:
        label = entry.description or entry.name
        table.add_row(*_entry_row(entry), escape(shorten_path(entry.path)))
        if label != entry.name:
            table.add_row(f"[dim]{escape(label)}[/dim]", "", "", "", "")
        if tree:
            for child in entry.children:
                table.add_row(*_entry_row(child, indent=True), "")

    console.print(table)
    console.print(
        f"[bold]Total:[/bold] [blue]{format_size(result.total_size)}[/blue]  "
        f"[dim]scanned in {format_duration(result.scan_duration.total_seconds())}[/dim]"
    )


def show_catalog(catalog: list[CatalogEntry]) -> None:
    """Display the scanned locations."""
    console.print("[bold]Scanned Locations[/bold]\n")
    for target in catalog:
        marker = "[green]✓[/green]" if target.path.exists() else "[dim]·[/dim]"
        console.print(f"  {marker} [bold]{escape(target.description)}[/bold] {escape(shorten_path(str(target.path)))}")


def show_scanning_progress() -> Progress:
    """Create progress bar for scanning."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}/{task.total}"),
        TimeElapsedColumn(),
        console=console,
    )
