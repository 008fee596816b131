"""Custom widgets for the dusty TUI."""

from rich.markup import escape
from rich.text import Text
from textual.widgets import Static

from dusty.display import format_date, format_duration, format_size, shorten_path, size_style
from dusty.models import DisplayRow, Entry
from dusty.session import CleanupSession

# Catppuccin Mocha
PEACH = "#fab387"
PINK = "#f5c2e7"
RED = "#f38ba8"
BLUE = "#89b4fa"
SAPPHIRE = "#74c7ec"
LAVENDER = "#b4befe"
YELLOW = "#f9e2af"
OVERLAY0 = "#6c7086"
OVERLAY1 = "#7f849c"
BASE = "#1e1e2e"

SIZE_COLORS = {"green": "#a6e3a1", "yellow": YELLOW, "red": "#eba0ac"}

CURSOR_STYLE = f"bold {BASE} on {BLUE}"


def _truncate(name: str, width: int) -> str:
    if len(name) > width:
        return name[: width - 3] + "..."
    return name


def _checkbox(entry: Entry) -> str:
    if entry.selected:
        return f"[{RED}]\\[✓][/{RED}]"
    return f"[{OVERLAY0}]\\[ ][/{OVERLAY0}]"


def _details(entry: Entry) -> str:
    color = SIZE_COLORS[size_style(entry.size)]
    size = f"{format_size(entry.size):>10}"
    files = f"{entry.file_count} files"
    return (
        f"[{color}]{size}[/{color}]  "
        f"[{SAPPHIRE}]{files:>12}[/{SAPPHIRE}]  "
        f"[{LAVENDER}]{format_date(entry.newest_mod)}[/{LAVENDER}]"
    )


def render_row(row: DisplayRow, is_cursor: bool) -> list[Text]:
    """Render one display row as one or two lines."""
    entry = row.entry

    if row.is_child:
        cursor = "  👉" if is_cursor else "    "
        name = escape(f"{_truncate(entry.name, 25):<25}")
        line = Text.from_markup(f"{cursor}{_checkbox(entry)}   {name}  {_details(entry)}")
        if is_cursor:
            line.stylize(CURSOR_STYLE)
        else:
            line.stylize("dim")
        return [line]

    cursor = "👉" if is_cursor else "  "
    if entry.is_category:
        icon = f"[{PEACH}]{'▼' if entry.expanded else '▶'}[/{PEACH}] "
    else:
        icon = "  "
    name = escape(f"{_truncate(entry.name, 20):<20}")
    line = Text.from_markup(f"{cursor}{_checkbox(entry)} {icon}{name}  {_details(entry)}")
    if is_cursor:
        line.stylize(CURSOR_STYLE)

    label = f" {entry.description}" if entry.description and entry.description != entry.name else ""
    path_line = Text.from_markup(
        f"       [italic {OVERLAY1}]{escape(shorten_path(entry.path))}[/italic {OVERLAY1}]"
        f"[{OVERLAY0}]{escape(label)}[/{OVERLAY0}]"
    )
    return [line, path_line]


def visible_window(count: int, cursor: int, capacity: int) -> tuple[int, int]:
    """Row range to draw so the cursor stays on screen."""
    capacity = max(5, capacity)
    start = 0
    if cursor >= capacity:
        start = cursor - capacity + 1
    return start, min(count, start + capacity)


class EntryList(Static):
    """Scrolling list of display rows with a cursor."""

    def __init__(self, session: CleanupSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def render(self) -> Text:
        """Render the visible rows."""
        session = self.session
        if not session.rows:
            return Text.from_markup(f"\n  [{OVERLAY0}]No items found.[/{OVERLAY0}]")

        # Root rows take two lines
        capacity = self.size.height // 2 if self.size.height else 10
        start, end = visible_window(len(session.rows), session.cursor, capacity)

        lines: list[Text] = []
        for i in range(start, end):
            lines.extend(render_row(session.rows[i], i == session.cursor))
        return Text("\n").join(lines)


class StatsBar(Static):
    """Totals line under the list."""

    def __init__(self, session: CleanupSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def render(self) -> str:
        """Render totals, item count, filter and scan time."""
        session = self.session
        parts = [
            f"Total: [{BLUE}]{format_size(session.total_size)}[/{BLUE}]",
            f"Selected: [{PINK}]{format_size(session.selected_size)}[/{PINK}]",
            f"Items: {len(session.rows)}",
        ]
        if session.filter_text:
            parts.append(f"Filter: [{YELLOW}]{escape(session.filter_text)}[/{YELLOW}]")
        if session.scan_seconds:
            parts.append(f"[dim]Scanned in {format_duration(session.scan_seconds)}[/dim]")
        return "  " + "  │  ".join(parts)


class StatusMessage(Static):
    """Scan errors and cleanup results."""

    def __init__(self, session: CleanupSession, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session

    def render(self) -> str:
        """Render the current error and message."""
        session = self.session
        lines = []
        if session.error:
            lines.append(f"[bold {RED}]Error: {escape(session.error)}[/bold {RED}]")
        if session.message:
            color = RED if session.message_is_error else "#a6e3a1"
            lines.append(f"[bold {color}]{escape(session.message)}[/bold {color}]")
        return "\n".join(lines)
