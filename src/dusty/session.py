"""Interactive cleanup session state.

The session is the single owner of the scanned tree while the TUI runs.
Every input event and every background completion is applied here, one at a
time, and the TUI renders whatever the session exposes afterwards. Events
that don't make sense in the current state are ignored, so a keypress can
never mutate the tree while a scan or cleanup is running.
"""

import logging
from enum import Enum
from typing import Optional

from dusty.display import format_size
from dusty.models import CleanupMode, CleanupOutcome, DisplayRow, Entry, ScanResult
from dusty.selection import SelectionTree
from dusty.view import project_rows

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    """What the interactive surface is showing."""

    SCANNING = "scanning"
    LIST = "list"
    FILTER = "filter"
    CONFIRM = "confirm"
    CLEANING = "cleaning"
    HELP = "help"


def describe_outcome(outcome: CleanupOutcome) -> str:
    """Status line for a finished cleanup."""
    if not outcome.success:
        text = f"Error: {outcome.error}"
        if outcome.removed:
            text += f" ({len(outcome.removed)} items were already removed)"
        return text

    verb = "Moved to Trash" if outcome.mode == CleanupMode.TRASH else "Cleaned"
    text = f"{verb} {format_size(outcome.bytes_planned)}!"
    if outcome.dry_run:
        text = f"Dry run: would have {verb.lower()} {format_size(outcome.bytes_planned)}"
    return text


class CleanupSession:
    """State machine behind the interactive list."""

    def __init__(self):
        self.tree = SelectionTree()
        self.rows: list[DisplayRow] = []
        self.cursor = 0
        self.state = ViewState.SCANNING
        self.filter_text = ""
        self.message = ""
        self.message_is_error = False
        self.error: Optional[str] = None
        self.pending_mode: Optional[CleanupMode] = None

    # -------------------------------------------------------------------------
    # Per-frame values
    # -------------------------------------------------------------------------

    @property
    def roots(self) -> list[Entry]:
        return self.tree.roots

    @property
    def total_size(self) -> int:
        return self.tree.total_size

    @property
    def selected_size(self) -> int:
        return self.tree.selected_size

    @property
    def scan_seconds(self) -> float:
        return self.tree.scan_duration.total_seconds()

    @property
    def current_row(self) -> Optional[DisplayRow]:
        if 0 <= self.cursor < len(self.rows):
            return self.rows[self.cursor]
        return None

    @property
    def busy(self) -> bool:
        return self.state in (ViewState.SCANNING, ViewState.CLEANING)

    def selected_targets(self) -> list[Entry]:
        return self.tree.selected_targets()

    def rebuild_rows(self) -> None:
        """Re-project the tree after a structural change."""
        self.rows = project_rows(self.tree.roots, self.filter_text)
        if self.cursor >= len(self.rows):
            self.cursor = max(0, len(self.rows) - 1)

    # -------------------------------------------------------------------------
    # Scanning
    # -------------------------------------------------------------------------

    def begin_scan(self) -> bool:
        """Enter the scanning state. Returns False if a scan can't start now."""
        if self.state not in (ViewState.LIST, ViewState.CLEANING):
            return False
        self.state = ViewState.SCANNING
        self.message = ""
        self.message_is_error = False
        self.cursor = 0
        return True

    def finish_scan(self, result: ScanResult) -> None:
        if self.state != ViewState.SCANNING:
            return
        self.tree.replace(result)
        self.error = None
        self.state = ViewState.LIST
        self.rebuild_rows()

    def fail_scan(self, error: str) -> None:
        if self.state != ViewState.SCANNING:
            return
        logger.error("Scan failed: %s", error)
        self.error = error
        self.state = ViewState.LIST
        self.rebuild_rows()

    # -------------------------------------------------------------------------
    # Navigation and selection
    # -------------------------------------------------------------------------

    def move_up(self) -> None:
        if self.state == ViewState.LIST and self.cursor > 0:
            self.cursor -= 1

    def move_down(self) -> None:
        if self.state == ViewState.LIST and self.cursor < len(self.rows) - 1:
            self.cursor += 1

    def toggle_expand(self) -> None:
        row = self.current_row
        if self.state != ViewState.LIST or row is None:
            return
        if not row.is_child and row.entry.is_category:
            self.tree.toggle_expand(row.entry)
            self.rebuild_rows()

    def toggle_select(self) -> None:
        row = self.current_row
        if self.state != ViewState.LIST or row is None:
            return
        self.tree.toggle_select(row.entry)

    def select_all(self) -> None:
        if self.state == ViewState.LIST:
            self.tree.select_all()

    def deselect_all(self) -> None:
        if self.state == ViewState.LIST:
            self.tree.deselect_all()

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def start_filter(self) -> None:
        if self.state == ViewState.LIST:
            self.state = ViewState.FILTER

    def commit_filter(self, text: str) -> None:
        if self.state != ViewState.FILTER:
            return
        self.filter_text = text.strip()
        self.state = ViewState.LIST
        self.cursor = 0
        self.rebuild_rows()

    def cancel_filter(self) -> None:
        if self.state == ViewState.FILTER:
            self.state = ViewState.LIST

    def clear_filter(self) -> None:
        if self.state != ViewState.LIST or not self.filter_text:
            return
        self.filter_text = ""
        self.cursor = 0
        self.rebuild_rows()

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    def request_cleanup(self, mode: CleanupMode) -> bool:
        """Ask for confirmation before removing the selection."""
        if self.state != ViewState.LIST or self.selected_size <= 0:
            return False
        self.pending_mode = mode
        self.state = ViewState.CONFIRM
        return True

    def confirm(self) -> Optional[CleanupMode]:
        """Accept the pending action. Returns the mode to run, if any."""
        if self.state != ViewState.CONFIRM or self.pending_mode is None:
            return None
        self.state = ViewState.CLEANING
        return self.pending_mode

    def cancel_confirm(self) -> None:
        if self.state == ViewState.CONFIRM:
            self.pending_mode = None
            self.state = ViewState.LIST

    def finish_cleanup(self, outcome: CleanupOutcome) -> None:
        """Record a cleanup result and start the follow-up rescan."""
        if self.state != ViewState.CLEANING:
            return
        self.pending_mode = None
        text = describe_outcome(outcome)
        self.begin_scan()
        self.message = text
        self.message_is_error = not outcome.success

    # -------------------------------------------------------------------------
    # Help
    # -------------------------------------------------------------------------

    def show_help(self) -> None:
        if self.state == ViewState.LIST:
            self.state = ViewState.HELP

    def dismiss_help(self) -> None:
        if self.state == ViewState.HELP:
            self.state = ViewState.LIST
