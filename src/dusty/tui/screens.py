"""TUI screens for dusty."""

from rich.markup import escape
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.screen import ModalScreen, Screen
from textual.widgets import Footer, Header, Input, LoadingIndicator, Static

from dusty.cleaner import clean_selected
from dusty.display import format_size, shorten_path
from dusty.errors import ConfigurationError
from dusty.models import CleanupMode, CleanupOutcome, Entry, ScanResult
from dusty.scanner import run_scan
from dusty.session import ViewState
from dusty.tui.widgets import EntryList, StatsBar, StatusMessage

HELP_KEYS = [
    ("↑/k, ↓/j", "Navigate up/down"),
    ("Enter/l", "Expand/collapse"),
    ("Space", "Toggle selection"),
    ("a", "Select all"),
    ("A", "Deselect all"),
    ("t", "🗑️  Move to Trash"),
    ("c", "💀 Clean (permanent)"),
    ("r", "🔄 Rescan directories"),
    ("/", "🔍 Filter items"),
    ("Esc", "Clear filter"),
    ("?", "❓ Show this help"),
    ("q", "👋 Quit"),
]


class MainScreen(Screen):
    """Scan results with selection, filtering and cleanup."""

    BINDINGS = [
        Binding("up,k", "cursor_up", "Up", show=False),
        Binding("down,j", "cursor_down", "Down", show=False),
        Binding("enter,l", "toggle_expand", "Expand"),
        Binding("space", "toggle_select", "Select"),
        Binding("a", "select_all", "All"),
        Binding("A", "deselect_all", "None"),
        Binding("t", "cleanup('trash')", "Trash"),
        Binding("c", "cleanup('permanent')", "Clean"),
        Binding("r", "rescan", "Rescan"),
        Binding("slash", "filter", "Filter"),
        Binding("escape", "back", "Clear filter", show=False),
        Binding("question_mark", "help", "Help"),
    ]

    def compose(self) -> ComposeResult:
        session = self.app.session
        yield Header()

        with Container(id="main-container"):
            yield StatusMessage(session, id="status-message")
            with Horizontal(id="busy"):
                yield LoadingIndicator(id="spinner")
                yield Static("Scanning directories...", id="busy-label")
            yield EntryList(session, id="entry-list")
            yield StatsBar(session, id="stats")
            yield Input(placeholder="Filter...", max_length=50, id="filter-input")

        yield Footer()

    def on_mount(self) -> None:
        """Start the first scan."""
        self.query_one("#filter-input", Input).display = False
        self._start_scan()

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def refresh_view(self) -> None:
        """Redraw every widget from the session state."""
        session = self.app.session
        busy = self.query_one("#busy", Horizontal)
        busy.display = session.busy
        if session.busy:
            label = "Cleaning..." if session.state == ViewState.CLEANING else "Scanning directories..."
            self.query_one("#busy-label", Static).update(label)

        entry_list = self.query_one("#entry-list", EntryList)
        entry_list.display = not session.busy
        entry_list.refresh()
        self.query_one("#stats", StatsBar).refresh()
        self.query_one("#status-message", StatusMessage).refresh()

    # -------------------------------------------------------------------------
    # Background work
    # -------------------------------------------------------------------------

    def _start_scan(self) -> None:
        self.refresh_view()
        self.run_worker(self._scan, thread=True, exclusive=True, group="io")

    def _scan(self) -> None:
        """Scan in a worker thread and hand the result back to the UI."""
        app = self.app
        try:
            result = run_scan(home=app.home)
        except ConfigurationError as e:
            app.call_from_thread(self._scan_failed, str(e))
            return
        except Exception as e:
            app.call_from_thread(self._scan_failed, f"scan failed: {e}")
            return
        app.call_from_thread(self._scan_finished, result)

    def _scan_finished(self, result: ScanResult) -> None:
        self.app.session.finish_scan(result)
        self.refresh_view()

    def _scan_failed(self, error: str) -> None:
        self.app.session.fail_scan(error)
        self.refresh_view()

    def _start_cleanup(self, mode: CleanupMode) -> None:
        roots = list(self.app.session.roots)
        self.refresh_view()
        self.run_worker(lambda: self._clean(roots, mode), thread=True, exclusive=True, group="io")

    def _clean(self, roots: list[Entry], mode: CleanupMode) -> None:
        """Clean in a worker thread and hand the outcome back to the UI."""
        app = self.app
        outcome = clean_selected(roots, mode, dry_run=app.dry_run)
        app.call_from_thread(self._cleanup_finished, outcome)

    def _cleanup_finished(self, outcome: CleanupOutcome) -> None:
        session = self.app.session
        session.finish_cleanup(outcome)
        self.notify(session.message, severity="error" if session.message_is_error else "information")
        self._start_scan()

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    def action_cursor_up(self) -> None:
        self.app.session.move_up()
        self.refresh_view()

    def action_cursor_down(self) -> None:
        self.app.session.move_down()
        self.refresh_view()

    def action_toggle_expand(self) -> None:
        self.app.session.toggle_expand()
        self.refresh_view()

    def action_toggle_select(self) -> None:
        self.app.session.toggle_select()
        self.refresh_view()

    def action_select_all(self) -> None:
        self.app.session.select_all()
        self.refresh_view()

    def action_deselect_all(self) -> None:
        self.app.session.deselect_all()
        self.refresh_view()

    def action_rescan(self) -> None:
        if self.app.session.begin_scan():
            self._start_scan()

    def action_filter(self) -> None:
        session = self.app.session
        session.start_filter()
        if session.state != ViewState.FILTER:
            return
        filter_input = self.query_one("#filter-input", Input)
        filter_input.value = session.filter_text
        filter_input.display = True
        filter_input.focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Apply the filter."""
        self.app.session.commit_filter(event.value)
        self._hide_filter()

    def _hide_filter(self) -> None:
        self.query_one("#filter-input", Input).display = False
        self.set_focus(None)
        self.refresh_view()

    def action_back(self) -> None:
        """Cancel filter entry, or clear the active filter."""
        session = self.app.session
        if session.state == ViewState.FILTER:
            session.cancel_filter()
            self._hide_filter()
        else:
            session.clear_filter()
            self.refresh_view()

    def action_cleanup(self, mode: str) -> None:
        """Confirm, then remove the selection."""
        session = self.app.session
        if not session.request_cleanup(CleanupMode(mode)):
            if session.state == ViewState.LIST:
                self.notify("No items selected", severity="warning")
            return

        def on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                session.cancel_confirm()
                self.refresh_view()
                return
            chosen = session.confirm()
            if chosen is not None:
                self._start_cleanup(chosen)

        self.app.push_screen(
            ConfirmScreen(session.selected_targets(), CleanupMode(mode), session.selected_size),
            on_confirm,
        )

    def action_help(self) -> None:
        session = self.app.session
        session.show_help()
        if session.state != ViewState.HELP:
            return

        def on_close(_: None) -> None:
            session.dismiss_help()

        self.app.push_screen(HelpScreen(), on_close)


class ConfirmScreen(ModalScreen[bool]):
    """Confirmation before a destructive action."""

    BINDINGS = [
        Binding("y", "confirm", "Yes"),
        Binding("n", "cancel", "No"),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    def __init__(self, targets: list[Entry], mode: CleanupMode, total_bytes: int):
        super().__init__()
        self.targets = targets
        self.mode = mode
        self.total_bytes = total_bytes

    def compose(self) -> ComposeResult:
        if self.mode == CleanupMode.PERMANENT:
            title = "💀 Confirm Clean"
            action = "Clean"
        else:
            title = "🗑️ Confirm Move to Trash"
            action = "Move to Trash"

        with VerticalScroll(id="confirm-container"):
            yield Static(f"[bold]{title}[/bold]", id="confirm-title")
            if self.mode == CleanupMode.PERMANENT:
                yield Static(
                    "[bold red]⚠️  WARNING: This will PERMANENTLY remove these files! "
                    "They cannot be recovered![/bold red]",
                    id="confirm-warning",
                )
            items = [
                f"  • {escape(t.name)} ({format_size(t.size)})\n"
                f"    [dim italic]{escape(shorten_path(t.path))}[/dim italic]"
                for t in self.targets
            ]
            yield Static("\n".join(items), id="confirm-items")
            yield Static(
                f"\n[bold red]{action} {len(self.targets)} items ({format_size(self.total_bytes)})?[/bold red]\n"
                "[dim]Press y to confirm, n to cancel[/dim]",
                id="confirm-prompt",
            )

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


class HelpScreen(ModalScreen[None]):
    """Key reference. Any key closes it."""

    CLOSE_KEYS = ("q", "escape", "question_mark")

    BINDINGS = [
        Binding(",".join(CLOSE_KEYS), "close", "Close", show=False),
    ]

    def compose(self) -> ComposeResult:
        lines = ["[bold]Help[/bold]", ""]
        for key, desc in HELP_KEYS:
            lines.append(f"  [#fab387]{escape(key):<12}[/#fab387] {desc}")
        lines.extend(["", "[dim]Press any key to return[/dim]"])
        yield Static("\n".join(lines), id="help-content")

    def on_key(self, event: events.Key) -> None:
        # Close keys go through BINDINGS so app bindings never see them
        if event.key in self.CLOSE_KEYS:
            return
        event.stop()
        event.prevent_default()
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
