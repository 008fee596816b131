"""Main TUI application for dusty."""

from pathlib import Path
from typing import Optional

from textual.app import App
from textual.binding import Binding

from dusty.session import CleanupSession
from dusty.tui.screens import MainScreen


class DustyApp(App):
    """Interactive cache cleanup application."""

    TITLE = "dusty"
    SUB_TITLE = "Clean up your Mac"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("ctrl+c", "quit", "Quit", show=False, priority=True),
    ]

    SCREENS = {
        "main": MainScreen,
    }

    def __init__(self, dry_run: bool = False, home: Optional[Path] = None):
        super().__init__()
        self.dry_run = dry_run
        self.home = home
        self.session = CleanupSession()

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        if self.dry_run:
            self.sub_title = f"{self.SUB_TITLE} (dry run)"
        self.push_screen("main")


def run_tui(dry_run: bool = False, home: Optional[Path] = None) -> None:
    """Run the interactive TUI.

    Args:
        dry_run: If True, don't actually remove files
        home: Home directory to build the catalog from (defaults to the user's)
    """
    app = DustyApp(dry_run=dry_run, home=home)
    app.run()
