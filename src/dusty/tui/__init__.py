"""Textual interface for dusty."""

from dusty.tui.app import DustyApp, run_tui

__all__ = ["DustyApp", "run_tui"]
