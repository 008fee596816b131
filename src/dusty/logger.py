"""Logging configuration for dusty."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from platformdirs import PlatformDirs
from rich.console import Console
from rich.logging import RichHandler

APP_NAME = "dusty"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_installed: list[logging.Handler] = []


def default_log_path() -> Path:
    """Rotating log file location, creating folders as needed."""
    path = Path(PlatformDirs(appname=APP_NAME).user_log_dir)
    path.mkdir(parents=True, exist_ok=True)
    return path / f"{APP_NAME}.log"


def configure(
    log_level: str = "WARNING",
    log_file: Optional[Path] = None,
    console: bool = True,
) -> None:
    """
    Configure the root logger.

    Args:
        log_level: Level name for the handlers (DEBUG, INFO, ...)
        log_file: Write a rotating log here when given
        console: Log to stderr through Rich (off while the TUI owns the screen)
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)
    root = logging.getLogger()
    root.setLevel(level)

    # Avoid duplicate handlers when reconfiguring
    while _installed:
        handler = _installed.pop()
        root.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=2 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        file_handler.setLevel(level)
        _installed.append(file_handler)

    if console:
        console_handler = RichHandler(console=Console(stderr=True), show_path=False)
        console_handler.setLevel(level)
        _installed.append(console_handler)

    if not _installed:
        _installed.append(logging.NullHandler())

    for handler in _installed:
        root.addHandler(handler)
