"""Known cache locations scanned by dusty."""

import logging
from pathlib import Path
from typing import Optional

from dusty.errors import ConfigurationError
from dusty.models import CatalogEntry

logger = logging.getLogger(__name__)

# (path relative to the home directory, label)
CATALOG_PATHS: list[tuple[tuple[str, ...], str]] = [
    # =============================================================================
    # System and application caches
    # =============================================================================
    (("Library", "Caches"), "System & App Caches"),
    (("Library", "Logs"), "Log Files"),
    # =============================================================================
    # Developer tooling
    # =============================================================================
    (("Library", "Developer", "Xcode", "DerivedData"), "Xcode Build Data"),
    (("Library", "Developer", "Xcode", "Archives"), "Xcode Archives"),
    ((".npm", "_cacache"), "npm Cache"),
    ((".cache", "yarn"), "Yarn Cache"),
    (("Library", "Caches", "pip"), "Python pip Cache"),
    (("Library", "Caches", "Homebrew"), "Homebrew Cache"),
    ((".gradle", "caches"), "Gradle Cache"),
    ((".cargo", "registry"), "Cargo Registry"),
    # =============================================================================
    # Browsers
    # =============================================================================
    (("Library", "Caches", "Google", "Chrome"), "Chrome Cache"),
    (("Library", "Caches", "com.apple.Safari"), "Safari Cache"),
]


def resolve_home() -> Path:
    """
    Resolve the current user's home directory.

    Raises:
        ConfigurationError: If the home directory cannot be determined
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError, OSError) as e:
        raise ConfigurationError(f"cannot resolve home directory: {e}") from e

    if not str(home) or not home.is_absolute():
        raise ConfigurationError(f"home directory is not an absolute path: {home!r}")
    return home


def build_catalog(home: Optional[Path] = None) -> list[CatalogEntry]:
    """
    Build the list of locations to scan.

    Args:
        home: Home directory to resolve paths against (defaults to the user's home)

    Returns:
        CatalogEntry list in catalog order
    """
    base = Path(home) if home is not None else resolve_home()
    catalog = [
        CatalogEntry(path=base.joinpath(*parts), description=label)
        for parts, label in CATALOG_PATHS
    ]
    logger.debug("Built catalog with %d entries under %s", len(catalog), base)
    return catalog
