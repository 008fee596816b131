"""Cleanup execution for dusty."""

import logging
import shutil
from pathlib import Path
from typing import Callable

from send2trash import send2trash

from dusty.errors import DestructiveActionError
from dusty.models import CleanupMode, CleanupOutcome, Entry
from dusty.selection import iter_selected

logger = logging.getLogger(__name__)


def is_path_safe(path: Path) -> bool:
    """
    Check if a path may be removed.

    The filesystem root and the home directory are never removed.
    """
    resolved = Path(path).absolute()
    if resolved == Path(resolved.anchor):
        return False
    try:
        if resolved == Path.home():
            return False
    except RuntimeError:
        pass
    return True


def remove_path(path: Path, mode: CleanupMode) -> None:
    """
    Permanently delete a path or move it to the trash.

    Args:
        path: File or directory to remove
        mode: CleanupMode.PERMANENT or CleanupMode.TRASH

    Raises:
        DestructiveActionError: If the path is protected or removal fails
    """
    path = Path(path)
    if not is_path_safe(path):
        raise DestructiveActionError(path, PermissionError("refusing to remove a protected path"))

    try:
        if mode == CleanupMode.TRASH:
            send2trash(str(path))
        elif path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as e:
        raise DestructiveActionError(path, e) from e


def collect_targets(roots: list[Entry]) -> list[Entry]:
    """
    Selected entries to clean, minus any nested inside another target.

    Catalog locations can overlap (pip's cache lives inside Library/Caches),
    and removing the outer path already removes the inner one.
    """
    targets = list(iter_selected(roots))
    paths = [Path(t.path) for t in targets]

    top_level = []
    for target, path in zip(targets, paths):
        if any(other != path and other in path.parents for other in paths):
            continue
        top_level.append(target)
    return top_level


def clean_selected(
    roots: list[Entry],
    mode: CleanupMode,
    dry_run: bool = False,
    progress_callback: Callable[[str, int, int], None] | None = None,
) -> CleanupOutcome:
    """
    Remove every selected entry.

    The batch stops at the first failure. Paths removed before it are not
    restored. The reported byte total is computed from the scan before
    anything is removed, so after a failure it is an upper bound.

    Args:
        roots: Root entries carrying selection flags
        mode: Permanent delete or trash
        dry_run: If True, don't actually remove anything
        progress_callback: Optional callback(path, current, total)

    Returns:
        CleanupOutcome describing what was removed and any failure
    """
    planned = sum(e.size for e in iter_selected(roots))
    targets = collect_targets(roots)
    outcome = CleanupOutcome(mode=mode, bytes_planned=planned, dry_run=dry_run)

    total = len(targets)
    for i, target in enumerate(targets):
        if progress_callback:
            progress_callback(target.path, i + 1, total)

        if dry_run:
            outcome.removed.append(target.path)
            continue

        try:
            remove_path(Path(target.path), mode)
        except DestructiveActionError as e:
            logger.warning("Cleanup stopped at %s: %s", e.path, e.cause)
            outcome.failed_path = str(e.path)
            outcome.error = str(e)
            break

        logger.info("Removed %s (%s)", target.path, mode.value)
        outcome.removed.append(target.path)

    return outcome
