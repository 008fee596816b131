"""Disk scanning functionality for dusty."""

import logging
import os
import stat
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Optional

from dusty.catalog import build_catalog
from dusty.errors import PathUnavailable
from dusty.models import CatalogEntry, DirStats, Entry, ScanResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4
DEFAULT_MAX_DEPTH = 20


def _mtime(st: os.stat_result) -> datetime:
    return datetime.fromtimestamp(st.st_mtime)


def _widen(newest: Optional[datetime], oldest: Optional[datetime], mod: datetime):
    if newest is None or mod > newest:
        newest = mod
    if oldest is None or mod < oldest:
        oldest = mod
    return newest, oldest


def collect_stats(path: Path, max_depth: int = DEFAULT_MAX_DEPTH) -> DirStats:
    """
    Recursively total the regular files under a path.

    Uses os.scandir without following symlinks, including at the top: a
    symlink is measured as nothing. Descendants that cannot be read or that
    sit deeper than max_depth are skipped, so the result may be a partial
    total. A file path is measured directly and a missing path yields an
    empty result.

    Args:
        path: Directory or file to measure
        max_depth: Maximum recursion depth below path

    Returns:
        DirStats with size, file count and modification-time range
    """
    try:
        st = os.lstat(path)
    except OSError:
        return DirStats()

    root_mod = _mtime(st)
    if not stat.S_ISDIR(st.st_mode):
        size = st.st_size if stat.S_ISREG(st.st_mode) else 0
        return DirStats(
            size=size,
            file_count=1 if stat.S_ISREG(st.st_mode) else 0,
            newest_mod=root_mod,
            oldest_mod=root_mod,
        )

    total_size = 0
    file_count = 0
    newest, oldest = root_mod, root_mod

    def _scan(p: str, depth: int):
        nonlocal total_size, file_count, newest, oldest
        if depth > max_depth:
            return
        try:
            with os.scandir(p) as entries:
                for entry in entries:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            info = entry.stat(follow_symlinks=False)
                            total_size += info.st_size
                            file_count += 1
                            newest, oldest = _widen(newest, oldest, _mtime(info))
                        elif entry.is_dir(follow_symlinks=False):
                            _scan(entry.path, depth + 1)
                    except OSError:
                        continue
        except OSError:
            pass

    _scan(str(path), 0)
    return DirStats(size=total_size, file_count=file_count, newest_mod=newest, oldest_mod=oldest)


def _build_child(path: Path) -> Optional[Entry]:
    try:
        st = os.lstat(path)
    except OSError:
        return None

    if stat.S_ISDIR(st.st_mode):
        stats = collect_stats(path)
    else:
        # Symlinks and special files are not counted
        if not stat.S_ISREG(st.st_mode):
            return None
        mod = _mtime(st)
        stats = DirStats(size=st.st_size, file_count=1, newest_mod=mod, oldest_mod=mod)

    return Entry(
        name=path.name,
        path=str(path),
        size=stats.size,
        file_count=stats.file_count,
        newest_mod=stats.newest_mod,
        oldest_mod=stats.oldest_mod,
        depth=1,
    )


def build_entry(path: Path, description: str) -> Entry:
    """
    Build a root entry for one catalog location and its immediate children.

    Children are measured recursively but only one level is kept in the
    tree. Empty children are dropped and the rest are sorted largest first.
    A root with fewer than two surviving children is returned as a flat
    leaf.

    Args:
        path: Catalog path to scan
        description: Catalog label for the root

    Returns:
        Root Entry (its size may be 0, which callers treat as nothing to report)

    Raises:
        PathUnavailable: If the path does not exist or cannot be stat'ed
    """
    path = Path(path)
    try:
        st = os.stat(path)
    except OSError as e:
        raise PathUnavailable(path, e) from e

    root_mod = _mtime(st)
    entry = Entry(
        name=path.name,
        path=str(path),
        description=description,
        newest_mod=root_mod,
        oldest_mod=root_mod,
    )

    try:
        with os.scandir(path) as it:
            names = [de.name for de in it]
    except OSError:
        # Not listable (a file, or no permission): measure it as a single item
        stats = collect_stats(path)
        entry.size = stats.size
        entry.file_count = stats.file_count
        entry.newest_mod = stats.newest_mod or root_mod
        entry.oldest_mod = stats.oldest_mod or root_mod
        return entry

    children: list[Entry] = []
    newest, oldest = root_mod, root_mod
    for name in names:
        child = _build_child(path / name)
        if child is None or child.size == 0:
            continue
        children.append(child)
        entry.size += child.size
        entry.file_count += child.file_count
        for mod in (child.newest_mod, child.oldest_mod):
            if mod is not None:
                newest, oldest = _widen(newest, oldest, mod)

    entry.newest_mod, entry.oldest_mod = newest, oldest

    children.sort(key=lambda c: c.size, reverse=True)

    # A single child is not worth expanding
    if len(children) > 1:
        entry.is_category = True
        entry.children = children

    return entry


def scan_catalog(
    catalog: list[CatalogEntry],
    progress_callback: Callable[[str, int, int], None] | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> ScanResult:
    """
    Scan every catalog location in parallel.

    Locations that are missing or fail to scan are skipped, and roots with
    nothing reclaimable are dropped.

    Args:
        catalog: Locations to scan
        progress_callback: Optional callback(description, current, total)
        max_workers: Number of parallel workers

    Returns:
        ScanResult with roots sorted largest first
    """
    start = time.perf_counter()
    entries: list[Entry] = []
    total = len(catalog)

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as executor:
        future_to_target = {
            executor.submit(build_entry, target.path, target.description): target
            for target in catalog
        }

        for i, future in enumerate(as_completed(future_to_target)):
            target = future_to_target[future]

            if progress_callback:
                progress_callback(target.description, i + 1, total)

            try:
                entry = future.result()
            except PathUnavailable:
                logger.debug("Skipping missing path %s", target.path)
                continue
            except Exception:
                logger.debug("Skipping %s after scan error", target.path, exc_info=True)
                continue

            if entry.size > 0:
                entries.append(entry)

    entries.sort(key=lambda e: e.size, reverse=True)
    duration = timedelta(seconds=time.perf_counter() - start)
    total_size = sum(e.size for e in entries)
    logger.info(
        "Scanned %d locations: %d with data, %d bytes in %.2fs",
        total,
        len(entries),
        total_size,
        duration.total_seconds(),
    )

    return ScanResult(entries=entries, total_size=total_size, scan_duration=duration)


def run_scan(
    home: Optional[Path] = None,
    progress_callback: Callable[[str, int, int], None] | None = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> ScanResult:
    """
    Build the catalog for a home directory and scan it.

    Raises:
        ConfigurationError: If the home directory cannot be resolved
    """
    catalog = build_catalog(home)
    return scan_catalog(catalog, progress_callback=progress_callback, max_workers=max_workers)
