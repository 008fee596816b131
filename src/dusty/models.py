"""Data models for dusty."""

from datetime import datetime, timedelta
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CleanupMode(str, Enum):
    """How selected items are removed."""

    PERMANENT = "permanent"  # Gone for good
    TRASH = "trash"  # Moved to the OS trash, recoverable


class CatalogEntry(BaseModel):
    """One known cache location."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(..., description="Absolute path of the cache location")
    description: str = Field(..., description="Human-readable label")


class DirStats(BaseModel):
    """Totals gathered while walking a directory."""

    size: int = Field(0, ge=0, description="Total bytes of regular files")
    file_count: int = Field(0, ge=0, description="Number of regular files")
    newest_mod: Optional[datetime] = Field(None, description="Most recent modification seen")
    oldest_mod: Optional[datetime] = Field(None, description="Oldest modification seen")


class Entry(BaseModel):
    """A category root or one of its immediate children."""

    name: str = Field(..., description="Display label (leaf name)")
    path: str = Field(..., frozen=True, description="Absolute filesystem path")
    size: int = Field(0, ge=0, description="Total bytes, including children")
    file_count: int = Field(0, ge=0, description="Number of regular files")
    newest_mod: Optional[datetime] = Field(None, description="Most recent modification")
    oldest_mod: Optional[datetime] = Field(None, description="Oldest modification")
    selected: bool = Field(False, description="Marked for cleanup")
    expanded: bool = Field(False, description="Children visible (categories only)")
    is_category: bool = Field(False, description="Has more than one non-empty child")
    children: list["Entry"] = Field(default_factory=list, description="Children, largest first")
    description: Optional[str] = Field(None, description="Catalog label, roots only")
    depth: int = Field(0, ge=0, le=1, description="0 for roots, 1 for children")


class ScanResult(BaseModel):
    """Snapshot produced by one scan of the catalog."""

    model_config = ConfigDict(frozen=True)

    entries: list[Entry] = Field(default_factory=list, description="Root entries, largest first")
    total_size: int = Field(0, ge=0, description="Sum of all root sizes")
    scan_duration: timedelta = Field(default_factory=timedelta, description="Wall-clock scan time")


class DisplayRow(BaseModel):
    """One projected line of the list view."""

    model_config = ConfigDict(frozen=True)

    entry: Entry
    is_child: bool = False
    root_index: int = Field(..., ge=0, description="Index of the owning root")


class CleanupOutcome(BaseModel):
    """Result of a cleanup batch."""

    mode: CleanupMode = Field(..., description="How paths were removed")
    bytes_planned: int = Field(
        0,
        ge=0,
        description="Bytes freed if every target succeeds; an upper bound after a failure",
    )
    removed: list[str] = Field(default_factory=list, description="Paths removed, in order")
    failed_path: Optional[str] = Field(None, description="Path that stopped the batch")
    error: Optional[str] = Field(None, description="Error message if the batch failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")

    @property
    def success(self) -> bool:
        """True when every target was removed."""
        return self.error is None
