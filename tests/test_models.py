"""Tests for data models."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from dusty.models import (
    CatalogEntry,
    CleanupMode,
    CleanupOutcome,
    DirStats,
    DisplayRow,
    Entry,
    ScanResult,
)


class TestCleanupMode:
    def test_modes_exist(self):
        assert CleanupMode.PERMANENT == "permanent"
        assert CleanupMode.TRASH == "trash"

    def test_from_value(self):
        assert CleanupMode("trash") is CleanupMode.TRASH


class TestEntry:
    def test_defaults(self):
        entry = Entry(name="pip", path="/cache/pip")
        assert entry.size == 0
        assert entry.file_count == 0
        assert not entry.selected
        assert not entry.expanded
        assert not entry.is_category
        assert entry.children == []
        assert entry.description is None
        assert entry.depth == 0

    def test_path_is_immutable(self):
        entry = Entry(name="pip", path="/cache/pip")
        with pytest.raises(ValidationError):
            entry.path = "/elsewhere"

    def test_flags_are_mutable(self):
        entry = Entry(name="pip", path="/cache/pip")
        entry.selected = True
        entry.expanded = True
        assert entry.selected
        assert entry.expanded

    def test_rejects_negative_size(self):
        with pytest.raises(ValidationError):
            Entry(name="pip", path="/cache/pip", size=-1)

    def test_rejects_deep_nesting(self):
        with pytest.raises(ValidationError):
            Entry(name="pip", path="/cache/pip", depth=2)


class TestScanResult:
    def test_defaults(self):
        result = ScanResult()
        assert result.entries == []
        assert result.total_size == 0
        assert result.scan_duration == timedelta()

    def test_is_frozen(self):
        result = ScanResult(total_size=10)
        with pytest.raises(ValidationError):
            result.total_size = 20

    def test_keeps_entry_identity(self):
        entry = Entry(name="pip", path="/cache/pip", size=5)
        result = ScanResult(entries=[entry], total_size=5)
        assert result.entries[0] is entry


class TestDisplayRow:
    def test_references_entry(self):
        entry = Entry(name="pip", path="/cache/pip")
        row = DisplayRow(entry=entry, is_child=True, root_index=2)
        assert row.entry is entry
        assert row.is_child
        assert row.root_index == 2


class TestCatalogEntry:
    def test_path_coerced(self):
        target = CatalogEntry(path="/home/me/.npm/_cacache", description="npm Cache")
        assert target.path == Path("/home/me/.npm/_cacache")


class TestDirStats:
    def test_empty(self):
        stats = DirStats()
        assert stats.size == 0
        assert stats.newest_mod is None


class TestCleanupOutcome:
    def test_success_without_error(self):
        outcome = CleanupOutcome(mode=CleanupMode.TRASH, bytes_planned=100)
        assert outcome.success

    def test_failure_with_error(self):
        outcome = CleanupOutcome(
            mode=CleanupMode.PERMANENT,
            failed_path="/cache/pip",
            error="failed to clean /cache/pip: gone",
        )
        assert not outcome.success
