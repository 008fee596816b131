"""Tests for the cache location catalog."""

from pathlib import Path
from unittest.mock import patch

import pytest

from dusty.catalog import CATALOG_PATHS, build_catalog, resolve_home
from dusty.errors import ConfigurationError


class TestBuildCatalog:
    def test_catalog_not_empty(self):
        assert len(CATALOG_PATHS) > 0

    def test_paths_resolved_under_home(self, tmp_path):
        catalog = build_catalog(tmp_path)
        assert len(catalog) == len(CATALOG_PATHS)
        for target in catalog:
            assert target.path.is_absolute()
            assert tmp_path in target.path.parents

    def test_all_entries_have_labels(self, tmp_path):
        for target in build_catalog(tmp_path):
            assert target.description

    def test_known_locations(self, tmp_path):
        catalog = {t.description: t.path for t in build_catalog(tmp_path)}
        assert catalog["npm Cache"] == tmp_path / ".npm" / "_cacache"
        assert catalog["System & App Caches"] == tmp_path / "Library" / "Caches"
        assert catalog["Cargo Registry"] == tmp_path / ".cargo" / "registry"

    def test_paths_are_unique(self, tmp_path):
        paths = [t.path for t in build_catalog(tmp_path)]
        assert len(paths) == len(set(paths))

    def test_defaults_to_user_home(self):
        catalog = build_catalog()
        assert all(Path.home() in t.path.parents for t in catalog)


class TestResolveHome:
    def test_returns_home(self):
        assert resolve_home() == Path.home()

    def test_runtime_error_becomes_configuration_error(self):
        with patch("dusty.catalog.Path.home", side_effect=RuntimeError("Could not determine home directory.")):
            with pytest.raises(ConfigurationError):
                resolve_home()

    def test_relative_home_rejected(self):
        with patch("dusty.catalog.Path.home", return_value=Path("~")):
            with pytest.raises(ConfigurationError):
                resolve_home()
