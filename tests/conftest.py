"""Shared test fixtures."""

import pytest

from dusty.models import Entry


def make_leaf(name: str, size: int, path: str | None = None, depth: int = 0) -> Entry:
    return Entry(name=name, path=path or f"/cache/{name}", size=size, file_count=1, depth=depth)


def make_category(name: str, child_sizes: list[int], description: str | None = None) -> Entry:
    children = [
        make_leaf(f"{name}-{i}", size, path=f"/cache/{name}/{name}-{i}", depth=1)
        for i, size in enumerate(sorted(child_sizes, reverse=True))
    ]
    return Entry(
        name=name,
        path=f"/cache/{name}",
        size=sum(child_sizes),
        file_count=len(children),
        is_category=True,
        children=children,
        description=description,
    )


@pytest.fixture
def roots() -> list[Entry]:
    """Two categories and a flat leaf, largest first."""
    return [
        make_category("Caches", [700, 300, 100], description="System & App Caches"),
        make_category("Logs", [400, 200], description="Log Files"),
        make_leaf("registry", 50),
    ]
