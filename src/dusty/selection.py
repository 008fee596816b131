"""Selection state over a scanned entry tree."""

from datetime import timedelta
from typing import Iterator

from dusty.models import Entry, ScanResult


def iter_selected(roots: list[Entry]) -> Iterator[Entry]:
    """
    Yield the entries that count towards the selected size.

    A selected root stands for its whole subtree, whatever its children's
    flags say. Under an unselected root, each selected child counts on its
    own.
    """
    for root in roots:
        if root.selected:
            yield root
        else:
            for child in root.children:
                if child.selected:
                    yield child


class SelectionTree:
    """Owns the scanned roots and their selection and expansion flags."""

    def __init__(self, result: ScanResult | None = None):
        self.roots: list[Entry] = []
        self.total_size = 0
        self.scan_duration = timedelta()
        self.selected_size = 0
        if result is not None:
            self.replace(result)

    def replace(self, result: ScanResult) -> None:
        """Swap in the roots of a new scan, dropping the old tree."""
        self.roots = list(result.entries)
        self.total_size = result.total_size
        self.scan_duration = result.scan_duration
        self.recompute_selected_size()

    def toggle_expand(self, entry: Entry) -> None:
        """Expand or collapse a category. Leaves are left alone."""
        if entry.is_category:
            entry.expanded = not entry.expanded

    def toggle_select(self, entry: Entry) -> None:
        """Flip selection on an entry, cascading from a category to its children."""
        entry.selected = not entry.selected
        if entry.is_category:
            for child in entry.children:
                child.selected = entry.selected
        self.recompute_selected_size()

    def select_all(self) -> None:
        self._set_all(True)

    def deselect_all(self) -> None:
        self._set_all(False)

    def _set_all(self, value: bool) -> None:
        for root in self.roots:
            root.selected = value
            for child in root.children:
                child.selected = value
        self.recompute_selected_size()

    def recompute_selected_size(self) -> int:
        """Recompute the selected byte total from the flags."""
        self.selected_size = sum(e.size for e in iter_selected(self.roots))
        return self.selected_size

    def selected_targets(self) -> list[Entry]:
        """Entries a cleanup would remove, in display order."""
        return list(iter_selected(self.roots))
