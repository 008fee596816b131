"""Flatten the entry tree into display rows."""

from dusty.models import DisplayRow, Entry


def _matches(text: str | None, needle: str) -> bool:
    return bool(text) and needle in text.lower()


def project_rows(roots: list[Entry], filter_text: str = "") -> list[DisplayRow]:
    """
    Build the ordered rows for the list view.

    A root is shown when the filter is empty or matches its name or
    description (case-insensitive). Children of a shown, expanded category
    follow it when they match by name. Expansion flags are never changed.

    Args:
        roots: Root entries in display order
        filter_text: Substring to filter on

    Returns:
        DisplayRows in display order
    """
    needle = filter_text.lower()
    rows: list[DisplayRow] = []

    for i, root in enumerate(roots):
        if needle and not (_matches(root.name, needle) or _matches(root.description, needle)):
            continue

        rows.append(DisplayRow(entry=root, is_child=False, root_index=i))

        if root.expanded and root.is_category:
            for child in root.children:
                if needle and not _matches(child.name, needle):
                    continue
                rows.append(DisplayRow(entry=child, is_child=True, root_index=i))

    return rows
