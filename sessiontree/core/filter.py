"""Substring filter over flattened tree entries."""

from __future__ import annotations

from typing import Sequence

from sessiontree.core.tree import FlatEntry


def entry_search_text(entry: FlatEntry) -> str:
    """Lowercased text a query is matched against."""
    summary = entry.session.summary
    parts = (summary.first_line, summary.display_name, summary.cwd, summary.path)
    return " ".join(part for part in parts if part).lower()


def filter_entries(entries: Sequence[FlatEntry], query: str) -> list[FlatEntry]:
    """Return entries matching `query` case-insensitively, in their original order.

    A blank query keeps every entry. Matches keep their tree prefix as-is, so
    a child can show up without its ancestors.
    """
    needle = query.strip().lower()
    if not needle:
        return list(entries)
    return [entry for entry in entries if needle in entry_search_text(entry)]
