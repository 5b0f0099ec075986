"""Unit tests for the incremental session filter."""

from datetime import datetime, timezone

import pytest

from sessiontree.core.filter import entry_search_text, filter_entries
from sessiontree.core.tree import build_session_tree, flatten_tree
from sessiontree.models import SessionNode, SessionSummary


def make_node(
    path: str,
    *,
    parent: str | None = None,
    modified: int = 0,
    created: int = 0,
    cwd: str = "/home/user/project",
    **fields,
) -> SessionNode:
    summary = SessionSummary(
        path=path,
        cwd=cwd,
        created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        modified_at=datetime.fromtimestamp(modified, tz=timezone.utc),
        **fields,
    )
    return SessionNode(summary=summary, parent_session=parent)


@pytest.fixture
def entries():
    nodes = [
        make_node("/a", modified=10, created=10, display_name="Refactor parser"),
        make_node("/b", parent="/a", created=11, first_line="Fix the Lexer bug"),
        make_node("/c", modified=20, created=5, cwd="/srv/other"),
    ]
    return flatten_tree(build_session_tree(nodes))


@pytest.mark.unit
def test_empty_query_returns_full_list(entries):
    assert filter_entries(entries, "") == entries
    assert filter_entries(entries, "   ") == entries


@pytest.mark.unit
def test_non_matching_query_returns_empty(entries):
    assert filter_entries(entries, "zzz-nothing") == []


@pytest.mark.unit
def test_match_is_case_insensitive_and_order_preserving(entries):
    result = filter_entries(entries, "LEXER")

    assert [entry.session.path for entry in result] == ["/b"]


@pytest.mark.unit
def test_matched_child_keeps_prefix_without_ancestors(entries):
    child = next(entry for entry in entries if entry.session.path == "/b")

    result = filter_entries(entries, "lexer")

    assert result[0].prefix == child.prefix
    assert result[0].depth == 1


@pytest.mark.unit
def test_filter_by_path_reduces_to_single_root(entries):
    result = filter_entries(entries, "/c")

    assert len(result) == 1
    assert result[0].session.path == "/c"
    assert result[0].prefix == ""


@pytest.mark.unit
def test_query_matches_cwd_and_display_name(entries):
    assert [e.session.path for e in filter_entries(entries, "srv/other")] == ["/c"]
    assert [e.session.path for e in filter_entries(entries, "refactor")] == ["/a"]


@pytest.mark.unit
def test_filter_is_idempotent(entries):
    once = filter_entries(entries, "project")
    twice = filter_entries(once, "project")

    assert twice == once


@pytest.mark.unit
def test_query_is_stripped(entries):
    assert [e.session.path for e in filter_entries(entries, "  lexer  ")] == ["/b"]


@pytest.mark.unit
def test_search_text_skips_missing_fields(entries):
    root = next(entry for entry in entries if entry.session.path == "/c")

    assert entry_search_text(root) == "/srv/other /c"
