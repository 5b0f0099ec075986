"""Shared fixtures for integration tests: a stub session store and app factory."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from sessiontree.cli.tui.app import SessionTreeApp
from sessiontree.cli.tui.theme import DARK_STYLE
from sessiontree.models import SessionHeader, SessionSummary

# /b was branched from /a; /c is a separate, more recently modified root.
PARENTS = {"/a": None, "/b": "/a", "/c": None}


def make_summary(path: str, modified: int, created: int) -> SessionSummary:
    return SessionSummary(
        path=path,
        cwd="/srv/project",
        created_at=datetime.fromtimestamp(created, tz=timezone.utc),
        modified_at=datetime.fromtimestamp(modified, tz=timezone.utc),
        display_name=f"session {path}",
    )


def _store_stub(sessions: list[SessionSummary] | None = None, error: Exception | None = None) -> SimpleNamespace:
    listing = AsyncMock(return_value=sessions or [], side_effect=error)
    return SimpleNamespace(list_project=listing, list_all=listing)


async def parent_reader(path: str) -> SessionHeader | None:
    return SessionHeader(parent_session=PARENTS.get(path))


@pytest.fixture
def store_stub():
    """Factory for a store whose listing returns `sessions` or raises `error`."""
    return _store_stub


@pytest.fixture
def sample_sessions() -> list[SessionSummary]:
    return [make_summary("/c", 20, 5), make_summary("/a", 10, 10), make_summary("/b", 11, 11)]


@pytest.fixture
def statuses() -> list[tuple[str, int, int]]:
    return []


@pytest.fixture
def make_app(statuses):
    """Build a `SessionTreeApp` over a stub store, recording status notifications."""

    def factory(store: SimpleNamespace, **kwargs) -> SessionTreeApp:
        kwargs.setdefault("reader", parent_reader)
        return SessionTreeApp(
            store,  # type: ignore[arg-type]
            cwd="/srv/project",
            on_status=lambda status, loaded, total: statuses.append((status, loaded, total)),
            tree_style=DARK_STYLE,
            **kwargs,
        )

    return factory
