"""Typed models shared by the session store, tree builder and TUI."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TypeAlias

ParentLink: TypeAlias = str | None


@dataclass(frozen=True)
class SessionSummary:
    """Point-in-time listing record for one session transcript."""

    path: str
    cwd: str
    created_at: datetime
    modified_at: datetime
    display_name: str | None = None
    first_line: str | None = None
    session_id: str | None = None
    message_count: int = 0


@dataclass(frozen=True)
class SessionHeader:
    """Fields read from the leading header record of a transcript."""

    parent_session: ParentLink = None


@dataclass(frozen=True)
class SessionNode:
    """A session summary joined with its resolved parent reference."""

    summary: SessionSummary
    parent_session: ParentLink = None

    @property
    def path(self) -> str:
        return self.summary.path

    @property
    def created_at(self) -> datetime:
        return self.summary.created_at

    @property
    def modified_at(self) -> datetime:
        return self.summary.modified_at
