"""Shared TUI types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias


class NavigatorMode(str, Enum):
    """Interaction modes of the session tree navigator."""

    BROWSING = "browsing"
    SEARCHING = "searching"


class NotificationLevel(str, Enum):
    """Notification severity levels (Textual `notify` severities)."""

    INFO = "information"
    WARNING = "warning"
    ERROR = "error"


class ThemeMode(str, Enum):
    """Theme mode identifiers."""

    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class Selected:
    """Terminal outcome: the user committed to a session."""

    path: str


@dataclass(frozen=True)
class Cancelled:
    """Terminal outcome: the user backed out without choosing."""


NavigatorOutcome: TypeAlias = Selected | Cancelled
