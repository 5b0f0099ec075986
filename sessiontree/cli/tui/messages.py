"""Custom Textual messages for the session tree app."""

from __future__ import annotations

from textual.message import Message

from sessiontree.cli.tui.types import NavigatorOutcome

# --- Loading messages ---


class LoadProgress(Message):
    """Status update from the session loader.

    `loaded`/`total` count header reads; both are 0 for plain status text.
    """

    def __init__(self, status: str, loaded: int = 0, total: int = 0) -> None:
        super().__init__()
        self.status = status
        self.loaded = loaded
        self.total = total


# --- Navigation messages ---


class NavigationFinished(Message):
    """The navigator reached a terminal state (selection or cancellation)."""

    def __init__(self, outcome: NavigatorOutcome) -> None:
        super().__init__()
        self.outcome = outcome
