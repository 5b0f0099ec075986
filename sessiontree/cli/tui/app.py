"""Textual host for the session tree navigator.

Lifecycle: list sessions -> read parent references (with progress) -> build
the forest -> browse/search -> exit with the selected path, or None.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical

from sessiontree.cli.tui.messages import LoadProgress, NavigationFinished
from sessiontree.cli.tui.navigator import SessionTreeSelector
from sessiontree.cli.tui.theme import TreeStyle, resolve_tree_style
from sessiontree.cli.tui.types import NotificationLevel, Selected
from sessiontree.cli.tui.widgets.loading_panel import LoadingPanel
from sessiontree.cli.tui.widgets.session_tree_view import SessionTreeView
from sessiontree.config import config
from sessiontree.core.errors import SessionListingError
from sessiontree.core.header import HeaderReader, load_session_parents, read_session_header
from sessiontree.core.store import SessionStore
from sessiontree.core.tree import TreeNode, build_session_tree

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str, int, int], None]

STATUS_NO_SESSIONS = "No sessions found"
STATUS_READY = "ready"


def visible_line_count(rows: int) -> int:
    """Rows given to the session list for a terminal `rows` tall."""
    return max(config.min_visible_lines, math.floor(rows * config.visible_fraction))


class SessionTreeApp(App[Optional[str]]):
    """Load sessions, show them as a lineage tree and return the chosen path.

    `on_status` receives every status/progress notification as
    `(status, loaded, total)`.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
    ]

    CSS = """
    #tree-frame {
        height: auto;
        border: round $accent;
    }
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        cwd: str,
        show_all_projects: bool = False,
        current_session_path: Optional[str] = None,
        reader: HeaderReader = read_session_header,
        on_status: Optional[StatusCallback] = None,
        tree_style: Optional[TreeStyle] = None,
        **kwargs: object,
    ) -> None:
        super().__init__(**kwargs)
        self.store = store
        self.cwd = cwd
        self.show_all_projects = show_all_projects
        self.current_session_path = current_session_path
        self.reader = reader
        self._on_status = on_status
        self.tree_style = tree_style or resolve_tree_style()
        self.error: Optional[Exception] = None
        self.status = ""
        self._finished = False

    def compose(self) -> ComposeResult:
        with Vertical(id="tree-frame"):
            yield LoadingPanel(self.tree_style, id="loading")

    def on_mount(self) -> None:
        self.run_worker(self._load_sessions(), exclusive=True, name="load-sessions")

    # --- Loading ---

    async def _load_sessions(self) -> None:
        self._report("Listing sessions")
        try:
            if self.show_all_projects:
                sessions = await self.store.list_all()
            else:
                sessions = await self.store.list_project(self.cwd)
        except Exception as e:  # noqa: BLE001 - listing failure ends this invocation
            self._fail(e)
            return
        if self._finished:
            return

        if not sessions:
            self._report(STATUS_NO_SESSIONS)
            self._finish(None)
            return

        def progress(loaded: int, total: int) -> None:
            if not self._finished:
                self.post_message(LoadProgress("Loading sessions", loaded, total))

        try:
            nodes = await load_session_parents(
                sessions,
                on_progress=progress,
                max_concurrency=config.max_concurrency,
                reader=self.reader,
            )
            if self._finished:
                logger.debug("Discarding %d loaded sessions after exit", len(nodes))
                return
            roots = build_session_tree(nodes)
        except Exception as e:  # noqa: BLE001 - any loader failure aborts before browsing
            self._fail(e)
            return

        await self._show_tree(roots)

    async def _show_tree(self, roots: list[TreeNode]) -> None:
        if self._finished:
            return
        selector = SessionTreeSelector(
            roots,
            visible_line_count(self.size.height),
            self.show_all_projects,
            self.current_session_path,
        )
        view = SessionTreeView(selector, self.tree_style, id="tree")
        frame = self.query_one("#tree-frame", Vertical)
        await self.query_one("#loading", LoadingPanel).remove()
        await frame.mount(view)
        view.focus()
        self._report(STATUS_READY)

    def _fail(self, error: Exception) -> None:
        logger.error("Loading sessions failed: %s", error, exc_info=not isinstance(error, SessionListingError))
        self.error = error
        self._report(f"Error loading sessions: {error}")
        self.notify(f"Error loading sessions: {error}", severity=NotificationLevel.ERROR.value)
        self._finish(None)

    def _report(self, status: str, loaded: int = 0, total: int = 0) -> None:
        self.status = status
        if self._on_status:
            self._on_status(status, loaded, total)

    def _finish(self, path: Optional[str]) -> None:
        if self._finished:
            return
        self._finished = True
        self.exit(path)

    # --- Events ---

    def on_load_progress(self, message: LoadProgress) -> None:
        if self._finished:
            return
        self._report(message.status, message.loaded, message.total)
        for panel in self.query(LoadingPanel):
            panel.set_progress(message.loaded, message.total)

    def on_navigation_finished(self, message: NavigationFinished) -> None:
        outcome = message.outcome
        self._finish(outcome.path if isinstance(outcome, Selected) else None)

    def action_cancel(self) -> None:
        """Escape before the tree is shown: give up without waiting for the loader."""
        self._finish(None)
