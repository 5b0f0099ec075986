"""Selection model for the session tree.

Holds everything that changes while the user browses: the filter query, the
selected row, the scroll window and the current mode. Rendering produces
plain `rich.text.Text` lines for a given width, so the model can be driven
without a running Textual app.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from rich.cells import cell_len
from rich.text import Text

from sessiontree.cli.tui.theme import TreeStyle
from sessiontree.cli.tui.types import Cancelled, NavigatorMode, NavigatorOutcome, Selected
from sessiontree.cli.tui.utils.formatters import first_line, format_relative_date, shorten_path, truncate_to_width
from sessiontree.constants import CURRENT_SESSION_INDICATOR, EMPTY_SESSION_LABEL, NO_INDICATOR, SEARCH_CURSOR
from sessiontree.core.filter import filter_entries
from sessiontree.core.tree import FlatEntry, TreeNode, flatten_tree

logger = logging.getLogger(__name__)

# Names narrower than this are left whole and clipped with the row instead.
_MIN_NAME_WIDTH = 10

BROWSING_HELP = "↑↓/jk: navigate • enter: select • /: filter • esc: cancel"
SEARCHING_HELP = "enter: apply filter • esc: cancel search"

_UP_KEYS = {"up", "k"}
_DOWN_KEYS = {"down", "j"}


class SessionTreeSelector:
    """Keyboard-driven, filterable selection over a flattened session forest."""

    def __init__(
        self,
        roots: Sequence[TreeNode],
        max_visible_lines: int,
        show_all_projects: bool = False,
        current_session_path: Optional[str] = None,
    ) -> None:
        self.max_visible_lines = max(1, max_visible_lines)
        self.show_all_projects = show_all_projects
        self.current_session_path = current_session_path

        self.entries: list[FlatEntry] = flatten_tree(roots)
        self.filtered: list[FlatEntry] = self.entries
        self.selected_index = 0
        self.scroll_offset = 0
        self.query = ""
        self.mode = NavigatorMode.BROWSING

        if current_session_path:
            for idx, entry in enumerate(self.entries):
                if entry.session.path == current_session_path:
                    self.selected_index = idx
                    self._ensure_visible()
                    break

    @property
    def selected_entry(self) -> FlatEntry | None:
        if 0 <= self.selected_index < len(self.filtered):
            return self.filtered[self.selected_index]
        return None

    @property
    def visible_entries(self) -> list[FlatEntry]:
        return self.filtered[self.scroll_offset : self.scroll_offset + self.max_visible_lines]

    # --- State transitions ---

    def handle_key(self, key: str, character: Optional[str] = None) -> NavigatorOutcome | None:
        """Apply one key press.

        Args:
            key: Textual key name ("up", "pagedown", "enter", "j", ...).
            character: The printable character for the key, if any.

        Returns:
            The terminal outcome when the key ends the interaction, else None.
        """
        if self.mode == NavigatorMode.SEARCHING:
            self._handle_search_key(key, character)
            return None
        return self._handle_browse_key(key, character)

    def _handle_browse_key(self, key: str, character: Optional[str]) -> NavigatorOutcome | None:
        last_index = len(self.filtered) - 1

        if key in _UP_KEYS:
            if self.selected_index > 0:
                self.selected_index -= 1
        elif key in _DOWN_KEYS:
            if self.selected_index < last_index:
                self.selected_index += 1
        elif key == "pageup":
            self.selected_index = max(0, self.selected_index - self.max_visible_lines)
        elif key == "pagedown":
            self.selected_index = max(0, min(last_index, self.selected_index + self.max_visible_lines))
        elif key == "home":
            self.selected_index = 0
        elif key == "end":
            self.selected_index = max(0, last_index)
        elif key == "enter":
            entry = self.selected_entry
            return Selected(entry.session.path) if entry else None
        elif key == "escape":
            return Cancelled()
        elif key == "slash" or character == "/":
            self.mode = NavigatorMode.SEARCHING
            return None
        else:
            return None

        self._ensure_visible()
        return None

    def _handle_search_key(self, key: str, character: Optional[str]) -> None:
        if key == "escape":
            self.mode = NavigatorMode.BROWSING
            self.set_query("")
        elif key == "enter":
            # The filter stays applied.
            self.mode = NavigatorMode.BROWSING
        elif key == "backspace":
            if self.query:
                self.set_query(self.query[:-1])
        elif character and character.isprintable():
            self.set_query(self.query + character)

    def set_query(self, query: str) -> None:
        """Re-filter for `query`, keeping the selection inside the new bounds."""
        self.query = query
        self.filtered = filter_entries(self.entries, query)
        self.selected_index = min(self.selected_index, max(0, len(self.filtered) - 1))
        self.scroll_offset = 0
        self._ensure_visible()
        logger.debug("Filter %r matched %d of %d sessions", query, len(self.filtered), len(self.entries))

    def _ensure_visible(self) -> None:
        """Scroll by the smallest amount that brings the selection into view."""
        if self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index
        elif self.selected_index >= self.scroll_offset + self.max_visible_lines:
            self.scroll_offset = self.selected_index - self.max_visible_lines + 1

    # --- Rendering ---

    def render(self, width: int, style: TreeStyle, now: Optional[datetime] = None) -> list[Text]:
        """Render the selector as one `Text` per terminal line."""
        lines: list[Text] = []

        scope = "all projects" if self.show_all_projects else "current project"
        lines.append(Text(f" Session Tree ({scope})", style=style.title))
        lines.append(Text(""))

        if self.mode == NavigatorMode.SEARCHING:
            search = Text.assemble((" Search: ", style.muted), self.query + SEARCH_CURSOR)
            search.truncate(width)
            lines.append(search)
            lines.append(Text(""))

        if not self.filtered:
            lines.append(Text("  No sessions found", style=style.warning))
        else:
            for offset, entry in enumerate(self.visible_entries):
                index = self.scroll_offset + offset
                lines.append(self._render_row(entry, width, style, index == self.selected_index, now))

            total = len(self.filtered)
            if total > self.max_visible_lines:
                end = min(self.scroll_offset + self.max_visible_lines, total)
                lines.append(Text(f" {self.scroll_offset + 1}-{end} of {total}", style=style.dim))

        lines.append(Text(""))
        help_text = SEARCHING_HELP if self.mode == NavigatorMode.SEARCHING else BROWSING_HELP
        lines.append(Text(" " + help_text, style=style.dim))
        return lines

    def _render_row(
        self,
        entry: FlatEntry,
        width: int,
        style: TreeStyle,
        selected: bool,
        now: Optional[datetime],
    ) -> Text:
        summary = entry.session.summary
        is_current = entry.session.path == self.current_session_path
        indicator = CURRENT_SESSION_INDICATOR if is_current else NO_INDICATOR

        name = first_line(summary.display_name) or first_line(summary.first_line) or EMPTY_SESSION_LABEL
        date_label = format_relative_date(summary.modified_at, now=now)
        cwd_part = f" {shorten_path(summary.cwd)}" if self.show_all_projects else ""

        date_width = len(date_label) + 2
        cwd_width = cell_len(cwd_part)
        available = width - cell_len(entry.prefix) - cell_len(indicator) - date_width - cwd_width - 2
        if available > _MIN_NAME_WIDTH:
            name = truncate_to_width(name, available)

        row = Text(entry.prefix + indicator + name)
        padding = max(1, width - row.cell_len - len(date_label) - cwd_width - 1)
        row.append(" " * padding)
        row.append(date_label, style=style.dim)
        if cwd_part:
            row.append(cwd_part, style=style.muted)

        row.truncate(width, overflow="ellipsis", pad=True)
        if selected:
            row.stylize(style.selected)
        elif is_current:
            row.stylize(style.current)
        elif entry.depth > 0:
            row.stylize(style.text)
        return row
