"""Focusable view over a `SessionTreeSelector`."""

from __future__ import annotations

from rich.text import Text
from textual import events
from textual.widget import Widget

from sessiontree.cli.tui.messages import NavigationFinished
from sessiontree.cli.tui.navigator import SessionTreeSelector
from sessiontree.cli.tui.theme import TreeStyle


class SessionTreeView(Widget, can_focus=True):
    """Renders the selector and feeds it every key press.

    Keys are consumed here so app-level bindings (escape) only apply while
    the tree is not mounted yet.
    """

    DEFAULT_CSS = """
    SessionTreeView {
        width: 100%;
        height: auto;
        padding: 0 1;
    }
    """

    def __init__(self, selector: SessionTreeSelector, tree_style: TreeStyle, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.selector = selector
        self._tree_style = tree_style
        self._finished = False

    def render(self) -> Text:
        width = max(self.content_size.width, 1)
        return Text("\n").join(self.selector.render(width, self._tree_style))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        if self._finished:
            return

        outcome = self.selector.handle_key(event.key, event.character)
        if outcome is not None:
            self._finished = True
            self.post_message(NavigationFinished(outcome))
        self.refresh(layout=True)
