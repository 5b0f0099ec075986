"""Loading status shown while sessions and their parents are read."""

from __future__ import annotations

from rich.text import Text
from textual.reactive import reactive
from textual.widgets import Static

from sessiontree.cli.tui.theme import TreeStyle


class LoadingPanel(Static):
    """One status line: ` Loading sessions... loaded/total`."""

    DEFAULT_CSS = """
    LoadingPanel {
        width: 100%;
        height: auto;
        padding: 0 1;
    }
    """

    loaded = reactive(0)
    total = reactive(0)

    def __init__(self, tree_style: TreeStyle, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._tree_style = tree_style

    def set_progress(self, loaded: int, total: int) -> None:
        self.loaded = loaded
        self.total = total

    def render(self) -> Text:
        label = " Loading sessions..."
        if self.total:
            label += f" {self.loaded}/{self.total}"
        return Text(label, style=self._tree_style.muted)
