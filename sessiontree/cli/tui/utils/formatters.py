"""Formatting utilities for TUI display."""

from __future__ import annotations

import os
import re
from datetime import datetime, timezone

from rich.cells import cell_len, set_cell_size

ELLIPSIS = "…"


def format_relative_date(dt: datetime, now: datetime | None = None) -> str:
    """Convert a timestamp to 'now', '5m ago', '3h ago', '2d ago' or a local date.

    Anything a week or older shows as YYYY-MM-DD in local time.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    seconds = int((now - dt).total_seconds())

    minutes = seconds // 60
    if minutes < 1:
        return "now"
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 7:
        return f"{days}d ago"
    return dt.astimezone().strftime("%Y-%m-%d")


# Pattern matches /Users/<user>/... (macOS) or /home/<user>/... (Linux)
_HOME_PATH_PATTERN = re.compile(r"^(/(?:Users|home)/[^/]+)(?=/|$)")


def shorten_path(path: str | None) -> str:
    """Replace the home directory prefix with ~ to save space."""
    if not path:
        return ""

    local_home = os.path.expanduser("~")
    if path == local_home:
        return "~"
    if path.startswith(local_home + "/"):
        return "~" + path[len(local_home) :]

    return _HOME_PATH_PATTERN.sub("~", path)


def first_line(text: str | None) -> str:
    """Return the first line of text, or an empty string."""
    if not text:
        return ""
    return text.splitlines()[0] if text.strip() else ""


def truncate_to_width(text: str, width: int) -> str:
    """Cut text to at most `width` terminal cells, ending in an ellipsis when cut."""
    if width <= 0:
        return ""
    if cell_len(text) <= width:
        return text
    return set_cell_size(text, width - 1) + ELLIPSIS
