"""Styles for the session tree.

The style is an explicit `TreeStyle` value handed to every render call; there
is no module-level theme state. Dark/light selection follows the
`APPEARANCE_MODE` environment variable, then macOS system appearance, then
defaults to dark.
"""

from __future__ import annotations

import os
import subprocess
import sys
from dataclasses import dataclass
from typing import Optional

from rich.style import Style

from sessiontree.cli.tui.types import ThemeMode

_APPLE_DARK_LABEL = "Dark"
_MISSING_KEY_MARKERS = ("does not exist", "could not be found")


@dataclass(frozen=True)
class TreeStyle:
    """Rich styles for each visual role in the session tree."""

    accent: Style
    title: Style
    muted: Style
    dim: Style
    text: Style
    warning: Style
    current: Style
    selected: Style


DARK_STYLE = TreeStyle(
    accent=Style(color="#8abeb7"),
    title=Style(color="#8abeb7", bold=True),
    muted=Style(color="#969896"),
    dim=Style(color="#727578"),
    text=Style(color="#c5c8c6"),
    warning=Style(color="#f0c674"),
    current=Style(color="#b5bd68"),
    selected=Style(color="#8abeb7", bgcolor="#373b41", bold=True),
)

LIGHT_STYLE = TreeStyle(
    accent=Style(color="#3e999f"),
    title=Style(color="#3e999f", bold=True),
    muted=Style(color="#8e908c"),
    dim=Style(color="#a0a1a7"),
    text=Style(color="#4d4d4c"),
    warning=Style(color="#c18401"),
    current=Style(color="#718c00"),
    selected=Style(color="#3e999f", bgcolor="#e0e0e0", bold=True),
)


def _get_env_appearance_mode() -> Optional[str]:
    """Return APPEARANCE_MODE if explicitly provided."""
    mode = (os.environ.get("APPEARANCE_MODE") or "").strip().lower()
    if mode in {ThemeMode.DARK.value, ThemeMode.LIGHT.value}:
        return mode
    return None


def _get_system_appearance_mode() -> Optional[str]:
    """Return host OS appearance mode when detectable."""
    if sys.platform != "darwin":
        return None
    try:
        result = subprocess.run(
            ["defaults", "read", "-g", "AppleInterfaceStyle"],
            capture_output=True,
            text=True,
            timeout=1,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError):
        return None

    if _APPLE_DARK_LABEL in (result.stdout or ""):
        return ThemeMode.DARK.value
    # The key is absent in light mode, so defaults exits non-zero.
    # Any other failure leaves the mode unknown.
    if result.returncode != 0:
        stderr = (result.stderr or "").lower()
        if any(marker in stderr for marker in _MISSING_KEY_MARKERS):
            return ThemeMode.LIGHT.value
        return None
    return ThemeMode.LIGHT.value


def is_dark_mode() -> bool:
    """Resolve dark mode: APPEARANCE_MODE env, then macOS appearance, then dark."""
    mode = _get_env_appearance_mode() or _get_system_appearance_mode()
    return mode != ThemeMode.LIGHT.value


def resolve_tree_style(dark: bool | None = None) -> TreeStyle:
    """Pick the tree style for the given (or detected) appearance mode."""
    if dark is None:
        dark = is_dark_mode()
    return DARK_STYLE if dark else LIGHT_STYLE
