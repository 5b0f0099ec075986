"""session-tree: browse the branch lineage of recorded agent sessions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("session-tree")
except PackageNotFoundError:
    # Source checkout without an installed distribution.
    __version__ = "0.0.0"

__all__ = ["__version__"]
