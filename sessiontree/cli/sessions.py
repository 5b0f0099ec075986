"""`session-tree` command: browse session lineage and print the chosen path.

Usage: session-tree [--all] [--cwd PATH] [--current PATH] [--sessions-dir PATH] [--log-level LEVEL]

stdout receives only the selected session path so the command composes with
shell substitution; everything else goes to stderr.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from sessiontree import __version__
from sessiontree.cli.tui.app import STATUS_NO_SESSIONS, SessionTreeApp
from sessiontree.core.store import SessionStore
from sessiontree.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="session-tree",
        description="Show session tree with parent/child relationships.",
    )
    parser.add_argument("--all", dest="show_all", action="store_true", help="Show sessions from all projects")
    parser.add_argument("--cwd", default=None, help="Project directory (default: current directory)")
    parser.add_argument("--current", default=None, help="Path of the current session, marked and pre-selected")
    parser.add_argument("--sessions-dir", default=None, help="Sessions root (default: from config)")
    parser.add_argument("--log-level", default=None, help="Log level override (DEBUG, INFO, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)

    cwd = str(Path(args.cwd).expanduser().resolve()) if args.cwd else os.getcwd()
    app = SessionTreeApp(
        SessionStore(args.sessions_dir),
        cwd=cwd,
        show_all_projects=args.show_all,
        current_session_path=args.current,
    )

    try:
        result = app.run()
    except KeyboardInterrupt:
        return 130

    if app.error is not None:
        print(f"Error loading sessions: {app.error}", file=sys.stderr)
        return 1
    if app.status == STATUS_NO_SESSIONS:
        print(STATUS_NO_SESSIONS, file=sys.stderr)
        return 0

    if result and result != args.current:
        logger.info("Selected session %s", result)
        print(result)
        print(f"Session: {Path(result).name}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
