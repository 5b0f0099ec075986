"""File-backed session store for JSONL transcripts.

Layout: one directory per project under the sessions root, named after the
project's working directory (`/home/me/app` -> `--home-me-app--`), holding one
`*.jsonl` transcript per session. The first line of a transcript is its
header record.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from sessiontree.config import config
from sessiontree.constants import SESSION_FILE_SUFFIX, SESSION_HEADER_TYPE, SESSION_INFO_ENTRY_TYPE
from sessiontree.core.errors import SessionListingError
from sessiontree.models import SessionSummary

logger = logging.getLogger(__name__)


def encode_project_dir(cwd: str) -> str:
    """Return the project directory name used for a working directory."""
    return "--" + cwd.strip("/").replace("/", "-") + "--"


def _parse_timestamp(value: object) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def _message_text(message: object) -> str | None:
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        for block in content:
            if isinstance(block, dict) and block.get("type") == "text" and isinstance(block.get("text"), str):
                return block["text"]
    return None


def read_session_summary(path: Path) -> SessionSummary | None:
    """Build a summary from one transcript, or None if it has no session header."""
    stat = path.stat()
    modified_at = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)

    header: dict[str, object] | None = None
    display_name: str | None = None
    first_line: str | None = None
    message_count = 0

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for raw_line in f:
            raw_line = raw_line.strip()
            if not raw_line:
                continue
            try:
                entry = json.loads(raw_line)
            except json.JSONDecodeError:
                continue
            if not isinstance(entry, dict):
                continue

            if header is None:
                if entry.get("type") != SESSION_HEADER_TYPE:
                    return None
                header = entry
                continue

            entry_type = entry.get("type")
            if entry_type == SESSION_INFO_ENTRY_TYPE and isinstance(entry.get("name"), str):
                display_name = entry["name"].strip() or display_name
            elif entry_type == "message":
                message_count += 1
                message = entry.get("message")
                if first_line is None and isinstance(message, dict) and message.get("role") == "user":
                    first_line = _message_text(message)

    if header is None:
        return None

    cwd = header.get("cwd")
    session_id = header.get("id")
    return SessionSummary(
        path=str(path),
        cwd=cwd if isinstance(cwd, str) else "",
        created_at=_parse_timestamp(header.get("timestamp")) or modified_at,
        modified_at=modified_at,
        display_name=display_name,
        first_line=first_line,
        session_id=session_id if isinstance(session_id, str) else None,
        message_count=message_count,
    )


class SessionStore:
    """Enumerates session summaries from a sessions root directory."""

    def __init__(self, sessions_dir: str | Path | None = None) -> None:
        self.sessions_dir = Path(sessions_dir or config.sessions_dir).expanduser()

    async def list_project(self, cwd: str) -> list[SessionSummary]:
        """List sessions recorded for one working directory."""
        return await asyncio.to_thread(self._list_dirs, [self.sessions_dir / encode_project_dir(cwd)])

    async def list_all(self) -> list[SessionSummary]:
        """List sessions across every project."""
        return await asyncio.to_thread(self._list_all_sync)

    def _list_all_sync(self) -> list[SessionSummary]:
        try:
            project_dirs = [entry for entry in self.sessions_dir.iterdir() if entry.is_dir()]
        except OSError as e:
            raise SessionListingError(
                f"Cannot read sessions directory {self.sessions_dir}: {e}",
                sessions_dir=str(self.sessions_dir),
            ) from e
        return self._list_dirs(project_dirs)

    def _list_dirs(self, project_dirs: list[Path]) -> list[SessionSummary]:
        if not self.sessions_dir.is_dir():
            raise SessionListingError(
                f"Sessions directory not found: {self.sessions_dir}",
                sessions_dir=str(self.sessions_dir),
            )

        summaries: list[SessionSummary] = []
        for project_dir in project_dirs:
            if not project_dir.is_dir():
                continue
            for path in sorted(project_dir.glob(f"*{SESSION_FILE_SUFFIX}")):
                try:
                    summary = read_session_summary(path)
                except OSError as e:
                    logger.warning("Skipping unreadable session %s: %s", path, e)
                    continue
                if summary is not None:
                    summaries.append(summary)

        summaries.sort(key=lambda s: s.modified_at, reverse=True)
        logger.debug("Listed %d sessions from %d project dirs", len(summaries), len(project_dirs))
        return summaries
