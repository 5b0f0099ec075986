"""Bounded header reads for session transcripts.

Only the first line of a transcript is read, capped at a byte limit, so the
cost of resolving parents grows with the number of sessions rather than with
their size.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Awaitable, Callable, Sequence

from sessiontree.config import config
from sessiontree.constants import SESSION_HEADER_TYPE
from sessiontree.models import SessionHeader, SessionNode, SessionSummary

logger = logging.getLogger(__name__)

HeaderReader = Callable[[str], Awaitable[SessionHeader | None]]
ProgressCallback = Callable[[int, int], None]


def _read_first_line(path: str, limit: int) -> str:
    with open(path, "rb") as f:
        return f.readline(limit).decode("utf-8", errors="replace")


def parse_session_header(line: str) -> SessionHeader | None:
    """Parse a transcript header line.

    Returns None for anything that is not a JSON object of type "session".
    """
    try:
        data = json.loads(line)
    except (json.JSONDecodeError, RecursionError):
        return None
    if not isinstance(data, dict) or data.get("type") != SESSION_HEADER_TYPE:
        return None

    parent = data.get("parentSession")
    if not isinstance(parent, str) or not parent:
        return SessionHeader()
    return SessionHeader(parent_session=parent)


async def read_session_header(path: str, *, limit: int | None = None) -> SessionHeader | None:
    """Read the parent reference from a transcript's header record.

    Read and parse failures are absorbed and reported as None.
    """
    read_limit = limit if limit is not None else config.header_read_limit
    try:
        line = await asyncio.to_thread(_read_first_line, path, read_limit)
    except (OSError, ValueError) as e:
        logger.debug("Header read failed for %s: %s", path, e)
        return None

    header = parse_session_header(line)
    if header is None:
        logger.debug("No session header in %s", path)
    return header


async def load_session_parents(
    sessions: Sequence[SessionSummary],
    *,
    on_progress: ProgressCallback | None = None,
    max_concurrency: int | None = None,
    reader: HeaderReader = read_session_header,
) -> list[SessionNode]:
    """Resolve parent references for every session.

    Reads run with bounded concurrency. Results keep the input order; progress
    counts completions, so `loaded` increases by one per call and the last
    call reports `loaded == total` whatever order the reads finish in.
    """
    total = len(sessions)
    semaphore = asyncio.Semaphore(max_concurrency or config.max_concurrency)
    loaded = 0

    async def resolve(summary: SessionSummary) -> SessionNode:
        nonlocal loaded
        async with semaphore:
            header = await reader(summary.path)
        loaded += 1
        if on_progress:
            on_progress(loaded, total)
        return SessionNode(summary=summary, parent_session=header.parent_session if header else None)

    return list(await asyncio.gather(*(resolve(summary) for summary in sessions)))
