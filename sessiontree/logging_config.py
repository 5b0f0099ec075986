"""session-tree logging configuration.

Logs go to a file (default: `~/.sessiontree/logs/session-tree.log`) because
stdout/stderr belong to the terminal UI while it runs.
Example: `SESSIONTREE_LOG_LEVEL=DEBUG session-tree --all`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

_LOGGER_NAME = "sessiontree"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure session-tree logging.

    Args:
        level: Optional override for `SESSIONTREE_LOG_LEVEL`.
        log_file: Optional override for the configured log file.
    """
    from sessiontree.config import config

    if level:
        os.environ["SESSIONTREE_LOG_LEVEL"] = level

    resolved_level = os.getenv("SESSIONTREE_LOG_LEVEL") or config.log_level
    path = Path(log_file or config.log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))

    logger = logging.getLogger(_LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(resolved_level.upper())
    logger.propagate = False
