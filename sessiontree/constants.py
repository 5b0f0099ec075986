"""Constants used across session-tree.

Values here are internal defaults; user-tunable settings live in
`sessiontree.config`.
"""

# Session transcript layout
SESSION_FILE_SUFFIX = ".jsonl"
SESSION_HEADER_TYPE = "session"
SESSION_INFO_ENTRY_TYPE = "session_info"
DEFAULT_SESSIONS_DIR = "~/.pi/agent/sessions"

# Header reads never pull more than this many bytes from a transcript
DEFAULT_HEADER_READ_LIMIT = 65536
DEFAULT_MAX_CONCURRENCY = 8

# Visible window sizing: max(MIN_VISIBLE_LINES, floor(rows * VISIBLE_FRACTION))
DEFAULT_VISIBLE_FRACTION = 0.6
DEFAULT_MIN_VISIBLE_LINES = 5

# Tree connector glyphs
CONNECTOR_BRANCH = "├─ "
CONNECTOR_LAST = "└─ "
CONNECTOR_CONTINUATION = "│  "
CONNECTOR_BLANK = "   "

CURRENT_SESSION_INDICATOR = "● "
NO_INDICATOR = "  "
EMPTY_SESSION_LABEL = "(empty)"
SEARCH_CURSOR = "█"

DEFAULT_CONFIG_PATH = "~/.sessiontree/config.yml"
DEFAULT_LOG_FILE = "~/.sessiontree/logs/session-tree.log"
