"""Utility functions for session-tree."""

import os
import re

_ENV_REF = re.compile(r"\$\{([^}]+)\}")


def _substitute(match: re.Match[str]) -> str:
    return os.environ.get(match.group(1), match.group(0))


def expand_env_vars(value: object) -> object:
    """Replace `${VAR}` references in YAML-loaded config values.

    Walks dicts and lists; strings get every known variable substituted and
    unknown references kept verbatim so a typo stays visible in the loaded
    value. Other scalars pass through.
    """
    if isinstance(value, str):
        return _ENV_REF.sub(_substitute, value)
    if isinstance(value, dict):
        return {key: expand_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value
