"""Global configuration management.

Config is loaded at module import time and available globally via:
    from sessiontree.config import config

Environment overrides:
- SESSIONTREE_ENV_PATH: .env file to load (default: ./.env)
- SESSIONTREE_CONFIG_PATH: YAML config file (default: ~/.sessiontree/config.yml)
- SESSIONTREE_SESSIONS_DIR: sessions root, wins over the YAML value
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from sessiontree.config.loader import load_global_config
from sessiontree.config.schema import SessionTreeConfig

_env_path = os.getenv("SESSIONTREE_ENV_PATH")
load_dotenv(Path(_env_path).expanduser() if _env_path else None)


def _load() -> SessionTreeConfig:
    config_path = os.getenv("SESSIONTREE_CONFIG_PATH")
    loaded = load_global_config(Path(config_path).expanduser() if config_path else None)

    sessions_dir = os.getenv("SESSIONTREE_SESSIONS_DIR")
    if sessions_dir:
        loaded = loaded.model_copy(update={"sessions_dir": sessions_dir})
    return loaded


config: SessionTreeConfig = _load()

__all__ = ["SessionTreeConfig", "config"]
