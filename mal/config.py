from __future__ import annotations
import logging
import os
from pathlib import Path


# Defaults
_DEFAULT_HISTORY_FILE = Path.home() / '.mal-history'
_DEFAULT_PROMPT = 'user> '
_DEFAULT_LOG_LEVEL = 'WARNING'


def path_from_env(var: str, default: Path) -> Path:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip()).expanduser()


def get_history_file() -> Path:
    return path_from_env('MAL_HISTORY_FILE', _DEFAULT_HISTORY_FILE)


def get_prompt() -> str:
    return os.environ.get('MAL_PROMPT', _DEFAULT_PROMPT)


def get_log_level(override: str | None = None) -> int:
    """Resolve a logging level name; unknown names fall back to the default."""
    name = (override or os.environ.get('MAL_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.getLevelName(_DEFAULT_LOG_LEVEL)
    return level
