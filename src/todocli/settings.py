from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_DB_PATH = os.path.join(".", "tmp", "todocli.db")


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODOCLI_DB_PATH: path to the sqlite db file. Default './tmp/todocli.db'
      (resolved against the current working directory)
    - TODOCLI_DB_TIMEOUT: seconds to wait on a locked database (default: 5.0)
    - TODOCLI_COLOR: 'auto' (default), 'always' or 'never'
    - NO_COLOR: any non-empty value disables color output
    - LOG_LEVEL: logging level name (default: WARNING)
    - LOG_FORMAT: 'auto' (default), 'console' or 'json'
    """

    db_path: str
    db_timeout: float
    color: str
    log_level: str
    log_format: str


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_float(value: str, default: float) -> float:
    try:
        parsed = float(value.strip())
    except ValueError:
        return default
    return parsed if parsed >= 0 else default


def _parse_choice(value: str, allowed: set[str], default: str) -> str:
    v = value.strip().lower()
    return v if v in allowed else default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    db_path = os.path.abspath(_get_env("TODOCLI_DB_PATH", DEFAULT_DB_PATH).strip())
    db_timeout = _parse_float(_get_env("TODOCLI_DB_TIMEOUT", "5.0"), 5.0)

    color = _parse_choice(_get_env("TODOCLI_COLOR", "auto"), {"auto", "always", "never"}, "auto")
    if os.getenv("NO_COLOR") and color == "auto":
        color = "never"

    return Settings(
        db_path=db_path,
        db_timeout=db_timeout,
        color=color,
        log_level=_get_env("LOG_LEVEL", "WARNING").strip().upper(),
        log_format=_parse_choice(_get_env("LOG_FORMAT", "auto"), {"auto", "console", "json"}, "auto"),
    )
