from __future__ import annotations

import datetime as dt
import json
import logging
import sys
from typing import Any

ROOT_LOGGER = "todocli"


def _iso_now() -> str:
    return dt.datetime.now(dt.timezone.utc).isoformat()


class _StderrHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stderr`` is at emit time.

    stdout carries command output (tables, JSON), so logs never go there.
    """

    def __init__(self) -> None:
        super().__init__()

    @property
    def stream(self) -> Any:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, value: Any) -> None:
        pass


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: dict[str, Any] = {
            "ts": _iso_now(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for attr in ("event", "todo_id", "db_path", "priority"):
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)
        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["err_type"] = getattr(exc_type, "__name__", str(exc_type))
            if exc_value is not None:
                payload["err"] = str(exc_value)
        return json.dumps(payload, ensure_ascii=False)


class ConsoleLogFormatter(logging.Formatter):
    def __init__(self) -> None:
        super().__init__("%(message)s")

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = _iso_now()[11:19]  # HH:MM:SS
        parts: list[str] = [ts, record.levelname.upper(), record.name]
        event = getattr(record, "event", None)
        if event:
            parts.append(str(event))
        parts.append("-")
        parts.append(record.getMessage())
        return " ".join(parts)


def _choose_formatter(format_pref: str) -> logging.Formatter:
    pref = (format_pref or "").strip().lower() or "auto"
    if pref == "auto":
        try:
            if sys.stderr.isatty():
                return ConsoleLogFormatter()
        except Exception:
            pass
        return JsonLogFormatter()
    if pref == "console":
        return ConsoleLogFormatter()
    return JsonLogFormatter()


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    name = (value or "").strip().upper()
    if not name:
        return default
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else default


# PUBLIC_INTERFACE
def configure_logging(level: str | None = None, log_format: str = "auto") -> logging.Logger:
    """Install the single stderr handler on the ``todocli`` logger.

    Safe to call more than once; later calls replace the formatter and level.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
    handler = _StderrHandler()
    handler.setFormatter(_choose_formatter(log_format))
    logger.addHandler(handler)
    logger.setLevel(_parse_level(level))
    logger.propagate = False
    return logger


# PUBLIC_INTERFACE
def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Return a logger under the ``todocli`` namespace, configuring defaults on first use."""
    root = logging.getLogger(ROOT_LOGGER)
    if not root.handlers:
        configure_logging()
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


__all__ = ["ConsoleLogFormatter", "JsonLogFormatter", "configure_logging", "get_logger"]
