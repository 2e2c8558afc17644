from __future__ import annotations

import io
import json
import logging

from todocli.observability import ConsoleLogFormatter, JsonLogFormatter, configure_logging, get_logger
from todocli.render import use_color


def _record(msg: str = "added todo", **extra) -> logging.LogRecord:
    record = logging.LogRecord("todocli.db", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_includes_extras() -> None:
    line = JsonLogFormatter().format(_record(event="todo_added", todo_id=3, priority="high"))
    payload = json.loads(line)
    assert payload["level"] == "info"
    assert payload["logger"] == "todocli.db"
    assert payload["msg"] == "added todo"
    assert payload["event"] == "todo_added"
    assert payload["todo_id"] == 3
    assert payload["priority"] == "high"


def test_console_formatter_is_single_line() -> None:
    line = ConsoleLogFormatter().format(_record(event="todo_added"))
    assert "\n" not in line
    assert " INFO todocli.db todo_added - added todo" in line


def test_configure_logging_sets_level_and_single_handler() -> None:
    logger = configure_logging("debug", "json")
    configure_logging("debug", "json")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JsonLogFormatter)
    configure_logging()
    assert logger.level == logging.WARNING


def test_get_logger_namespaces_under_todocli() -> None:
    assert get_logger("todocli.db").name == "todocli.db"
    assert get_logger("thirdparty").name == "todocli.thirdparty"


def test_logs_go_to_stderr(capsys) -> None:
    configure_logging("info", "console")
    get_logger("todocli.test").info("hello")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "hello" in captured.err
    configure_logging()


def test_use_color_modes() -> None:
    assert use_color("always", io.StringIO()) is True
    assert use_color("never", io.StringIO()) is False
    assert use_color("auto", io.StringIO()) is False
