"""Text rendering for command output.

Rendering is pure: functions return strings and never print, so commands can
be exercised without capturing the console.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence, TextIO

from .models import Priority, Todo
from .schemas import TodoRecord, VersionInfo

RULE = "─" * 80

_ANSI = {
    "red": "31",
    "green": "32",
    "yellow": "33",
    "white": "37",
    "bright_black": "90",
}

_PRIORITY_COLORS = {
    Priority.HIGH: "red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
    Priority.OTHER: "white",
}


# PUBLIC_INTERFACE
def use_color(mode: str, stream: TextIO) -> bool:
    """Resolve a color mode ('auto', 'always', 'never') against an output stream."""
    if mode == "always":
        return True
    if mode == "never":
        return False
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def colorize(text: str, color: str, enabled: bool = True) -> str:
    if not enabled:
        return text
    return f"\x1b[{_ANSI[color]}m{text}\x1b[0m"


def _todo_line(todo: Todo, color: bool) -> str:
    status = "✓" if todo.completed else "○"
    tag = colorize(f"[{todo.priority.upper()}]", _PRIORITY_COLORS[todo.priority_class], color)
    text = colorize(todo.text, "bright_black", color) if todo.completed else todo.text
    return f"{status} {todo.id:>3} {text} {tag}"


# PUBLIC_INTERFACE
def render_table(todos: Sequence[Todo], color: bool = False) -> str:
    """
    Render todos as a table with a trailing summary line.

    Args:
        todos: Todos in display order.
        color: Emit ANSI color codes for priority tags and completed text.

    Returns:
        The table as a single string without a trailing newline.
    """
    completed_count = sum(1 for t in todos if t.completed)
    pending_count = len(todos) - completed_count
    lines: List[str] = ["", "Todos:", RULE]
    lines.extend(_todo_line(t, color) for t in todos)
    lines.append(RULE)
    lines.append(f"Total: {len(todos)} ({pending_count} pending, {completed_count} completed)")
    return "\n".join(lines)


# PUBLIC_INTERFACE
def todo_records(todos: Sequence[Todo]) -> List[Dict[str, Any]]:
    """Return the JSON-ready record for each todo."""
    return [TodoRecord.from_todo(t).model_dump() for t in todos]


# PUBLIC_INTERFACE
def render_json(todos: Sequence[Todo]) -> str:
    """Render todos as a pretty-printed JSON array."""
    return json.dumps(todo_records(todos), indent=2, ensure_ascii=False)


# PUBLIC_INTERFACE
def render_version(info: VersionInfo, as_json: bool = False) -> str:
    if as_json:
        return json.dumps(info.model_dump(), indent=2, ensure_ascii=False)
    return f"{info.name} {info.version}\n{info.description}"
