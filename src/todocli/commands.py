from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from pydantic import ValidationError

from . import __description__, __title__, __version__
from .errors import StorageError, TodoCliError
from .models import DEFAULT_PRIORITY, Priority, Todo
from .observability import get_logger
from .render import render_json, render_table, render_version
from .repositories import Repository, get_repository
from .schemas import TodoCreate, VersionInfo
from .settings import Settings

logger = get_logger(__name__)

LIST_FORMATS = ("table", "json")


class Outcome(str, Enum):
    """How a command ended. Only ERROR and INVALID are process failures."""

    OK = "ok"
    NOT_FOUND = "not_found"
    ALREADY_COMPLETED = "already_completed"
    FAILED = "failed"
    INVALID = "invalid"
    ERROR = "error"


_EXIT_CODES = {Outcome.ERROR: 1, Outcome.INVALID: 2}


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class CommandResult:
    """
    Structured outcome of a command.

    Fields:
    - success: whether the command did what was asked
    - message: short machine-friendly summary (e.g. 'Todo not found')
    - outcome: the Outcome classification
    - output: exact text to show the user
    - todo_id: id the command acted on, when there is one
    - todos: rows returned by the list command
    """

    success: bool
    message: str
    outcome: Outcome = Outcome.OK
    output: str = ""
    todo_id: Optional[int] = None
    todos: Tuple[Todo, ...] = ()

    def is_success(self) -> bool:
        return self.success

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES.get(self.outcome, 0)


class Command(ABC):
    """
    Base class for the CLI commands.

    ``run`` is the pure core: it takes an open repository and returns a
    CommandResult. Query faults are turned into an ERROR result there.
    ``execute`` opens a fresh repository first; a failure to open it is
    reported the same way.
    """

    def run(self, repo: Repository) -> CommandResult:
        try:
            return self._perform(repo)
        except StorageError as e:
            return _fault(e)

    @abstractmethod
    def _perform(self, repo: Repository) -> CommandResult:
        """Carry out the command against ``repo``."""

    def execute(self, settings: Optional[Settings] = None) -> CommandResult:
        try:
            repo = get_repository(settings)
        except TodoCliError as e:
            logger.debug("could not open todo store", exc_info=True, extra={"event": "store_open_failed"})
            return _fault(e)
        return self.run(repo)


# PUBLIC_INTERFACE
class AddCommand(Command):
    """Create a todo."""

    def __init__(self, text: str, priority: Optional[str] = None) -> None:
        self.text = text
        self.priority = priority if priority is not None else DEFAULT_PRIORITY

    def _perform(self, repo: Repository) -> CommandResult:
        try:
            payload = TodoCreate(text=self.text, priority=self.priority)
        except ValidationError as e:
            msg = "; ".join(err["msg"] for err in e.errors())
            return CommandResult(False, msg, Outcome.INVALID, output=f"Error: {msg}")

        if Priority.classify(payload.priority) is Priority.OTHER:
            logger.warning(
                "unknown priority %r, expected one of %s; it will sort last",
                payload.priority,
                ", ".join(Priority.known()),
                extra={"event": "unknown_priority", "priority": payload.priority},
            )

        new_id = repo.add(payload.text, payload.priority)
        return CommandResult(
            True,
            f"Todo added with ID {new_id}",
            output=f"✓ Added todo #{new_id}: {payload.text} [{payload.priority}]",
            todo_id=new_id,
        )


# PUBLIC_INTERFACE
class ListCommand(Command):
    """List todos as a table or as JSON."""

    def __init__(self, show_all: bool = False, output_format: Optional[str] = None, color: bool = False) -> None:
        self.show_all = show_all
        self.format = output_format or "table"
        self.color = color

    def _perform(self, repo: Repository) -> CommandResult:
        if self.format not in LIST_FORMATS:
            msg = f"format must be one of: {', '.join(LIST_FORMATS)}"
            return CommandResult(False, msg, Outcome.INVALID, output=f"Error: {msg}")

        todos = repo.list(include_completed=self.show_all)
        if not todos:
            return CommandResult(True, "No todos", output="No todos found.")

        body = render_json(todos) if self.format == "json" else render_table(todos, color=self.color)
        return CommandResult(True, f"Listed {len(todos)} todos", output=body, todos=tuple(todos))


# PUBLIC_INTERFACE
class CompleteCommand(Command):
    """
    Mark a pending todo completed.

    Missing and already-completed todos are reported without touching storage.
    """

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id

    def _perform(self, repo: Repository) -> CommandResult:
        todo = repo.find(self.todo_id)
        if todo is None:
            return _not_found(self.todo_id)
        if todo.completed:
            return CommandResult(
                False,
                "Already completed",
                Outcome.ALREADY_COMPLETED,
                output=f"Todo #{self.todo_id} is already completed",
                todo_id=self.todo_id,
            )

        if not repo.complete(self.todo_id):
            return CommandResult(
                False,
                "Failed to complete todo",
                Outcome.FAILED,
                output=f"Failed to complete todo #{self.todo_id}",
                todo_id=self.todo_id,
            )
        return CommandResult(
            True,
            "Todo completed",
            output=f"✓ Completed todo #{self.todo_id}: {todo.text}",
            todo_id=self.todo_id,
        )


# PUBLIC_INTERFACE
class DeleteCommand(Command):
    """Delete a todo."""

    def __init__(self, todo_id: int) -> None:
        self.todo_id = todo_id

    def _perform(self, repo: Repository) -> CommandResult:
        todo = repo.find(self.todo_id)
        if todo is None:
            return _not_found(self.todo_id)

        if not repo.delete(self.todo_id):
            return CommandResult(
                False,
                "Failed to delete todo",
                Outcome.FAILED,
                output=f"Failed to delete todo #{self.todo_id}",
                todo_id=self.todo_id,
            )
        return CommandResult(
            True,
            "Todo deleted",
            output=f"✗ Deleted todo #{self.todo_id}: {todo.text}",
            todo_id=self.todo_id,
        )


# PUBLIC_INTERFACE
class VersionCommand(Command):
    """Report name and version. Never opens storage."""

    def __init__(self, as_json: bool = False) -> None:
        self.as_json = as_json

    @staticmethod
    def info() -> VersionInfo:
        return VersionInfo(name=__title__, version=__version__, description=__description__)

    def report(self) -> CommandResult:
        info = self.info()
        return CommandResult(True, f"{info.name} {info.version}", output=render_version(info, self.as_json))

    def _perform(self, repo: Repository) -> CommandResult:
        return self.report()

    def execute(self, settings: Optional[Settings] = None) -> CommandResult:
        return self.report()


def _fault(e: TodoCliError) -> CommandResult:
    return CommandResult(False, str(e), Outcome.ERROR, output=f"Error: {e}")


def _not_found(todo_id: int) -> CommandResult:
    return CommandResult(
        False,
        "Todo not found",
        Outcome.NOT_FOUND,
        output=f"Todo #{todo_id} not found",
        todo_id=todo_id,
    )
