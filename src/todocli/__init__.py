"""
todocli package.

A single-user command-line todo manager backed by a SQLite file. The command
classes are exposed here for programmatic use; the console entry point lives
in ``todocli.cli``.
"""

__title__ = "todocli"
__version__ = "0.1.0"
__description__ = "TodoCli - command-line todo manager"

from .commands import (  # noqa: E402
    AddCommand,
    CommandResult,
    CompleteCommand,
    DeleteCommand,
    ListCommand,
    Outcome,
    VersionCommand,
)
from .models import Priority, Todo  # noqa: E402

__all__ = [
    "AddCommand",
    "CommandResult",
    "CompleteCommand",
    "DeleteCommand",
    "ListCommand",
    "Outcome",
    "Priority",
    "Todo",
    "VersionCommand",
    "__version__",
]
