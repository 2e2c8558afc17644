"""Exception hierarchy for storage faults.

Business outcomes such as "not found" or "already completed" are not
exceptions; commands report them through ``CommandResult``.
"""

from __future__ import annotations


class TodoCliError(Exception):
    """Base class for every fault raised by todocli."""


class StorageIOError(TodoCliError):
    """The database location cannot be created or opened."""


class SchemaError(TodoCliError):
    """The todos schema cannot be created or does not have the expected shape."""


class StorageError(TodoCliError):
    """A query against the database failed."""


class DecodeError(StorageError):
    """A stored row could not be mapped onto a Todo."""


__all__ = ["DecodeError", "SchemaError", "StorageError", "StorageIOError", "TodoCliError"]
