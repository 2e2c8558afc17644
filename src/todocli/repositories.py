from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from .models import DEFAULT_PRIORITY, Todo
from .settings import Settings, get_settings


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for todo storage backends."""

    @abstractmethod
    def add(self, text: str, priority: str = DEFAULT_PRIORITY) -> int:
        """Insert a pending todo and return its newly assigned id."""

    @abstractmethod
    def list(self, include_completed: bool = False) -> List[Todo]:
        """
        Return todos in display order.
        - include_completed=True: every todo, pending before completed, newest first in each group
        - include_completed=False: pending todos only, by priority rank (high, medium, low, other),
          newest first within a rank
        """

    @abstractmethod
    def find(self, todo_id: int) -> Optional[Todo]:
        """Return a Todo by id, or None if not found."""

    @abstractmethod
    def complete(self, todo_id: int) -> bool:
        """Mark a todo completed now. Return True if a row was affected."""

    @abstractmethod
    def delete(self, todo_id: int) -> bool:
        """Delete a Todo by id. Return True if deleted, False if not found."""


# PUBLIC_INTERFACE
def get_repository(settings: Optional[Settings] = None) -> Repository:
    """
    Open the configured repository. Each call opens a fresh handle; nothing is cached.

    Raises:
        StorageIOError if the database location cannot be created or opened.
        SchemaError if the todos table cannot be created or has an unexpected shape.
    """
    from .db import SQLiteRepository

    s = settings or get_settings()
    return SQLiteRepository(s.db_path, timeout=s.db_timeout)
