from __future__ import annotations

import os
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generator, List, Optional

from .errors import SchemaError, StorageError, StorageIOError
from .models import DEFAULT_PRIORITY, Priority, Todo
from .observability import get_logger
from .repositories import Repository

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Cols:
    table: str = "todos"
    id: str = "id"
    text: str = "text"
    priority: str = "priority"
    completed: str = "completed"
    created_at: str = "created_at"
    completed_at: str = "completed_at"

    def all(self) -> tuple[str, ...]:
        return (self.id, self.text, self.priority, self.completed, self.created_at, self.completed_at)


_COLS = _Cols()

_SELECT = f"SELECT {', '.join(_COLS.all())} FROM {_COLS.table}"

_RANK_SQL = (
    f"CASE {_COLS.priority} "
    + " ".join(f"WHEN '{p.value}' THEN {p.rank}" for p in (Priority.HIGH, Priority.MEDIUM, Priority.LOW))
    + f" ELSE {Priority.OTHER.rank} END"
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SQLiteRepository(Repository):
    """
    SQLite repository implementing the Repository interface.

    Every operation runs on its own short-lived connection; cross-process
    writers are serialized by sqlite's file locking, waiting up to ``timeout``
    seconds on a locked database.
    """

    def __init__(
        self,
        db_path: str,
        timeout: float = 5.0,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        parent = os.path.dirname(db_path) or "."
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Failed to create directory {parent}: {e}") from e
        self._db_path = db_path
        self._timeout = timeout
        self._clock = clock or _utc_now
        self._init_db()

    @property
    def db_path(self) -> str:
        return self._db_path

    def _now(self) -> str:
        # Fixed-width timestamps keep lexical and chronological order identical.
        return self._clock().isoformat(timespec="microseconds")

    def _connect(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(self._db_path, timeout=self._timeout)
        except sqlite3.Error as e:
            raise StorageIOError(f"Failed to open database at {self._db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _conn(self, action: str) -> Generator[sqlite3.Connection, None, None]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            logger.warning("storage query failed: %s", e, extra={"event": "storage_error"})
            raise StorageError(f"Failed to {action}: {e}") from e
        finally:
            conn.close()

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            try:
                conn.execute("PRAGMA schema_version").fetchone()
            except sqlite3.Error as e:
                raise StorageIOError(f"Failed to open database at {self._db_path}: {e}") from e
            try:
                conn.execute(
                    f"""
                    CREATE TABLE IF NOT EXISTS {_COLS.table} (
                        {_COLS.id} INTEGER PRIMARY KEY AUTOINCREMENT,
                        {_COLS.text} TEXT NOT NULL,
                        {_COLS.priority} TEXT DEFAULT '{DEFAULT_PRIORITY}',
                        {_COLS.completed} INTEGER DEFAULT 0,
                        {_COLS.created_at} TEXT NOT NULL,
                        {_COLS.completed_at} TEXT
                    )
                    """
                )
                present = {row["name"] for row in conn.execute(f"PRAGMA table_info({_COLS.table})")}
                missing = [c for c in _COLS.all() if c not in present]
                if missing:
                    raise SchemaError(f"{_COLS.table} table is missing columns: {', '.join(missing)}")
                conn.execute(
                    f"CREATE INDEX IF NOT EXISTS idx_{_COLS.table}_completed ON {_COLS.table}({_COLS.completed})"
                )
                conn.commit()
            except sqlite3.Error as e:
                raise SchemaError(f"Failed to create {_COLS.table} table: {e}") from e
        finally:
            conn.close()

        logger.debug("opened todo store", extra={"event": "store_opened", "db_path": self._db_path})

    def add(self, text: str, priority: str = DEFAULT_PRIORITY) -> int:
        with self._conn("insert todo") as conn:
            cur = conn.execute(
                f"""
                INSERT INTO {_COLS.table} ({_COLS.text}, {_COLS.priority}, {_COLS.completed}, {_COLS.created_at})
                VALUES (?, ?, 0, ?)
                """,
                (text, priority, self._now()),
            )
            new_id = cur.lastrowid
        assert new_id is not None
        logger.info("added todo", extra={"event": "todo_added", "todo_id": new_id, "priority": priority})
        return int(new_id)

    def list(self, include_completed: bool = False) -> List[Todo]:
        if include_completed:
            sql = f"""
                {_SELECT}
                ORDER BY {_COLS.completed} ASC, {_COLS.created_at} DESC, {_COLS.id} DESC
            """
        else:
            sql = f"""
                {_SELECT}
                WHERE {_COLS.completed} = 0
                ORDER BY {_RANK_SQL}, {_COLS.created_at} DESC, {_COLS.id} DESC
            """
        with self._conn("list todos") as conn:
            rows = conn.execute(sql).fetchall()
            return [Todo.from_row(r) for r in rows]

    def find(self, todo_id: int) -> Optional[Todo]:
        with self._conn("find todo") as conn:
            row = conn.execute(f"{_SELECT} WHERE {_COLS.id} = ?", (todo_id,)).fetchone()
            return Todo.from_row(row) if row else None

    def complete(self, todo_id: int) -> bool:
        with self._conn("complete todo") as conn:
            cur = conn.execute(
                f"UPDATE {_COLS.table} SET {_COLS.completed} = 1, {_COLS.completed_at} = ? WHERE {_COLS.id} = ?",
                (self._now(), todo_id),
            )
            changed = cur.rowcount > 0
        if changed:
            logger.info("completed todo", extra={"event": "todo_completed", "todo_id": todo_id})
        return changed

    def delete(self, todo_id: int) -> bool:
        with self._conn("delete todo") as conn:
            cur = conn.execute(f"DELETE FROM {_COLS.table} WHERE {_COLS.id} = ?", (todo_id,))
            changed = cur.rowcount > 0
        if changed:
            logger.info("deleted todo", extra={"event": "todo_deleted", "todo_id": todo_id})
        return changed
