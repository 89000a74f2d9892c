# src/tuido/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import re
import sqlite3
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from ..core.errors import StorageOperationFailed, StorageUnavailable
from ..core.models import Task, TaskStatus

logger = logging.getLogger(__name__)

TAG_SEPARATOR = ","

# Older databases hold DATETIME text such as "2024-05-01 10:00:00" (SQLite
# CURRENT_TIMESTAMP, UTC) or "2024-05-01 10:00:00.123456789+02:00".
_EXTRA_FRACTION = re.compile(r"(\.\d{6})\d+")


def _to_epoch(raw: object) -> float | None:
    """Decode a stored timestamp (epoch number or DATETIME text); None if unreadable."""
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        pass
    try:
        dt = datetime.fromisoformat(_EXTRA_FRACTION.sub(r"\1", text))
    except ValueError:
        logger.warning("Unreadable timestamp in task database: %r", text)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


class TaskStore:
    """
    SQLite task store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tui-do.db") -> None:
        self._db_path = Path(db_path)
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
            total = self.count_tasks()
        except (OSError, sqlite3.Error) as e:
            raise StorageUnavailable(f"cannot open task database {self._db_path}: {e}") from e
        logger.info("TaskStore ready db=%s total=%s", self._db_path, total)

    @property
    def db_path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _operation(self, name: str) -> Iterator[sqlite3.Connection]:
        """Open a connection for one operation; sqlite errors become StorageOperationFailed."""
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise StorageOperationFailed(name, str(e)) from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StorageOperationFailed(name, str(e)) from e
        except (TypeError, ValueError) as e:
            raise StorageOperationFailed(name, f"bad row: {e}") from e
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()

            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    tags TEXT NOT NULL DEFAULT '',
                    status INTEGER NOT NULL DEFAULT 0,
                    created_at REAL NOT NULL,
                    completed_at REAL
                )
                """
            )

            # Migrations (safe): add missing columns.
            cur.execute("PRAGMA table_info(tasks)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE tasks ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("tags", "TEXT NOT NULL DEFAULT ''")
            add_col("status", "INTEGER NOT NULL DEFAULT 0")
            add_col("created_at", "REAL NOT NULL DEFAULT 0")
            add_col("completed_at", "REAL")

            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _tags_to_str(tags: list[str]) -> str:
        return TAG_SEPARATOR.join(t for t in tags if t)

    @staticmethod
    def _str_to_tags(s: str | None) -> list[str]:
        if not s:
            return []
        return [t for t in s.split(TAG_SEPARATOR) if t]

    def _row_to_task(self, row: sqlite3.Row) -> Task:
        status = TaskStatus.from_db(row["status"])
        created_at = _to_epoch(row["created_at"])
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            tags=self._str_to_tags(row["tags"]),
            status=status,
            created_at=created_at if created_at is not None else 0.0,
            completed_at=_to_epoch(row["completed_at"]) if status is TaskStatus.DONE else None,
        )

    @staticmethod
    def _completed_value(task: Task) -> float | None:
        return task.completed_at if task.status is TaskStatus.DONE else None

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
            return int(n)
        finally:
            conn.close()

    def load_all(self) -> list[Task]:
        with self._operation("load_all") as conn:
            rows = conn.execute("SELECT * FROM tasks ORDER BY id ASC").fetchall()
            tasks = [self._row_to_task(r) for r in rows]
        logger.debug("Loaded %d tasks", len(tasks))
        return tasks

    def insert(self, task: Task) -> Task:
        """
        Insert a task and return a copy with its id.

        A positive task.id is kept (restoring a deleted row under its old id);
        otherwise SQLite assigns one.
        """
        if not task.title or not task.title.strip():
            raise StorageOperationFailed("insert", "title is required")

        params = (
            task.title.strip(),
            self._tags_to_str(task.tags),
            int(task.status),
            float(task.created_at),
            self._completed_value(task),
        )

        with self._operation("insert") as conn:
            if task.id > 0:
                cur = conn.execute(
                    """
                    INSERT INTO tasks(id, title, tags, status, created_at, completed_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    (int(task.id), *params),
                )
            else:
                cur = conn.execute(
                    """
                    INSERT INTO tasks(title, tags, status, created_at, completed_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    params,
                )
            rowid = cur.lastrowid

        if rowid is None:
            raise StorageOperationFailed("insert", "SQLite did not return lastrowid for tasks insert")
        task_id = int(rowid)
        logger.debug("Task added id=%s status=%s tags=%s", task_id, task.status.name, task.tags)
        return replace(task, id=task_id, tags=list(task.tags))

    def update(self, task: Task) -> None:
        with self._operation("update") as conn:
            conn.execute(
                """
                UPDATE tasks
                SET title = ?, tags = ?, status = ?, completed_at = ?
                WHERE id = ?
                """,
                (
                    task.title,
                    self._tags_to_str(task.tags),
                    int(task.status),
                    self._completed_value(task),
                    int(task.id),
                ),
            )
        logger.debug("Task updated id=%s status=%s", task.id, task.status.name)

    def delete(self, task_id: int) -> None:
        with self._operation("delete") as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
        logger.debug("Task deleted id=%s", task_id)
