# src/termtasks/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from .dates import UNSTORED_DATE_PLACEHOLDER
from .task_models import Priority, Task

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"

_COLUMNS = "id, title, description, completed, priority"


class TaskStoreError(RuntimeError):
    """A SQLite statement or connection failed."""


class TaskNotFoundError(LookupError):
    """No row exists for the requested task id."""

    def __init__(self, task_id: int | None) -> None:
        super().__init__(f"Couldn't find task with id {task_id}")
        self.task_id = task_id


class TaskStore:
    """
    SQLite task store.

    One table, one row per task; the row id is the task identity.
    An empty db_path (or ":memory:") opens a transient in-memory database.

    The table has no date column: tasks read back always carry
    UNSTORED_DATE_PLACEHOLDER as their date.

    The connection is opened once and owned by the store until close(),
    which is what keeps an in-memory database alive between calls.
    """

    def __init__(self, db_path: str | Path = "") -> None:
        raw = str(db_path) if db_path else ""
        self._in_memory = raw in ("", IN_MEMORY)
        if self._in_memory:
            self._db_path = IN_MEMORY
        else:
            path = Path(raw)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._db_path = str(path)

        try:
            self._conn = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise TaskStoreError(f"Can't open database {self._db_path}") from e
        self._conn.row_factory = sqlite3.Row
        self._configure_conn(self._conn)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    @property
    def db_path(self) -> str:
        return self._db_path

    def close(self) -> None:
        with contextlib.suppress(sqlite3.Error):
            self._conn.close()

    # ---- low-level helpers ----

    def _configure_conn(self, conn: sqlite3.Connection) -> None:
        if self._in_memory:
            return
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    @contextlib.contextmanager
    def _cursor(self, action: str) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success, translate SQLite failures."""
        try:
            cur = self._conn.cursor()
            yield cur
            self._conn.commit()
        except sqlite3.Error as e:
            with contextlib.suppress(sqlite3.Error):
                self._conn.rollback()
            raise TaskStoreError(f"Can't {action}.") from e

    def _ensure_schema(self) -> None:
        with self._cursor("create the tasks table") as cur:
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY,
                    title TEXT NOT NULL,
                    description TEXT NOT NULL,
                    completed BOOLEAN NOT NULL,
                    priority INTEGER NOT NULL
                )
                """
            )

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            description=str(row["description"] or ""),
            completed=bool(row["completed"]),
            priority=Priority.from_db(row["priority"]),
            date=UNSTORED_DATE_PLACEHOLDER,
        )

    def _select(self, sql: str, params: tuple = (), *, action: str) -> list[Task]:
        with self._cursor(action) as cur:
            cur.execute(sql, params)
            rows = cur.fetchall()
        return [self._row_to_task(r) for r in rows]

    # ---- public API ----

    def count_tasks(self) -> int:
        with self._cursor("get record count") as cur:
            cur.execute("SELECT COUNT(*) FROM tasks")
            (n,) = cur.fetchone()
        return int(n)

    def add_task(self, task: Task) -> int:
        """Insert task, attach the new row id to it and return the id."""
        with self._cursor("add task to DB") as cur:
            cur.execute(
                "INSERT INTO tasks (title, description, completed, priority) VALUES (?, ?, ?, ?)",
                (
                    task.title.strip(),
                    task.description.strip(),
                    int(task.completed),
                    int(task.priority),
                ),
            )
            rowid = cur.lastrowid
        if rowid is None:
            raise TaskStoreError("SQLite did not return lastrowid for tasks insert")
        task.id = int(rowid)
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.name)
        return task.id

    def list_tasks(self) -> list[Task]:
        return self._select(f"SELECT {_COLUMNS} FROM tasks", action="get results from DB")

    def get_task(self, task_id: int) -> Task:
        tasks = self._select(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (int(task_id),),
            action=f"get task {task_id}",
        )
        if not tasks:
            raise TaskNotFoundError(task_id)
        return tasks[0]

    def list_tasks_by_priority(self, *, descending: bool = True) -> list[Task]:
        """All tasks ordered by priority; ties keep insertion order."""
        direction = "DESC" if descending else "ASC"
        return self._select(
            f"SELECT {_COLUMNS} FROM tasks ORDER BY priority {direction}, id ASC",
            action="get results from DB",
        )

    def update_task_status(self, task_id: int, completed: bool) -> int:
        with self._cursor("update the task completed property") as cur:
            cur.execute(
                "UPDATE tasks SET completed = ? WHERE id = ?",
                (int(completed), int(task_id)),
            )
            n = cur.rowcount
        logger.debug("Task status id=%s completed=%s rows=%s", task_id, completed, n)
        return n

    def update_task_priority(self, task_id: int, priority: Priority) -> int:
        with self._cursor("update the task priority property") as cur:
            cur.execute(
                "UPDATE tasks SET priority = ? WHERE id = ?",
                (int(priority), int(task_id)),
            )
            n = cur.rowcount
        logger.debug("Task priority id=%s priority=%s rows=%s", task_id, priority.name, n)
        return n

    def update_task_fields(self, task: Task) -> int:
        """Overwrite title and description of the row with task.id."""
        if task.id is None:
            raise TaskNotFoundError(None)
        with self._cursor("update the task") as cur:
            cur.execute(
                "UPDATE tasks SET title = ?, description = ? WHERE id = ?",
                (task.title.strip(), task.description.strip(), int(task.id)),
            )
            n = cur.rowcount
        logger.debug("Task fields id=%s rows=%s", task.id, n)
        return n

    def delete_task(self, task_id: int) -> int:
        with self._cursor("delete the task") as cur:
            cur.execute("DELETE FROM tasks WHERE id = ?", (int(task_id),))
            n = cur.rowcount
        logger.debug("Task deleted id=%s rows=%s", task_id, n)
        return n

    def clear(self) -> int:
        with self._cursor("clear database") as cur:
            cur.execute("DELETE FROM tasks")
            n = cur.rowcount
        logger.info("TaskStore cleared rows=%s", n)
        return n
