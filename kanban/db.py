"""SQLite persistence layer for tasks and projects.

Every call opens its own connection and closes it before returning, on
success and on error alike. Connections are never pooled or shared.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterator

from kanban.models import Project, ProjectStatus, Status, Task, merge_task

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """A store call failed."""


class TaskNotFound(StoreError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id


@contextmanager
def connect(db_path: str | Path) -> Iterator[sqlite3.Connection]:
    """Scoped connection: commit on success, roll back on error, always close."""
    try:
        conn = sqlite3.connect(str(db_path))
    except sqlite3.Error as e:
        raise StoreError(f"Cannot open store {db_path}: {e}") from e
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise StoreError(str(e)) from e
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


# ── Tasks ─────────────────────────────────────────────────────


class TaskDB:
    """Typed accessors for the ``tasks`` table."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)

    def create_tasks_table(self) -> None:
        with connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS tasks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT,
                    info TEXT,
                    status INTEGER,
                    project INTEGER
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_tasks_project_status ON tasks(project, status)")

    def insert_task(self, name: str, info: str, project_id: int, status: Status) -> int:
        """Insert a task and return the id the store assigned to it."""
        with connect(self.db_path) as conn:
            cur = conn.execute(
                "INSERT INTO tasks (name, info, status, project) VALUES (?, ?, ?, ?)",
                (name, info, int(status), project_id),
            )
            task_id = int(cur.lastrowid)
        logger.debug(f"Inserted task {task_id} into project {project_id} ({status.name})")
        return task_id

    def delete_task(self, task_id: int) -> None:
        with connect(self.db_path) as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        logger.debug(f"Deleted task {task_id}")

    def get_task(self, task_id: int) -> Task:
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, name, info, status, project FROM tasks WHERE id = ?", (task_id,)
            ).fetchone()
        if row is None:
            raise TaskNotFound(task_id)
        return Task.from_row(row)

    def update_task(self, task: Task) -> Task:
        """Merge-update: fetch the stored row, fold ``task`` onto it, write it back.

        Returns the task as persisted.
        """
        merged = merge_task(self.get_task(task.id), task)
        with connect(self.db_path) as conn:
            conn.execute(
                "UPDATE tasks SET name = ?, info = ?, status = ?, project = ? WHERE id = ?",
                (merged.name, merged.info, int(merged.status), merged.project_id, merged.id),
            )
        logger.debug(f"Updated task {merged.id}")
        return merged

    def next_status(self, task: Task) -> Task:
        """Advance a task one status step (Done wraps to Todo) and persist it."""
        return self.update_task(replace(task, status=task.status.next()))

    def get_tasks_by_status(self, status: Status, project_id: int) -> list[Task]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, name, info, status, project FROM tasks "
                "WHERE status = ? AND project = ? ORDER BY id",
                (int(status), project_id),
            ).fetchall()
        return [Task.from_row(r) for r in rows]

    def get_task_counts_by_project_grouped_by_status(self, project_id: int) -> list[tuple[Status, int]]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT status, COUNT(*) FROM tasks WHERE project = ? GROUP BY status ORDER BY status",
                (project_id,),
            ).fetchall()
        return [(Status(int(r[0])), int(r[1])) for r in rows]


# ── Projects ──────────────────────────────────────────────────


class ProjectDB:
    """Typed accessors for the ``projects`` table."""

    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)

    def create_projects_table(self) -> None:
        with connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS projects (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT,
                    sort_order INTEGER,
                    status INTEGER DEFAULT 0
                )
            """)

    def get_highest_sort_order(self) -> int:
        with connect(self.db_path) as conn:
            row = conn.execute("SELECT COALESCE(MAX(sort_order), 0) FROM projects").fetchone()
        return int(row[0])

    def insert_project(self, name: str) -> int:
        """Append a project after the current highest sort order."""
        sort_order = self.get_highest_sort_order() + 1
        with connect(self.db_path) as conn:
            cur = conn.execute(
                "INSERT INTO projects (name, sort_order) VALUES (?, ?)", (name, sort_order)
            )
            project_id = int(cur.lastrowid)
        logger.debug(f"Inserted project {project_id} {name!r} at sort order {sort_order}")
        return project_id

    def get_project(self, project_id: int) -> Project | None:
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, name, sort_order, status FROM projects WHERE id = ?", (project_id,)
            ).fetchone()
        return Project.from_row(row) if row else None

    def get_all_projects(self) -> list[Project]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, name, sort_order, status FROM projects ORDER BY sort_order, id"
            ).fetchall()
        return [Project.from_row(r) for r in rows]

    def get_projects_by_status(self, status: ProjectStatus) -> list[Project]:
        with connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, name, sort_order, status FROM projects "
                "WHERE status = ? ORDER BY sort_order, id",
                (int(status),),
            ).fetchall()
        return [Project.from_row(r) for r in rows]

    def archive_project(self, project_id: int) -> None:
        with connect(self.db_path) as conn:
            conn.execute(
                "UPDATE projects SET status = ? WHERE id = ?", (int(ProjectStatus.ARCHIVED), project_id)
            )
        logger.debug(f"Archived project {project_id}")


# ── Store ─────────────────────────────────────────────────────


@dataclass
class Store:
    tasks: TaskDB
    projects: ProjectDB


def open_store(db_path: str | Path) -> Store:
    """Create both tables if needed. Raises StoreError if the store is unreachable."""
    store = Store(tasks=TaskDB(db_path), projects=ProjectDB(db_path))
    store.tasks.create_tasks_table()
    store.projects.create_projects_table()
    logger.info(f"Opened store at {db_path}")
    return store
