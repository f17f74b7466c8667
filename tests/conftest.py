"""Shared test fixtures for kanban tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from kanban.db import Store, open_store
from kanban.models import Status, Task


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary data root and point KANBAN_ROOT at it."""
    root = tmp_path / "kanban"
    root.mkdir(parents=True)
    (root / "config.yaml").write_text(
        "db_name: test.db\nlog_level: debug\nlog_file: test.log\n", encoding="utf-8"
    )

    os.environ["KANBAN_ROOT"] = str(root)
    yield root
    # Cleanup
    if "KANBAN_ROOT" in os.environ:
        del os.environ["KANBAN_ROOT"]


@pytest.fixture
def store(workspace: Path) -> Store:
    """An empty store with both tables created."""
    return open_store(workspace / "test.db")


@pytest.fixture
def project_id(store: Store) -> int:
    return store.projects.insert_project("Thesis")


@pytest.fixture
def seed_tasks(store: Store, project_id: int):
    """Insert tasks into the store. Each spec is ``(name, status)``."""

    def _seed(*specs: tuple[str, Status]) -> list[Task]:
        out = []
        for name, status in specs:
            task_id = store.tasks.insert_task(name, f"{name} notes", project_id, status)
            out.append(Task(id=task_id, name=name, info=f"{name} notes", status=status, project_id=project_id))
        return out

    return _seed
