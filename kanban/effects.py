"""Run the store calls screens ask for and turn their results into events."""

from __future__ import annotations

import logging
from dataclasses import replace

from kanban.board import Board
from kanban.db import Store
from kanban.messages import (
    AdvanceTask,
    ArchiveProject,
    BoardOpened,
    CreateProject,
    CreateTask,
    DeleteTask,
    Effect,
    Event,
    LoadProjects,
    OpenBoard,
    ProjectArchived,
    ProjectCreated,
    ProjectsLoaded,
    TaskAdvanced,
    TaskCreated,
    TaskDeleted,
    TaskEdited,
    UpdateTask,
)
from kanban.models import ProjectRow, ProjectStatus

logger = logging.getLogger(__name__)


def load_project_rows(store: Store, view: ProjectStatus) -> list[ProjectRow]:
    """Projects with ``view`` status, each with its live per-status task counts."""
    rows = []
    for project in store.projects.get_projects_by_status(view):
        counts = dict(store.tasks.get_task_counts_by_project_grouped_by_status(project.id))
        rows.append(ProjectRow(project=project, counts=counts))
    return rows


def perform(effect: Effect, store: Store) -> Event:
    """Make the store call described by ``effect``. StoreError propagates."""
    logger.debug(f"Performing {type(effect).__name__}")

    if isinstance(effect, CreateTask):
        task = effect.task
        task_id = store.tasks.insert_task(task.name, task.info, task.project_id, task.status)
        return TaskCreated(task=replace(task, id=task_id))

    if isinstance(effect, UpdateTask):
        return TaskEdited(task=store.tasks.update_task(effect.task), index=effect.index)

    if isinstance(effect, AdvanceTask):
        return TaskAdvanced(task=store.tasks.next_status(effect.task), source=effect.source)

    if isinstance(effect, DeleteTask):
        store.tasks.delete_task(effect.task.id)
        return TaskDeleted(task=effect.task, index=effect.index)

    if isinstance(effect, OpenBoard):
        board = Board.initialize(store.tasks, effect.project_id, effect.width, effect.height)
        return BoardOpened(board=board)

    if isinstance(effect, LoadProjects):
        return ProjectsLoaded(view=effect.view, rows=load_project_rows(store, effect.view))

    if isinstance(effect, CreateProject):
        return ProjectCreated(project_id=store.projects.insert_project(effect.name))

    if isinstance(effect, ArchiveProject):
        store.projects.archive_project(effect.project_id)
        return ProjectArchived(project_id=effect.project_id)

    raise TypeError(f"Unknown effect: {effect!r}")
