"""Typed dataclasses for the kanban data model.

Tasks and projects map one-to-one onto rows of the ``tasks`` and ``projects``
tables. ``from_row`` accepts anything indexable by column name (``sqlite3.Row``
or a plain dict); missing keys use defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping


# ── Status ────────────────────────────────────────────────────


class Status(IntEnum):
    """Lane identity. Ordered ``TODO < IN_PROGRESS < DONE``."""

    TODO = 0
    IN_PROGRESS = 1
    DONE = 2

    def next(self) -> Status:
        """Next status in the cycle; ``DONE`` wraps around to ``TODO``."""
        members = list(Status)
        return members[(members.index(self) + 1) % len(members)]

    def prev(self) -> Status:
        members = list(Status)
        return members[(members.index(self) - 1) % len(members)]

    @property
    def title(self) -> str:
        return STATUS_TITLES[self]


STATUS_TITLES: dict[Status, str] = {
    Status.TODO: "To Do",
    Status.IN_PROGRESS: "In Progress",
    Status.DONE: "Done",
}


class ProjectStatus(IntEnum):
    OPEN = 0
    ARCHIVED = 1


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    id: int = 0  # 0 = not saved yet
    name: str = ""
    info: str = ""
    status: Status = Status.TODO
    project_id: int = 0

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Task:
        return cls(
            id=int(row["id"] or 0),
            name=str(row["name"] or ""),
            info=str(row["info"] or ""),
            status=Status(int(row["status"] or 0)),
            project_id=int(row["project"] or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "info": self.info,
            "status": int(self.status),
            "project": self.project_id,
        }


def merge_task(old: Task, new: Task) -> Task:
    """Fold an incoming task onto the persisted one, field by field.

    Text fields overwrite only when non-empty and the project overwrites only
    when non-zero. Status always overwrites, since ``TODO`` (0) is a real value
    and not "absent". The id is never taken from ``new``.

    An intentionally cleared name or description cannot be told apart from one
    that was never supplied; the old value is kept in both cases.
    """
    return Task(
        id=old.id,
        name=new.name if new.name else old.name,
        info=new.info if new.info else old.info,
        status=new.status,
        project_id=new.project_id if new.project_id else old.project_id,
    )


# ── Projects ──────────────────────────────────────────────────


@dataclass
class Project:
    id: int = 0
    name: str = ""
    sort_order: int = 0
    status: ProjectStatus = ProjectStatus.OPEN

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Project:
        return cls(
            id=int(row["id"] or 0),
            name=str(row["name"] or ""),
            sort_order=int(row["sort_order"] or 0),
            status=ProjectStatus(int(row["status"] or 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "sort_order": self.sort_order,
            "status": int(self.status),
        }


@dataclass
class ProjectRow:
    """A project as listed on the project screen, with live task counts."""

    project: Project
    counts: dict[Status, int] = field(default_factory=dict)

    def count(self, status: Status) -> int:
        return self.counts.get(status, 0)
