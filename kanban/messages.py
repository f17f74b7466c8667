"""Values passed between screens and the router.

Screens never touch the store. A key press returns at most one outcome:
``Navigate`` to another screen, ``Quit``, or a ``Command``. A command is either
an ``Effect`` (a store call for the router to perform, producing an ``Event``)
or an ``Event`` folded straight back into the active screen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from kanban.models import ProjectRow, ProjectStatus, Status, Task

if TYPE_CHECKING:
    from kanban.board import Board


class ScreenKind(Enum):
    BOARD = "board"
    FORM = "form"
    PROJECTS = "projects"
    VIEW_TASK = "view_task"


@dataclass(frozen=True)
class KeyPress:
    """A decoded key press: a key name (``"enter"``, ``"ctrl+y"``, ``"a"``) and its printable character, if any."""

    key: str
    char: str | None = None

    @property
    def printable(self) -> bool:
        return self.char is not None and len(self.char) == 1 and self.char.isprintable()


# ── Effects ───────────────────────────────────────────────────


class Effect:
    """A store call to make on behalf of a screen."""


@dataclass
class CreateTask(Effect):
    task: Task


@dataclass
class UpdateTask(Effect):
    task: Task
    index: int


@dataclass
class AdvanceTask(Effect):
    task: Task
    source: Status


@dataclass
class DeleteTask(Effect):
    task: Task
    index: int


@dataclass
class OpenBoard(Effect):
    project_id: int
    width: int
    height: int


@dataclass
class LoadProjects(Effect):
    view: ProjectStatus


@dataclass
class CreateProject(Effect):
    name: str


@dataclass
class ArchiveProject(Effect):
    project_id: int


# ── Events ────────────────────────────────────────────────────


class Event:
    """The result of an effect, or a screen-local notification."""


@dataclass
class TaskCreated(Event):
    task: Task


@dataclass
class TaskEdited(Event):
    task: Task
    index: int


@dataclass
class TaskAdvanced(Event):
    task: Task
    source: Status


@dataclass
class TaskDeleted(Event):
    task: Task
    index: int


@dataclass
class LaneChanged(Event):
    """A lane's list was mutated; its cursor and page need clamping."""

    status: Status


@dataclass
class BoardOpened(Event):
    board: Board


@dataclass
class ProjectsStale(Event):
    """The project list should reload its current view."""


@dataclass
class ProjectsLoaded(Event):
    view: ProjectStatus
    rows: list[ProjectRow] = field(default_factory=list)


@dataclass
class ProjectCreated(Event):
    project_id: int


@dataclass
class ProjectArchived(Event):
    project_id: int


Command = Union[Effect, Event]


# ── Navigation ────────────────────────────────────────────────


@dataclass
class Navigate:
    """Switch the active screen.

    ``screen`` replaces the registry entry for ``target`` when given. ``action``
    runs after the switch and its result is folded into the new active screen.
    """

    target: ScreenKind
    screen: Any = None
    action: Command | None = None


@dataclass
class Quit:
    pass


Outcome = Union[Navigate, Quit, Effect, Event, None]
