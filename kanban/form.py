"""Two-field task form: title, then description.

The text itself is edited in Textual ``Input``/``TextArea`` widgets; the app
copies their values in with ``set_text`` before handing over a key press.
``ctrl+y`` on the title moves to the description; ``ctrl+y`` on the
description submits. Submitting never touches the store itself. It hands the
router a ``CreateTask`` or ``UpdateTask`` effect to run once the board is
active again.
"""

from __future__ import annotations

from enum import Enum

from kanban.keys import FORM_KEYS
from kanban.messages import (
    CreateTask,
    KeyPress,
    Navigate,
    Outcome,
    Quit,
    ScreenKind,
    UpdateTask,
)
from kanban.models import Status, Task

TITLE_PLACEHOLDER = "What is the task's title?"
DESCRIPTION_PLACEHOLDER = "Brief description"


class FormField(Enum):
    TITLE = "title"
    DESCRIPTION = "description"


class Form:
    def __init__(
        self,
        status: Status,
        project_id: int,
        width: int = 0,
        height: int = 0,
        editing: bool = False,
        index: int = 0,
        task_id: int = 0,
    ):
        self.status = status
        self.project_id = project_id
        self.width = width
        self.height = height
        self.editing = editing
        self.index = index  # position within the task's lane
        self.task_id = task_id
        self.keys = FORM_KEYS
        self.title = ""
        self.description = ""
        self.focused = FormField.TITLE

    @classmethod
    def new(cls, status: Status, project_id: int, width: int = 0, height: int = 0) -> Form:
        """Blank form creating a task in the ``status`` lane."""
        return cls(status, project_id, width, height)

    @classmethod
    def for_task(cls, task: Task, index: int, width: int = 0, height: int = 0) -> Form:
        """Form pre-filled from an existing task."""
        form = cls(task.status, task.project_id, width, height, editing=True, index=index, task_id=task.id)
        form.set_text(task.name, task.info)
        return form

    @property
    def heading(self) -> str:
        return "Edit task" if self.editing else f"New task in {self.status.title}"

    def set_text(self, title: str, description: str) -> None:
        self.title = title
        self.description = description

    def task(self) -> Task:
        return Task(
            id=self.task_id,
            name=self.title,
            info=self.description,
            status=self.status,
            project_id=self.project_id,
        )

    def advance(self) -> Navigate | None:
        """Move to the description, or submit if already there."""
        if self.focused == FormField.TITLE:
            self.focused = FormField.DESCRIPTION
            return None
        return self.submit()

    def submit(self) -> Navigate:
        if self.editing:
            effect = UpdateTask(task=self.task(), index=self.index)
        else:
            effect = CreateTask(task=self.task())
        return Navigate(ScreenKind.BOARD, action=effect)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def handle_key(self, press: KeyPress) -> Outcome:
        if self.keys.matches("quit", press):
            return Quit()
        if self.keys.matches("next", press):
            return self.advance()
        if self.keys.matches("back", press):
            return Navigate(ScreenKind.BOARD)
        return None
