"""Read-only view of a single task."""

from __future__ import annotations

from kanban.keys import VIEW_TASK_KEYS
from kanban.messages import KeyPress, Navigate, Outcome, Quit, ScreenKind
from kanban.models import Task


class TaskDetail:
    def __init__(self, task: Task, width: int = 0, height: int = 0):
        self.task = task
        self.width = width
        self.height = height
        self.keys = VIEW_TASK_KEYS

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def handle_key(self, press: KeyPress) -> Outcome:
        if self.keys.matches("back", press):
            return Navigate(ScreenKind.BOARD)
        if self.keys.matches("quit", press):
            return Quit()
        return None
