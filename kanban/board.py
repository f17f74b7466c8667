"""The board screen: three lanes for one project plus running task totals.

``total_tasks`` always equals the number of tasks across all lanes and
``completed_tasks`` the number in the Done lane. Both are adjusted
incrementally on create, delete and advance rather than recounted.
"""

from __future__ import annotations

import logging

from kanban.db import TaskDB
from kanban.form import Form
from kanban.keys import BOARD_KEYS
from kanban.lane import Lane
from kanban.messages import (
    AdvanceTask,
    Command,
    DeleteTask,
    Event,
    KeyPress,
    LaneChanged,
    Navigate,
    Outcome,
    ProjectsStale,
    Quit,
    ScreenKind,
    TaskAdvanced,
    TaskCreated,
    TaskDeleted,
    TaskEdited,
)
from kanban.models import Status, Task
from kanban.view_task import TaskDetail

logger = logging.getLogger(__name__)

PROGRESS_HEIGHT = 1
PROGRESS_MARGIN = 1


class Board:
    def __init__(self, project_id: int, lanes: dict[Status, Lane], width: int = 0, height: int = 0):
        self.project_id = project_id
        self.lanes = lanes
        self.keys = BOARD_KEYS
        self.show_full_help = False
        self.width = width
        self.height = height
        self.focused = Status.TODO
        self.total_tasks = sum(len(lane) for lane in lanes.values())
        self.completed_tasks = len(lanes[Status.DONE])
        self.resize(width, height)

    @classmethod
    def initialize(cls, tasks: TaskDB, project_id: int, width: int, height: int) -> Board:
        """Load the three lanes of ``project_id`` and focus the Todo lane."""
        list_height = list_height_for(height, show_full_help=False)
        lanes = {s: Lane.initialize(tasks, width, list_height, project_id, s) for s in Status}
        board = cls(project_id, lanes, width, height)
        logger.debug(
            f"Board for project {project_id}: {board.total_tasks} tasks, {board.completed_tasks} done"
        )
        return board

    # ── Layout ────────────────────────────────────────────────

    def list_height(self) -> int:
        return list_height_for(self.height, self.show_full_help)

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        for lane in self.lanes.values():
            lane.resize(width, self.list_height())
            lane.blur()
        self.lanes[self.focused].focus()

    def toggle_help(self) -> None:
        self.show_full_help = not self.show_full_help
        self.resize(self.width, self.height)

    @property
    def progress(self) -> float:
        if self.total_tasks == 0:
            return 0.0
        return self.completed_tasks / self.total_tasks

    # ── Focus ─────────────────────────────────────────────────

    @property
    def focused_lane(self) -> Lane:
        return self.lanes[self.focused]

    def focus_next(self) -> None:
        self.focused_lane.blur()
        self.focused = self.focused.next()
        self.focused_lane.focus()

    def focus_previous(self) -> None:
        self.focused_lane.blur()
        self.focused = self.focused.prev()
        self.focused_lane.focus()

    def selected_task(self) -> Task | None:
        return self.focused_lane.selected_item()

    # ── Advance ───────────────────────────────────────────────

    def advance_selected_task(self) -> AdvanceTask | None:
        """Take the selected task out of its lane and ask for it to be advanced.

        The task is not in any lane until the ``TaskAdvanced`` result comes back.
        """
        lane = self.focused_lane
        task = lane.selected_item()
        if task is None:
            return None

        index = lane.index
        lane.remove_at(index)
        lane.select(max(0, index - 1))

        if lane.status == Status.DONE:
            self.completed_tasks -= 1

        return AdvanceTask(task=task, source=lane.status)

    def on_task_advanced(self, event: TaskAdvanced) -> LaneChanged:
        task = event.task
        if task.status == Status.DONE:
            self.completed_tasks += 1
        self.lanes[task.status].insert(task)
        return LaneChanged(status=event.source)

    # ── Delete ────────────────────────────────────────────────

    def delete_selected_task(self) -> DeleteTask | None:
        """Ask for the selected task to be deleted. Nothing changes until it is."""
        task = self.focused_lane.selected_item()
        if task is None:
            return None
        return DeleteTask(task=task, index=self.focused_lane.index)

    def on_task_deleted(self, event: TaskDeleted) -> None:
        lane = self.lanes[event.task.status]
        index = self._locate(lane, event.task, event.index)
        if index is None:
            logger.warning(f"Deleted task {event.task.id} was not on the board")
            return

        self.total_tasks -= 1
        if event.task.status == Status.DONE:
            self.completed_tasks -= 1
        lane.remove_at(index)

    # ── Create / edit ─────────────────────────────────────────

    def create_task(self, task: Task) -> None:
        self.total_tasks += 1
        if task.status == Status.DONE:
            self.completed_tasks += 1
        self.lanes[task.status].insert(task)

    def edit_task(self, task: Task, index: int) -> None:
        lane = self.lanes[task.status]
        found = self._locate(lane, task, index)
        if found is None:
            logger.warning(f"Edited task {task.id} was not in the {task.status.title} lane")
            return
        lane.set_at(found, task)

    @staticmethod
    def _locate(lane: Lane, task: Task, index: int) -> int | None:
        if 0 <= index < len(lane) and lane.items[index].id == task.id:
            return index
        return lane.index_of(task.id)

    # ── Events ────────────────────────────────────────────────

    def apply(self, event: Event) -> Command | None:
        if isinstance(event, TaskCreated):
            self.create_task(event.task)
        elif isinstance(event, TaskEdited):
            self.edit_task(event.task, event.index)
        elif isinstance(event, TaskAdvanced):
            return self.on_task_advanced(event)
        elif isinstance(event, TaskDeleted):
            self.on_task_deleted(event)
        elif isinstance(event, LaneChanged):
            self.lanes[event.status].refresh()
        return None

    def handle_key(self, press: KeyPress) -> Outcome:
        keys = self.keys
        lane = self.focused_lane

        if keys.matches("quit", press):
            return Quit()
        if keys.matches("left", press):
            if lane.total_pages > 1 and not lane.on_first_page():
                lane.prev_page()
            else:
                self.focus_previous()
        elif keys.matches("right", press):
            if lane.total_pages > 1 and not lane.on_last_page():
                lane.next_page()
            else:
                self.focus_next()
        elif keys.matches("up", press):
            lane.cursor_up()
        elif keys.matches("down", press):
            lane.cursor_down()
        elif keys.matches("move", press):
            return self.advance_selected_task()
        elif keys.matches("help", press):
            self.toggle_help()
        elif keys.matches("new", press):
            form = Form.new(self.focused, self.project_id, self.width, self.height)
            return Navigate(ScreenKind.FORM, screen=form)
        elif keys.matches("edit", press):
            task = lane.selected_item()
            if task is not None:
                form = Form.for_task(task, lane.index, self.width, self.height)
                return Navigate(ScreenKind.FORM, screen=form)
        elif keys.matches("delete", press):
            return self.delete_selected_task()
        elif keys.matches("view", press):
            task = lane.selected_item()
            if task is not None:
                return Navigate(ScreenKind.VIEW_TASK, screen=TaskDetail(task, self.width, self.height))
        elif keys.matches("projects", press):
            return Navigate(ScreenKind.PROJECTS, action=ProjectsStale())
        return None


def list_height_for(height: int, show_full_help: bool) -> int:
    """Terminal height left for the lanes after the help line and progress bar."""
    help_height = BOARD_KEYS.help_height(show_full_help)
    return max(0, height - help_height - PROGRESS_HEIGHT - PROGRESS_MARGIN * 2)
