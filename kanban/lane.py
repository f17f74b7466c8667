"""One status-filtered, paginated column of tasks on a board.

List mutations here are in-memory only. Writing to the store is the caller's
job, so the two can be exercised separately.
"""

from __future__ import annotations

from kanban.db import TaskDB
from kanban.models import Status, Task

LANE_COUNT = len(Status)
PAD = 2  # horizontal padding inside a lane, also its vertical chrome
TITLE_LINES = 2  # lane title + blank line
ITEM_LINES = 3  # name, description, spacer


class Lane:
    def __init__(self, status: Status, items: list[Task] | None = None, width: int = 0, height: int = 0):
        self.status = status
        self.title = status.title
        self.focused = False
        self.items: list[Task] = list(items or [])
        self.index = 0
        self.page = 0
        self.width = 0
        self.height = 0
        self.per_page = 1
        self.resize(width, height)

    @classmethod
    def initialize(cls, tasks: TaskDB, width: int, height: int, project_id: int, status: Status) -> Lane:
        """Load every task of ``project_id`` with ``status``, in store order."""
        return cls(status, tasks.get_tasks_by_status(status, project_id), width, height)

    def __len__(self) -> int:
        return len(self.items)

    # ── Focus ─────────────────────────────────────────────────

    def focus(self) -> None:
        self.focused = True

    def blur(self) -> None:
        self.focused = False

    # ── Viewport ──────────────────────────────────────────────

    def resize(self, width: int, height: int) -> None:
        """Size the list to one third of ``width`` and ``height`` minus chrome."""
        self.width = max(0, width // LANE_COUNT - PAD * 2)
        self.height = max(0, height - PAD * 2)
        self.per_page = max(1, (self.height - TITLE_LINES) // ITEM_LINES)
        self._sync_page()

    @property
    def total_pages(self) -> int:
        return max(1, -(-len(self.items) // self.per_page))

    def on_first_page(self) -> bool:
        return self.page == 0

    def on_last_page(self) -> bool:
        return self.page >= self.total_pages - 1

    def next_page(self) -> None:
        if not self.on_last_page():
            self.page += 1
            self.index = min(self.page * self.per_page, len(self.items) - 1)

    def prev_page(self) -> None:
        if not self.on_first_page():
            self.page -= 1
            self.index = self.page * self.per_page

    def visible_items(self) -> list[tuple[int, Task]]:
        start = self.page * self.per_page
        return list(enumerate(self.items))[start:start + self.per_page]

    def _sync_page(self) -> None:
        self.page = self.index // self.per_page if self.items else 0

    # ── Selection ─────────────────────────────────────────────

    def selected_item(self) -> Task | None:
        if not self.items:
            return None
        return self.items[self.index]

    def select(self, index: int) -> None:
        self.index = min(max(0, index), max(0, len(self.items) - 1))
        self._sync_page()

    def cursor_up(self) -> None:
        self.select(self.index - 1)

    def cursor_down(self) -> None:
        self.select(self.index + 1)

    def refresh(self) -> None:
        """Clamp the cursor and page after the list changed underneath them."""
        self.select(self.index)

    # ── Mutation ──────────────────────────────────────────────

    def insert(self, task: Task, index: int | None = None) -> None:
        """Insert at ``index``, or append when omitted."""
        if index is None or index >= len(self.items):
            self.items.append(task)
        else:
            self.items.insert(max(0, index), task)

    def remove_at(self, index: int) -> Task:
        task = self.items.pop(index)
        self.refresh()
        return task

    def set_at(self, index: int, task: Task) -> None:
        self.items[index] = task

    def index_of(self, task_id: int) -> int | None:
        for i, t in enumerate(self.items):
            if t.id == task_id:
                return i
        return None
