"""Project list screen: open or archived projects with per-lane task counts."""

from __future__ import annotations

import logging

from kanban.keys import PROJECT_LIST_KEYS
from kanban.messages import (
    ArchiveProject,
    Command,
    CreateProject,
    Event,
    KeyPress,
    LoadProjects,
    Navigate,
    OpenBoard,
    Outcome,
    ProjectArchived,
    ProjectCreated,
    ProjectsLoaded,
    ProjectsStale,
    Quit,
    ScreenKind,
)
from kanban.models import ProjectRow, ProjectStatus

logger = logging.getLogger(__name__)

COLUMNS = ("Project", "Todo", "In Progress", "Done")


class ProjectList:
    def __init__(self, width: int = 0, height: int = 0, view: ProjectStatus = ProjectStatus.OPEN):
        self.width = width
        self.height = height
        self.view = view
        self.rows: list[ProjectRow] = []
        self.cursor = 0
        self.keys = PROJECT_LIST_KEYS
        self.show_full_help = False
        self.naming = False  # a project name is being asked for
        self._select_after_load: int | None = None

    @property
    def heading(self) -> str:
        return "Archived projects" if self.view == ProjectStatus.ARCHIVED else "Projects"

    def load(self) -> LoadProjects:
        return LoadProjects(view=self.view)

    def selected_row(self) -> ProjectRow | None:
        if not self.rows:
            return None
        return self.rows[self.cursor]

    def highlight(self, index: int) -> None:
        """Move the cursor to row ``index``, clamped to the list."""
        self.cursor = index
        self._clamp()

    def _clamp(self) -> None:
        self.cursor = min(max(0, self.cursor), max(0, len(self.rows) - 1))

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # ── Operations ────────────────────────────────────────────

    def select(self) -> Navigate | None:
        row = self.selected_row()
        if row is None:
            return None
        return Navigate(
            ScreenKind.BOARD,
            action=OpenBoard(project_id=row.project.id, width=self.width, height=self.height),
        )

    def archive(self) -> ArchiveProject | None:
        """Ask for the selected project to be archived. The row stays until it is."""
        row = self.selected_row()
        if row is None or self.view == ProjectStatus.ARCHIVED:
            return None
        return ArchiveProject(project_id=row.project.id)

    def toggle_view(self) -> LoadProjects:
        if self.view == ProjectStatus.OPEN:
            self.view = ProjectStatus.ARCHIVED
        else:
            self.view = ProjectStatus.OPEN
        self.cursor = 0
        return self.load()

    def start_naming(self) -> None:
        self.naming = True

    def finish_naming(self, name: str | None) -> CreateProject | None:
        """Close the name prompt. ``None`` means it was cancelled."""
        self.naming = False
        if name is None:
            return None
        return self.create(name)

    def create(self, name: str) -> CreateProject | None:
        name = name.strip()
        if not name:
            return None
        return CreateProject(name=name)

    # ── Events ────────────────────────────────────────────────

    def apply(self, event: Event) -> Command | None:
        if isinstance(event, ProjectsLoaded):
            if event.view == self.view:
                self.rows = list(event.rows)
                self._select_pending()
                self._clamp()
        elif isinstance(event, ProjectArchived):
            self.rows = [r for r in self.rows if r.project.id != event.project_id]
            self._clamp()
        elif isinstance(event, ProjectCreated):
            # New projects are open; show them with a full reload.
            self.view = ProjectStatus.OPEN
            self._select_after_load = event.project_id
            return self.load()
        elif isinstance(event, ProjectsStale):
            return self.load()
        return None

    def _select_pending(self) -> None:
        if self._select_after_load is None:
            return
        for i, row in enumerate(self.rows):
            if row.project.id == self._select_after_load:
                self.cursor = i
                break
        self._select_after_load = None

    def handle_key(self, press: KeyPress) -> Outcome:
        if self.naming:
            return None

        keys = self.keys
        if keys.matches("quit", press):
            return Quit()
        if keys.matches("up", press):
            self.highlight(self.cursor - 1)
        elif keys.matches("down", press):
            self.highlight(self.cursor + 1)
        elif keys.matches("select", press):
            return self.select()
        elif keys.matches("archive", press):
            return self.archive()
        elif keys.matches("view_archived", press):
            return self.toggle_view()
        elif keys.matches("new", press):
            self.start_naming()
        elif keys.matches("help", press):
            self.show_full_help = not self.show_full_help
        return None
