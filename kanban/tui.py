"""Kanban TUI — terminal task board powered by Textual.

The app decodes key presses and resizes, hands them to the router, and
redraws whatever screen is active afterwards. The board and the task detail
are drawn as one ``Static``. The project list is a ``DataTable``; the task form
is an ``Input`` plus a ``TextArea``; new project names come from a modal.
"""

from __future__ import annotations

import logging
import sys

from textual import events, on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Vertical
from textual.screen import ModalScreen
from textual.widgets import DataTable, Input, Label, Static, TextArea

from kanban.db import Store, StoreError, open_store
from kanban.form import DESCRIPTION_PLACEHOLDER, TITLE_PLACEHOLDER, Form, FormField
from kanban.messages import KeyPress, ScreenKind
from kanban.projects import COLUMNS, ProjectList
from kanban.render import project_table_rows, render_help, render_projects_footer, render_screen
from kanban.router import Router
from kanban.workspace import data_root, db_path, init_settings, log_path

logger = logging.getLogger(__name__)

QUIT_MESSAGE = "Quitting KanBan CLI..."

# Keys the focused project table handles itself; its cursor drives the list.
TABLE_KEYS = frozenset({"up", "down", "pageup", "pagedown", "home", "end"})

CSS = """
Screen {
    background: $surface;
    overflow: hidden;
}

#screen {
    width: 1fr;
    height: 1fr;
    padding: 0 1;
}

#projects, #form {
    padding: 1 2;
}

.section-title {
    text-style: bold;
    color: #C0FFE3;
    background: #663399;
    padding: 0 1;
    margin-bottom: 1;
}

#project-table {
    height: auto;
    max-height: 1fr;
}

#title {
    margin-bottom: 1;
}

#description {
    height: 8;
}

.caption {
    color: $text-muted;
}

ProjectNameScreen {
    align: center middle;
}

#name-dialog {
    width: 60;
    height: auto;
    border: round #0087ff;
    background: $surface;
    padding: 1 2;
}
"""


def to_key_press(event: events.Key) -> KeyPress:
    return KeyPress(key=event.key, char=event.character if event.is_printable else None)


class ProjectNameScreen(ModalScreen[str | None]):
    """Modal asking for the name of a new project."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel"),
        Binding("ctrl+c", "quit_app", "Quit", priority=True),
    ]

    def compose(self) -> ComposeResult:
        yield Container(
            Label("New project", classes="section-title"),
            Input(placeholder="Project name", id="project-name"),
            Label("Press Enter to create, Escape to cancel", classes="caption"),
            id="name-dialog",
        )

    def on_mount(self) -> None:
        self.query_one("#project-name", Input).focus()

    @on(Input.Submitted)
    def on_submit(self, event: Input.Submitted) -> None:
        self.dismiss(event.value)

    def action_cancel(self) -> None:
        self.dismiss(None)

    def action_quit_app(self) -> None:
        self.app.exit(message=QUIT_MESSAGE)


class KanbanApp(App):
    """Kanban — personal task board."""

    TITLE = "Kanban"
    CSS = CSS
    AUTO_FOCUS = None
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, store: Store) -> None:
        super().__init__()
        self.router = Router(store)
        self._shown_rows: list[tuple[str, ...]] | None = None
        self._shown_form: Form | None = None

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label(id="projects-title", classes="section-title"),
            DataTable(id="project-table", cursor_type="row", zebra_stripes=True),
            Static(id="projects-help"),
            id="projects",
        )
        yield Vertical(
            Label(id="form-title", classes="section-title"),
            Input(placeholder=TITLE_PLACEHOLDER, id="title"),
            Label(DESCRIPTION_PLACEHOLDER, classes="caption"),
            TextArea(id="description"),
            Static(id="form-help"),
            id="form",
        )
        yield Static(id="screen")

    def on_mount(self) -> None:
        self.query_one("#project-table", DataTable).add_columns(*COLUMNS)
        self._guard(self.router.start, self.size.width, self.size.height)
        self._draw()

    def on_resize(self, event: events.Resize) -> None:
        self.router.resize(event.size.width, event.size.height)
        self._draw()

    # ── Input ─────────────────────────────────────────────────

    def on_key(self, event: events.Key) -> None:
        if isinstance(self.screen, ModalScreen) or self._widget_owns(event):
            return
        event.stop()
        event.prevent_default()

        current = self.router.current
        if isinstance(current, Form):
            current.set_text(
                self.query_one("#title", Input).value,
                self.query_one("#description", TextArea).text,
            )

        running = self._guard(self.router.handle_key, to_key_press(event))
        if running is False:
            self.exit(message=QUIT_MESSAGE)
            return

        current = self.router.current
        if isinstance(current, ProjectList) and current.naming:
            self.push_screen(ProjectNameScreen(), self._project_named)
        self._draw()

    def _widget_owns(self, event: events.Key) -> bool:
        """Keys left to the focused widget instead of the router."""
        active = self.router.active
        if active == ScreenKind.FORM:
            return not self.router.current.keys.binds(to_key_press(event))
        if active == ScreenKind.PROJECTS:
            return event.key in TABLE_KEYS
        return False

    def _project_named(self, name: str | None) -> None:
        projects = self.router.current
        if not isinstance(projects, ProjectList):
            return
        self._guard(self.router.dispatch, projects.finish_naming(name))
        self._draw()

    @on(DataTable.RowHighlighted, "#project-table")
    def _project_highlighted(self, event: DataTable.RowHighlighted) -> None:
        projects = self.router.screens.projects
        if projects is not None:
            projects.highlight(event.cursor_row)

    # ── Drawing ───────────────────────────────────────────────

    def _draw(self) -> None:
        active = self.router.active
        current = self.router.current
        if current is None:
            return
        self.query_one("#projects").display = active == ScreenKind.PROJECTS
        self.query_one("#form").display = active == ScreenKind.FORM
        screen = self.query_one("#screen", Static)
        screen.display = active in (ScreenKind.BOARD, ScreenKind.VIEW_TASK)

        if active == ScreenKind.PROJECTS:
            self._draw_projects(current)
        elif active == ScreenKind.FORM:
            self._draw_form(current)
        else:
            self._shown_form = None
            self.set_focus(None)
            screen.update(render_screen(current))

    def _draw_projects(self, projects: ProjectList) -> None:
        self.query_one("#projects-title", Label).update(projects.heading)
        table = self.query_one("#project-table", DataTable)
        rows = project_table_rows(projects)
        if rows != self._shown_rows:
            table.clear()
            for row, cells in zip(projects.rows, rows):
                table.add_row(*cells, key=str(row.project.id))
            self._shown_rows = rows
        if table.row_count and table.cursor_row != projects.cursor:
            table.move_cursor(row=projects.cursor)
        self.query_one("#projects-help", Static).update(render_projects_footer(projects))
        if self.focused is not table:
            table.focus()

    def _draw_form(self, form: Form) -> None:
        title = self.query_one("#title", Input)
        description = self.query_one("#description", TextArea)
        if form is not self._shown_form:
            self.query_one("#form-title", Label).update(form.heading)
            self.query_one("#form-help", Static).update(render_help(form.keys, False))
            title.value = form.title
            title.cursor_position = len(form.title)
            description.load_text(form.description)
            self._shown_form = form
        target = title if form.focused == FormField.TITLE else description
        if self.focused is not target:
            target.focus()

    def _guard(self, fn, *args):
        """Run a router call; a store failure ends the app with status 1."""
        try:
            return fn(*args)
        except StoreError as e:
            logger.exception("Store operation failed")
            self.exit(return_code=1, message=f"fatal: {e}")
            return None


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = data_root()
    try:
        settings = init_settings(root)
    except OSError as e:
        print(f"fatal: cannot prepare data directory {root}: {e}")
        sys.exit(1)

    logging.basicConfig(
        filename=str(log_path(root, settings)),
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting Kanban...")

    try:
        store = open_store(db_path(root, settings))
    except StoreError as e:
        logger.error(f"Store unavailable: {e}")
        print(f"fatal: {e}")
        sys.exit(1)

    app = KanbanApp(store)
    app.run()
    sys.exit(app.return_code or 0)


if __name__ == "__main__":
    main()
