"""Turn screen state into rich renderables for the terminal."""

from __future__ import annotations

from typing import Any

from rich import box
from rich.align import Align
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text
from textual.binding import Binding

from kanban.board import Board
from kanban.keys import KeyMap
from kanban.lane import PAD, Lane
from kanban.models import Status
from kanban.projects import ProjectList
from kanban.view_task import TaskDetail

GREY = "grey50"
HIGHLIGHT = "#C0FFE3"
SECONDARY = "#663399"
FOCUS_BORDER = "#5f5fd7"
SELECTED = "#ee6ff8"


def _help_entry(binding: Binding) -> str:
    return f"{binding.key_display or binding.key} {binding.description}"


def render_help(keys: KeyMap, show_all: bool) -> RenderableType:
    if not show_all:
        return Text(" • ".join(_help_entry(b) for b in keys.short_help()), style=GREY)

    grid = Table.grid(padding=(0, 4))
    columns = keys.full_help()
    for _ in columns:
        grid.add_column()
    depth = max(len(c) for c in columns)
    for i in range(depth):
        cells = []
        for column in columns:
            if i < len(column):
                cells.append(Text(_help_entry(column[i]), style=GREY))
            else:
                cells.append(Text(""))
        grid.add_row(*cells)
    return grid


# ── Board ─────────────────────────────────────────────────────


def render_lane(lane: Lane) -> RenderableType:
    lines: list[RenderableType] = [Text(f" {lane.title} ", style=f"bold {HIGHLIGHT} on {SECONDARY}"), Text("")]
    if not lane.items:
        lines.append(Text("No items.", style=GREY))
    for i, task in lane.visible_items():
        selected = lane.focused and i == lane.index
        marker = "│ " if selected else "  "
        style = SELECTED if selected else ""
        lines.append(Text(marker + task.name, style=f"bold {style}".strip(), overflow="ellipsis", no_wrap=True))
        info = task.info.splitlines()[0] if task.info else ""
        lines.append(Text(marker + info, style=style or GREY, overflow="ellipsis", no_wrap=True))
        lines.append(Text(""))
    if lane.total_pages > 1:
        lines.append(Text(f"{lane.page + 1}/{lane.total_pages}", style=GREY))

    body = Group(*lines)
    width = lane.width + PAD * 2
    if lane.focused:
        return Panel(body, box=box.ROUNDED, border_style=FOCUS_BORDER, padding=(1, PAD), width=width, height=lane.height + PAD * 2)
    return Panel(body, box=box.SIMPLE, padding=(1, PAD), width=width, height=lane.height + PAD * 2)


def render_board(board: Board) -> RenderableType:
    lanes = Table.grid(expand=False)
    for _ in Status:
        lanes.add_column()
    lanes.add_row(*(render_lane(board.lanes[s]) for s in Status))

    bar_width = max(10, board.width // 2 - PAD * 2)
    progress = ProgressBar(
        total=max(1, board.total_tasks),
        completed=board.completed_tasks,
        width=bar_width,
        complete_style=HIGHLIGHT,
        finished_style=HIGHLIGHT,
    )
    counter = Text(f"{board.completed_tasks}/{board.total_tasks} done ({board.progress:.0%})", style=GREY)

    return Group(
        Align.center(lanes),
        Align.center(render_help(board.keys, board.show_full_help)),
        Padding(Align.center(Group(progress, Align.center(counter))), (1, 0)),
    )


# ── Projects ──────────────────────────────────────────────────


def project_table_rows(projects: ProjectList) -> list[tuple[str, str, str, str]]:
    """Cells for the project table, one row per project, in list order."""
    return [
        (
            row.project.name,
            str(row.count(Status.TODO)),
            str(row.count(Status.IN_PROGRESS)),
            str(row.count(Status.DONE)),
        )
        for row in projects.rows
    ]


def render_projects_footer(projects: ProjectList) -> RenderableType:
    parts: list[RenderableType] = []
    if not projects.rows:
        parts.append(Text("No projects. Press n to create one.", style=GREY))
    parts.append(render_help(projects.keys, projects.show_full_help))
    return Group(*parts)


# ── Task detail ───────────────────────────────────────────────


def render_task(view: TaskDetail) -> RenderableType:
    body = Group(
        Padding(Text(view.task.name, style="bold"), (0, 0, 2, 0)),
        Text(view.task.info, style="italic"),
    )
    card = Panel(body, box=box.ROUNDED, border_style=SECONDARY, padding=1, expand=False)
    return Align.center(
        Group(Align.center(card), Align.center(render_help(view.keys, False))),
        vertical="middle",
        height=view.height or None,
    )


def render_screen(screen: Any) -> RenderableType:
    """Renderable for the screens drawn as a single static view."""
    if isinstance(screen, Board):
        return render_board(screen)
    if isinstance(screen, TaskDetail):
        return render_task(screen)
    return Text("loading...")
