"""Tests for kanban/board.py — focus cycle, advance, counters."""

import io
import random

import pytest
from rich.console import Console

from kanban.board import Board, list_height_for
from kanban.effects import perform
from kanban.form import Form
from kanban.lane import Lane
from kanban.messages import (
    AdvanceTask,
    CreateTask,
    DeleteTask,
    KeyPress,
    LaneChanged,
    Navigate,
    ProjectsStale,
    Quit,
    ScreenKind,
    TaskAdvanced,
    TaskCreated,
    TaskDeleted,
    TaskEdited,
)
from kanban.models import Status, Task
from kanban.render import render_screen
from kanban.view_task import TaskDetail


def _press(key: str) -> KeyPress:
    return KeyPress(key=key, char=key if len(key) == 1 else None)


def _board(todo=(), in_progress=(), done=(), width=120, height=40) -> Board:
    lanes = {
        Status.TODO: Lane(Status.TODO, list(todo)),
        Status.IN_PROGRESS: Lane(Status.IN_PROGRESS, list(in_progress)),
        Status.DONE: Lane(Status.DONE, list(done)),
    }
    return Board(project_id=1, lanes=lanes, width=width, height=height)


def _names(board: Board, status: Status) -> list[str]:
    return [t.name for t in board.lanes[status].items]


def _assert_counters(board: Board) -> None:
    assert board.total_tasks == sum(len(lane) for lane in board.lanes.values())
    assert board.completed_tasks == len(board.lanes[Status.DONE])


def _advance(board: Board, store) -> None:
    """Advance the selected task through the store, as the router would."""
    effect = board.advance_selected_task()
    if effect is None:
        return
    follow_up = board.apply(perform(effect, store))
    board.apply(follow_up)


def test_initialize_counts_and_focus(store, seed_tasks, project_id):
    seed_tasks(("A", Status.TODO), ("B", Status.TODO), ("C", Status.IN_PROGRESS), ("D", Status.DONE))
    board = Board.initialize(store.tasks, project_id, 120, 40)
    assert board.total_tasks == 4
    assert board.completed_tasks == 1
    assert board.focused == Status.TODO
    assert board.lanes[Status.TODO].focused
    assert not board.lanes[Status.DONE].focused


def test_focus_next_and_previous_cycle():
    board = _board()
    board.focus_next()
    assert board.focused == Status.IN_PROGRESS
    board.focus_next()
    board.focus_next()
    assert board.focused == Status.TODO
    board.focus_previous()
    assert board.focused == Status.DONE
    assert board.lanes[Status.DONE].focused
    assert sum(lane.focused for lane in board.lanes.values()) == 1


def test_advance_scenario_todo_to_in_progress(store, seed_tasks, project_id):
    seed_tasks(("A", Status.TODO), ("B", Status.TODO))
    board = Board.initialize(store.tasks, project_id, 120, 40)
    board.lanes[Status.TODO].select(0)

    _advance(board, store)

    assert _names(board, Status.TODO) == ["B"]
    assert board.lanes[Status.TODO].index == 0
    assert _names(board, Status.IN_PROGRESS) == ["A"]
    assert board.total_tasks == 2
    assert board.completed_tasks == 0


def test_advance_phase_one_removes_before_persisting():
    a = Task(id=1, name="A", status=Status.TODO)
    board = _board(todo=[a, Task(id=2, name="B")])
    board.lanes[Status.TODO].select(1)

    effect = board.advance_selected_task()

    assert isinstance(effect, AdvanceTask)
    assert effect.task.name == "B"
    assert effect.source == Status.TODO
    assert _names(board, Status.TODO) == ["A"]
    assert board.lanes[Status.TODO].index == 0
    assert _names(board, Status.IN_PROGRESS) == []


def test_advance_phase_two_inserts_and_names_source_lane():
    board = _board(in_progress=[Task(id=3, name="C", status=Status.IN_PROGRESS)])
    board.focus_next()
    board.advance_selected_task()
    moved = Task(id=3, name="C", status=Status.DONE)
    follow_up = board.apply(TaskAdvanced(task=moved, source=Status.IN_PROGRESS))
    assert follow_up == LaneChanged(status=Status.IN_PROGRESS)
    assert _names(board, Status.DONE) == ["C"]
    assert board.completed_tasks == 1
    _assert_counters(board)


def test_advance_done_wraps_to_todo(store, seed_tasks, project_id):
    seed_tasks(("A", Status.DONE))
    board = Board.initialize(store.tasks, project_id, 120, 40)
    board.focus_previous()
    assert board.focused == Status.DONE

    _advance(board, store)

    assert _names(board, Status.DONE) == []
    assert _names(board, Status.TODO) == ["A"]
    assert board.lanes[Status.TODO].items[0].status == Status.TODO
    assert board.completed_tasks == 0
    assert board.total_tasks == 1


def test_advance_with_nothing_selected_is_noop():
    board = _board()
    assert board.advance_selected_task() is None
    assert board.handle_key(_press("enter")) is None
    _assert_counters(board)


def test_delete_waits_for_store():
    a = Task(id=1, name="A", status=Status.DONE)
    board = _board(done=[a])
    board.focus_previous()

    effect = board.delete_selected_task()
    assert isinstance(effect, DeleteTask)
    assert _names(board, Status.DONE) == ["A"]
    assert board.total_tasks == 1

    board.apply(TaskDeleted(task=a, index=0))
    assert _names(board, Status.DONE) == []
    assert board.total_tasks == 0
    assert board.completed_tasks == 0


def test_delete_last_task_in_lane(store, seed_tasks, project_id):
    seed_tasks(("A", Status.TODO))
    board = Board.initialize(store.tasks, project_id, 120, 40)
    board.apply(perform(board.delete_selected_task(), store))
    assert len(board.lanes[Status.TODO]) == 0
    assert board.total_tasks == 0
    assert board.selected_task() is None
    assert board.delete_selected_task() is None

    console = Console(file=io.StringIO(), width=120)
    console.print(render_screen(board))
    assert "0/0 done" in console.file.getvalue()


def test_delete_with_nothing_selected_is_noop():
    assert _board().delete_selected_task() is None


def test_create_task_directly_into_done():
    board = _board(todo=[Task(id=1, name="A")])
    board.apply(TaskCreated(task=Task(id=2, name="B", status=Status.DONE)))
    assert board.total_tasks == 2
    assert board.completed_tasks == 1
    assert _names(board, Status.DONE) == ["B"]


def test_edit_task_replaces_by_index():
    board = _board(in_progress=[Task(id=1, name="A", status=Status.IN_PROGRESS), Task(id=2, name="B", status=Status.IN_PROGRESS)])
    board.apply(TaskEdited(task=Task(id=2, name="B2", status=Status.IN_PROGRESS), index=1))
    assert _names(board, Status.IN_PROGRESS) == ["A", "B2"]
    assert board.total_tasks == 2


def test_edit_task_with_stale_index_finds_by_id():
    board = _board(todo=[Task(id=1, name="A"), Task(id=2, name="B")])
    board.apply(TaskEdited(task=Task(id=1, name="A2"), index=1))
    assert _names(board, Status.TODO) == ["A2", "B"]


def test_counters_hold_over_random_operations(store, project_id):
    board = Board.initialize(store.tasks, project_id, 120, 40)
    rng = random.Random(1234)

    for step in range(200):
        op = rng.choice(["create", "delete", "advance", "focus", "cursor"])
        if op == "create":
            status = rng.choice(list(Status))
            task = Task(name=f"t{step}", info="", status=status, project_id=project_id)
            board.apply(perform(CreateTask(task=task), store))
        elif op == "delete":
            effect = board.delete_selected_task()
            if effect is not None:
                board.apply(perform(effect, store))
        elif op == "advance":
            _advance(board, store)
        elif op == "focus":
            if rng.random() < 0.5:
                board.focus_next()
            else:
                board.focus_previous()
        else:
            board.focused_lane.select(rng.randrange(0, 5))
        _assert_counters(board)

    reloaded = Board.initialize(store.tasks, project_id, 120, 40)
    for status in Status:
        assert sorted(t.id for t in reloaded.lanes[status].items) == sorted(t.id for t in board.lanes[status].items)


def test_resize_refocuses_lane():
    board = _board(todo=[Task(id=1, name="A")])
    board.focus_next()
    board.resize(60, 20)
    assert board.lanes[Status.IN_PROGRESS].focused
    assert not board.lanes[Status.TODO].focused
    assert board.lanes[Status.TODO].height == list_height_for(20, False) - 4


def test_toggle_help_shrinks_lanes():
    board = _board(width=120, height=40)
    before = board.lanes[Status.TODO].height
    board.handle_key(_press("?"))
    assert board.show_full_help
    assert board.lanes[Status.TODO].height < before


def test_progress():
    assert _board().progress == 0.0
    board = _board(todo=[Task(id=1)], done=[Task(id=2, status=Status.DONE)])
    assert board.progress == pytest.approx(0.5)


# ── Keys ──────────────────────────────────────────────────────


def test_keys_left_right_change_lane():
    board = _board()
    board.handle_key(_press("right"))
    assert board.focused == Status.IN_PROGRESS
    board.handle_key(_press("h"))
    assert board.focused == Status.TODO


def test_keys_right_pages_before_changing_lane():
    board = _board(todo=[Task(id=i, name=str(i)) for i in range(1, 10)], height=20)
    lane = board.lanes[Status.TODO]
    assert lane.total_pages > 1
    board.handle_key(_press("right"))
    assert board.focused == Status.TODO
    assert lane.page == 1


def test_keys_quit():
    assert isinstance(_board().handle_key(_press("q")), Quit)
    assert isinstance(_board().handle_key(KeyPress("ctrl+c")), Quit)


def test_keys_new_opens_form_in_focused_lane():
    board = _board()
    board.focus_next()
    nav = board.handle_key(_press("n"))
    assert isinstance(nav, Navigate)
    assert nav.target == ScreenKind.FORM
    assert isinstance(nav.screen, Form)
    assert nav.screen.status == Status.IN_PROGRESS
    assert nav.screen.project_id == 1
    assert not nav.screen.editing


def test_keys_edit_opens_prefilled_form():
    board = _board(todo=[Task(id=1, name="A"), Task(id=2, name="B", info="bee", project_id=1)])
    board.handle_key(_press("down"))
    nav = board.handle_key(_press("e"))
    assert nav.screen.editing
    assert nav.screen.index == 1
    assert nav.screen.task_id == 2
    assert nav.screen.title == "B"
    assert nav.screen.description == "bee"


def test_keys_edit_and_view_need_selection():
    board = _board()
    assert board.handle_key(_press("e")) is None
    assert board.handle_key(_press("v")) is None


def test_keys_view_opens_task_detail():
    nav = _board(todo=[Task(id=1, name="A")]).handle_key(_press("v"))
    assert nav.target == ScreenKind.VIEW_TASK
    assert isinstance(nav.screen, TaskDetail)
    assert nav.screen.task.name == "A"


def test_keys_projects_marks_list_stale():
    nav = _board().handle_key(_press("p"))
    assert nav.target == ScreenKind.PROJECTS
    assert isinstance(nav.action, ProjectsStale)
