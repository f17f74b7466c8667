"""Tests for kanban/form.py — the two-step task form."""

from kanban.form import DESCRIPTION_PLACEHOLDER, TITLE_PLACEHOLDER, Form, FormField
from kanban.messages import CreateTask, KeyPress, Navigate, Quit, ScreenKind, UpdateTask
from kanban.models import Status, Task


def _press(key: str, char: str | None = None) -> KeyPress:
    if char is None and len(key) == 1:
        char = key
    return KeyPress(key=key, char=char)


def test_placeholders():
    assert TITLE_PLACEHOLDER == "What is the task's title?"
    assert DESCRIPTION_PLACEHOLDER == "Brief description"


def test_new_form_is_blank():
    form = Form.new(Status.IN_PROGRESS, 7)
    assert form.title == ""
    assert form.description == ""
    assert form.focused == FormField.TITLE
    assert not form.editing
    assert form.heading == "New task in In Progress"


def test_ctrl_y_moves_to_description_then_submits():
    form = Form.new(Status.IN_PROGRESS, 7)
    form.set_text("Write intro", "")
    assert form.handle_key(_press("ctrl+y")) is None
    assert form.focused == FormField.DESCRIPTION

    form.set_text("Write intro", "two pages")
    nav = form.handle_key(_press("ctrl+y"))
    assert isinstance(nav, Navigate)
    assert nav.target == ScreenKind.BOARD
    assert isinstance(nav.action, CreateTask)
    task = nav.action.task
    assert task.name == "Write intro"
    assert task.info == "two pages"
    assert task.status == Status.IN_PROGRESS
    assert task.project_id == 7
    assert task.id == 0


def test_text_keys_are_left_to_the_inputs():
    form = Form.new(Status.TODO, 1)
    for key in ("q", "v", "enter", "backspace", "escape"):
        assert form.handle_key(_press(key)) is None
    assert form.focused == FormField.TITLE


def test_editing_prefills_and_submits_update():
    task = Task(id=4, name="Old", info="notes", status=Status.DONE, project_id=2)
    form = Form.for_task(task, index=3)
    assert form.editing
    assert form.heading == "Edit task"
    assert (form.title, form.description) == ("Old", "notes")

    form.set_text("Older", "notes")
    form.handle_key(_press("ctrl+y"))
    nav = form.handle_key(_press("ctrl+y"))
    assert isinstance(nav.action, UpdateTask)
    assert nav.action.index == 3
    assert nav.action.task == Task(id=4, name="Older", info="notes", status=Status.DONE, project_id=2)


def test_back_returns_without_effect():
    nav = Form.new(Status.TODO, 1).handle_key(_press("ctrl+b"))
    assert nav == Navigate(ScreenKind.BOARD)


def test_ctrl_c_quits():
    assert isinstance(Form.new(Status.TODO, 1).handle_key(_press("ctrl+c")), Quit)


def test_binds_only_its_control_keys():
    keys = Form.new(Status.TODO, 1).keys
    assert keys.binds(_press("ctrl+y"))
    assert keys.binds(_press("ctrl+b"))
    assert not keys.binds(_press("a"))
    assert not keys.binds(_press("backspace"))


def test_resize():
    form = Form.new(Status.TODO, 1)
    form.resize(100, 30)
    assert (form.width, form.height) == (100, 30)
