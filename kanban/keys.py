"""Key bindings for each screen, with the text shown in the help line.

Bindings are Textual ``Binding`` values keyed by action name. Screens match
presses against them in ``handle_key``, so they work without a running app.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual.binding import Binding

from kanban.messages import KeyPress


def binding_keys(binding: Binding) -> list[str]:
    """The key names of a binding (``"up,k"`` -> ``["up", "k"]``)."""
    return [k.strip() for k in binding.key.split(",")]


def matches(binding: Binding, press: KeyPress) -> bool:
    keys = binding_keys(binding)
    return press.key in keys or (press.char is not None and press.char in keys)


@dataclass(frozen=True)
class KeyMap:
    """A screen's bindings plus the layout of its short and full help views."""

    bindings: tuple[Binding, ...]
    short: tuple[str, ...]
    full: tuple[tuple[str, ...], ...]

    def __getitem__(self, action: str) -> Binding:
        for binding in self.bindings:
            if binding.action == action:
                return binding
        raise KeyError(action)

    def matches(self, action: str, press: KeyPress) -> bool:
        return matches(self[action], press)

    def binds(self, press: KeyPress) -> bool:
        """True if any binding of this map claims the press."""
        return any(matches(b, press) for b in self.bindings)

    def short_help(self) -> list[Binding]:
        return [self[a] for a in self.short]

    def full_help(self) -> list[list[Binding]]:
        return [[self[a] for a in column] for column in self.full]

    def help_height(self, show_all: bool) -> int:
        if not show_all:
            return 1
        return max(len(column) for column in self.full)


UP = Binding("up,k", "up", "move up", key_display="↑/k")
DOWN = Binding("down,j", "down", "move down", key_display="↓/j")
HELP = Binding("question_mark,?", "help", "toggle help", key_display="?")
QUIT = Binding("q,escape,ctrl+c", "quit", "quit", key_display="q")


BOARD_KEYS = KeyMap(
    bindings=(
        UP,
        DOWN,
        Binding("left,h", "left", "move left", key_display="←/h"),
        Binding("right,l", "right", "move right", key_display="→/l"),
        HELP,
        Binding("e", "edit", "edit task"),
        Binding("n", "new", "new task"),
        Binding("enter", "move", "move task"),
        Binding("d", "delete", "delete task"),
        Binding("v", "view", "view task"),
        Binding("p", "projects", "projects"),
        QUIT,
    ),
    short=("new", "projects", "quit", "help"),
    full=(
        ("up", "down", "left", "right"),
        ("new", "edit", "delete", "move", "view"),
        ("projects", "quit", "help"),
    ),
)

FORM_KEYS = KeyMap(
    bindings=(
        Binding("ctrl+y", "next", "next field/confirm"),
        Binding("ctrl+b", "back", "back"),
        Binding("ctrl+c", "quit", "quit"),
    ),
    short=("next", "back", "quit"),
    full=(("next", "back", "quit"),),
)

PROJECT_LIST_KEYS = KeyMap(
    bindings=(
        UP,
        DOWN,
        HELP,
        Binding("n", "new", "new project"),
        Binding("a", "archive", "archive project"),
        Binding("v", "view_archived", "view archived projects"),
        QUIT,
        Binding("enter,space", "select", "select project", key_display="enter/space"),
    ),
    short=("up", "down", "select", "help"),
    full=(
        ("up", "down", "select"),
        ("new", "archive", "view_archived"),
        ("help", "quit"),
    ),
)

VIEW_TASK_KEYS = KeyMap(
    bindings=(
        Binding("escape,b", "back", "back", key_display="esc/b"),
        Binding("q,ctrl+c", "quit", "quit", key_display="q"),
    ),
    short=("back", "quit"),
    full=(("back", "quit"),),
)
