"""Screen router: owns every screen and forwards input to the active one.

A screen answers a key press with an outcome. ``Navigate`` switches the active
screen and may carry an action that runs after the switch. ``Quit`` stops the
app. An effect is performed against the store, and the resulting event is
folded into whichever screen is active by then. Folding an event may yield a
further command; the router keeps going until none is left.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from kanban.board import Board
from kanban.db import Store
from kanban.effects import perform
from kanban.form import Form
from kanban.messages import (
    BoardOpened,
    Command,
    Effect,
    Event,
    KeyPress,
    Navigate,
    Outcome,
    Quit,
    ScreenKind,
)
from kanban.projects import ProjectList
from kanban.view_task import TaskDetail

logger = logging.getLogger(__name__)


@dataclass
class Screens:
    """Registry of screen instances plus which one is active."""

    active: ScreenKind = ScreenKind.PROJECTS
    board: Board | None = None
    form: Form | None = None
    projects: ProjectList | None = None
    view_task: TaskDetail | None = None
    width: int = 0
    height: int = 0

    def get(self, kind: ScreenKind) -> Any:
        return getattr(self, kind.value)

    def set(self, kind: ScreenKind, screen: Any) -> None:
        setattr(self, kind.value, screen)

    def all(self) -> list[Any]:
        return [s for s in (self.board, self.form, self.projects, self.view_task) if s is not None]


class Router:
    def __init__(self, store: Store, screens: Screens | None = None):
        self.store = store
        self.screens = screens if screens is not None else Screens()
        self.quitting = False

    @property
    def active(self) -> ScreenKind:
        return self.screens.active

    @property
    def current(self) -> Any:
        return self.screens.get(self.screens.active)

    def start(self, width: int, height: int) -> None:
        """Open on the project list and load its rows."""
        self.screens.width = width
        self.screens.height = height
        projects = ProjectList(width, height)
        self.screens.set(ScreenKind.PROJECTS, projects)
        self.screens.active = ScreenKind.PROJECTS
        self.run(projects.load())

    # ── Input ─────────────────────────────────────────────────

    def handle_key(self, press: KeyPress) -> bool:
        """Dispatch a key press. Returns False once the app should quit."""
        screen = self.current
        if screen is None:
            return not self.quitting

        return self.dispatch(screen.handle_key(press))

    def dispatch(self, outcome: Outcome) -> bool:
        """Act on a screen outcome. Returns False once the app should quit."""
        if isinstance(outcome, Quit):
            self.quitting = True
        elif isinstance(outcome, Navigate):
            self.navigate(outcome)
        elif isinstance(outcome, (Effect, Event)):
            self.run(outcome)
        return not self.quitting

    def resize(self, width: int, height: int) -> None:
        self.screens.width = width
        self.screens.height = height
        for screen in self.screens.all():
            screen.resize(width, height)

    # ── Navigation ────────────────────────────────────────────

    def navigate(self, nav: Navigate) -> None:
        outgoing = self.screens.active
        self.screens.set(outgoing, self.current)
        if nav.screen is not None:
            self.screens.set(nav.target, nav.screen)
        self.screens.active = nav.target
        logger.debug(f"Navigate {outgoing.value} -> {nav.target.value}")

        if nav.action is not None:
            self.run(nav.action)

    def run(self, command: Command | None) -> None:
        """Perform effects and fold events until nothing is pending."""
        while command is not None:
            if isinstance(command, Effect):
                command = perform(command, self.store)
            command = self.fold(command)

    def fold(self, event: Event) -> Command | None:
        if isinstance(event, BoardOpened):
            self.screens.set(ScreenKind.BOARD, event.board)
            return None

        screen = self.current
        if screen is None or not hasattr(screen, "apply"):
            logger.warning(f"No screen to fold {type(event).__name__} into")
            return None
        return screen.apply(event)
