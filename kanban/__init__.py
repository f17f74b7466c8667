"""Kanban core library — task board screens, store and routing.

Public API re-exports for convenient imports:
    from kanban import open_store, Router, Board, Task, Status, ...
"""

# Workspace & settings
from kanban.workspace import (
    data_root,
    ensure_root,
    Settings,
    load_settings,
    write_settings,
    init_settings,
    config_path,
    db_path,
    log_path,
)

# Models
from kanban.models import (
    Status,
    ProjectStatus,
    Task,
    Project,
    ProjectRow,
    merge_task,
)

# Persistence
from kanban.db import (
    StoreError,
    TaskNotFound,
    TaskDB,
    ProjectDB,
    Store,
    connect,
    open_store,
)

# Screens
from kanban.lane import Lane
from kanban.board import Board
from kanban.form import Form, FormField
from kanban.projects import ProjectList
from kanban.view_task import TaskDetail

# Routing
from kanban.messages import KeyPress, Navigate, Quit, ScreenKind
from kanban.effects import perform
from kanban.router import Router, Screens
