# src/threads_app/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_operations import TaskOperations
from ..tasks.task_store import TaskStore
from .scope import TaskScope


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    store: TaskStore
    operations: TaskOperations
    scope: TaskScope
