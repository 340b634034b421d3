# tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.observable import ObservableValue, Subscription
from .task_models import DEFAULT_PRIORITY, Task

logger = logging.getLogger(__name__)

DEFAULT_READY_MESSAGE = "Ready to add tasks"
DEFAULT_DESCRIPTION = "No description"


class TaskStore:
    """
    In-memory task store.

    Single authoritative holder of:
    - the ordered task list (insertion order unless a sort replaced it),
    - the current status line,
    - the id counter shared by every operation that creates tasks.

    Both values are ObservableValues; readers only ever get snapshots
    (tasks are published as immutable tuples).

    Lifecycle:
    - lives as long as the owning session
    - dispose() drops every later publish (late operations must not update a
      store that is gone)
    """

    def __init__(
        self,
        *,
        ready_message: str = DEFAULT_READY_MESSAGE,
        default_description: str = DEFAULT_DESCRIPTION,
    ) -> None:
        self._tasks: ObservableValue[tuple[Task, ...]] = ObservableValue((), name="tasks")
        self._status: ObservableValue[str] = ObservableValue(ready_message, name="status")
        self._default_description = default_description
        self._next_id = 1
        self._disposed = False
        logger.debug("TaskStore ready status=%r", ready_message)

    # ---- observables ----

    @property
    def tasks(self) -> ObservableValue[tuple[Task, ...]]:
        return self._tasks

    @property
    def status(self) -> ObservableValue[str]:
        return self._status

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ---- snapshots ----

    def get_tasks(self) -> tuple[Task, ...]:
        return self._tasks.get()

    def get_status(self) -> str:
        return self._status.get()

    def find_task(self, task_id: int) -> Task | None:
        for task in self._tasks.get():
            if task.id == task_id:
                return task
        return None

    # ---- publishing ----

    def set_tasks(self, new_tasks: Sequence[Task]) -> None:
        if self._disposed:
            logger.debug("Dropped tasks publish on disposed store (n=%d)", len(new_tasks))
            return
        self._tasks.set(tuple(new_tasks))

    def set_status(self, message: str) -> None:
        if self._disposed:
            logger.debug("Dropped status publish on disposed store: %s", message)
            return
        self._status.set(message)

    def subscribe_tasks(
        self, callback: Callable[[tuple[Task, ...]], None], *, replay: bool = True
    ) -> Subscription:
        return self._tasks.subscribe(callback, replay=replay)

    def subscribe_status(self, callback: Callable[[str], None], *, replay: bool = True) -> Subscription:
        return self._status.subscribe(callback, replay=replay)

    # ---- ids / construction ----

    def next_id(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def new_task(self, title: str, description: str = "", priority: int = DEFAULT_PRIORITY) -> Task:
        """Build a Task with a fresh id; blank descriptions get the placeholder."""
        desc = (description or "").strip() or self._default_description
        return Task(id=self.next_id(), title=title, description=desc, priority=priority)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        logger.debug("TaskStore disposed (tasks=%d)", len(self._tasks.get()))
