# src/threads_app/tasks/task_operations.py

from __future__ import annotations

"""
Task operations engine.

Every operation follows the same shape:
- publish a "started" status naming the simulated execution context,
- suspend for the simulated work (never blocks the event loop),
- re-read the store, compute the new list, publish list then status.

List-wide operations (sort, load, clear, process-all) always work on the
list as it is after the delay, so overlapping operations compose
(last publish wins, nothing is lost to a stale pre-delay copy).
process_task works on the task it was given.

Each operation accepts a CancellationToken (TaskScope.launch passes the
scope's token). A cancelled token suppresses every later publish.
"""

import asyncio
import logging
from collections.abc import Iterable

from ..config import DelayProfile
from ..core.ports import Sleep, TaskRepo
from ..core.scope import CancellationToken
from .task_models import DEFAULT_PRIORITY, SAMPLE_TASKS, ExecutionContext, Task

logger = logging.getLogger(__name__)

NOTHING_TO_PROCESS = "No tasks to process"


def sort_by_priority(tasks: Iterable[Task]) -> list[Task]:
    """
    Priority descending (High first), then id ascending (creation order).

    sorted() is stable, so the result is deterministic and idempotent.
    """
    return sorted(tasks, key=lambda t: (-t.priority, t.id))


class TaskOperations:
    def __init__(
        self,
        store: TaskRepo,
        *,
        delays: DelayProfile | None = None,
        sleep: Sleep | None = None,
        token: CancellationToken | None = None,
    ) -> None:
        self.store = store
        self.delays = delays or DelayProfile()
        self._sleep: Sleep = sleep or asyncio.sleep
        # Used when an operation is awaited directly instead of launched in a scope.
        self._default_token = token

    # ---- helpers ----

    def _live(self, token: CancellationToken | None) -> bool:
        token = token or self._default_token
        if token is not None and token.cancelled:
            return False
        return not self.store.disposed

    def _status(self, message: str, token: CancellationToken | None) -> bool:
        if not self._live(token):
            logger.debug("Suppressed status publish: %s", message)
            return False
        self.store.set_status(message)
        return True

    def _tasks(self, tasks: Iterable[Task], token: CancellationToken | None) -> bool:
        if not self._live(token):
            logger.debug("Suppressed tasks publish")
            return False
        self.store.set_tasks(tuple(tasks))
        return True

    async def _simulate(self, seconds: float, context: ExecutionContext) -> None:
        logger.debug("Simulating %.2fs of %s work", seconds, context.value)
        await self._sleep(seconds)

    # ---- operations ----

    async def add_task(
        self,
        title: str,
        description: str = "",
        priority: int = DEFAULT_PRIORITY,
        *,
        token: CancellationToken | None = None,
    ) -> Task | None:
        """Append a new task right away (immediate context)."""
        logger.debug("add_task started title=%r", title)
        if not self._live(token):
            return None

        task = self.store.new_task(title, description, priority)
        self._tasks((*self.store.get_tasks(), task), token)
        self._status(f"Task '{title}' added ({ExecutionContext.IMMEDIATE})", token)
        logger.info("Task added id=%s priority=%s", task.id, task.priority)
        return task

    async def process_task(self, task: Task, *, token: CancellationToken | None = None) -> str | None:
        """Simulate CPU-bound processing of one task. The list is not touched."""
        logger.debug("process_task started id=%s", task.id)
        ctx = ExecutionContext.CPU_BOUND
        if not self._status(f"Processing '{task.title}' ({ctx})...", token):
            return None

        await self._simulate(self.delays.process, ctx)

        message = f"{task.title}: done (priority {task.priority_name})"
        if not self._status(message, token):
            return None
        logger.info("Task processed id=%s", task.id)
        return message

    async def sort_tasks_by_priority(
        self, *, token: CancellationToken | None = None
    ) -> tuple[Task, ...] | None:
        logger.debug("sort_tasks_by_priority started")
        ctx = ExecutionContext.CPU_BOUND
        if not self._status(f"Sorting tasks ({ctx})...", token):
            return None

        await self._simulate(self.delays.sort, ctx)

        ordered = tuple(sort_by_priority(self.store.get_tasks()))
        if not self._tasks(ordered, token):
            return None
        self._status(f"Tasks sorted high→low ({ctx})", token)
        logger.info("Tasks sorted n=%d", len(ordered))
        return ordered

    async def process_all_tasks(self, *, token: CancellationToken | None = None) -> int | None:
        logger.debug("process_all_tasks started")
        ctx = ExecutionContext.IO_BOUND
        if not self.store.get_tasks():
            return 0 if self._status(NOTHING_TO_PROCESS, token) else None

        if not self._status(f"Processing all tasks ({ctx})...", token):
            return None

        await self._simulate(self.delays.process_all, ctx)

        count = len(self.store.get_tasks())
        if not self._status(f"{count} tasks processed ({ctx})", token):
            return None
        logger.info("All tasks processed n=%d", count)
        return count

    async def clear_all_tasks(self, *, token: CancellationToken | None = None) -> None:
        logger.debug("clear_all_tasks started")
        if not self._tasks((), token):
            return
        self._status(f"All tasks cleared ({ExecutionContext.IMMEDIATE})", token)
        logger.info("All tasks cleared")

    async def load_sample_tasks(
        self, *, token: CancellationToken | None = None
    ) -> tuple[Task, ...] | None:
        """Simulate loading fixtures from a slow source (I/O-bound context)."""
        logger.debug("load_sample_tasks started")
        ctx = ExecutionContext.IO_BOUND
        if not self._status(f"Loading sample tasks ({ctx})...", token):
            return None

        await self._simulate(self.delays.load, ctx)

        if not self._live(token):
            return None
        # Ids are allocated only once the "load" finished, continuing the shared counter.
        loaded = tuple(self.store.new_task(s.title, s.description, s.priority) for s in SAMPLE_TASKS)
        self._tasks((*self.store.get_tasks(), *loaded), token)
        self._status(f"{len(loaded)} tasks loaded ({ctx})", token)
        logger.info("Sample tasks loaded n=%d first_id=%s", len(loaded), loaded[0].id)
        return loaded
