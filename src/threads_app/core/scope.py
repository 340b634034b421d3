# src/threads_app/core/scope.py

from __future__ import annotations

"""
Structured concurrency for the session.

A TaskScope owns every operation launched on behalf of a session:
- launch() schedules the operation as an asyncio.Task and hands it the
  scope's CancellationToken,
- close()/aclose() cancel the token and every pending task.

Operations check the token before each publish, so work that resumes after
the owner is gone never touches its state.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class ScopeClosedError(RuntimeError):
    """Raised when launching work on a scope that was already closed."""


class CancellationToken:
    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class TaskScope:
    def __init__(self, name: str = "session") -> None:
        self.name = name
        self.token = CancellationToken()
        self._tasks: set[asyncio.Task[Any]] = set()

    @property
    def closed(self) -> bool:
        return self.token.cancelled

    @property
    def active(self) -> bool:
        return not self.token.cancelled

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def launch(
        self,
        op: Callable[..., Awaitable[Any]],
        *args: Any,
        **kwargs: Any,
    ) -> asyncio.Task[Any]:
        """
        Start `op(*args, token=self.token, **kwargs)` without blocking the caller.

        Must be called from a running event loop.
        """
        if self.closed:
            raise ScopeClosedError(f"scope {self.name!r} is closed")

        op_name = getattr(op, "__name__", repr(op))
        task = asyncio.create_task(
            op(*args, token=self.token, **kwargs),
            name=f"{self.name}:{op_name}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.debug("Launched %s in scope %s (pending=%d)", op_name, self.name, len(self._tasks))
        return task

    def _on_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("Task %s cancelled", task.get_name())
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Task %s failed", task.get_name(), exc_info=exc)

    def close(self) -> None:
        """Cancel the token and every pending task (does not wait)."""
        if not self.token.cancelled:
            logger.info("Closing scope %s (pending=%d)", self.name, len(self._tasks))
        self.token.cancel()
        for task in list(self._tasks):
            task.cancel()

    async def aclose(self) -> None:
        """Cancel everything and wait until the cancelled tasks actually finish."""
        self.close()
        pending = list(self._tasks)
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def __aenter__(self) -> TaskScope:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()
