# src/threads_app/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The operations engine depends on Protocols instead of concrete implementations.
This keeps the store and the clock swappable and makes testing easier.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol

Sleep = Callable[[float], Awaitable[None]]
# Simulated work: asyncio.sleep in production, a gated fake in tests.


class TaskRepo(Protocol):
    """What the operations engine needs from the task store."""

    @property
    def disposed(self) -> bool: ...

    def get_tasks(self) -> tuple[Any, ...]: ...
    def get_status(self) -> str: ...
    def set_tasks(self, new_tasks: Sequence[Any]) -> None: ...
    def set_status(self, message: str) -> None: ...

    def new_task(self, title: str, description: str, priority: int) -> Any: ...
