# src/threads_app/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- wires store, scope and operations engine into AppState,
- tears a session down (cancel in-flight work, dispose the store).
"""

from __future__ import annotations

import logging

from ..config import DelayProfile, get_settings
from ..core.ports import Sleep
from ..core.scope import TaskScope
from ..core.state import AppState
from ..tasks.task_operations import TaskOperations
from ..tasks.task_store import DEFAULT_DESCRIPTION, DEFAULT_READY_MESSAGE, TaskStore

logger = logging.getLogger(__name__)


def _delays_from(settings) -> DelayProfile:
    delays = getattr(settings, "delays", None)
    if callable(delays):
        return delays()
    # SimpleNamespace settings (tests) carry the raw fields only.
    defaults = DelayProfile()
    return DelayProfile(
        process=float(getattr(settings, "process_delay", defaults.process)),
        sort=float(getattr(settings, "sort_delay", defaults.sort)),
        process_all=float(getattr(settings, "process_all_delay", defaults.process_all)),
        load=float(getattr(settings, "load_delay", defaults.load)),
    )


def create_session(settings=None, *, sleep: Sleep | None = None) -> AppState:
    """
    Create a fresh session (empty store, open scope) from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    store = TaskStore(
        ready_message=getattr(settings, "ready_message", DEFAULT_READY_MESSAGE),
        default_description=getattr(settings, "default_description", DEFAULT_DESCRIPTION),
    )
    scope = TaskScope(name=str(getattr(settings, "app_name", "session")))
    operations = TaskOperations(store, delays=_delays_from(settings), sleep=sleep, token=scope.token)

    logger.debug("Session created (delays=%s)", operations.delays)
    return AppState(settings=settings, store=store, operations=operations, scope=scope)


async def shutdown_session(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.scope.aclose()
    except Exception:
        logger.exception("Failed to close task scope.")

    try:
        state.store.dispose()
    except Exception:
        logger.debug("Store dispose failed.", exc_info=True)
