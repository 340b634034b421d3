# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from threads_app.cli.bootstrap import create_session
from threads_app.config import DelayProfile
from threads_app.core.state import AppState
from threads_app.tasks.task_operations import TaskOperations
from threads_app.tasks.task_store import TaskStore

from .fakes import GatedSleep

# Distinct delays so tests can release one simulated operation at a time.
TEST_DELAYS = DelayProfile(process=2.0, sort=1.0, process_all=2.5, load=1.5)


@pytest.fixture()
def settings() -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment (and from any .env).
    """
    return SimpleNamespace(
        app_name="threads-test",
        log_level="DEBUG",
        process_delay=0.0,
        sort_delay=0.0,
        process_all_delay=0.0,
        load_delay=0.0,
        ready_message="Ready to add tasks",
        default_description="No description",
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def gate() -> GatedSleep:
    return GatedSleep()


@pytest.fixture()
def ops(store: TaskStore, gate: GatedSleep) -> TaskOperations:
    """Engine whose simulated delays only finish when the test releases them."""
    return TaskOperations(store, delays=TEST_DELAYS, sleep=gate)


@pytest.fixture()
def instant_ops(store: TaskStore) -> TaskOperations:
    """Engine with zero delays (plain asyncio.sleep(0))."""
    return TaskOperations(store, delays=DelayProfile(0.0, 0.0, 0.0, 0.0))


@pytest.fixture()
def session(settings: SimpleNamespace) -> AppState:
    return create_session(settings)
