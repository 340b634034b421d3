# tests/test_session.py

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from threads_app.cli.bootstrap import create_session, shutdown_session
from threads_app.connectors.console_connector import run_console_loop
from threads_app.core.scope import ScopeClosedError

from .fakes import GatedSleep, settle


def _script(*lines: str):
    pending = list(lines)

    async def read(_prompt: str) -> str:
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


def test_create_session_wires_settings(settings: SimpleNamespace) -> None:
    settings.ready_message = "Listo"
    settings.load_delay = 0.5

    state = create_session(settings)

    assert state.store.get_status() == "Listo"
    assert state.operations.delays.load == 0.5
    assert state.scope.active
    assert state.scope.closed is False


@pytest.mark.asyncio
async def test_shutdown_cancels_in_flight_operations(settings: SimpleNamespace) -> None:
    gate = GatedSleep()
    state = create_session(settings, sleep=gate)

    task = state.scope.launch(state.operations.load_sample_tasks)
    await settle()
    assert gate.waiting

    await shutdown_session(state)
    gate.release()
    await settle()

    assert task.cancelled()
    assert state.scope.closed
    assert state.store.disposed
    assert state.store.get_tasks() == ()
    with pytest.raises(ScopeClosedError):
        state.scope.launch(state.operations.clear_all_tasks)


@pytest.mark.asyncio
async def test_console_loop_renders_status_and_list(settings: SimpleNamespace) -> None:
    state = create_session(settings)
    out: list[str] = []

    reader = _script("/add A | first | 3", "", "hello", "/list", "/exit")

    await run_console_loop(state, read_line=reader, write=out.append)

    text = "\n".join(out)
    assert "Ready to add tasks" in text
    assert "Task 'A' added (immediate)" in text
    assert "Commands start with '/'" in text
    assert "#1 [high] A — first" in text
    assert state.store.status.subscriber_count == 0
    assert state.store.tasks.subscriber_count == 0
    await shutdown_session(state)


@pytest.mark.asyncio
async def test_console_loop_exits_on_eof(settings: SimpleNamespace) -> None:
    state = create_session(settings)
    out: list[str] = []

    await asyncio.wait_for(run_console_loop(state, read_line=_script(), write=out.append), timeout=1.0)

    assert out
    await shutdown_session(state)
