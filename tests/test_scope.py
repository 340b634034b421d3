# tests/test_scope.py

from __future__ import annotations

import asyncio
import logging

import pytest

from threads_app.core.scope import CancellationToken, ScopeClosedError, TaskScope

from .fakes import settle


async def _echo(value: str, *, token: CancellationToken) -> tuple[str, CancellationToken]:
    return value, token


async def _wait_forever(*, token: CancellationToken) -> None:
    await asyncio.Event().wait()


async def _explode(*, token: CancellationToken) -> None:
    raise ValueError("broken operation")


def test_token_cancel() -> None:
    token = CancellationToken()
    assert token.cancelled is False

    token.cancel()

    assert token.cancelled is True


@pytest.mark.asyncio
async def test_launch_passes_scope_token() -> None:
    scope = TaskScope("test")

    task = scope.launch(_echo, "hi")
    value, token = await task

    assert value == "hi"
    assert token is scope.token
    await settle()
    assert scope.pending == 0


@pytest.mark.asyncio
async def test_aclose_cancels_pending_work() -> None:
    scope = TaskScope("test")
    task = scope.launch(_wait_forever)
    await settle()
    assert scope.pending == 1

    await scope.aclose()

    assert task.cancelled()
    assert scope.pending == 0
    assert scope.closed is True
    assert scope.active is False
    assert scope.token.cancelled is True


@pytest.mark.asyncio
async def test_launch_on_closed_scope_raises() -> None:
    scope = TaskScope("test")
    scope.close()

    with pytest.raises(ScopeClosedError):
        scope.launch(_wait_forever)


@pytest.mark.asyncio
async def test_async_context_manager_closes_scope() -> None:
    async with TaskScope("ctx") as scope:
        task = scope.launch(_wait_forever)
        await settle()

    assert task.cancelled()
    assert scope.closed


@pytest.mark.asyncio
async def test_failed_operation_is_logged(caplog) -> None:
    scope = TaskScope("test")

    with caplog.at_level(logging.ERROR, logger="threads_app.core.scope"):
        task = scope.launch(_explode)
        with pytest.raises(ValueError):
            await task
        await settle()

    assert "failed" in caplog.text
    assert scope.pending == 0
