# src/threads_app/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import format_task_list
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
LineWriter = Callable[[str], None]

PROMPT = ">>> "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


async def _read_stdin(prompt: str) -> str:
    # input() blocks; run it off the loop so launched operations keep running.
    return await asyncio.to_thread(input, prompt)


async def run_console_loop(
    state: AppState,
    *,
    read_line: LineReader | None = None,
    write: LineWriter = print,
) -> None:
    """
    Interactive front end.

    Renders every published status line and task list, and turns slash
    commands into launched operations. Returns on /exit, /quit or EOF.
    """
    read = read_line or _read_stdin
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "threads-app"))

    def on_status(message: str) -> None:
        write(f"[{_ts_local()}] [{app_name}] {message}")

    def on_tasks(tasks) -> None:
        write(format_task_list(tasks))

    logger.info("Console connector started.")
    write(f"[{_ts_local()}] [CONSOLE] Use /help for commands. Use /exit to quit.")

    status_sub = state.store.subscribe_status(on_status)
    tasks_sub = state.store.subscribe_tasks(on_tasks, replay=False)
    try:
        while True:
            try:
                user_input = (await read(PROMPT)).strip()
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                write("")
                break

            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            try:
                reply = command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is None:
                reply = "Commands start with '/'. Use /help to list them."
            if reply:
                write(f"[{_ts_local()}] {reply}")

            # Let freshly launched immediate operations publish before the next prompt.
            await asyncio.sleep(0)
    finally:
        status_sub.unsubscribe()
        tasks_sub.unsubscribe()
