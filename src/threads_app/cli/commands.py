# src/threads_app/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from ..core.state import AppState
from ..tasks.task_models import DEFAULT_PRIORITY, Task, parse_priority, priority_badge

CommandHandler = Callable[[AppState, str], str]
# Handlers get the raw text after the command name (inner spacing preserved).

logger = logging.getLogger(__name__)

ADD_USAGE = "Usage: /add <title> [| description] [| priority 1-3 or low/medium/high]"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /sort, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string ("" when the status line says it all) or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split(maxsplit=1)
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        logger.debug("Command /%s rest=%r", name, rest)
        return handler(state, rest)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(task: Task) -> str:
    return f"#{task.id} {priority_badge(task.priority)} {task.title} — {task.description}"


def format_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return "No tasks. Add one with /add."
    lines = [f"Tasks ({len(tasks)}):"]
    lines.extend(f"  {format_task(t)}" for t in tasks)
    return "\n".join(lines)


def parse_add_args(rest: str) -> tuple[str, str, int] | None:
    """
    "/add Buy milk | two bottles | high" -> ("Buy milk", "two bottles", 3)

    Description and priority are optional. Returns None when the title is
    blank or the priority is not recognised.
    """
    fields = [f.strip() for f in rest.split("|")]
    if len(fields) > 3:
        return None

    title = fields[0]
    if not title:
        return None

    description = fields[1] if len(fields) > 1 else ""

    priority: int | None = DEFAULT_PRIORITY
    if len(fields) > 2 and fields[2]:
        priority = parse_priority(fields[2])
    if priority is None:
        return None

    return title, description, priority


def cmd_help(state: AppState, rest: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, rest: str) -> str:
    return format_task_list(state.store.get_tasks())


def cmd_status(state: AppState, rest: str) -> str:
    return f"Status: {state.store.get_status()}"


def cmd_add(state: AppState, rest: str) -> str:
    parsed = parse_add_args(rest)
    if parsed is None:
        return ADD_USAGE
    title, description, priority = parsed
    state.scope.launch(state.operations.add_task, title, description, priority)
    return ""


def cmd_process(state: AppState, rest: str) -> str:
    """
    /process <id>  -> process that task (uses the task as it is right now)
    """
    args = rest.split()
    if len(args) != 1 or not args[0].lstrip("#").isdigit():
        return "Usage: /process <id>"

    task_id = int(args[0].lstrip("#"))
    task = state.store.find_task(task_id)
    if task is None:
        return f"No task with id {task_id}. Use /list to see ids."

    state.scope.launch(state.operations.process_task, task)
    return ""


def cmd_sort(state: AppState, rest: str) -> str:
    state.scope.launch(state.operations.sort_tasks_by_priority)
    return ""


def cmd_process_all(state: AppState, rest: str) -> str:
    state.scope.launch(state.operations.process_all_tasks)
    return ""


def cmd_clear(state: AppState, rest: str) -> str:
    state.scope.launch(state.operations.clear_all_tasks)
    return ""


def cmd_samples(state: AppState, rest: str) -> str:
    state.scope.launch(state.operations.load_sample_tasks)
    return ""


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> [| description] [| priority].")
registry.register("process", cmd_process, help_text="Process one task (CPU-bound): /process <id>.")
registry.register("sort", cmd_sort, help_text="Sort tasks by priority, high to low (CPU-bound).")
registry.register(
    "process-all", cmd_process_all, help_text="Process every task (I/O-bound).", aliases=["all"]
)
registry.register("clear", cmd_clear, help_text="Remove all tasks.")
registry.register("samples", cmd_samples, help_text="Load sample tasks (I/O-bound).", aliases=["load"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show the current status line.")
