# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

PRIORITY_LOW = 1
PRIORITY_MEDIUM = 2
PRIORITY_HIGH = 3
DEFAULT_PRIORITY = PRIORITY_MEDIUM

_PRIORITY_NAMES = {
    PRIORITY_LOW: "Low",
    PRIORITY_MEDIUM: "Medium",
    PRIORITY_HIGH: "High",
}

_PRIORITY_BADGES = {
    PRIORITY_LOW: "[low]",
    PRIORITY_MEDIUM: "[medium]",
    PRIORITY_HIGH: "[high]",
}


class ExecutionContext(StrEnum):
    """
    Simulated execution context.

    A label for status text only; nothing is scheduled on a real thread pool.
    """

    IMMEDIATE = "immediate"
    CPU_BOUND = "CPU-bound"
    IO_BOUND = "I/O-bound"


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    description: str
    priority: int = DEFAULT_PRIORITY

    @property
    def priority_name(self) -> str:
        return priority_name(self.priority)


@dataclass(frozen=True, slots=True)
class SampleTask:
    title: str
    description: str
    priority: int


SAMPLE_TASKS: tuple[SampleTask, ...] = (
    SampleTask("Study Python", "Review coroutines and event loops", PRIORITY_HIGH),
    SampleTask("Exercise", "30 minute routine", PRIORITY_MEDIUM),
    SampleTask("Read a book", "Chapter 5", PRIORITY_LOW),
    SampleTask("Final project", "Finish the application", PRIORITY_HIGH),
)


def priority_name(priority: int) -> str:
    """1 -> Low, 2 -> Medium, 3 -> High, anything else -> Unknown."""
    return _PRIORITY_NAMES.get(priority, "Unknown")


def priority_badge(priority: int) -> str:
    return _PRIORITY_BADGES.get(priority, "[?]")


def parse_priority(raw: str | int | None) -> int | None:
    """
    Accept 1/2/3 or low/medium/high (case-insensitive).

    Returns None for anything else so callers can show a usage hint.
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw if raw in _PRIORITY_NAMES else None

    s = raw.strip().lower()
    if not s:
        return None
    if s.isdigit():
        n = int(s)
        return n if n in _PRIORITY_NAMES else None
    for value, name in _PRIORITY_NAMES.items():
        if s == name.lower():
            return value
    return None
