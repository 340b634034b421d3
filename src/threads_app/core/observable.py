# src/threads_app/core/observable.py

from __future__ import annotations

"""
Observable value: a current value plus a change stream.

Framework independent. Presentation code subscribes, operations publish.
Delivery is synchronous and FIFO: a `set()` issued from inside a subscriber is
queued and delivered once the current value reached everyone, so every
subscriber sees every value in publication order and ends on the latest one.
"""

import logging
from collections import deque
from collections.abc import Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[T], None]


class Subscription:
    """Handle returned by `ObservableValue.subscribe`; call `unsubscribe()` to stop."""

    __slots__ = ("_detach",)

    def __init__(self, detach: Callable[[], None]) -> None:
        self._detach: Callable[[], None] | None = detach

    @property
    def active(self) -> bool:
        return self._detach is not None

    def unsubscribe(self) -> None:
        detach, self._detach = self._detach, None
        if detach is not None:
            detach()


class ObservableValue(Generic[T]):
    def __init__(self, initial: T, *, name: str = "value") -> None:
        self._value = initial
        self._name = name
        self._subscribers: list[Subscriber[T]] = []
        self._pending: deque[T] = deque()
        self._delivering = False

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def get(self) -> T:
        return self._value

    def set(self, new_value: T) -> None:
        self._value = new_value
        self._pending.append(new_value)
        if self._delivering:
            # Re-entrant set() from a subscriber: the outer call delivers it after the current value.
            return

        self._delivering = True
        try:
            while self._pending:
                value = self._pending.popleft()
                # Copy: a callback may unsubscribe itself (or others) while we iterate.
                for cb in list(self._subscribers):
                    self._deliver(cb, value)
        finally:
            self._delivering = False
            self._pending.clear()

    def subscribe(self, callback: Subscriber[T], *, replay: bool = True) -> Subscription:
        """
        Register `callback` for every future `set()`.

        With replay=True (default) the callback immediately receives the
        current value ("current value + change stream" semantics).
        """
        self._subscribers.append(callback)

        def _detach() -> None:
            try:
                self._subscribers.remove(callback)
            except ValueError:
                pass

        if replay:
            self._deliver(callback, self._value)
        return Subscription(_detach)

    def _deliver(self, cb: Subscriber[T], value: T) -> None:
        try:
            cb(value)
        except Exception:
            logger.exception("Subscriber of %s failed", self._name)

    def __repr__(self) -> str:
        return f"ObservableValue(name={self._name!r}, value={self._value!r})"
