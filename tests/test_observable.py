# tests/test_observable.py

from __future__ import annotations

import logging

from threads_app.core.observable import ObservableValue
from threads_app.tasks.task_store import TaskStore

from .fakes import Recorder


def test_subscribe_replays_current_value() -> None:
    obs = ObservableValue("ready", name="status")
    rec = Recorder()

    obs.subscribe(rec)

    assert rec.values == ["ready"]


def test_subscribe_without_replay_waits_for_next_set() -> None:
    obs = ObservableValue(0)
    rec = Recorder()

    obs.subscribe(rec, replay=False)
    assert rec.values == []

    obs.set(1)
    assert rec.values == [1]


def test_every_published_value_is_seen_in_order() -> None:
    obs = ObservableValue(0)
    a, b = Recorder(), Recorder()
    obs.subscribe(a)
    obs.subscribe(b, replay=False)

    for i in range(1, 6):
        obs.set(i)

    assert a.values == [0, 1, 2, 3, 4, 5]
    assert b.values == [1, 2, 3, 4, 5]
    assert obs.get() == 5


def test_unsubscribe_stops_delivery_and_is_idempotent() -> None:
    obs = ObservableValue("a")
    rec = Recorder()
    sub = obs.subscribe(rec)
    assert obs.subscriber_count == 1

    sub.unsubscribe()
    sub.unsubscribe()
    obs.set("b")

    assert rec.values == ["a"]
    assert obs.subscriber_count == 0
    assert sub.active is False


def test_failing_subscriber_does_not_block_others(caplog) -> None:
    obs = ObservableValue(0, name="tasks")
    rec = Recorder()

    def boom(_value: int) -> None:
        raise RuntimeError("subscriber bug")

    obs.subscribe(boom, replay=False)
    obs.subscribe(rec, replay=False)

    with caplog.at_level(logging.ERROR):
        obs.set(42)

    assert rec.values == [42]
    assert obs.get() == 42
    assert "Subscriber of tasks failed" in caplog.text


def test_subscriber_may_unsubscribe_itself_during_delivery() -> None:
    obs = ObservableValue(0)
    seen: list[int] = []
    other = Recorder()

    def once(value: int) -> None:
        seen.append(value)
        sub.unsubscribe()

    sub = obs.subscribe(once, replay=False)
    obs.subscribe(other, replay=False)

    obs.set(1)
    obs.set(2)

    assert seen == [1]
    assert other.values == [1, 2]


def test_set_from_inside_a_subscriber_keeps_publication_order() -> None:
    obs = ObservableValue(0)
    first, last = Recorder(), Recorder()

    def bump(value: int) -> None:
        first(value)
        if value == 1:
            obs.set(2)

    obs.subscribe(bump, replay=False)
    obs.subscribe(last, replay=False)

    obs.set(1)

    assert first.values == [1, 2]
    assert last.values == [1, 2]
    assert obs.get() == 2
    assert last.last == obs.get()


def test_store_status_stays_ordered_when_a_subscriber_publishes() -> None:
    store = TaskStore()
    log = Recorder()

    def follow_up(message: str) -> None:
        if message == "x":
            store.set_status("y")

    store.subscribe_status(follow_up, replay=False)
    store.subscribe_status(log, replay=False)

    store.set_status("x")

    assert log.values == ["x", "y"]
    assert store.get_status() == "y"
