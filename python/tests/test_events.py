"""Event bus: named blinker signals."""

from __future__ import annotations

import gc

from backend.engine.events import EventBus


def test_emit_passes_bus_and_payload() -> None:
    bus = EventBus()
    received: list[tuple[object, dict]] = []
    bus.subscribe("ping", lambda sender, **kw: received.append((sender, kw)))

    bus.emit("ping", value=3)
    assert received == [(bus, {"value": 3})]


def test_emit_without_subscribers_is_a_no_op() -> None:
    EventBus().emit("nobody-listens", value=1)


def test_subscribers_stay_connected_without_other_references() -> None:
    bus = EventBus()
    calls: list[int] = []

    def handler(_sender: object, **_: object) -> None:
        calls.append(1)

    bus.subscribe("ping", handler)
    del handler
    gc.collect()

    bus.emit("ping")
    assert calls == [1]
