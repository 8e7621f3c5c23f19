"""Terminal key mapping."""

from __future__ import annotations

import pytest

from frontend.cli import input_handler


@pytest.mark.parametrize(
    "ch, action",
    [
        ("w", "up"),
        ("D", "right"),
        (" ", "shuffle"),
        ("r", "reset"),
        ("n", "hint"),
        ("v", "solve"),
        ("=", "level_up"),
        ("[", "level_down"),
        ("\x03", "quit"),
        ("\r", ""),
        ("z", ""),
    ],
)
def test_resolve_maps_keys_to_actions(ch: str, action: str) -> None:
    assert input_handler._resolve(ch) == action


def test_get_key_timeout_forwards_the_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    waits: list[float] = []

    def fake_read(timeout: float) -> str | None:
        waits.append(timeout)
        return None

    monkeypatch.setattr(input_handler, "_read", fake_read)
    assert input_handler.get_key_timeout(0.5) is None
    assert waits == [0.5]
