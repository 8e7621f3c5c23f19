"""Single-keypress reader for the terminal frontend.

Maps arrow keys, WASD and the puzzle shortcuts to action strings without
requiring Enter. Works on macOS / Linux (tty+termios) and Windows (msvcrt).
"""

from __future__ import annotations

import os
import sys
import time

# -- key mapping ---------------------------------------------------------------

_KEY_MAP: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    " ": "shuffle",
    "x": "shuffle",
    "r": "reset",
    "n": "hint",
    "v": "solve",
    "+": "level_up",
    "=": "level_up",
    "]": "level_up",
    "-": "level_down",
    "[": "level_down",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

_ARROW_MAP: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
}


def _resolve(ch: str) -> str:
    """Map a raw character to its action string."""
    return _KEY_MAP.get(ch.lower() if ch.isalpha() else ch, "")


# -- platform readers ----------------------------------------------------------


def _read_windows(timeout: float) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    end = time.monotonic() + timeout
    while not msvcrt.kbhit():
        if time.monotonic() >= end:
            return None
        time.sleep(0.02)
    ch = msvcrt.getch()
    if ch in (b"\x00", b"\xe0"):
        # Windows arrow prefix; second byte is the scan code.
        return {b"H": "up", b"P": "down", b"K": "left", b"M": "right"}.get(
            msvcrt.getch(), ""
        )
    return _resolve(ch.decode("utf-8", errors="ignore"))


def _read_unix(timeout: float) -> str | None:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)

    def pending(wait: float) -> bool:
        ready, _, _ = select.select([fd], [], [], wait)
        return bool(ready)

    def read1() -> str:
        # Unbuffered so select() still sees the rest of an escape sequence.
        return os.read(fd, 1).decode("utf-8", errors="ignore")

    try:
        tty.setraw(fd)
        if not pending(timeout):
            return None
        ch = read1()
        if ch != "\x1b":
            return _resolve(ch)

        # ESC [ A/B/C/D is an arrow key, a bare ESC quits.
        if not pending(0.1) or read1() != "[":
            return "quit"
        if not pending(0.1):
            return ""
        return _ARROW_MAP.get(read1(), "")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


_read = _read_windows if os.name == "nt" else _read_unix


# -- public API ----------------------------------------------------------------


def get_key_timeout(timeout: float) -> str | None:
    """Wait up to *timeout* seconds for a key and return its action string.

    Returns ``None`` when no key arrived in time. Action strings:
        "up", "down", "left", "right"   slide a tile into the gap
        "shuffle"                       space / x
        "reset"                         r
        "hint"                          n
        "solve"                         v (auto-solve)
        "level_up", "level_down"        + / -
        "quit"                          q / Ctrl-C / Escape
        ""                              unrecognised key
    """
    return _read(timeout)
