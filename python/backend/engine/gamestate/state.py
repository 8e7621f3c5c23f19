"""Tracks the mutable state of a game in progress."""

from __future__ import annotations

import enum
from collections.abc import Iterator
from contextlib import contextmanager

from backend.models.board import Board


class Phase(enum.Enum):
    """Only ``IDLE`` accepts user moves."""

    IDLE = "idle"
    BUILDING = "building"
    SHUFFLING = "shuffling"


class GameState:
    """Holds the current board, move counter, elapsed time and busy phase.

    Time is counted in whole seconds by an external timer calling
    :meth:`tick`; the clock only advances while running.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self.moves: int = 0
        self.elapsed_seconds: int = 0
        self._running: bool = False
        self.phase: Phase = Phase.IDLE

    # -- time tracking --------------------------------------------------------

    @property
    def clock_running(self) -> bool:
        return self._running

    def start_clock(self) -> None:
        self._running = True

    def pause(self) -> None:
        self._running = False

    def tick(self, seconds: int = 1) -> None:
        if self._running:
            self.elapsed_seconds += seconds

    # -- moves ----------------------------------------------------------------

    def increment_moves(self) -> None:
        self.moves += 1

    def reset_counters(self) -> None:
        self.moves = 0
        self.elapsed_seconds = 0
        self._running = False

    # -- busy phase -----------------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self.phase is not Phase.IDLE

    @contextmanager
    def busy(self, phase: Phase) -> Iterator[None]:
        """Reject user moves for the duration of the block."""
        self.phase = phase
        try:
            yield
        finally:
            self.phase = Phase.IDLE

    @property
    def is_solved(self) -> bool:
        return self.board.is_solved()
