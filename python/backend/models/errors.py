"""Error kinds raised by the puzzle engine.

None of these are fatal: whoever raises one leaves the engine in its last
valid state.
"""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for all engine errors."""


class ImageLoadError(PuzzleError):
    """The source image is missing or could not be decoded."""


class InvalidMoveError(PuzzleError):
    """The clicked cell cannot slide into the empty slot."""

    def __init__(self, row: int, col: int, reason: str) -> None:
        super().__init__(f"Cannot move tile at ({row}, {col}): {reason}")
        self.row = row
        self.col = col
        self.reason = reason


class BusyError(PuzzleError):
    """A move arrived while the board was being built or shuffled."""


class SolverLimitError(PuzzleError):
    """The solver gave up after exhausting its search budget."""
