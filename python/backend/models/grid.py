"""Grid sizing policy: maps a difficulty level to board dimensions."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Largest grid still playable on a typical screen.
MAX_COLS = 14
MAX_ROWS = 12

MIN_LEVEL = 1
MAX_LEVEL = 20

BASE_COLS = 5
BASE_ROWS = 4
GROWTH_PER_LEVEL = 2


@dataclass(frozen=True)
class GridDimensions:
    cols: int
    rows: int
    requested_cols: int = 0
    requested_rows: int = 0

    @property
    def capped(self) -> bool:
        return (self.requested_cols, self.requested_rows) != (self.cols, self.rows)

    @property
    def tile_count(self) -> int:
        return self.cols * self.rows

    def note(self, level: int) -> str:
        """Advisory text shown when the level formula hit the cap."""
        if not self.capped:
            return ""
        return (
            f"Level {level} requested {self.requested_cols}x{self.requested_rows} "
            f"but capped to {self.cols}x{self.rows} for usability."
        )


def compute_dimensions(level: int) -> GridDimensions:
    """Return the (capped) grid for *level*.

    Level 1 is 5×4 and every level adds two columns and two rows, up to
    ``MAX_COLS`` × ``MAX_ROWS``.
    """
    if level < MIN_LEVEL:
        raise ValueError(f"Level must be >= {MIN_LEVEL}, got {level}.")

    requested_cols = BASE_COLS + (level - 1) * GROWTH_PER_LEVEL
    requested_rows = BASE_ROWS + (level - 1) * GROWTH_PER_LEVEL
    dims = GridDimensions(
        cols=min(requested_cols, MAX_COLS),
        rows=min(requested_rows, MAX_ROWS),
        requested_cols=requested_cols,
        requested_rows=requested_rows,
    )
    if dims.capped:
        logger.info(dims.note(level))
    return dims


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, level))
