"""Board model for the image slide puzzle."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from PIL import Image


class Direction(StrEnum):
    """Direction a *tile* slides into the empty slot."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


# Offset from the empty slot to the tile that slides in each direction.
# UP    -> tile below the gap moves up
# DOWN  -> tile above the gap moves down
# LEFT  -> tile right of the gap moves left
# RIGHT -> tile left of the gap moves right
DIRECTION_OFFSETS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (1, 0),
    Direction.DOWN: (-1, 0),
    Direction.LEFT: (0, 1),
    Direction.RIGHT: (0, -1),
}


@dataclass
class Tile:
    """One piece of the sliced picture, or the empty slot.

    ``home_row``/``home_col`` is where the tile sits when the puzzle is
    solved. The empty tile never carries pixels.
    """

    home_row: int
    home_col: int
    home_index: int
    pixels: Optional[Image.Image] = field(default=None, repr=False)
    is_empty: bool = False

    def make_empty(self) -> None:
        self.is_empty = True
        self.pixels = None


@dataclass
class Board:
    """A rows×cols grid of tiles with exactly one empty slot.

    ``empty_pos`` caches the empty slot's coordinates and is kept in sync
    by :meth:`slide`, the only method that moves tiles around.
    """

    rows: int
    cols: int
    tiles: list[list[Tile]]
    empty_pos: tuple[int, int]
    tile_size: int = 0

    # -- construction helpers -------------------------------------------------

    @classmethod
    def from_home_indices(
        cls, rows: int, cols: int, flat: list[int], tile_size: int = 0
    ) -> Board:
        """Create an image-less board from a flat row-major list of home indices.

        The highest index (``rows*cols - 1``) is the empty tile. Example::

            Board.from_home_indices(2, 2, [0, 3, 2, 1])
        """
        total = rows * cols
        if len(flat) != total:
            raise ValueError(
                f"Expected {total} tiles for a {rows}×{cols} board, "
                f"got {len(flat)}."
            )
        if sorted(flat) != list(range(total)):
            raise ValueError("Home indices must be a permutation of 0..rows*cols-1.")

        tiles: list[list[Tile]] = []
        empty_pos: tuple[int, int] = (rows - 1, cols - 1)
        for r in range(rows):
            row: list[Tile] = []
            for c in range(cols):
                idx = flat[r * cols + c]
                tile = Tile(home_row=idx // cols, home_col=idx % cols, home_index=idx)
                if idx == total - 1:
                    tile.make_empty()
                    empty_pos = (r, c)
                row.append(tile)
            tiles.append(row)
        return cls(rows=rows, cols=cols, tiles=tiles, empty_pos=empty_pos,
                   tile_size=tile_size)

    # -- queries --------------------------------------------------------------

    def get_tile(self, row: int, col: int) -> Tile:
        return self.tiles[row][col]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_adjacent(self, row: int, col: int) -> bool:
        """True iff (row, col) is exactly one step away from the empty slot."""
        er, ec = self.empty_pos
        return abs(row - er) + abs(col - ec) == 1

    def empty_neighbors(self) -> list[tuple[int, int]]:
        """In-bounds cells that could slide into the empty slot."""
        er, ec = self.empty_pos
        neighbors: list[tuple[int, int]] = []
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nr, nc = er + dr, ec + dc
            if self.in_bounds(nr, nc):
                neighbors.append((nr, nc))
        return neighbors

    def is_solved(self) -> bool:
        """Check every slot holds its home tile and the gap is bottom-right."""
        expected = 0
        for r in range(self.rows):
            for c in range(self.cols):
                tile = self.tiles[r][c]
                if tile.home_index != expected:
                    return False
                expected += 1
        return self.tiles[self.rows - 1][self.cols - 1].is_empty

    def is_tile_correct(self, row: int, col: int) -> bool:
        """Check if a specific tile is in its home position."""
        tile = self.tiles[row][col]
        return tile.home_row == row and tile.home_col == col

    def home_indices(self) -> list[int]:
        """Flat row-major list of the home index held by each slot."""
        return [tile.home_index for row in self.tiles for tile in row]

    def empty_count(self) -> int:
        return sum(tile.is_empty for row in self.tiles for tile in row)

    # -- mutation -------------------------------------------------------------

    def slide(self, row: int, col: int) -> None:
        """Swap the tile at (row, col) with the empty slot. No validation."""
        er, ec = self.empty_pos
        self.tiles[er][ec], self.tiles[row][col] = (
            self.tiles[row][col],
            self.tiles[er][ec],
        )
        self.empty_pos = (row, col)

    def restore_solved(self) -> None:
        """Put every tile back in its home slot."""
        placed: list[list[Optional[Tile]]] = [
            [None] * self.cols for _ in range(self.rows)
        ]
        for row in self.tiles:
            for tile in row:
                placed[tile.home_row][tile.home_col] = tile
        self.tiles = placed  # type: ignore[assignment]
        self.empty_pos = (self.rows - 1, self.cols - 1)

    def copy(self) -> Board:
        # Pixel images are shared, never mutated after slicing.
        return Board(
            rows=self.rows,
            cols=self.cols,
            tiles=[[replace(t) for t in row] for row in self.tiles],
            empty_pos=self.empty_pos,
            tile_size=self.tile_size,
        )
