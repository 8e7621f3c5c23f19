from backend.models.board import Board, Direction, Tile
from backend.models.errors import (
    BusyError,
    ImageLoadError,
    InvalidMoveError,
    PuzzleError,
    SolverLimitError,
)
from backend.models.grid import GridDimensions, compute_dimensions

__all__ = [
    "Board",
    "BusyError",
    "Direction",
    "GridDimensions",
    "ImageLoadError",
    "InvalidMoveError",
    "PuzzleError",
    "SolverLimitError",
    "Tile",
    "compute_dimensions",
]
