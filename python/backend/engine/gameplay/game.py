"""Core gameplay logic: loads pictures, processes moves and checks the win."""

from __future__ import annotations

import logging
import random
from enum import StrEnum
from pathlib import Path

from PIL import Image

from backend.engine.events import (
    EVENT_BOARD_CHANGED,
    EVENT_BOARD_REBUILT,
    EVENT_LEVEL_CAPPED,
    EVENT_PUZZLE_SOLVED,
    EVENT_SHUFFLE_COMPLETE,
    EVENT_SHUFFLE_STARTED,
    EVENT_TILE_MOVED,
    EventBus,
)
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gamestate import GameState, Phase
from backend.engine.tileslicer import TileSlicer
from backend.models.board import DIRECTION_OFFSETS, Board, Direction
from backend.models.errors import BusyError, ImageLoadError, InvalidMoveError
from backend.models.grid import GridDimensions, clamp_level, compute_dimensions

logger = logging.getLogger(__name__)

# Board area of a 1000×700 window once controls and margins are taken out.
DEFAULT_AVAILABLE_SIZE = (900, 550)


class MoveOutcome(StrEnum):
    APPLIED = "applied"
    REJECTED_NOT_ADJACENT = "rejected-not-adjacent"
    REJECTED_BUSY = "rejected-busy"


def format_time(seconds: float) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m:02d}:{s:02d}"


class GamePlay:
    """Orchestrates a single puzzle session.

    Owns the source picture, the current level and the :class:`GameState`.
    Frontends only go through the ``request_*`` methods and read the board
    through :attr:`board`, which hands out a copy.
    """

    def __init__(
        self,
        level: int = 1,
        available_size: tuple[float, float] = DEFAULT_AVAILABLE_SIZE,
        *,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
        tile_gap: int = 0,
    ) -> None:
        self.level = level
        self.dimensions = compute_dimensions(level)
        self.available_width, self.available_height = available_size
        self.tile_gap = tile_gap
        self.rng = rng or random.Random()
        self.bus = bus or EventBus()
        self._image: Image.Image | None = None
        self.state: GameState | None = None

    @classmethod
    def from_board(
        cls,
        board: Board,
        *,
        rng: random.Random | None = None,
        bus: EventBus | None = None,
    ) -> GamePlay:
        """Create a session around an existing board (e.g. built in a test)."""
        obj = cls(rng=rng, bus=bus)
        obj.dimensions = GridDimensions(
            cols=board.cols,
            rows=board.rows,
            requested_cols=board.cols,
            requested_rows=board.rows,
        )
        obj.state = GameState(board)
        return obj

    # -- loading & building ---------------------------------------------------

    def load_image(self, data: bytes | None) -> Board:
        """Decode *data* and build a solved board from it.

        On ``ImageLoadError`` the current picture and board are kept.
        """
        image = TileSlicer.decode(data)
        board = TileSlicer.slice(
            image,
            self.dimensions,
            self.available_width,
            self.available_height,
            self.tile_gap,
        )
        self._image = image
        self._install(board)
        return self.board  # type: ignore[return-value]

    def load_image_file(self, path: Path) -> Board:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ImageLoadError(f"Failed to load image: {exc}") from exc
        return self.load_image(data)

    def set_level(self, level: int) -> GridDimensions:
        """Switch difficulty; rebuilds the board if a picture is loaded."""
        dims = compute_dimensions(level)
        self.level = level
        self.dimensions = dims
        if dims.capped:
            self.bus.emit(EVENT_LEVEL_CAPPED, level=level, note=dims.note(level))
        self._rebuild()
        return dims

    def step_level(self, delta: int) -> GridDimensions:
        """Previous/next level, kept within the selectable range."""
        return self.set_level(clamp_level(self.level + delta))

    def resize(self, available_width: float, available_height: float) -> Board | None:
        """Re-slice for a new display area, keeping the level."""
        self.available_width = available_width
        self.available_height = available_height
        return self._rebuild()

    def _rebuild(self) -> Board | None:
        if self._image is None:
            return None
        board = TileSlicer.slice(
            self._image,
            self.dimensions,
            self.available_width,
            self.available_height,
            self.tile_gap,
        )
        self._install(board)
        return self.board

    def _install(self, board: Board) -> None:
        state = GameState(board)
        with state.busy(Phase.BUILDING):
            self.state = state
            logger.info(
                "Built %dx%d board at level %d", board.cols, board.rows, self.level
            )
            self.bus.emit(EVENT_BOARD_REBUILT, board=board.copy(), dimensions=self.dimensions)

    # -- movement -------------------------------------------------------------

    def apply_move(self, row: int, col: int) -> None:
        """Slide the tile at (row, col) into the adjacent empty slot.

        Raises ``BusyError`` while building/shuffling and
        ``InvalidMoveError`` for any other illegal target; the board is
        left untouched in both cases.
        """
        state = self.state
        if state is None:
            raise InvalidMoveError(row, col, "no board loaded")
        if state.is_busy:
            raise BusyError(f"Board is {state.phase.value}; move dropped.")

        board = state.board
        if not board.in_bounds(row, col):
            raise InvalidMoveError(row, col, "outside the board")
        if board.get_tile(row, col).is_empty:
            raise InvalidMoveError(row, col, "that is the empty slot")
        if not board.is_adjacent(row, col):
            raise InvalidMoveError(row, col, "not adjacent to the empty slot")

        dst = board.empty_pos
        board.slide(row, col)
        state.increment_moves()
        if state.moves == 1:
            state.start_clock()
        logger.debug("Moved tile (%d, %d) -> %s, moves=%d", row, col, dst, state.moves)
        self.bus.emit(EVENT_TILE_MOVED, src=(row, col), dst=dst, moves=state.moves)

        if board.is_solved():
            state.pause()
            logger.info(
                "Puzzle solved in %d moves, %s", state.moves, format_time(state.elapsed_seconds)
            )
            self.bus.emit(
                EVENT_PUZZLE_SOLVED, moves=state.moves, elapsed=state.elapsed_seconds
            )

    def request_move(self, row: int, col: int) -> MoveOutcome:
        """Frontend entry point for a click; never raises for illegal moves."""
        try:
            self.apply_move(row, col)
        except BusyError:
            logger.debug("Move (%d, %d) dropped: board busy", row, col)
            return MoveOutcome.REJECTED_BUSY
        except InvalidMoveError as exc:
            logger.debug("%s", exc)
            return MoveOutcome.REJECTED_NOT_ADJACENT
        return MoveOutcome.APPLIED

    def move(self, direction: Direction) -> bool:
        """Slide a tile in *direction* into the adjacent empty slot.

        E.g. ``Direction.UP`` moves the tile **below** the gap upward.
        Returns True if the move was applied.
        """
        if self.state is None:
            return False
        er, ec = self.state.board.empty_pos
        dr, dc = DIRECTION_OFFSETS[direction]
        return self.request_move(er + dr, ec + dc) is MoveOutcome.APPLIED

    # -- shuffle & reset ------------------------------------------------------

    def request_shuffle(self) -> None:
        """Scramble the board from solved order.

        Moves are rejected until ``EVENT_SHUFFLE_COMPLETE`` has been emitted.
        """
        state = self.state
        if state is None or state.is_busy:
            return

        board = state.board
        moves = GameGenerator.shuffle_intensity(board.rows, board.cols)
        with state.busy(Phase.SHUFFLING):
            self.bus.emit(EVENT_SHUFFLE_STARTED, moves=moves)
            GameGenerator.shuffle(board, moves, self.rng)
            state.reset_counters()
            self.bus.emit(EVENT_BOARD_CHANGED, reason="shuffle")
        self.bus.emit(EVENT_SHUFFLE_COMPLETE, board=self.board)

    def request_reset(self) -> Board | None:
        """Put every tile home and clear the counters."""
        state = self.state
        if state is None:
            return None
        if not state.is_busy:
            with state.busy(Phase.BUILDING):
                state.board.restore_solved()
                state.reset_counters()
                self.bus.emit(EVENT_BOARD_CHANGED, reason="reset")
        return self.board

    def tick(self, seconds: int = 1) -> None:
        """Hook for the frontend's one-second timer."""
        if self.state is not None:
            self.state.tick(seconds)

    # -- queries --------------------------------------------------------------

    @property
    def board(self) -> Board | None:
        """Snapshot of the current board.

        Tiles are copied so sliding the snapshot never touches the engine,
        but the tile pictures are shared with it and must not be drawn on.
        """
        return self.state.board.copy() if self.state is not None else None

    @property
    def has_image(self) -> bool:
        return self._image is not None

    @property
    def source_image(self) -> Image.Image | None:
        return self._image

    @property
    def note(self) -> str:
        return self.dimensions.note(self.level)

    @property
    def is_busy(self) -> bool:
        return self.state is not None and self.state.is_busy

    @property
    def move_count(self) -> int:
        return self.state.moves if self.state is not None else 0

    @property
    def elapsed_seconds(self) -> int:
        return self.state.elapsed_seconds if self.state is not None else 0

    @property
    def clock_running(self) -> bool:
        return self.state is not None and self.state.clock_running

    def is_solved(self) -> bool:
        return self.state is not None and self.state.is_solved

    @property
    def is_won(self) -> bool:
        return self.is_solved()
