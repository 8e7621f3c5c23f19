"""Generates solvable boards by shuffling from the solved state."""

from __future__ import annotations

import logging
import random

from backend.models.board import Board

logger = logging.getLogger(__name__)

MIN_SHUFFLE_MOVES = 200
SHUFFLE_MOVES_PER_TILE = 10


class GameGenerator:
    """Creates solvable puzzles by applying random legal moves."""

    @staticmethod
    def solved(rows: int, cols: int) -> Board:
        """Return an image-less goal-state board (empty slot bottom-right)."""
        return Board.from_home_indices(rows, cols, list(range(rows * cols)))

    @staticmethod
    def shuffle_intensity(rows: int, cols: int) -> int:
        """Number of random moves used for a board of this size."""
        return max(MIN_SHUFFLE_MOVES, rows * cols * SHUFFLE_MOVES_PER_TILE)

    @staticmethod
    def scramble(
        board: Board,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> Board:
        """Scramble *board* in-place using random valid moves.

        Every step slides a real neighbour of the empty slot, so the result
        is always reachable from (and back to) the starting arrangement.
        """
        if board.rows * board.cols < 2:
            return board
        if moves is None:
            moves = GameGenerator.shuffle_intensity(board.rows, board.cols)
        rng = rng or random.Random()

        for _ in range(moves):
            target = rng.choice(board.empty_neighbors())
            board.slide(*target)

        logger.info("Scrambled %dx%d board with %d moves", board.cols, board.rows, moves)
        return board

    @staticmethod
    def shuffle(
        board: Board,
        moves: int | None = None,
        rng: random.Random | None = None,
    ) -> Board:
        """Restore *board* to solved order, then scramble it in-place.

        The result is never the solved arrangement itself.
        """
        if board.rows * board.cols < 2:
            raise ValueError("A puzzle needs at least two cells.")
        rng = rng or random.Random()
        board.restore_solved()
        GameGenerator.scramble(board, moves, rng)

        # An even walk can land back on the goal (always, on a 1×2 board).
        if board.is_solved():
            board.slide(*rng.choice(board.empty_neighbors()))

        return board

    @staticmethod
    def generate(
        rows: int, cols: int, rng: random.Random | None = None
    ) -> Board:
        """Return a random *solvable* board that is not already solved."""
        return GameGenerator.shuffle(GameGenerator.solved(rows, cols), rng=rng)
