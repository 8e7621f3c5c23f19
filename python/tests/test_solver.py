"""Solver test suite.

Shuffled boards are re-solved and the move list is replayed through the
real game engine to prove the shuffle left them reachable from solved.
Every test is hard-killed by ``pytest-timeout`` (configured in
``pyproject.toml``).
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay.game import GamePlay
from backend.engine.gamesolver.solver import HINT_WEIGHT, Solver
from backend.models.board import Board, Direction
from backend.models.errors import SolverLimitError

# -- helpers ------------------------------------------------------------------


def _assert_solve(board: Board, *, weight: float = 1.0) -> list[Direction]:
    """Solve the board and verify the returned moves reach the goal state."""
    moves = Solver.solve(board, weight=weight)

    # ---- move-list sanity ---------------------------------------------------
    assert isinstance(moves, list), "solve() must return a list of Direction"
    assert len(moves) > 0, "Shuffled board returned 0 moves"
    assert all(isinstance(m, Direction) for m in moves), (
        "Every element must be a Direction"
    )

    # ---- apply moves via the real game engine and check win -----------------
    game = GamePlay.from_board(board.copy())
    for i, direction in enumerate(moves):
        ok = game.move(direction)
        assert ok, f"Move {i} ({direction.value}) was invalid"

    assert game.is_won, f"Board not solved after {len(moves)} moves"
    assert game.move_count == len(moves)
    return moves


# -- solving shuffled boards --------------------------------------------------


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("rows, cols", [(2, 2), (2, 3), (3, 2), (3, 3)])
def test_solve_fully_shuffled(rows: int, cols: int, seed: int) -> None:
    board = GameGenerator.generate(rows, cols, random.Random(seed))
    _assert_solve(board)


@pytest.mark.parametrize("seed", range(5))
@pytest.mark.parametrize("rows, cols", [(3, 4), (4, 5)])
def test_solve_lightly_shuffled_larger_boards(rows: int, cols: int, seed: int) -> None:
    board = GameGenerator.shuffle(
        GameGenerator.solved(rows, cols), 30, random.Random(seed)
    )
    _assert_solve(board, weight=HINT_WEIGHT)


def test_optimal_solution_length() -> None:
    board = GameGenerator.solved(3, 3)
    for cell in ((1, 2), (0, 2), (0, 1), (0, 0)):
        board.slide(*cell)
    moves = _assert_solve(board)
    assert len(moves) == 4


def test_solved_board_needs_no_moves() -> None:
    assert Solver.solve(GameGenerator.solved(3, 3)) == []
    assert Solver.hint(GameGenerator.solved(3, 3)) is None


def test_search_budget_is_enforced() -> None:
    board = GameGenerator.solved(3, 3)
    for cell in ((1, 2), (0, 2), (0, 1), (0, 0)):
        board.slide(*cell)
    with pytest.raises(SolverLimitError):
        Solver.solve(board, max_expansions=1)


# -- solvability --------------------------------------------------------------


@pytest.mark.parametrize(
    "rows, cols, flat",
    [
        (3, 3, [1, 0, 2, 3, 4, 5, 6, 7, 8]),
        (2, 2, [1, 0, 2, 3]),
        (3, 4, [1, 0, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11]),
        (1, 3, [1, 0, 2]),
    ],
    ids=["3x3-swap", "2x2-swap", "3x4-swap", "single-row"],
)
def test_swapped_tiles_are_unsolvable(rows: int, cols: int, flat: list[int]) -> None:
    board = Board.from_home_indices(rows, cols, flat)
    assert not Solver.is_solvable(board)
    assert Solver.solve(board) == []
    assert Solver.hint(board) is None


def test_single_row_shift_is_solvable() -> None:
    board = Board.from_home_indices(1, 3, [0, 2, 1])
    assert Solver.is_solvable(board)
    assert _assert_solve(board) == [Direction.LEFT]


@pytest.mark.parametrize("seed", range(10))
def test_even_width_parity_accounts_for_empty_row(seed: int) -> None:
    board = GameGenerator.generate(4, 4, random.Random(seed))
    assert Solver.is_solvable(board)
    board.slide(*board.empty_neighbors()[0])
    assert Solver.is_solvable(board)


# -- hints --------------------------------------------------------------------


def test_hint_is_a_legal_first_move() -> None:
    board = GameGenerator.shuffle(GameGenerator.solved(4, 5), 40, random.Random(8))
    hint = Solver.hint(board)
    assert hint is not None
    game = GamePlay.from_board(board)
    assert game.move(hint)


@pytest.mark.parametrize("rows, cols", [(6, 7), (12, 14)])
def test_hint_on_large_board_stays_within_budget(rows: int, cols: int) -> None:
    board = GameGenerator.generate(rows, cols, random.Random(1))
    hint = Solver.hint(board, max_expansions=2_000)
    assert hint is not None
    game = GamePlay.from_board(board)
    assert game.move(hint)


def test_hint_without_budget_falls_back_to_nothing() -> None:
    board = GameGenerator.generate(4, 5, random.Random(2))
    assert Solver.hint(board, max_expansions=0) is None
