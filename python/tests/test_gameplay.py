"""Move engine: validating and applying single tile slides."""

from __future__ import annotations

import random

import pytest

from backend.engine.events import EVENT_PUZZLE_SOLVED, EVENT_TILE_MOVED
from backend.engine.gamegenerator import GameGenerator
from backend.engine.gameplay import GamePlay, MoveOutcome, format_time
from backend.models.board import Direction
from backend.models.errors import InvalidMoveError

# -- helpers ------------------------------------------------------------------


def _game(rows: int, cols: int) -> GamePlay:
    return GamePlay.from_board(GameGenerator.solved(rows, cols))


def _layout(game: GamePlay) -> list[int]:
    board = game.board
    assert board is not None
    return board.home_indices()


# -- tests --------------------------------------------------------------------


def test_two_by_two_cycle_returns_to_solved() -> None:
    # Home indices: A=0, B=1, C=2, empty=3.
    game = _game(2, 2)
    cycle = [(0, 1), (0, 0), (1, 0), (1, 1)]

    assert game.request_move(0, 1) is MoveOutcome.APPLIED
    assert _layout(game) == [0, 3, 2, 1]  # [A, _ / C, B]
    assert not game.is_solved()

    assert game.request_move(0, 0) is MoveOutcome.APPLIED
    assert _layout(game) == [3, 0, 2, 1]  # [_, A / C, B]

    for cell in cycle[2:] + cycle * 2:
        assert not game.is_solved()
        assert game.request_move(*cell) is MoveOutcome.APPLIED

    assert game.is_solved()
    assert game.move_count == 12


def test_non_adjacent_move_is_a_no_op() -> None:
    game = _game(3, 3)
    before = _layout(game)

    assert game.request_move(0, 0) is MoveOutcome.REJECTED_NOT_ADJACENT
    assert _layout(game) == before
    assert game.move_count == 0


@pytest.mark.parametrize(
    "cell",
    [(0, 0), (1, 1), (2, 2), (3, 2), (-1, 2), (2, 3)],
    ids=["far", "diagonal", "empty-slot", "below", "above", "right"],
)
def test_apply_move_rejects_illegal_targets(cell: tuple[int, int]) -> None:
    game = _game(3, 3)
    with pytest.raises(InvalidMoveError):
        game.apply_move(*cell)
    assert game.is_solved()
    assert game.move_count == 0


def test_one_valid_move_unsolves_the_board() -> None:
    game = _game(3, 4)
    assert game.is_solved()
    game.apply_move(2, 2)
    assert not game.is_solved()
    assert game.move_count == 1


@pytest.mark.parametrize("seed", range(5))
def test_random_clicks_keep_one_empty_slot(seed: int) -> None:
    rng = random.Random(seed)
    game = _game(4, 3)
    applied = 0

    for _ in range(400):
        cell = (rng.randrange(4), rng.randrange(3))
        if game.request_move(*cell) is MoveOutcome.APPLIED:
            applied += 1
        board = game.board
        assert board is not None
        assert board.empty_count() == 1
        assert board.get_tile(*board.empty_pos).is_empty
        assert sorted(board.home_indices()) == list(range(12))

    assert game.move_count == applied


def test_directional_moves() -> None:
    game = _game(3, 3)
    assert not game.move(Direction.LEFT)  # nothing right of the gap
    assert not game.move(Direction.UP)  # nothing below the gap

    assert game.move(Direction.DOWN)  # tile above slides down
    assert game.board is not None and game.board.empty_pos == (1, 2)

    assert game.move(Direction.RIGHT)  # tile left slides right
    assert game.board is not None and game.board.empty_pos == (1, 1)
    assert game.move_count == 2


def test_clock_runs_from_first_move_until_solved() -> None:
    game = _game(2, 2)
    game.tick()
    assert game.elapsed_seconds == 0

    game.apply_move(0, 1)
    game.tick()
    game.tick(2)
    assert game.elapsed_seconds == 3

    game.apply_move(1, 1)  # slide back: solved
    assert game.is_solved()
    game.tick()
    assert game.elapsed_seconds == 3


def test_move_and_solved_signals() -> None:
    game = _game(2, 2)
    moved: list[dict] = []
    solved: list[dict] = []
    game.bus.subscribe(EVENT_TILE_MOVED, lambda _s, **kw: moved.append(kw))
    game.bus.subscribe(EVENT_PUZZLE_SOLVED, lambda _s, **kw: solved.append(kw))

    game.request_move(1, 0)
    assert moved == [{"src": (1, 0), "dst": (1, 1), "moves": 1}]
    assert solved == []

    game.request_move(1, 1)
    assert len(moved) == 2
    assert solved == [{"moves": 2, "elapsed": 0}]


def test_rejected_moves_emit_nothing() -> None:
    game = _game(3, 3)
    moved: list[dict] = []
    game.bus.subscribe(EVENT_TILE_MOVED, lambda _s, **kw: moved.append(kw))
    game.request_move(0, 0)
    assert moved == []


@pytest.mark.parametrize(
    "seconds, expected", [(0, "00:00"), (75, "01:15"), (3599, "59:59"), (61.9, "01:01")]
)
def test_format_time(seconds: float, expected: str) -> None:
    assert format_time(seconds) == expected
