"""Sliding puzzle solver."""

from __future__ import annotations

import heapq
import itertools
import logging

from backend.models.board import DIRECTION_OFFSETS, Board, Direction
from backend.models.errors import SolverLimitError

logger = logging.getLogger(__name__)

DEFAULT_MAX_EXPANSIONS = 500_000
HINT_WEIGHT = 2.0  # inflated heuristic: fast, near-optimal hints on big boards
HINT_MAX_EXPANSIONS = 20_000

State = tuple[int, ...]

_OFFSET_TO_DIRECTION = {offset: d for d, offset in DIRECTION_OFFSETS.items()}


class Solver:
    """Stateless solver; all methods are static.

    States are flat row-major tuples of home indices; the empty tile is the
    highest index.
    """

    @staticmethod
    def solve(
        board: Board,
        *,
        weight: float = 1.0,
        max_expansions: int = DEFAULT_MAX_EXPANSIONS,
    ) -> list[Direction]:
        """Return a move sequence that solves *board*, or ``[]`` if unsolvable.

        A* with the Manhattan-distance heuristic; ``weight > 1`` trades
        optimality for speed. Raises ``SolverLimitError`` after
        *max_expansions* expanded states.
        """
        if board.is_solved() or not Solver.is_solvable(board):
            return []

        moves, _ = Solver._search(board, weight, max_expansions)
        if moves is None:
            raise SolverLimitError(f"Gave up after expanding {max_expansions} states.")
        return moves

    @staticmethod
    def hint(
        board: Board, *, max_expansions: int = HINT_MAX_EXPANSIONS
    ) -> Direction | None:
        """Return a good next move, or ``None`` if solved or unsolvable.

        When the search budget runs out before the goal is found, the hint is
        the first move towards the closest state (by Manhattan distance) seen
        so far.
        """
        if board.is_solved() or not Solver.is_solvable(board):
            return None

        moves, closest = Solver._search(board, HINT_WEIGHT, max_expansions)
        if moves is None:
            logger.debug("Hint budget exhausted, steering towards closest state")
            moves = closest
        return moves[0] if moves else None

    @staticmethod
    def is_solvable(board: Board) -> bool:
        """Return True if *board* can reach the goal state."""
        blank = board.rows * board.cols - 1
        flat = [v for v in board.home_indices() if v != blank]

        # A single row or column can only shift the gap, never reorder tiles.
        if board.rows == 1 or board.cols == 1:
            return flat == sorted(flat)

        inversions = 0
        for i in range(len(flat)):
            for j in range(i + 1, len(flat)):
                if flat[i] > flat[j]:
                    inversions += 1
        if board.cols % 2 == 1:
            return inversions % 2 == 0
        empty_row_from_bottom = board.rows - 1 - board.empty_pos[0]
        return (inversions + empty_row_from_bottom) % 2 == 0

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _search(
        board: Board, weight: float, max_expansions: int
    ) -> tuple[list[Direction] | None, list[Direction]]:
        """Weighted A* from *board*.

        Returns ``(solution, closest)``: the solution is ``None`` when the
        budget ran out, and *closest* is the path to the lowest-heuristic
        state expanded.
        """
        rows, cols = board.rows, board.cols
        blank = rows * cols - 1
        start: State = tuple(board.home_indices())
        goal: State = tuple(range(rows * cols))
        adjacency = Solver._adjacency(rows, cols)

        def dist(value: int, pos: int) -> int:
            return abs(pos // cols - value // cols) + abs(pos % cols - value % cols)

        h0 = sum(dist(v, i) for i, v in enumerate(start) if v != blank)
        tie = itertools.count()
        # (f, h, tie, g, state, blank position)
        frontier = [(weight * h0, h0, next(tie), 0, start, start.index(blank))]
        best_g: dict[State, int] = {start: 0}
        came_from: dict[State, tuple[State, Direction]] = {}
        closest, closest_h = start, h0
        expansions = 0

        while frontier:
            _, h, _, g, state, bi = heapq.heappop(frontier)
            if state == goal:
                moves = Solver._reconstruct(came_from, state)
                logger.info(
                    "Solved %dx%d board in %d moves (%d states expanded)",
                    cols, rows, len(moves), expansions,
                )
                return moves, moves
            if g > best_g[state]:
                continue

            expansions += 1
            if expansions > max_expansions:
                return None, Solver._reconstruct(came_from, closest)
            if h < closest_h:
                closest, closest_h = state, h

            for ni, direction in adjacency[bi]:
                tile = state[ni]
                nh = h - dist(tile, ni) + dist(tile, bi)
                nxt = list(state)
                nxt[bi], nxt[ni] = tile, blank
                ns = tuple(nxt)
                ng = g + 1
                if ng < best_g.get(ns, ng + 1):
                    best_g[ns] = ng
                    came_from[ns] = (state, direction)
                    heapq.heappush(
                        frontier, (ng + weight * nh, nh, next(tie), ng, ns, ni)
                    )

        return [], []

    @staticmethod
    def _adjacency(rows: int, cols: int) -> list[list[tuple[int, Direction]]]:
        """For each gap position: (neighbour position, direction that tile slides)."""
        adjacency: list[list[tuple[int, Direction]]] = []
        for i in range(rows * cols):
            r, c = divmod(i, cols)
            nb: list[tuple[int, Direction]] = []
            for dr, dc in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nr, nc = r + dr, c + dc
                if 0 <= nr < rows and 0 <= nc < cols:
                    nb.append((nr * cols + nc, _OFFSET_TO_DIRECTION[(dr, dc)]))
            adjacency.append(nb)
        return adjacency

    @staticmethod
    def _reconstruct(
        came_from: dict[State, tuple[State, Direction]], state: State
    ) -> list[Direction]:
        moves: list[Direction] = []
        while state in came_from:
            state, direction = came_from[state]
            moves.append(direction)
        moves.reverse()
        return moves
