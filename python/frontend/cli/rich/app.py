"""Rich terminal frontend.

Each tile is drawn as a numbered cell painted with the average colour of
its piece of the picture, so the image is still recognisable in a terminal.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path

import rich.box
from PIL import Image
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.events import EVENT_BOARD_REBUILT, EVENT_PUZZLE_SOLVED
from backend.engine.gameplay import GamePlay, format_time
from backend.engine.gamesolver import Solver
from backend.engine.gamesolver.solver import HINT_WEIGHT
from backend.models.board import Board, Direction, Tile
from backend.models.errors import ImageLoadError, SolverLimitError
from frontend.cli.input_handler import get_key_timeout

console = Console()

AUTO_SOLVE_MAX_EXPANSIONS = 100_000

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- tile colours -------------------------------------------------------------


def _average_colour(tile: Tile) -> tuple[int, int, int]:
    if tile.pixels is None:
        return (0, 0, 0)
    r, g, b = tile.pixels.resize((1, 1), resample=Image.Resampling.BOX).getpixel((0, 0))
    return r, g, b


def _tile_colours(board: Board) -> dict[int, tuple[int, int, int]]:
    return {
        tile.home_index: _average_colour(tile)
        for row in board.tiles
        for tile in row
        if not tile.is_empty
    }


# -- board rendering ----------------------------------------------------------


def _render_board(board: Board, colours: dict[int, tuple[int, int, int]]) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.rows * board.cols))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style="bright_blue",
        padding=(0, 1),
    )
    for _ in range(board.cols):
        table.add_column(width=width + 1, justify="center")

    for r, row in enumerate(board.tiles):
        cells: list[Text] = []
        for c, tile in enumerate(row):
            if tile.is_empty:
                cells.append(Text("·", style="dim"))
                continue
            red, green, blue = colours.get(tile.home_index, (60, 60, 80))
            fg = "black" if (red * 299 + green * 587 + blue * 114) > 128_000 else "white"
            style = f"bold {fg} on rgb({red},{green},{blue})"
            if board.is_tile_correct(r, c):
                style += " underline"
            cells.append(Text(f"{tile.home_index + 1:>{width}}", style=style))
        table.add_row(*cells)

    return table


def _stats(game: GamePlay) -> Text:
    stats = Text()
    stats.append("  Level: ", style="dim")
    stats.append(str(game.level), style="bold cyan")
    stats.append(f"  ({game.dimensions.cols}×{game.dimensions.rows})", style="dim")
    stats.append("    Moves: ", style="dim")
    stats.append(str(game.move_count), style="bold yellow")
    stats.append("    Time: ", style="dim")
    stats.append(format_time(game.elapsed_seconds), style="bold yellow")
    return stats


def _controls() -> Text:
    controls = Text()
    for key, label in (
        ("↑↓←→/WASD", "move"),
        ("Space", "shuffle"),
        ("R", "reset"),
        ("N", "hint"),
        ("V", "solve"),
        ("+/-", "level"),
        ("Q", "quit"),
    ):
        controls.append(f"  {key}", style="bold cyan")
        controls.append(f" {label} ", style="dim")
    return controls


def _draw(
    game: GamePlay, colours: dict[int, tuple[int, int, int]], status: str = ""
) -> None:
    board = game.board
    if board is None:
        return
    console.clear()

    parts = [Align.center(_render_board(board, colours))]
    if game.note:
        parts.append(Align.center(Text(game.note, style="dark_orange")))

    title_style = "bold green" if game.is_solved() else "bold cyan"
    panel = Panel(
        Group(*parts),
        title=f"[{title_style}]Image Slide Puzzle[/{title_style}]",
        border_style="bright_blue",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_stats(game)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(_controls()))


# -- solver helpers -----------------------------------------------------------


def _apply_hint(game: GamePlay) -> str:
    board = game.board
    if board is None:
        return ""
    hint = Solver.hint(board)
    if hint is None:
        if board.is_solved():
            return "[green]Already solved![/green]"
        return "[yellow]No hint available.[/yellow]"
    game.move(hint)
    return f"[cyan]Hint:[/cyan] moved [bold]{hint.value}[/bold]"


def _auto_solve(game: GamePlay, colours: dict[int, tuple[int, int, int]]) -> str:
    board = game.board
    if board is None:
        return ""
    try:
        moves = Solver.solve(
            board, weight=HINT_WEIGHT, max_expansions=AUTO_SOLVE_MAX_EXPANSIONS
        )
    except SolverLimitError:
        return "[yellow]Too scrambled for the auto-solver, try a few hints first.[/yellow]"

    if not moves:
        return "[green]Already solved![/green]"

    for i, direction in enumerate(moves):
        game.move(direction)
        _draw(game, colours, f"[bold cyan]Solving… move {i + 1}/{len(moves)}[/bold cyan]")
        sys.stdout.flush()
        time.sleep(0.05)

    return f"[bold green]Solved in {len(moves)} moves![/bold green]"


# -- game loop ----------------------------------------------------------------


def _play(game: GamePlay) -> None:
    colours: dict[int, tuple[int, int, int]] = {}
    solved_msg: list[str] = []

    def on_rebuilt(_sender: object, board: Board, **_: object) -> None:
        colours.clear()
        colours.update(_tile_colours(board))

    def on_solved(_sender: object, moves: int, elapsed: int, **_: object) -> None:
        solved_msg.append(
            f"[bold green]★ Solved in {moves} moves in {format_time(elapsed)} ★[/bold green]"
        )

    game.bus.subscribe(EVENT_BOARD_REBUILT, on_rebuilt)
    game.bus.subscribe(EVENT_PUZZLE_SOLVED, on_solved)
    board = game.board
    if board is not None:
        colours.update(_tile_colours(board))

    game.request_shuffle()
    status = "[yellow]Shuffled![/yellow]"
    last_tick = time.monotonic()

    while True:
        _draw(game, colours, status)
        status = ""

        # Poll so the clock keeps ticking while waiting for input.
        while True:
            key = get_key_timeout(0.5)
            whole = int(time.monotonic() - last_tick)
            if whole:
                game.tick(whole)
                last_tick += whole
                if key is None and game.clock_running:
                    _draw(game, colours)
            if key is not None:
                break

        if key in _DIRECTIONS:
            game.move(_DIRECTIONS[key])
        elif key == "shuffle":
            game.request_shuffle()
            status = "[yellow]Shuffled![/yellow]"
        elif key == "reset":
            game.request_reset()
            status = "[yellow]Reset to the solved picture.[/yellow]"
        elif key == "hint":
            status = _apply_hint(game)
        elif key == "solve":
            status = _auto_solve(game, colours)
        elif key in ("level_up", "level_down"):
            game.step_level(1 if key == "level_up" else -1)
            game.request_shuffle()
        elif key == "quit":
            return

        if solved_msg:
            status = solved_msg.pop()


# -- public entry point -------------------------------------------------------


def run(image: Path, game: GamePlay) -> None:
    """Load *image* into *game* and play it in the terminal."""
    try:
        game.load_image_file(image)
    except ImageLoadError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        return
    _play(game)
    console.clear()
    console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
