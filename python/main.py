#!/usr/bin/env python3
"""Sliding Image Puzzle.

Usage::

    python main.py photo.jpg                 # Pygame window, level 1
    python main.py photo.jpg -f rich -l 3    # Rich terminal, level 3
    python main.py photo.jpg --seed 7 -v     # reproducible shuffle, debug log
"""

import importlib
import logging
import random
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gameplay.game import DEFAULT_AVAILABLE_SIZE, GamePlay  # noqa: E402
from backend.models.grid import MAX_LEVEL, MIN_LEVEL  # noqa: E402


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=verbose)],
    )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    image: Path = typer.Argument(
        ...,
        exists=True, dir_okay=False, readable=True,
        help="Picture to cut into tiles.",
    ),
    frontend: Frontend = typer.Option(
        Frontend.pygame, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    level: int = typer.Option(
        1, "-l", "--level",
        min=MIN_LEVEL, max=MAX_LEVEL,
        help=f"Difficulty level ({MIN_LEVEL}-{MAX_LEVEL}).",
    ),
    width: int = typer.Option(
        DEFAULT_AVAILABLE_SIZE[0], "--width",
        min=1,
        help="Board area width in px (rich frontend only).",
    ),
    height: int = typer.Option(
        DEFAULT_AVAILABLE_SIZE[1], "--height",
        min=1,
        help="Board area height in px (rich frontend only).",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the shuffle for a reproducible board.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log engine activity.",
    ),
) -> None:
    """Sliding Image Puzzle."""
    _configure_logging(verbose)
    game = GamePlay(level, (width, height), rng=random.Random(seed))
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(image=image, game=game)


if __name__ == "__main__":
    app()
