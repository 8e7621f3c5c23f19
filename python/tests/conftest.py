"""Shared fixtures: in-memory pictures and seeded game sessions."""

from __future__ import annotations

import io
import random
from typing import Callable

import pytest
from PIL import Image

from backend.engine.gameplay import GamePlay


def _block_colour(row: int, col: int) -> tuple[int, int, int]:
    return (row * 40 % 256, col * 40 % 256, 120)


@pytest.fixture
def block_colour() -> Callable[[int, int], tuple[int, int, int]]:
    """Colour of the solid block at (row, col) in pictures from ``make_png``."""
    return _block_colour


@pytest.fixture
def make_png() -> Callable[..., bytes]:
    """Factory for PNG bytes made of solid ``block``-sized squares."""

    def _make(width: int = 250, height: int = 200, block: int = 50) -> bytes:
        img = Image.new("RGB", (width, height), (255, 255, 255))
        for r in range(0, (height + block - 1) // block):
            for c in range(0, (width + block - 1) // block):
                box = (
                    c * block,
                    r * block,
                    min(width, (c + 1) * block),
                    min(height, (r + 1) * block),
                )
                img.paste(_block_colour(r, c), box)
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()

    return _make


@pytest.fixture
def game() -> GamePlay:
    """Level-1 session whose 5×4 board gets 50px tiles."""
    return GamePlay(level=1, available_size=(250, 200), rng=random.Random(3))
