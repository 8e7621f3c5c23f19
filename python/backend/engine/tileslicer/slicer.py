"""Cuts a source picture into a grid of square tiles."""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from backend.models.board import Board, Tile
from backend.models.errors import ImageLoadError
from backend.models.grid import GridDimensions

logger = logging.getLogger(__name__)

MIN_TILE_SIZE = 24  # px, below this tiles are too small to click
FILL_COLOR = (0, 0, 0)


class TileSlicer:
    """Stateless slicer; all methods are static."""

    @staticmethod
    def decode(data: bytes | None) -> Image.Image:
        """Decode raw image bytes into a fully loaded RGB image.

        Raises ``ImageLoadError`` when *data* is missing or unreadable.
        """
        if not data:
            raise ImageLoadError("No image data provided.")
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return img.convert("RGB")
        except (
            UnidentifiedImageError,
            Image.DecompressionBombError,
            OSError,
            ValueError,
        ) as exc:
            raise ImageLoadError(f"Error loading image: {exc}") from exc

    @staticmethod
    def tile_size_for(
        dimensions: GridDimensions,
        available_width: float,
        available_height: float,
        gap: int = 0,
    ) -> int:
        """Largest square tile that fits the area, never below ``MIN_TILE_SIZE``.

        *gap* is the spacing a renderer draws between neighbouring tiles.
        """
        cols, rows = dimensions.cols, dimensions.rows
        fit = min(
            (available_width - (cols - 1) * gap) / cols,
            (available_height - (rows - 1) * gap) / rows,
        )
        return max(MIN_TILE_SIZE, int(fit))

    @staticmethod
    def slice(
        image: Image.Image | None,
        dimensions: GridDimensions,
        available_width: float,
        available_height: float,
        gap: int = 0,
    ) -> Board:
        """Return a solved board whose tiles are cut from *image*.

        The bottom-right tile is the empty slot.
        """
        if image is None:
            raise ImageLoadError("No image loaded.")

        cols, rows = dimensions.cols, dimensions.rows
        tile_size = TileSlicer.tile_size_for(
            dimensions, available_width, available_height, gap
        )
        scaled = TileSlicer._resample(image, tile_size * cols, tile_size * rows)

        tiles: list[list[Tile]] = []
        for r in range(rows):
            row: list[Tile] = []
            for c in range(cols):
                x, y = c * tile_size, r * tile_size
                piece = scaled.crop((x, y, x + tile_size, y + tile_size))
                row.append(
                    Tile(home_row=r, home_col=c, home_index=r * cols + c, pixels=piece)
                )
            tiles.append(row)

        tiles[rows - 1][cols - 1].make_empty()
        logger.info(
            "Sliced %dx%d image into %dx%d tiles of %dpx",
            image.width, image.height, cols, rows, tile_size,
        )
        return Board(
            rows=rows,
            cols=cols,
            tiles=tiles,
            empty_pos=(rows - 1, cols - 1),
            tile_size=tile_size,
        )

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _resample(image: Image.Image, width: int, height: int) -> Image.Image:
        canvas = Image.new("RGB", (width, height), FILL_COLOR)
        src = image.convert("RGB")
        if src.size != (width, height):
            src = src.resize((width, height), resample=Image.Resampling.BILINEAR)
        canvas.paste(src, (0, 0))
        return canvas
