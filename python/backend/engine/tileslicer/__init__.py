from backend.engine.tileslicer.slicer import FILL_COLOR, MIN_TILE_SIZE, TileSlicer

__all__ = ["FILL_COLOR", "MIN_TILE_SIZE", "TileSlicer"]
