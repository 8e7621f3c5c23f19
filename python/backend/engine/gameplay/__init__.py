from backend.engine.gameplay.game import GamePlay, MoveOutcome, format_time

__all__ = ["GamePlay", "MoveOutcome", "format_time"]
