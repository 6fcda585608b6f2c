"""monday.com board access: the Task Source and Group Source of the engine."""

from .client import MondayBoardClient
from .parser import BoardColumns, parse_board_items

__all__ = ["MondayBoardClient", "BoardColumns", "parse_board_items"]
