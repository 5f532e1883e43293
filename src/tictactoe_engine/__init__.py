"""tictactoe_engine package.

3x3 board state machine, minimax search with difficulty tiers, and a small CLI.

Convenience imports are exposed for common workflows.
"""

from .board import Board
from .errors import (
    CellOccupiedError,
    EngineError,
    GameOverError,
    MoveError,
    OutOfRangeError,
    PreconditionError,
)
from .game_basics import Difficulty, GameStatus, Player
from .solver import available_moves, get_best_move, get_medium_move, get_next_move, get_random_move, minimax

__all__ = [
    "Board",
    "Player",
    "GameStatus",
    "Difficulty",
    "available_moves",
    "minimax",
    "get_best_move",
    "get_random_move",
    "get_medium_move",
    "get_next_move",
    "EngineError",
    "MoveError",
    "OutOfRangeError",
    "CellOccupiedError",
    "GameOverError",
    "PreconditionError",
]
