"""
Exhaustive minimax search over a mutable Board, plus the difficulty policies.

Scores are seen from the side that is NOT ``perspective``:
- a finished game won by ``perspective`` scores -1, won by the other side +1;
- a draw scores 0.
get_best_move passes the side to move after each candidate (the engine's
opponent), so the maximizing levels are the engine's own turns.

The search mutates the board in place and undoes every move it applies, so
the caller sees an identical board when a call returns.
"""
from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from .board import Board
from .errors import PreconditionError
from .game_basics import Difficulty, GameStatus, Player

logger = logging.getLogger(__name__)

MEDIUM_OPTIMAL_PERCENT = 75

_default_rng = np.random.default_rng()


def seed_default_rng(seed: Optional[int]) -> None:
    global _default_rng
    _default_rng = np.random.default_rng(seed)


def _rng_or_default(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return _default_rng if rng is None else rng


def _require_playable(board: Board) -> List[int]:
    if board.is_over():
        raise PreconditionError(f"no move to search: game is {board.status().value}")
    moves = available_moves(board)
    if not moves:
        raise PreconditionError("no move to search: board is full")
    return moves


def available_moves(board: Board) -> List[int]:
    return [i for i, v in enumerate(board.cells) if v is Player.EMPTY]


def minimax(board: Board, perspective: Player) -> int:
    status = board.status()
    if status is GameStatus.RESULTED:
        return -1 if board.winner() is perspective else 1
    if status is GameStatus.DRAW:
        return 0

    is_max = board.current_turn() is not perspective
    best = -1000 if is_max else 1000
    for mv in available_moves(board):
        board.apply_move(mv)
        try:
            score = minimax(board, perspective)
        finally:
            board.undo_last_move()
        if is_max and score > best:
            best = score
        if not is_max and score < best:
            best = score
    return best


def get_best_move(board: Board) -> int:
    """Optimal move for the side to move; ties go to the lowest index."""
    moves = _require_playable(board)
    best_score = -1000
    best_move = 0
    for mv in moves:
        board.apply_move(mv)
        try:
            score = minimax(board, board.current_turn())
        finally:
            board.undo_last_move()
        if score > best_score:
            best_score = score
            best_move = mv
    logger.debug("best move=%d score=%d for %s", best_move, best_score, board.current_turn().name)
    return best_move


def get_random_move(board: Board, rng: Optional[np.random.Generator] = None) -> int:
    moves = _require_playable(board)
    mv = moves[int(_rng_or_default(rng).integers(0, len(moves)))]
    logger.debug("random move=%d among %s", mv, moves)
    return mv


def get_medium_move(board: Board, rng: Optional[np.random.Generator] = None) -> int:
    """Optimal 75% of the time, uniformly random otherwise."""
    _require_playable(board)
    g = _rng_or_default(rng)
    if int(g.integers(0, 100)) < MEDIUM_OPTIMAL_PERCENT:
        return get_best_move(board)
    return get_random_move(board, g)


def move_for(board: Board, difficulty: Difficulty, rng: Optional[np.random.Generator] = None) -> int:
    if difficulty is Difficulty.EASY:
        return get_random_move(board, rng)
    if difficulty is Difficulty.MEDIUM:
        return get_medium_move(board, rng)
    return get_best_move(board)


def get_next_move(board: Board, rng: Optional[np.random.Generator] = None) -> int:
    """Engine's choice for the side to move. The caller applies it."""
    return move_for(board, board.difficulty, rng)
