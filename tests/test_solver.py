import numpy as np
import pytest

from tictactoe_engine.board import Board
from tictactoe_engine.errors import PreconditionError
from tictactoe_engine.game_basics import Difficulty, GameStatus, Player
from tictactoe_engine.solver import (
    available_moves,
    get_best_move,
    get_medium_move,
    get_next_move,
    get_random_move,
    minimax,
)


def _play(moves, start=Player.X, difficulty=Difficulty.HARD):
    b = Board(start, difficulty)
    for mv in moves:
        b.apply_move(mv)
    return b


class _ScriptedRng:
    """Stand-in for numpy's Generator that replays fixed draws."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.calls = []

    def integers(self, low, high):
        self.calls.append((low, high))
        return self.draws.pop(0)


def test_available_moves_ascending():
    b = _play([4, 0, 8])
    assert available_moves(b) == [1, 2, 3, 5, 6, 7]


def test_minimax_terminal_scores():
    won = _play([0, 3, 1, 4, 2])
    assert minimax(won, Player.X) == -1
    assert minimax(won, Player.O) == 1
    draw = _play([0, 1, 2, 4, 3, 5, 7, 6, 8])
    assert minimax(draw, Player.X) == 0


def test_minimax_restores_board():
    b = _play([0, 4, 8])
    before = b.copy()
    minimax(b, b.current_turn())
    assert b == before


def test_best_move_leaves_board_identical():
    b = _play([0, 4, 8])
    before = b.copy()
    get_best_move(b)
    assert b == before


def test_search_on_finished_board_fails_fast():
    won = _play([0, 3, 1, 4, 2])
    for fn in (get_best_move, get_random_move, get_medium_move, get_next_move):
        with pytest.raises(PreconditionError):
            fn(won)


def test_random_move_uses_uniform_index():
    b = _play([4, 0, 8])
    rng = _ScriptedRng([3])
    assert get_random_move(b, rng) == 5
    assert rng.calls == [(0, 6)]


@pytest.mark.parametrize("seed", range(20))
def test_random_move_is_legal(seed):
    b = _play([4, 0], difficulty=Difficulty.EASY)
    rng = np.random.default_rng(seed)
    assert get_random_move(b, rng) in available_moves(b)
    assert get_next_move(b, rng) in available_moves(b)


def test_medium_below_threshold_plays_best():
    b = _play([0, 4, 3], difficulty=Difficulty.MEDIUM)
    rng = _ScriptedRng([74])
    assert get_medium_move(b, rng) == get_best_move(b) == 6
    assert rng.calls == [(0, 100)]


def test_medium_at_threshold_plays_random():
    b = _play([0, 4, 3], difficulty=Difficulty.MEDIUM)
    rng = _ScriptedRng([75, 0])
    assert get_medium_move(b, rng) == 1
    assert rng.calls == [(0, 100), (0, 6)]


def test_next_move_dispatches_on_difficulty():
    hard = _play([0, 4, 3], difficulty=Difficulty.HARD)
    assert get_next_move(hard, _ScriptedRng([])) == 6
    easy = _play([0, 4, 3], difficulty=Difficulty.EASY)
    assert get_next_move(easy, _ScriptedRng([5])) == 8


def test_next_move_default_rng_legal():
    b = _play([4, 0, 8, 2], difficulty=Difficulty.MEDIUM)
    for _ in range(10):
        assert get_next_move(b) in available_moves(b)


def _engine_never_loses(board: Board, engine: Player) -> int:
    """Walk every opponent reply; return the number of finished games checked."""
    if board.is_over():
        assert not (board.status() is GameStatus.RESULTED and board.winner() is engine.opponent())
        return 1
    if board.current_turn() is engine:
        mv = get_best_move(board)
        board.apply_move(mv)
        n = _engine_never_loses(board, engine)
        board.undo_last_move()
        return n
    n = 0
    for mv in available_moves(board):
        board.apply_move(mv)
        n += _engine_never_loses(board, engine)
        board.undo_last_move()
    return n


@pytest.mark.parametrize("start", [Player.X, Player.O])
def test_hard_never_loses_against_any_line(start):
    b = Board(start, Difficulty.HARD)
    assert _engine_never_loses(b, Player.X) > 0
    assert b == Board(start, Difficulty.HARD)


def test_hard_vs_hard_is_draw():
    b = Board(Player.X, Difficulty.HARD)
    while not b.is_over():
        b.apply_move(get_next_move(b))
    assert b.status() is GameStatus.DRAW
