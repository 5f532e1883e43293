"""
Board state machine: cells, move history, side to move and derived status.

The status is recomputed incrementally after every move or undo, looking only
at the lines through the most recently changed cell. That check is only sound
because exactly one cell changed since the previous recomputation.
"""
from __future__ import annotations

import logging
import operator
from typing import List, Tuple

from .errors import CellOccupiedError, GameOverError, OutOfRangeError, PreconditionError
from .game_basics import Difficulty, GameStatus, Player, lines_through, serialize_board

logger = logging.getLogger(__name__)

N_CELLS = 9


class Board:
    def __init__(self, starting_player: Player, difficulty: Difficulty = Difficulty.HARD) -> None:
        if starting_player not in (Player.X, Player.O):
            raise ValueError(f"starting_player must be X or O, got {starting_player!r}")
        if not isinstance(difficulty, Difficulty):
            raise ValueError(f"difficulty must be a Difficulty, got {difficulty!r}")
        self._cells: List[Player] = [Player.EMPTY] * N_CELLS
        self._history: List[int] = []
        self._status = GameStatus.IN_PROGRESS
        self._turn = starting_player
        self._winner = Player.EMPTY
        self._difficulty = difficulty

    # -- queries -----------------------------------------------------------

    @property
    def cells(self) -> Tuple[Player, ...]:
        return tuple(self._cells)

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self._history)

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    def current_turn(self) -> Player:
        return self._turn

    def status(self) -> GameStatus:
        return self._status

    def winner(self) -> Player:
        """Winning side; meaningful only when status() is RESULTED."""
        return self._winner

    def is_over(self) -> bool:
        return self._status is not GameStatus.IN_PROGRESS

    def cell(self, idx: int) -> Player:
        return self._cells[idx]

    # -- mutation ----------------------------------------------------------

    def apply_move(self, position: int) -> None:
        """Place the side to move on ``position`` and pass the turn.

        Raises OutOfRangeError, CellOccupiedError or GameOverError without
        touching the board.
        """
        try:
            idx = operator.index(position)
        except TypeError:
            logger.debug("rejected non-integer position %r", position)
            raise OutOfRangeError(position) from None
        if idx < 0 or idx >= N_CELLS:
            logger.debug("rejected out-of-range position %r", position)
            raise OutOfRangeError(position)
        if self._cells[idx] is not Player.EMPTY:
            logger.debug("rejected occupied position %d", idx)
            raise CellOccupiedError(idx)
        if self.is_over():
            logger.debug("rejected position %d after game end (%s)", idx, self._status.value)
            raise GameOverError(idx)

        self._cells[idx] = self._turn
        self._history.append(idx)
        self._turn = self._turn.opponent()
        self._update_status()

    def undo_last_move(self) -> None:
        """Take back the most recent move. Used by the search engine."""
        if not self._history:
            raise PreconditionError("undo_last_move called with an empty history")
        idx = self._history.pop()
        self._cells[idx] = Player.EMPTY
        self._turn = self._turn.opponent()
        self._update_status()

    def _update_status(self) -> None:
        self._winner = Player.EMPTY
        if not self._history:
            self._status = GameStatus.IN_PROGRESS
            return

        last = self._history[-1]
        mark = self._cells[last]
        for line in lines_through(last):
            if all(self._cells[i] is mark for i in line):
                self._status = GameStatus.RESULTED
                self._winner = mark
                return
        if len(self._history) >= N_CELLS:
            self._status = GameStatus.DRAW
        else:
            self._status = GameStatus.IN_PROGRESS

    # -- helpers -----------------------------------------------------------

    def copy(self) -> "Board":
        b = Board(self._turn, self._difficulty)
        b._cells = self._cells[:]
        b._history = self._history[:]
        b._status = self._status
        b._winner = self._winner
        return b

    def render(self) -> str:
        s = serialize_board(self._cells)
        return "\n".join(s[r * 3:r * 3 + 3] for r in range(3))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._cells == other._cells
            and self._history == other._history
            and self._status is other._status
            and self._turn is other._turn
            and self._winner is other._winner
            and self._difficulty is other._difficulty
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Board(cells={serialize_board(self._cells)!r}, history={self._history!r}, "
            f"turn={self._turn.name}, status={self._status.name}, "
            f"winner={self._winner.name}, difficulty={self._difficulty.name})"
        )
