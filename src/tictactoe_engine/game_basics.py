"""
Game basics: cell values, game status, difficulty tiers and board lines.
Teaching notes:
- Cells are indexed 0..8 row-major (index = row * 3 + col).
- Player values double as cell markers; EMPTY marks a free cell.
"""
from enum import Enum
from typing import Dict, List, Sequence, Tuple


class Player(Enum):
    EMPTY = 0
    X = 1
    O = 2

    def opponent(self) -> "Player":
        if self is Player.X:
            return Player.O
        if self is Player.O:
            return Player.X
        return self

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


class GameStatus(Enum):
    IN_PROGRESS = "in_progress"
    DRAW = "draw"
    RESULTED = "resulted"


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


_SYMBOLS: Dict[Player, str] = {Player.EMPTY: ".", Player.X: "X", Player.O: "O"}

ROWS: List[Tuple[int, int, int]] = [(0, 1, 2), (3, 4, 5), (6, 7, 8)]
COLS: List[Tuple[int, int, int]] = [(0, 3, 6), (1, 4, 7), (2, 5, 8)]
MAIN_DIAGONAL: Tuple[int, int, int] = (0, 4, 8)
ANTI_DIAGONAL: Tuple[int, int, int] = (2, 4, 6)
WIN_PATTERNS: List[Tuple[int, int, int]] = ROWS + COLS + [MAIN_DIAGONAL, ANTI_DIAGONAL]


def lines_through(idx: int) -> List[Tuple[int, int, int]]:
    """Lines that contain cell ``idx``: its row, its column, and any diagonal."""
    lines = [ROWS[idx // 3], COLS[idx % 3]]
    if idx in MAIN_DIAGONAL:
        lines.append(MAIN_DIAGONAL)
    if idx in ANTI_DIAGONAL:
        lines.append(ANTI_DIAGONAL)
    return lines


def serialize_board(cells: Sequence[Player]) -> str:
    return ''.join(cell.symbol for cell in cells)


def parse_player(raw: str) -> Player:
    s = raw.strip().upper()
    if s == "X":
        return Player.X
    if s == "O":
        return Player.O
    raise ValueError(f"Unknown player: {raw!r} (expected X or O)")

