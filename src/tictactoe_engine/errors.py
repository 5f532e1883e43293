"""Exceptions raised by the board and the search engine."""


class EngineError(Exception):
    """Base class for all engine errors."""


class MoveError(EngineError, ValueError):
    """A move was rejected; the board is left untouched."""

    def __init__(self, position: object, message: str) -> None:
        super().__init__(message)
        self.position = position


class OutOfRangeError(MoveError):
    def __init__(self, position: object) -> None:
        super().__init__(position, f"Illegal position {position!r}: must be in 0..8")


class CellOccupiedError(MoveError):
    def __init__(self, position: int) -> None:
        super().__init__(position, f"Position {position} is already filled")


class GameOverError(MoveError):
    def __init__(self, position: int) -> None:
        super().__init__(position, f"Cannot play {position}: the game is already over")


class PreconditionError(EngineError, RuntimeError):
    """Internal contract violated (undo on empty history, search on a finished game)."""
