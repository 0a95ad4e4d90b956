"""Game module - Connect 4 boards, results and states."""

from .board import (
    ROWS,
    COLS,
    WIN_LENGTH,
    Player,
    Board,
    ColumnFullError,
    InvalidTurnError,
)

from .result import (
    Outcome,
    Result,
    DRAW,
    ONGOING,
)

from .state import GameState, StateIndex

__all__ = [
    "ROWS",
    "COLS",
    "WIN_LENGTH",
    "Player",
    "Board",
    "ColumnFullError",
    "InvalidTurnError",
    "Outcome",
    "Result",
    "DRAW",
    "ONGOING",
    "GameState",
    "StateIndex",
]
