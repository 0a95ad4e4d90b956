"""
Game result evaluation.

A result is derived purely from a board: Win(player), Draw or Ongoing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .board import Board, Player, WIN_LENGTH

# Rightward horizontal, upward vertical, up-right diagonal, up-left diagonal
DIRECTIONS = ((1, 0), (0, 1), (1, 1), (-1, 1))


class Outcome(Enum):
    WIN = "win"
    DRAW = "draw"
    ONGOING = "ongoing"


@dataclass(frozen=True)
class Result:
    """Outcome of a position, with the winner for wins."""

    outcome: Outcome
    winner: Optional[Player] = None

    def __post_init__(self):
        if (self.outcome is Outcome.WIN) != (self.winner is not None):
            raise ValueError("A winner is required for a win and only for a win")
        if self.winner is Player.EMPTY:
            raise ValueError("Empty cannot win")

    @classmethod
    def win(cls, player: Player) -> Result:
        return cls(Outcome.WIN, player)

    @property
    def is_win(self) -> bool:
        return self.outcome is Outcome.WIN

    @property
    def is_draw(self) -> bool:
        return self.outcome is Outcome.DRAW

    @property
    def is_ongoing(self) -> bool:
        return self.outcome is Outcome.ONGOING

    @property
    def is_terminal(self) -> bool:
        return self.outcome is not Outcome.ONGOING

    @classmethod
    def from_board(cls, board: Board) -> Result:
        """
        Classify a board.

        Cells are scanned column by column, bottom-up. The first complete
        line found in that order decides the winner; a move completing two
        lines at once always belongs to one player, so only which line is
        reported depends on the order.
        """
        winner = _find_winner(board)
        if winner is not None:
            return cls.win(winner)
        if board.is_full():
            return DRAW
        return ONGOING

    def __str__(self) -> str:
        if self.is_win:
            return f"{self.winner.name.lower()} won"
        if self.is_draw:
            return "draw"
        return "ongoing"


DRAW = Result(Outcome.DRAW)
ONGOING = Result(Outcome.ONGOING)


def _check_line(board: Board, x: int, y: int, dx: int, dy: int, player: int) -> bool:
    """Check for WIN_LENGTH in a row starting at (x, y) in direction (dx, dy)."""
    cells = board.cells
    for i in range(1, WIN_LENGTH):
        nx, ny = x + i * dx, y + i * dy
        if nx < 0 or nx >= board.width or ny < 0 or ny >= board.height:
            return False
        if cells[nx, ny] != player:
            return False
    return True


def _find_winner(board: Board) -> Optional[Player]:
    cells = board.cells
    for x in range(board.width):
        for y in range(board.height):
            player = int(cells[x, y])
            if player == Player.EMPTY:
                continue
            for dx, dy in DIRECTIONS:
                if _check_line(board, x, y, dx, dy, player):
                    return Player(player)
    return None
