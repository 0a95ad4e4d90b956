"""
Connect 4 board representation.

Board representation:
- W columns x H rows, default 7 x 6
- stored column-major: cells[col, row], row 0 is the bottom
- 0 = empty, 1 = red, 2 = yellow

Pieces only ever drop to the lowest empty row, so every column is a
contiguous run of pieces starting at row 0.

A board and its left-right mirror are the same position: equality and
hashing go through the canonical form, the lexicographically smaller of
the two in column-major, row-ascending order.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

COLS = 7
ROWS = 6
WIN_LENGTH = 4


class ColumnFullError(ValueError):
    """Raised when a piece is dropped into a column with no empty cell."""

    def __init__(self, col: int):
        super().__init__(f"Column {col} is full")
        self.col = col


class InvalidTurnError(RuntimeError):
    """Raised when the turn is flipped on a value that is not a player."""


class Player(IntEnum):
    """Cell value: one of the two players, or empty."""

    EMPTY = 0
    RED = 1
    YELLOW = 2

    def flip(self) -> Player:
        """Return the other player."""
        if self is Player.RED:
            return Player.YELLOW
        if self is Player.YELLOW:
            return Player.RED
        raise InvalidTurnError(f"Turn is invalid. Turn: {self.name}")

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, name: str) -> Player:
        """Parse a player name ("red"/"yellow", or "a"/"b")."""
        key = name.strip().lower()
        if key in ("red", "a", "1"):
            return cls.RED
        if key in ("yellow", "b", "2"):
            return cls.YELLOW
        raise ValueError(f"Unknown player '{name}', expected red or yellow")


_SYMBOLS = {Player.EMPTY: ".", Player.RED: "X", Player.YELLOW: "O"}


class Board:
    """
    Fixed-size column-major grid of cell values.

    Args:
        cells: int8 array of shape (width, height)
    """

    __slots__ = ("cells",)

    def __init__(self, cells: np.ndarray):
        if cells.ndim != 2 or cells.shape[0] < 1 or cells.shape[1] < 1:
            raise ValueError(f"Board must be a non-empty 2D grid, got shape {cells.shape}")
        if cells.dtype != np.int8:
            cells = cells.astype(np.int8)
        self.cells = cells

    @classmethod
    def empty(cls, width: int = COLS, height: int = ROWS) -> Board:
        """Create an all-empty board."""
        if width < 1 or height < 1:
            raise ValueError(f"Board size must be positive, got {width}x{height}")
        return cls(np.zeros((width, height), dtype=np.int8))

    @classmethod
    def from_columns(
        cls,
        columns: Sequence[Sequence[int]],
        height: int = ROWS,
    ) -> Board:
        """
        Build a board from per-column piece sequences, bottom-up.

        Args:
            columns: One sequence of players per column
            height: Number of rows

        Returns:
            Board with each column filled from row 0
        """
        board = cls.empty(len(columns), height)
        for col, pieces in enumerate(columns):
            if len(pieces) > height:
                raise ValueError(f"Column {col} holds {len(pieces)} pieces, height is {height}")
            for piece in pieces:
                board.play(col, Player(piece))
        return board

    @classmethod
    def from_moves(
        cls,
        moves: Iterable[int],
        first: Player = Player.RED,
        width: int = COLS,
        height: int = ROWS,
    ) -> Board:
        """Replay a sequence of columns from the empty board, alternating players."""
        board = cls.empty(width, height)
        player = first
        for col in moves:
            board.play(col, player)
            player = player.flip()
        return board

    @property
    def width(self) -> int:
        return self.cells.shape[0]

    @property
    def height(self) -> int:
        return self.cells.shape[1]

    def __getitem__(self, pos: Tuple[int, int]) -> Player:
        return Player(int(self.cells[pos]))

    def copy(self) -> Board:
        return Board(self.cells.copy())

    def _check_col(self, col: int) -> None:
        if col < 0 or col >= self.width:
            raise ValueError(f"Invalid column {col}, must be 0-{self.width - 1}")

    def play(self, col: int, player: Player) -> int:
        """
        Drop a piece into a column.

        Args:
            col: Column index
            player: Player whose piece is dropped

        Returns:
            Row the piece landed on

        Raises:
            ColumnFullError: if the column has no empty cell
        """
        self._check_col(col)
        if player == Player.EMPTY:
            raise ValueError("Cannot play an empty piece")

        column = self.cells[col]
        empty_rows = np.flatnonzero(column == Player.EMPTY)
        if empty_rows.size == 0:
            raise ColumnFullError(col)

        row = int(empty_rows[0])
        column[row] = int(player)
        return row

    def from_turn(self, col: int, player: Player) -> Optional[Board]:
        """Return a copy with the move played, or None if the column is full."""
        new_board = self.copy()
        try:
            new_board.play(col, player)
        except ColumnFullError:
            return None
        return new_board

    def is_column_full(self, col: int) -> bool:
        self._check_col(col)
        return bool(self.cells[col, -1] != Player.EMPTY)

    def is_full(self) -> bool:
        return not np.any(self.cells == Player.EMPTY)

    def column(self, col: int) -> np.ndarray:
        """Non-empty run of a column, bottom-up."""
        column = self.cells[col]
        return column[column != Player.EMPTY]

    def count_pieces(self) -> Tuple[int, int]:
        """Count pieces for each player: (red, yellow)."""
        red = int(np.count_nonzero(self.cells == Player.RED))
        yellow = int(np.count_nonzero(self.cells == Player.YELLOW))
        return red, yellow

    def mirror(self) -> Board:
        """Board with the column order reversed."""
        return Board(self.cells[::-1].copy())

    def canonical(self) -> Board:
        """Return the smaller of the board and its mirror, column-major."""
        mirrored = self.cells[::-1]
        if self.cells.tobytes() <= mirrored.tobytes():
            return Board(self.cells.copy())
        return Board(mirrored.copy())

    def key(self) -> Tuple[int, int, bytes]:
        """Hashable key of the canonical form."""
        original = self.cells.tobytes()
        mirrored = self.cells[::-1].tobytes()
        return self.width, self.height, min(original, mirrored)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.key() == other.key()

    def __hash__(self) -> int:
        return hash(self.key())

    def render(self) -> str:
        """
        Render the board as a string, top row first.

        - 'X' = red
        - 'O' = yellow
        - '.' = empty
        """
        lines = [" " + " ".join(str(c % 10) for c in range(self.width))]
        for row in range(self.height - 1, -1, -1):
            cells = (Player(int(v)).symbol for v in self.cells[:, row])
            lines.append("|" + "|".join(cells) + "|")
        lines.append("-" * (self.width * 2 + 1))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        columns = [[int(v) for v in self.column(c)] for c in range(self.width)]
        return f"Board(columns={columns}, height={self.height})"
