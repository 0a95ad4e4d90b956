"""
Game state: one node of the explored state graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, NewType, Optional, Tuple

from .board import Board, Player
from .result import Result

# Handle of a GameState slot in a Tree arena
StateIndex = NewType("StateIndex", int)


@dataclass
class GameState:
    """
    A position with the player to move.

    children holds one slot per column once the state has been expanded:
    a handle for a legal move, None for a full column. It stays empty until
    the explorer reaches this state.
    """

    board: Board
    turn: Player
    result: Result
    children: List[Optional[StateIndex]] = field(default_factory=list)
    index: Optional[StateIndex] = None

    @classmethod
    def from_board(cls, board: Board, turn: Player) -> GameState:
        """Create a detached state; the result is computed from the board."""
        if turn == Player.EMPTY:
            raise ValueError("The player to move cannot be empty")
        return cls(board=board, turn=Player(turn), result=Result.from_board(board))

    def from_turn(self, col: int) -> Optional[GameState]:
        """
        Play the active player's piece in a column.

        Args:
            col: Column index

        Returns:
            New detached state with the turn flipped, or None if the
            column is full
        """
        next_turn = self.turn.flip()
        new_board = self.board.from_turn(col, self.turn)
        if new_board is None:
            return None
        return GameState(
            board=new_board,
            turn=next_turn,
            result=Result.from_board(new_board),
        )

    @property
    def is_expanded(self) -> bool:
        return bool(self.children)

    def ok_children(self) -> Iterator[StateIndex]:
        """Handles of realized children, in column order."""
        return (c for c in self.children if c is not None)

    def count_pieces(self) -> Tuple[int, int]:
        return self.board.count_pieces()

    def __str__(self) -> str:
        label = "?" if self.index is None else str(self.index)
        lines = [f"State: {label}", self.board.render()]
        status = f"Goes to {len(self.children)}, "
        if self.result.is_ongoing:
            status += f"{self.turn.name.lower()} to move"
        else:
            status += str(self.result)
        lines.append(status)
        return "\n".join(lines)
