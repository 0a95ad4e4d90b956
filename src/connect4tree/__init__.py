"""
connect4tree - Connect 4 state-space explorer.

Enumerates the positions reachable from a start position on a
configurable board, sharing one node between move orders that reach the
same position (or its mirror), and filters the result down to winning
lines or to lines that can reach a target board.

Usage:
    from connect4tree.game import Board, GameState, Player
    from connect4tree.tree import Tree

    root = GameState.from_board(Board.empty(), Player.RED)
    tree = Tree.from_root(root)
    tree.explore(4)

    keep = tree.prune_to_wins()
    tree.mask_nodes(keep)
"""

__version__ = "0.1.0"

from . import game
from . import tree

__all__ = [
    "game",
    "tree",
    "__version__",
]
