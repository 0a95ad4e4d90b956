"""
Keep-mask computation over an explored tree.

Both filters mark a state as kept when it satisfies a predicate itself or
when any of its realized children is kept. The graph is a DAG (transposed
positions have several parents), so each handle is decided once and the
result is reused.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List, Optional

import numpy as np

from ..game import Board, GameState

if TYPE_CHECKING:
    from .tree import Tree

# Returns True/False to decide a state on its own, None to defer to its children
Decision = Callable[[GameState], Optional[bool]]

_NEW, _OPEN, _DONE = 0, 1, 2


def _mark(tree: Tree, root: int, decide: Decision) -> np.ndarray:
    """Post-order walk from root; unreachable states are not kept."""
    keep = np.zeros(len(tree), dtype=bool)
    status = np.full(len(tree), _NEW, dtype=np.int8)

    tree[root]  # raises IndexError for a bad handle
    stack = [(root, False)]
    while stack:
        index, children_done = stack.pop()
        node = tree.nodes[index]

        if children_done:
            keep[index] = any(keep[c] for c in node.ok_children())
            status[index] = _DONE
            continue
        if status[index] != _NEW:
            continue

        decision = decide(node)
        if decision is not None:
            keep[index] = decision
            status[index] = _DONE
            continue

        status[index] = _OPEN
        stack.append((index, True))
        stack.extend((c, False) for c in node.ok_children() if status[c] == _NEW)

    return keep


def prune_to_wins(tree: Tree, root: int) -> np.ndarray:
    """
    Mark states that are a win for either player or lead to one.

    Args:
        tree: Explored tree
        root: Handle to start from

    Returns:
        Boolean keep-mask with one entry per arena slot
    """

    def decide(node: GameState) -> Optional[bool]:
        return True if node.result.is_win else None

    return _mark(tree, root, decide)


def _target_columns(target: Board) -> List[np.ndarray]:
    return [target.column(col) for col in range(target.width)]


def _is_prefix(board: Board, columns: List[np.ndarray]) -> bool:
    for col, goal in enumerate(columns):
        run = board.column(col)
        if len(run) > len(goal) or not np.array_equal(run, goal[: len(run)]):
            return False
    return True


def can_reach(board: Board, target: Board) -> bool:
    """
    Whether piece histories still allow board to grow into target.

    Columns only ever gain pieces on top, so every column of board must be
    a prefix of the same column of the target, or of the target's mirror.
    """
    if (board.width, board.height) != (target.width, target.height):
        return False
    return _is_prefix(board, _target_columns(target)) or _is_prefix(
        board, _target_columns(target.mirror())
    )


def prune_to_target(tree: Tree, target: Board, root: int) -> np.ndarray:
    """
    Mark states equal to the target board or able to reach it.

    States whose columns rule the target out are rejected without
    visiting their children.

    Args:
        tree: Explored tree
        target: Board to look for (either orientation)
        root: Handle to start from

    Returns:
        Boolean keep-mask with one entry per arena slot
    """
    same_size = (target.width, target.height) == (tree.root.board.width, tree.root.board.height)
    columns = _target_columns(target)
    mirrored = _target_columns(target.mirror())

    def decide(node: GameState) -> Optional[bool]:
        if not same_size:
            return False
        if node.board == target:
            return True
        if not (_is_prefix(node.board, columns) or _is_prefix(node.board, mirrored)):
            return False
        return None

    return _mark(tree, root, decide)
