"""
Arena-backed game-state graph and depth-first explorer.

All discovered states live in a flat list (the arena) and refer to each
other by integer handle. A map from canonical board to handle (the
transposition table) makes different move orders reaching the same
position, or its mirror, share one node.

Exploration policy: the depth to which a position is explored is fixed
the first time it is discovered. Reaching it again through another move
order only adds an edge to the existing node; it is not expanded again,
even with more plies remaining.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from ..game import Board, GameState, StateIndex
from ..utils.logging import Logger
from .prune import prune_to_target, prune_to_wins


class Tree:
    """
    Owner of every GameState discovered from a root position.

    Boards stored in the arena are made read-only, so the transposition
    map always matches the states it indexes.

    Args:
        nodes: Arena of states; position in the list is the handle
        root_index: Handle of the root state
        logger: Optional logger for exploration and compaction messages
    """

    def __init__(
        self,
        nodes: List[GameState],
        root_index: int = 0,
        logger: Optional[Logger] = None,
    ):
        if not nodes:
            raise ValueError("A tree needs at least one state")
        self.nodes = nodes
        self.root_index = StateIndex(root_index)
        self.logger = logger
        self._map: Dict[Board, StateIndex] = {}
        self._rebuild_map()

    @classmethod
    def from_root(cls, root: GameState, logger: Optional[Logger] = None) -> Tree:
        """Create a tree holding only a copy of the root, at handle 0."""
        state = GameState.from_board(root.board.copy(), root.turn)
        state.index = StateIndex(0)
        return cls([state], 0, logger=logger)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def root(self) -> GameState:
        return self.nodes[self.root_index]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> GameState:
        return self.nodes[self._check_index(index)]

    def _check_index(self, index: int) -> int:
        if index < 0 or index >= len(self.nodes):
            raise IndexError(f"State index {index} out of range for {len(self.nodes)} states")
        return index

    def get_board(self, index: int) -> Board:
        """Board of a state. Arena boards are read-only; copy one to play on it."""
        return self[index].board

    def num_children(self, index: int) -> int:
        return len(self[index].children)

    def iter_children(self, index: int) -> Iterator[Optional[StateIndex]]:
        """All child slots of a state, one per column."""
        return iter(self[index].children)

    def iter_ok_children(self, index: int) -> Iterator[StateIndex]:
        """Realized children of a state, in column order."""
        return self[index].ok_children()

    def find(self, board: Board) -> Optional[StateIndex]:
        """Handle of a board (or its mirror), if it has been discovered."""
        return self._map.get(board)

    def count_children(self) -> int:
        """Number of parent -> child edges reachable from the root."""
        seen = {self.root_index}
        stack = [self.root_index]
        edges = 0
        while stack:
            for child in self.nodes[stack.pop()].ok_children():
                edges += 1
                if child not in seen:
                    seen.add(child)
                    stack.append(child)
        return edges

    # ------------------------------------------------------------------
    # Exploration
    # ------------------------------------------------------------------

    def explore(self, depth: int) -> int:
        """
        Expand the graph from the root for up to depth plies.

        Returns:
            Number of states added to the arena
        """
        return self._walk(self.root_index, depth)

    def explore_further(self, depth: int, at: int) -> int:
        """
        Expand the graph from an existing state for up to depth more plies.

        Returns:
            Number of states added to the arena
        """
        added = self._walk(StateIndex(self._check_index(at)), depth)
        if self.logger is not None:
            self.logger.log_info(f"Added {added} nodes")
        return added

    def _walk(self, head: StateIndex, depth: int) -> int:
        """
        Depth-first walk from head with an explicit stack.

        Unexpanded states get their moves generated; already expanded
        states hand out their realized children. Each handle is entered at
        most once per walk.
        """
        start = len(self.nodes)
        if depth <= 0 or not self.nodes[head].result.is_ongoing:
            return 0

        seen = {head}
        stack: List[Tuple[int, Iterator[StateIndex]]] = [(depth, self._moves(head))]
        while stack:
            remaining, moves = stack[-1]
            child = next(moves, None)
            if child is None:
                stack.pop()
                continue
            if child in seen:
                continue
            seen.add(child)
            if remaining > 1 and self.nodes[child].result.is_ongoing:
                stack.append((remaining - 1, self._moves(child)))

        return len(self.nodes) - start

    def _moves(self, index: StateIndex) -> Iterator[StateIndex]:
        """
        Yield the children of a state that the walk should descend into.

        Existing child links are handed out as they are. Empty slots are
        filled column by column, lazily, so each new child is fully
        explored before the next column is tried. A move onto an already
        known board is linked but not yielded. Empty slots left by
        compaction are filled again the same way.
        """
        node = self.nodes[index]
        if not node.is_expanded:
            node.children = [None] * node.board.width

        for col in range(node.board.width):
            child = node.children[col]
            if child is not None:
                yield child
                continue

            new_state = node.from_turn(col)
            if new_state is None:
                continue

            existing = self._map.get(new_state.board)
            if existing is not None:
                node.children[col] = existing
                continue

            new_index = StateIndex(len(self.nodes))
            new_state.index = new_index
            node.children[col] = new_index
            new_state.board.cells.flags.writeable = False
            self._map[new_state.board.canonical()] = new_index
            self.nodes.append(new_state)
            yield new_index

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------

    def prune_to_wins(self, root: Optional[int] = None) -> np.ndarray:
        """Keep-mask of states that are wins or lead to one."""
        return prune_to_wins(self, self.root_index if root is None else root)

    def prune_to_target(self, target: Board, root: Optional[int] = None) -> np.ndarray:
        """Keep-mask of states that are the target or can still reach it."""
        return prune_to_target(self, target, self.root_index if root is None else root)

    def mask_nodes(self, keep: Sequence[bool]) -> None:
        """
        Compact the arena to the states marked in keep.

        Kept states stay in their relative order and every stored handle is
        rewritten. Child slots pointing at dropped states become None so
        each child list keeps one slot per column. If the root is dropped,
        the tree is reset to a single empty-board state and a warning is
        logged.
        """
        keep = np.asarray(keep, dtype=bool)
        if keep.shape != (len(self.nodes),):
            raise ValueError(f"Keep mask has shape {keep.shape}, expected ({len(self.nodes)},)")

        before = len(self.nodes)
        if not keep[self.root_index]:
            self._reset()
            if self.logger is not None:
                self.logger.log_warning("Root dropped, tree reset to an empty board")
        else:
            remap = np.full(before, -1, dtype=np.int64)
            remap[keep] = np.arange(int(keep.sum()))

            new_nodes = []
            for old_index in np.flatnonzero(keep):
                node = self.nodes[old_index]
                node.children = [
                    StateIndex(int(remap[c])) if c is not None and keep[c] else None
                    for c in node.children
                ]
                node.index = StateIndex(int(remap[old_index]))
                new_nodes.append(node)

            self.nodes = new_nodes
            self.root_index = StateIndex(int(remap[self.root_index]))
            self._rebuild_map()

        if self.logger is not None:
            self.logger.log_info(f"Kept {len(self.nodes)} of {before} nodes")

    def _reset(self) -> None:
        board = self.root.board
        state = GameState.from_board(Board.empty(board.width, board.height), self.root.turn)
        state.index = StateIndex(0)
        self.nodes = [state]
        self.root_index = StateIndex(0)
        self._rebuild_map()

    def _rebuild_map(self) -> None:
        self._map = {}
        for i, node in enumerate(self.nodes):
            node.board.cells.flags.writeable = False
            board = node.board.canonical()
            if board in self._map:
                raise ValueError(f"States {self._map[board]} and {i} share a board")
            self._map[board] = StateIndex(i)
