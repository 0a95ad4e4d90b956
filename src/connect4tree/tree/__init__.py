"""Tree module - state arena, explorer and pruning."""

from .tree import Tree
from .prune import prune_to_wins, prune_to_target, can_reach

__all__ = [
    "Tree",
    "prune_to_wins",
    "prune_to_target",
    "can_reach",
]
