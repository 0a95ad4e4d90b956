"""Utilities module."""

from .config import (
    Config,
    BoardConfig,
    ExploreConfig,
    get_default_config,
)
from .logging import (
    Logger,
    ExploreMetrics,
    console,
    print_config,
    print_board,
)

__all__ = [
    "Config",
    "BoardConfig",
    "ExploreConfig",
    "get_default_config",
    "Logger",
    "ExploreMetrics",
    "console",
    "print_config",
    "print_board",
]
