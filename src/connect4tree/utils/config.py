"""
Configuration management for Connect 4 tree exploration.

Uses dataclasses for clean configuration with sensible defaults.
Supports loading from YAML files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List
import yaml

from ..game import COLS, ROWS, Player


@dataclass
class BoardConfig:
    """Board dimensions."""

    width: int = COLS
    height: int = ROWS


@dataclass
class ExploreConfig:
    """Exploration configuration."""

    depth: int = 4
    moves: List[int] = field(default_factory=list)  # Columns played to reach the start
    first_player: str = "red"


@dataclass
class Config:
    """Full exploration configuration."""

    board: BoardConfig = field(default_factory=BoardConfig)
    explore: ExploreConfig = field(default_factory=ExploreConfig)

    log_dir: str = "runs"

    def validate(self) -> None:
        """Raise ValueError for settings that cannot describe a game."""
        if self.board.width < 1 or self.board.height < 1:
            raise ValueError(
                f"Board size must be positive, got {self.board.width}x{self.board.height}"
            )
        if self.explore.depth < 0:
            raise ValueError(f"Depth must be non-negative, got {self.explore.depth}")
        for col in self.explore.moves:
            if col < 0 or col >= self.board.width:
                raise ValueError(f"Move {col} is outside a board of width {self.board.width}")
        Player.parse(self.explore.first_player)

    def save(self, path: str) -> None:
        """Save config to YAML file."""
        with open(path, "w") as f:
            yaml.dump(asdict(self), f, default_flow_style=False)

    @classmethod
    def load(cls, path: str) -> Config:
        """Load config from YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        config = cls(
            board=BoardConfig(**data.get("board", {})),
            explore=ExploreConfig(**data.get("explore", {})),
            log_dir=data.get("log_dir", "runs"),
        )
        config.validate()
        return config

    def ensure_dirs(self) -> None:
        """Create output directories if they don't exist."""
        Path(self.log_dir).mkdir(parents=True, exist_ok=True)


def get_default_config() -> Config:
    """Get default configuration for a standard 7x6 board."""
    return Config()
