"""
Logging utilities with rich formatting.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from datetime import datetime
from pathlib import Path
from typing import Optional, Any

from rich.console import Console
from rich.table import Table
from rich.panel import Panel


console = Console()


@dataclass
class ExploreMetrics:
    """Summary of one exploration or pruning run."""

    command: str
    depth: int
    nodes: int
    edges: int
    wins: int
    draws: int
    ongoing: int
    elapsed: float
    nodes_added: int = 0
    nodes_kept: Optional[int] = None
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now().isoformat()


class Logger:
    """
    Exploration logger with rich output and optional JSON logging.

    Args:
        log_dir: Directory for log files (no file is written if None)
        verbose: Whether to print to console
    """

    def __init__(self, log_dir: Optional[str] = "runs", verbose: bool = True):
        self.verbose = verbose
        self.log_file: Optional[Path] = None

        if log_dir is not None:
            self.log_dir = Path(log_dir)
            self.log_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_file = self.log_dir / f"explore_{timestamp}.jsonl"

        self.metrics_history: list[ExploreMetrics] = []

    def log_metrics(self, metrics: ExploreMetrics) -> None:
        """Log metrics for one run."""
        self.metrics_history.append(metrics)

        if self.log_file is not None:
            with open(self.log_file, "a") as f:
                f.write(json.dumps(asdict(metrics)) + "\n")

        if self.verbose:
            self._print_metrics(metrics)

    def _print_metrics(self, m: ExploreMetrics) -> None:
        """Print run summary to console."""
        table = Table(title=f"{m.command} (depth {m.depth})", show_header=False, box=None)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")

        table.add_row("Nodes", str(m.nodes))
        table.add_row("Edges", str(m.edges))
        table.add_row("Added", str(m.nodes_added))
        table.add_row("Wins", str(m.wins))
        table.add_row("Draws", str(m.draws))
        table.add_row("Ongoing", str(m.ongoing))
        if m.nodes_kept is not None:
            table.add_row("Kept", str(m.nodes_kept))
        table.add_row("Time", f"{m.elapsed:.3f}s")

        console.print(table)
        console.print()

    def log_message(self, message: str, style: str = "white") -> None:
        """Log a message."""
        if self.verbose:
            console.print(f"[{style}]{message}[/]")

    def log_info(self, message: str) -> None:
        """Log info message."""
        self.log_message(message, "blue")

    def log_success(self, message: str) -> None:
        """Log success message."""
        self.log_message(message, "green")

    def log_warning(self, message: str) -> None:
        """Log warning message."""
        self.log_message(message, "yellow")

    def log_error(self, message: str) -> None:
        """Log error message."""
        self.log_message(message, "red")


def print_config(config: Any) -> None:
    """Print configuration in a nice format."""
    table = Table(title="Configuration", show_header=True)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="white")

    def add_dict(d: dict, prefix: str = "") -> None:
        for k, v in d.items():
            key = f"{prefix}{k}" if prefix else k
            if isinstance(v, dict):
                add_dict(v, f"{key}.")
            else:
                table.add_row(key, str(v))

    add_dict(asdict(config))
    console.print(table)


def print_board(board_str: str, title: str = "Board") -> None:
    """Print a game board in a panel."""
    console.print(Panel(board_str, title=title, border_style="blue"))
