"""
Command-line interface for Connect 4 tree exploration.

Commands:
- explore: Enumerate positions reachable from a start position
- wins: Explore, then keep only lines that end in a win
- target: Explore, then keep only lines that can reach a target board
- show: Print a position and its result
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console

app = typer.Typer(
    name="c4tree",
    help="Connect 4 state-space explorer",
    no_args_is_help=True,
)

console = Console()


def parse_moves(text: Optional[str]) -> List[int]:
    """Parse a comma-separated column list such as "3,3,4"."""
    if not text:
        return []
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise ValueError(f"Moves must be comma-separated column numbers, got '{text}'")


def _load_config(
    config_path: Optional[Path],
    depth: Optional[int],
    width: Optional[int],
    height: Optional[int],
    moves: Optional[str],
    first: Optional[str],
    log_dir: Optional[str],
):
    from .utils import Config

    if config_path and config_path.exists():
        config = Config.load(str(config_path))
    else:
        config = Config()

    # Command-line options override the file
    if depth is not None:
        config.explore.depth = depth
    if width is not None:
        config.board.width = width
    if height is not None:
        config.board.height = height
    if moves is not None:
        config.explore.moves = parse_moves(moves)
    if first is not None:
        config.explore.first_player = first
    if log_dir is not None:
        config.log_dir = log_dir

    config.validate()
    return config


def _start_state(config):
    from .game import Board, GameState, Player

    first = Player.parse(config.explore.first_player)
    board = Board.from_moves(
        config.explore.moves,
        first=first,
        width=config.board.width,
        height=config.board.height,
    )
    turn = first if len(config.explore.moves) % 2 == 0 else first.flip()
    return GameState.from_board(board, turn)


def _summarize(tree, command: str, depth: int, elapsed: float, added: int, kept=None):
    from .utils import ExploreMetrics

    wins = sum(1 for node in tree.nodes if node.result.is_win)
    draws = sum(1 for node in tree.nodes if node.result.is_draw)
    return ExploreMetrics(
        command=command,
        depth=depth,
        nodes=len(tree),
        edges=tree.count_children(),
        wins=wins,
        draws=draws,
        ongoing=len(tree) - wins - draws,
        elapsed=elapsed,
        nodes_added=added,
        nodes_kept=kept,
    )


def _run(command: str, config, prune=None) -> None:
    from .tree import Tree
    from .utils import Logger, print_board, print_config

    config.ensure_dirs()
    logger = Logger(log_dir=config.log_dir)
    print_config(config)

    root = _start_state(config)
    print_board(root.board.render(), title=f"Start ({root.turn.name.lower()} to move)")

    tree = Tree.from_root(root, logger=logger)
    start = time.time()
    with console.status(f"[cyan]Exploring {config.explore.depth} plies...[/]"):
        added = tree.explore(config.explore.depth)

    kept = None
    if prune is not None:
        keep = prune(tree)
        kept = int(keep.sum())
        tree.mask_nodes(keep)

    metrics = _summarize(tree, command, config.explore.depth, time.time() - start, added, kept)
    logger.log_metrics(metrics)
    if logger.log_file is not None:
        logger.log_success(f"Metrics written to {logger.log_file}")


def _fail(err: Exception) -> None:
    from .utils import Logger

    Logger(log_dir=None).log_error(str(err))
    raise typer.Exit(code=1)


@app.command()
def explore(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Plies to explore"),
    width: Optional[int] = typer.Option(None, "--width", help="Board width (columns)"),
    height: Optional[int] = typer.Option(None, "--height", help="Board height (rows)"),
    moves: Optional[str] = typer.Option(
        None, "--moves", "-m", help="Columns played to reach the start, e.g. 3,3,4"
    ),
    first: Optional[str] = typer.Option(None, "--first", help="Player who moves first: red or yellow"),
    log_dir: Optional[str] = typer.Option(None, "--log-dir", help="Directory for JSON metrics logs"),
) -> None:
    """Enumerate every position reachable within the given depth."""
    try:
        config = _load_config(config_path, depth, width, height, moves, first, log_dir)
        _run("explore", config)
    except ValueError as err:
        _fail(err)


@app.command()
def wins(
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Plies to explore"),
    width: Optional[int] = typer.Option(None, "--width", help="Board width (columns)"),
    height: Optional[int] = typer.Option(None, "--height", help="Board height (rows)"),
    moves: Optional[str] = typer.Option(
        None, "--moves", "-m", help="Columns played to reach the start, e.g. 3,3,4"
    ),
    first: Optional[str] = typer.Option(None, "--first", help="Player who moves first: red or yellow"),
    log_dir: Optional[str] = typer.Option(None, "--log-dir", help="Directory for JSON metrics logs"),
) -> None:
    """Explore, then keep only positions that lead to a win."""
    try:
        config = _load_config(config_path, depth, width, height, moves, first, log_dir)
        _run("wins", config, prune=lambda tree: tree.prune_to_wins())
    except ValueError as err:
        _fail(err)


@app.command()
def target(
    target_moves: str = typer.Option(..., "--target", "-t", help="Columns played to reach the target"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config YAML file"
    ),
    depth: Optional[int] = typer.Option(None, "--depth", "-d", help="Plies to explore"),
    width: Optional[int] = typer.Option(None, "--width", help="Board width (columns)"),
    height: Optional[int] = typer.Option(None, "--height", help="Board height (rows)"),
    moves: Optional[str] = typer.Option(
        None, "--moves", "-m", help="Columns played to reach the start, e.g. 3,3,4"
    ),
    first: Optional[str] = typer.Option(None, "--first", help="Player who moves first: red or yellow"),
    log_dir: Optional[str] = typer.Option(None, "--log-dir", help="Directory for JSON metrics logs"),
) -> None:
    """Explore, then keep only positions that can still reach the target."""
    from .game import Board, Player
    from .utils import print_board

    try:
        config = _load_config(config_path, depth, width, height, moves, first, log_dir)
        goal = Board.from_moves(
            parse_moves(target_moves),
            first=Player.parse(config.explore.first_player),
            width=config.board.width,
            height=config.board.height,
        )
        print_board(goal.render(), title="Target")
        _run("target", config, prune=lambda tree: tree.prune_to_target(goal))
    except ValueError as err:
        _fail(err)


@app.command()
def show(
    moves: Optional[str] = typer.Option(
        None, "--moves", "-m", help="Columns played to reach the start, e.g. 3,3,4"
    ),
    width: Optional[int] = typer.Option(None, "--width", help="Board width (columns)"),
    height: Optional[int] = typer.Option(None, "--height", help="Board height (rows)"),
    first: Optional[str] = typer.Option(None, "--first", help="Player who moves first: red or yellow"),
) -> None:
    """Print a position and its result."""
    from .utils import print_board

    try:
        config = _load_config(None, None, width, height, moves, first, None)
        state = _start_state(config)
    except ValueError as err:
        _fail(err)

    red, yellow = state.count_pieces()
    print_board(state.board.render(), title=f"red {red}, yellow {yellow}")
    if state.result.is_ongoing:
        console.print(f"[cyan]{state.turn.name.lower()} to move[/]")
    else:
        console.print(f"[bold green]{state.result}[/]")


if __name__ == "__main__":
    app()
