from __future__ import annotations

import argparse
import logging
import pathlib
import sys
from typing import Any, Dict, List, Optional

from ..engine.bitboard import Player
from ..engine.errors import ConfigurationError, GomokuError
from ..engine.game import GameState, Gomoku
from ..engine.notation import format_position, parse_position, render_board
from ..engine.search import SearchConfig
from ..logging_setup import setup_logging
from .diag import CONFIG_PATH, ensure_config, load_config, tomllib

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="gomoku", description="Play five-in-a-row against the computer")
    p.add_argument("-s", "--search-depth", type=int, default=None, help="minmax search tree depth (even, >= 2)")
    p.add_argument("--radius", type=int, default=None, help="candidate move distance from existing stones")
    p.add_argument("--workers", type=int, default=None, help="threads searching root moves")
    p.add_argument("--config", type=pathlib.Path, default=None, help=f"TOML config file (default {CONFIG_PATH})")
    return p


def resolve_config(args: argparse.Namespace) -> Dict[str, Any]:
    if args.config is not None:
        cfg = load_config(args.config)
    else:
        ensure_config()
        cfg = load_config(CONFIG_PATH)
    engine = dict(cfg.get("engine", {}) or {})
    for key in ("search_depth", "radius", "workers"):
        value = getattr(args, key)
        if value is not None:
            engine[key] = value
    cfg["engine"] = engine
    return cfg


def _announce(state: GameState) -> None:
    print("You Won !" if state.winner is Player.OPPONENT else "Computer Won !")


def run(game: Gomoku, read_line=input) -> GameState:
    """Alternate human and computer moves until someone wins or input ends."""
    print(render_board(game.board))
    while True:
        try:
            line = read_line("Input: col row (e.g. J10) > ")
        except EOFError:
            return GameState()

        try:
            position = parse_position(line)
            state = game.apply_move(position, Player.OPPONENT)
        except (ValueError, GomokuError) as exc:
            print(exc)
            continue

        if state.is_over:
            print(render_board(game.board))
            _announce(state)
            return state

        state = game.choose_computer_move()
        result = game.last_search
        if result is not None:
            print(f"Computer plays {format_position(result.best_move)}. Took: {result.time_ms} ms")
        print(render_board(game.board))
        if state.is_over:
            _announce(state)
            return state


def parse_level(name: Any) -> int:
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"unknown logging level {name!r}")
    return level


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    try:
        cfg = resolve_config(args)
        log_cfg = cfg.get("logging", {}) or {}
        level = parse_level(log_cfg.get("level", "DEBUG"))
        console_level = parse_level(log_cfg.get("console_level", "WARNING"))
        search_config = SearchConfig.from_mapping(cfg)
    except (OSError, tomllib.TOMLDecodeError, ValueError) as exc:
        # ConfigurationError is a ValueError
        print(f"gomoku: {exc}", file=sys.stderr)
        sys.exit(2)

    setup_logging(overwrite=True, level=level, console_level=console_level)
    game = Gomoku(search_config)

    logger.info("Starting game with %s", game.config)
    try:
        run(game)
    except KeyboardInterrupt:
        print()
    sys.exit(0)


if __name__ == "__main__":
    main()
