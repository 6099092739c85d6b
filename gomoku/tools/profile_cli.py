from __future__ import annotations

import argparse
from time import perf_counter
from typing import List, Optional, Tuple

from ..engine.bitboard import Move, Player
from ..engine.board import Board
from ..engine.notation import format_position, parse_position
from ..engine.search import SearchConfig, SearchResult, Searcher

# Opponent stones of the reference benchmark position
DEFAULT_MOVES = "D16,E15,F14,H12"


def build_board(moves: str) -> Board:
    board = Board()
    for text in filter(None, (m.strip() for m in moves.split(","))):
        position = parse_position(text)
        if not board.is_empty(position):
            raise ValueError(f"{text} is played twice")
        board.apply(Move(Player.OPPONENT, position))
    return board


def profile(board: Board, config: SearchConfig) -> Tuple[SearchResult, Searcher, float]:
    """Run one computer move search on `board`; returns the elapsed seconds too."""
    searcher = Searcher(Player.COMPUTER, radius=config.radius, workers=config.workers)
    t0 = perf_counter()
    result = searcher.choose_move(board, config.search_depth)
    return result, searcher, perf_counter() - t0


def main(argv: Optional[List[str]] = None) -> None:
    p = argparse.ArgumentParser(prog="gomoku-profile", description="Time one computer move search")
    p.add_argument("--depth", type=int, default=4)
    p.add_argument("--workers", type=int, default=1)
    p.add_argument("--radius", type=int, default=1)
    p.add_argument("--moves", type=str, default=DEFAULT_MOVES, help="opponent stones, e.g. D16,E15,F14")
    args = p.parse_args(argv)

    try:
        config = SearchConfig(search_depth=args.depth, radius=args.radius, workers=args.workers).validate()
        board = build_board(args.moves)
    except ValueError as exc:
        p.error(str(exc))

    result, searcher, dt = profile(board, config)
    print(
        f"choose_move(d={config.search_depth}, workers={config.workers})={format_position(result.best_move)} "
        f"score={result.score} nodes={result.nodes} in {dt * 1000:.1f} ms"
    )
    print(f"tt: {searcher.tt.snapshot()}")


if __name__ == "__main__":
    main()
