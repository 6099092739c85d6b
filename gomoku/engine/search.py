from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

from ..logging_setup import log_event
from .bitboard import GOBAN_SIZE, Player, Position, iter_positions
from .board import Board
from .errors import ConfigurationError, NoMoveAvailableError
from .eval import Eval, EvalKind, Evaluator, ThreatEvaluator
from .movegen import limited_moves_mask, possible_moves_mask
from .tt import TranspositionTable

logger = logging.getLogger(__name__)

WIN_SCORE = 1_000_000_000
INFINITY = WIN_SCORE + 1
CENTRE = Position(GOBAN_SIZE // 2, GOBAN_SIZE // 2)


def validate_search_depth(depth: Any) -> int:
    # The computer is the maximizing root, so only even depths >= 2 are valid
    if isinstance(depth, bool) or not isinstance(depth, int) or depth < 2 or depth % 2:
        raise ConfigurationError(f"search depth must be an even integer >= 2, got {depth!r}")
    return depth


@dataclass
class SearchConfig:
    search_depth: int = 4
    radius: int = 1
    workers: int = 1
    zobrist_seed: Optional[int] = None

    def validate(self) -> "SearchConfig":
        validate_search_depth(self.search_depth)
        if self.radius < 1:
            raise ConfigurationError(f"radius must be >= 1, got {self.radius}")
        if self.workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {self.workers}")
        return self

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "SearchConfig":
        """Build from the `[engine]` table of a parsed config file."""
        engine = cfg.get("engine", {}) or {}
        defaults = cls()
        return cls(
            search_depth=engine.get("search_depth", defaults.search_depth),
            radius=engine.get("radius", defaults.radius),
            workers=engine.get("workers", defaults.workers),
            zobrist_seed=engine.get("zobrist_seed", defaults.zobrist_seed),
        ).validate()


@dataclass
class SearchResult:
    best_move: Position
    score: int
    depth: int
    nodes: int
    time_ms: int
    # Root scores in visiting order. With a single worker, scores after the
    # first are upper bounds once they fail low against the best so far.
    candidates: List[Tuple[Position, int]] = field(default_factory=list)


class Searcher:
    """Depth-limited alpha-beta minimax from the point of view of `player`."""

    def __init__(
        self,
        player: Player = Player.COMPUTER,
        evaluator: Optional[Evaluator] = None,
        radius: int = 1,
        workers: int = 1,
    ) -> None:
        if radius < 1:
            raise ConfigurationError(f"radius must be >= 1, got {radius}")
        if workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {workers}")
        self.player = player
        self.evaluator: Evaluator = evaluator if evaluator is not None else ThreatEvaluator()
        self.tt = TranspositionTable()
        self.radius = radius
        self.workers = workers
        # Approximate when several workers share the searcher
        self.nodes = 0

    def evaluate(self, board: Board, player: Optional[Player] = None) -> Eval:
        player = self.player if player is None else player
        return self.tt.get_or_compute(
            board.hash,
            player,
            lambda: self.evaluator.evaluate(board.bits(player), board.bits(player.other)),
        )

    def static_score(self, board: Board) -> int:
        value = self.evaluate(board)
        if value.kind is EvalKind.WON:
            return WIN_SCORE
        if value.kind is EvalKind.LOST:
            return -WIN_SCORE
        return value.score

    def children(self, board: Board, maximizing: bool) -> List[Tuple[Position, Board]]:
        """Child positions for the side to move, best first for that side."""
        mover = self.player if maximizing else self.player.other
        children = [(pos, board.play(mover, pos)) for pos in iter_positions(limited_moves_mask(board, self.radius))]
        # Stable sort: ties keep board order
        children.sort(key=lambda item: self.static_score(item[1]), reverse=maximizing)
        return children

    def alphabeta(self, board: Board, depth: int, alpha: int, beta: int, maximizing: bool) -> int:
        self.nodes += 1
        value = self.evaluate(board)
        if value.kind is EvalKind.WON:
            return WIN_SCORE
        if value.kind is EvalKind.LOST:
            return -WIN_SCORE
        if depth == 0:
            return value.score

        children = self.children(board, maximizing)
        if not children:
            return value.score

        if maximizing:
            best = -INFINITY
            for _, child in children:
                best = max(best, self.alphabeta(child, depth - 1, alpha, beta, False))
                if best >= beta:
                    break
                alpha = max(alpha, best)
            return best

        best = INFINITY
        for _, child in children:
            best = min(best, self.alphabeta(child, depth - 1, alpha, beta, True))
            if best <= alpha:
                break
            beta = min(beta, best)
        return best

    def root_candidates(self, board: Board) -> List[Tuple[Position, Board]]:
        if board.stone_count() == 0:
            return [(CENTRE, board.play(self.player, CENTRE))]
        mask = limited_moves_mask(board, self.radius) or possible_moves_mask(board)
        candidates = [(pos, board.play(self.player, pos)) for pos in iter_positions(mask)]
        candidates.sort(key=lambda item: self.static_score(item[1]), reverse=True)
        return candidates

    def choose_move(self, board: Board, depth: int) -> SearchResult:
        validate_search_depth(depth)
        start = time.perf_counter()
        nodes_before = self.nodes

        candidates = self.root_candidates(board)
        if not candidates:
            raise NoMoveAvailableError("no empty cell left on the board")

        if len(candidates) == 1:
            pos, child = candidates[0]
            scored = [(pos, self.static_score(child))]
        elif self.workers > 1:
            scored = self._search_parallel(candidates, depth)
        else:
            scored = self._search_sequential(candidates, depth)

        best_move, best_score = scored[0]
        for pos, score in scored[1:]:
            if score > best_score:
                best_move, best_score = pos, score

        elapsed_ms = int((time.perf_counter() - start) * 1000)
        result = SearchResult(best_move, best_score, depth, self.nodes - nodes_before, elapsed_ms, scored)
        logger.debug(
            "choose_move: best=%s score=%s candidates=%d nodes=%d time_ms=%d",
            best_move, best_score, len(candidates), result.nodes, elapsed_ms,
        )
        log_event(
            "search",
            "choose_move",
            depth=depth,
            row=best_move.row,
            col=best_move.col,
            score=best_score,
            candidates=len(candidates),
            nodes=result.nodes,
            time_ms=elapsed_ms,
            workers=self.workers,
            tt=self.tt.snapshot(),
        )
        return result

    def _search_sequential(self, candidates: List[Tuple[Position, Board]], depth: int) -> List[Tuple[Position, int]]:
        scored: List[Tuple[Position, int]] = []
        alpha = -INFINITY
        for pos, child in candidates:
            score = self.alphabeta(child, depth - 1, alpha, INFINITY, False)
            scored.append((pos, score))
            alpha = max(alpha, score)
            if score >= WIN_SCORE:
                break
        return scored

    def _search_parallel(self, candidates: List[Tuple[Position, Board]], depth: int) -> List[Tuple[Position, int]]:
        # One task per root candidate; each owns its board copy, the cache is shared
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [
                executor.submit(self.alphabeta, child, depth - 1, -INFINITY, INFINITY, False)
                for _, child in candidates
            ]
            return [(pos, future.result()) for (pos, _), future in zip(candidates, futures)]
