from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .bitboard import Move, Player, Position
from .board import Board
from .errors import InvalidMoveError
from .eval import Evaluator
from .search import SearchConfig, SearchResult, Searcher, validate_search_depth
from .zobrist import ZobristHasher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    winner: Optional[Player] = None

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @staticmethod
    def won(player: Player) -> "GameState":
        return GameState(player)


IN_PROGRESS = GameState()


class Gomoku:
    """Game facade: the two entry points used by the CLI layer."""

    def __init__(self, config: Optional[SearchConfig] = None, evaluator: Optional[Evaluator] = None) -> None:
        self.config = (config or SearchConfig()).validate()
        self.hasher = ZobristHasher(self.config.zobrist_seed)
        self.board = Board(self.hasher)
        self.searcher = Searcher(
            Player.COMPUTER,
            evaluator=evaluator,
            radius=self.config.radius,
            workers=self.config.workers,
        )
        self.last_search: Optional[SearchResult] = None

    def apply_move(self, position: Position, player: Player) -> GameState:
        if not position.in_bounds():
            raise InvalidMoveError(f"position {position} is outside the board")
        if not self.board.is_empty(position):
            raise InvalidMoveError(f"position {position} is already occupied")
        self.board.apply(Move(player, position))
        if self.board.is_won(player):
            logger.info("%s completed five at %s", player.name, position)
            return GameState.won(player)
        return IN_PROGRESS

    def choose_computer_move(self, search_depth: Optional[int] = None) -> GameState:
        depth = validate_search_depth(self.config.search_depth if search_depth is None else search_depth)
        self.last_search = self.searcher.choose_move(self.board, depth)
        logger.info(
            "computer plays %s (score=%s, nodes=%d, %d ms)",
            self.last_search.best_move, self.last_search.score, self.last_search.nodes, self.last_search.time_ms,
        )
        return self.apply_move(self.last_search.best_move, Player.COMPUTER)

    def render(self) -> str:
        return str(self.board)
