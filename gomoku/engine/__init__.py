"""Board representation, evaluation and search"""

from .bitboard import Move, Player, Position
from .board import Board
from .errors import ConfigurationError, GomokuError, InvalidMoveError, NoMoveAvailableError
from .eval import Eval, ThreatEvaluator
from .game import GameState, Gomoku
from .search import SearchConfig, SearchResult, Searcher

__all__ = [
    'Board',
    'ConfigurationError',
    'Eval',
    'GameState',
    'Gomoku',
    'GomokuError',
    'InvalidMoveError',
    'Move',
    'NoMoveAvailableError',
    'Player',
    'Position',
    'SearchConfig',
    'SearchResult',
    'Searcher',
    'ThreatEvaluator',
]
