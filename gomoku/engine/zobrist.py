from __future__ import annotations

import random
from typing import Optional, TYPE_CHECKING

from .bitboard import BIT_SIZE, Move, Player, Position, iter_indices

if TYPE_CHECKING:
    from .board import Board

INITIAL_BOARD_HASH = 0


class ZobristHasher:
    """Fixed (cell, player) -> random 64-bit table.

    Built once and shared by reference with every board; never mutated after
    construction. Pass a seed for reproducible hashes across runs.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        rng = random.Random(seed)
        self._table = tuple(
            (rng.getrandbits(64), rng.getrandbits(64)) for _ in range(BIT_SIZE)
        )

    def key(self, position: Position, player: Player) -> int:
        return self._table[position.index][player]

    def update_hash(self, hash_: int, move: Move) -> int:
        return hash_ ^ self._table[move.position.index][move.player]

    def hash_of(self, board: "Board") -> int:
        h = INITIAL_BOARD_HASH
        for player in Player:
            for i in iter_indices(board.bits(player)):
                h ^= self._table[i][player]
        return h


# Table shared by boards built without an explicit hasher
DEFAULT_HASHER = ZobristHasher()
