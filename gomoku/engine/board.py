from __future__ import annotations

from typing import List, Optional

from .bitboard import (
    AXES,
    BOARD_MASK,
    GOBAN_SIZE,
    WIN_MINIMUM_LINE_SIZE,
    Axis,
    Move,
    Player,
    Position,
    erode,
)
from .zobrist import DEFAULT_HASHER, INITIAL_BOARD_HASH, ZobristHasher

CELL_SYMBOLS = {None: "_", Player.OPPONENT: "X", Player.COMPUTER: "O"}


class Board:
    """Two disjoint bitboards, one per player, plus the running Zobrist hash.

    Boards compare and hash by their Zobrist hash only.
    """

    __slots__ = ("_bits", "hash", "hasher")

    def __init__(self, hasher: Optional[ZobristHasher] = None) -> None:
        self._bits: List[int] = [0, 0]
        self.hash: int = INITIAL_BOARD_HASH
        self.hasher = hasher if hasher is not None else DEFAULT_HASHER

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other._bits = self._bits[:]
        other.hash = self.hash
        other.hasher = self.hasher
        return other

    def bits(self, player: Player) -> int:
        return self._bits[player]

    def occupied_mask(self) -> int:
        return self._bits[0] | self._bits[1]

    def empty_mask(self) -> int:
        return BOARD_MASK & ~self.occupied_mask()

    def stone_count(self) -> int:
        return self.occupied_mask().bit_count()

    def is_full(self) -> bool:
        return self.empty_mask() == 0

    def get(self, position: Position) -> Optional[Player]:
        mask = position.mask
        if self._bits[Player.OPPONENT] & mask:
            return Player.OPPONENT
        if self._bits[Player.COMPUTER] & mask:
            return Player.COMPUTER
        return None

    def is_empty(self, position: Position) -> bool:
        return not (self.occupied_mask() & position.mask)

    def set(self, position: Position, cell: Optional[Player]) -> None:
        """Overwrite a cell (None clears it), keeping the hash in sync."""
        current = self.get(position)
        if current is not None:
            self._bits[current] &= ~position.mask
            self.hash ^= self.hasher.key(position, current)
        if cell is not None:
            self._bits[cell] |= position.mask
            self.hash ^= self.hasher.key(position, cell)

    def apply(self, move: Move) -> None:
        # Callers guarantee the cell is empty
        self._bits[move.player] |= move.position.mask
        self.hash = self.hasher.update_hash(self.hash, move)

    def play(self, player: Player, position: Position) -> "Board":
        """Return a copy with the move applied."""
        child = self.copy()
        child.apply(Move(player, position))
        return child

    def maximum_line_size(self, player: Player, axis: Axis) -> int:
        """Length of the longest run of `player` stones along `axis`, by repeated erosion."""
        bb = self._bits[player]
        size = 0
        while bb:
            bb = erode(bb, axis)
            size += 1
        return size

    def is_won(self, player: Player) -> bool:
        # Eroding 4 times leaves a bit only where 5 consecutive stones start
        bb = self._bits[player]
        for axis in AXES:
            line = bb
            for _ in range(WIN_MINIMUM_LINE_SIZE - 1):
                line = erode(line, axis)
                if not line:
                    break
            if line:
                return True
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.hash == other.hash

    def __hash__(self) -> int:
        return self.hash

    def __str__(self) -> str:
        rows = []
        for row in range(GOBAN_SIZE):
            rows.append("".join(CELL_SYMBOLS[self.get(Position(row, col))] for col in range(GOBAN_SIZE)))
        return "\n".join(rows) + "\n"

    def __repr__(self) -> str:
        return f"Board(stones={self.stone_count()}, hash={self.hash:#018x})"
