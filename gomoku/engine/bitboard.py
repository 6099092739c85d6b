from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterator, Tuple

# Board is 19x19, stored row-major with 20 bits per row. Column 19 of every
# row is a sentinel that is never set, so shifts along a line stop at the
# edge instead of wrapping into the next row.
GOBAN_SIZE = 19
ROW_STRIDE = GOBAN_SIZE + 1
BIT_SIZE = GOBAN_SIZE * ROW_STRIDE
WIN_MINIMUM_LINE_SIZE = 5

FULL_MASK = (1 << BIT_SIZE) - 1
ROW_MASK = (1 << GOBAN_SIZE) - 1
BOARD_MASK = 0
for _row in range(GOBAN_SIZE):
    BOARD_MASK |= ROW_MASK << (_row * ROW_STRIDE)


class Player(IntEnum):
    OPPONENT = 0
    COMPUTER = 1

    @property
    def other(self) -> "Player":
        return Player(1 - self)


class Axis(IntEnum):
    """Line directions, valued by their bit shift."""

    EAST = 1
    SOUTH_WEST = ROW_STRIDE - 1
    SOUTH = ROW_STRIDE
    SOUTH_EAST = ROW_STRIDE + 1


AXES = (Axis.EAST, Axis.SOUTH, Axis.SOUTH_WEST, Axis.SOUTH_EAST)

# (row, col) step of each axis
AXIS_STEPS = {
    Axis.EAST: (0, 1),
    Axis.SOUTH: (1, 0),
    Axis.SOUTH_WEST: (1, -1),
    Axis.SOUTH_EAST: (1, 1),
}

# The eight king-move shifts used for dilation
NEIGHBOUR_SHIFTS = (1, -1, ROW_STRIDE, -ROW_STRIDE, ROW_STRIDE - 1, -(ROW_STRIDE - 1), ROW_STRIDE + 1, -(ROW_STRIDE + 1))


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    @property
    def index(self) -> int:
        return self.row * ROW_STRIDE + self.col

    @property
    def mask(self) -> int:
        return 1 << self.index

    def in_bounds(self) -> bool:
        return 0 <= self.row < GOBAN_SIZE and 0 <= self.col < GOBAN_SIZE

    @staticmethod
    def from_index(index: int) -> "Position":
        row, col = divmod(index, ROW_STRIDE)
        if col >= GOBAN_SIZE:
            raise ValueError(f"index {index} is a sentinel cell")
        return Position(row, col)


@dataclass(frozen=True)
class Move:
    player: Player
    position: Position


def shift(bb: int, d: int) -> int:
    if d > 0:
        return (bb << d) & FULL_MASK
    return bb >> (-d)


def erode(bb: int, axis: Axis, length: int = 1) -> int:
    """Keep only the cells whose neighbour `length` steps along `axis` is also set."""
    return bb & (bb >> (int(axis) * length))


def dilate(bb: int) -> int:
    """Grow a set of cells by one step in all eight directions."""
    grown = bb
    for d in NEIGHBOUR_SHIFTS:
        grown |= shift(bb, d)
    return grown & BOARD_MASK


def iter_indices(bb: int) -> Iterator[int]:
    while bb:
        lsb = bb & -bb
        yield lsb.bit_length() - 1
        bb ^= lsb


def iter_positions(bb: int) -> Iterator[Position]:
    for index in iter_indices(bb & BOARD_MASK):
        yield Position.from_index(index)


def _window_starts(axis: Axis, length: int) -> int:
    dr, dc = AXIS_STEPS[axis]
    mask = 0
    for row in range(GOBAN_SIZE):
        for col in range(GOBAN_SIZE):
            end_row = row + dr * (length - 1)
            end_col = col + dc * (length - 1)
            if 0 <= end_row < GOBAN_SIZE and 0 <= end_col < GOBAN_SIZE:
                mask |= 1 << (row * ROW_STRIDE + col)
    return mask


# Start cells of every window of a given length that stays on the board
WINDOW_STARTS: Dict[Tuple[Axis, int], int] = {
    (axis, length): _window_starts(axis, length)
    for axis in AXES
    for length in (5, 6, 7)
}
