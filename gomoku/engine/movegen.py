from __future__ import annotations

from typing import Set

from .bitboard import Position, dilate, iter_positions
from .board import Board


def possible_moves_mask(board: Board) -> int:
    return board.empty_mask()


def limited_moves_mask(board: Board, radius: int) -> int:
    """Empty cells within `radius` king steps of a stone."""
    occupied = board.occupied_mask()
    area = occupied
    for _ in range(radius):
        area = dilate(area)
    return area & board.empty_mask()


def possible_moves(board: Board) -> Set[Position]:
    return set(iter_positions(possible_moves_mask(board)))


def limited_moves(board: Board, radius: int = 1) -> Set[Position]:
    # Empty when no stone has been played yet
    return set(iter_positions(limited_moves_mask(board, radius)))
