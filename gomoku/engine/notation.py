"""
Coordinate notation for Gomoku moves.

Columns are letters A-S from left to right, rows are numbers 19-1 from top
to bottom, so 'A19' is the top-left cell (row 0, col 0) and 'S1' the
bottom-right one.
"""

from .bitboard import GOBAN_SIZE, Position
from .board import CELL_SYMBOLS, Board

COLUMNS = "ABCDEFGHIJKLMNOPQRS"


def parse_position(text: str) -> Position:
    """Convert notation (e.g. 'a15', 'J10') to a board position."""
    notation = text.strip()
    if len(notation) < 2:
        raise ValueError(f"Invalid notation format: {text!r}")

    col_char = notation[0].upper()
    row_str = notation[1:]
    if col_char not in COLUMNS or not row_str.isdigit():
        raise ValueError(f"Invalid notation format: {text!r}")

    number = int(row_str)
    if not 1 <= number <= GOBAN_SIZE:
        raise ValueError(f"Row out of range in {text!r}: expected 1-{GOBAN_SIZE}")

    return Position(GOBAN_SIZE - number, COLUMNS.index(col_char))


def format_position(position: Position) -> str:
    if not position.in_bounds():
        raise ValueError(f"Invalid position: {position}")
    return f"{COLUMNS[position.col]}{GOBAN_SIZE - position.row}"


def render_board(board: Board) -> str:
    """Board with coordinate labels, for display only."""
    lines = ["   " + " ".join(COLUMNS)]
    for row in range(GOBAN_SIZE):
        cells = " ".join(CELL_SYMBOLS[board.get(Position(row, col))] for col in range(GOBAN_SIZE))
        lines.append(f"{GOBAN_SIZE - row:>2} {cells}")
    return "\n".join(lines)
