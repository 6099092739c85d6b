from __future__ import annotations

import pytest

from gomoku.engine.bitboard import Player, Position
from gomoku.engine.board import Board
from gomoku.engine.notation import format_position, parse_position, render_board
from gomoku.engine.zobrist import ZobristHasher


@pytest.mark.parametrize(
    "text,expected",
    [
        ("A19", Position(0, 0)),
        ("a19", Position(0, 0)),
        ("S1", Position(18, 18)),
        ("J10", Position(9, 9)),
        ("a15", Position(4, 0)),
        (" c3 \n", Position(16, 2)),
    ],
)
def test_parse_position(text, expected):
    assert parse_position(text) == expected


@pytest.mark.parametrize("text", ["", "A", "T5", "A0", "A20", "19A", "AA1", "A-1", "?3"])
def test_parse_rejects_bad_input(text):
    with pytest.raises(ValueError):
        parse_position(text)


def test_format_is_inverse_of_parse():
    for text in ("A19", "S1", "J10", "K7"):
        assert format_position(parse_position(text)) == text


def test_format_rejects_off_board():
    with pytest.raises(ValueError):
        format_position(Position(19, 0))


def test_render_board_labels():
    board = Board(ZobristHasher(seed=1))
    board.set(parse_position("A19"), Player.OPPONENT)
    board.set(parse_position("S1"), Player.COMPUTER)
    lines = render_board(board).splitlines()
    assert lines[0].split() == list("ABCDEFGHIJKLMNOPQRS")
    assert lines[1].split()[0] == "19"
    assert lines[1].split()[1] == "X"
    assert lines[19].split()[0] == "1"
    assert lines[19].split()[-1] == "O"
