from __future__ import annotations

import pytest

from gomoku.engine.bitboard import GOBAN_SIZE, Player, Position
from gomoku.engine.errors import ConfigurationError, InvalidMoveError, NoMoveAvailableError
from gomoku.engine.game import IN_PROGRESS, GameState, Gomoku
from gomoku.engine.search import SearchConfig


def _game(**kwargs) -> Gomoku:
    return Gomoku(SearchConfig(search_depth=2, zobrist_seed=2025, **kwargs))


def test_five_in_a_row_wins():
    game = _game()
    for col in range(4):
        assert game.apply_move(Position(0, col), Player.OPPONENT) == IN_PROGRESS
    state = game.apply_move(Position(0, 4), Player.OPPONENT)
    assert state == GameState.won(Player.OPPONENT)
    assert state.is_over and state.winner is Player.OPPONENT


def test_occupied_cell_is_rejected_without_mutation():
    game = _game()
    game.apply_move(Position(9, 9), Player.OPPONENT)
    before = game.board.hash
    bits_before = (game.board.bits(Player.OPPONENT), game.board.bits(Player.COMPUTER))

    with pytest.raises(InvalidMoveError):
        game.apply_move(Position(9, 9), Player.COMPUTER)
    with pytest.raises(InvalidMoveError):
        game.apply_move(Position(9, 9), Player.OPPONENT)

    assert game.board.hash == before
    assert (game.board.bits(Player.OPPONENT), game.board.bits(Player.COMPUTER)) == bits_before


@pytest.mark.parametrize("pos", [Position(19, 0), Position(0, 19), Position(-1, 3), Position(4, -1)])
def test_out_of_bounds_is_rejected(pos):
    game = _game()
    with pytest.raises(InvalidMoveError):
        game.apply_move(pos, Player.OPPONENT)
    assert game.board.stone_count() == 0


def test_invalid_move_is_a_value_error():
    game = _game()
    with pytest.raises(ValueError):
        game.apply_move(Position(20, 20), Player.OPPONENT)


def test_computer_replies_next_to_play():
    game = _game()
    game.apply_move(Position(9, 9), Player.OPPONENT)
    state = game.choose_computer_move(2)
    assert state == IN_PROGRESS
    reply = game.last_search.best_move
    assert game.board.get(reply) is Player.COMPUTER
    assert max(abs(reply.row - 9), abs(reply.col - 9)) == 1
    assert game.board.stone_count() == 2


def test_computer_blocks_open_four_scenario():
    game = Gomoku(SearchConfig(search_depth=4, zobrist_seed=2025))
    for pos in (Position(3, 3), Position(4, 4), Position(5, 5), Position(7, 7)):
        game.apply_move(pos, Player.OPPONENT)
    assert game.choose_computer_move(4) == IN_PROGRESS
    for row in range(GOBAN_SIZE):
        for col in range(GOBAN_SIZE):
            pos = Position(row, col)
            if game.board.is_empty(pos):
                assert not game.board.play(Player.OPPONENT, pos).is_won(Player.OPPONENT)


def test_computer_takes_the_win():
    game = _game()
    for col in range(5, 9):
        game.board.set(Position(9, col), Player.COMPUTER)
    for pos in (Position(8, 5), Position(10, 6), Position(7, 7)):
        game.board.set(pos, Player.OPPONENT)
    assert game.choose_computer_move() == GameState.won(Player.COMPUTER)


@pytest.mark.parametrize("depth", [0, 1, 3, 7])
def test_bad_depth_is_a_configuration_error(depth):
    game = _game()
    game.apply_move(Position(9, 9), Player.OPPONENT)
    with pytest.raises(ConfigurationError):
        game.choose_computer_move(depth)
    assert game.board.stone_count() == 1


def test_bad_config_is_rejected():
    with pytest.raises(ConfigurationError):
        Gomoku(SearchConfig(search_depth=3))
    with pytest.raises(ConfigurationError):
        Gomoku(SearchConfig(radius=0))


def test_full_board_raises():
    game = _game()
    for row in range(GOBAN_SIZE):
        for col in range(GOBAN_SIZE):
            game.board.set(Position(row, col), Player((row * GOBAN_SIZE + col) % 2))
    with pytest.raises(NoMoveAvailableError):
        game.choose_computer_move(2)


def test_render_shows_both_sides():
    game = _game()
    game.apply_move(Position(0, 0), Player.OPPONENT)
    game.apply_move(Position(18, 18), Player.COMPUTER)
    lines = game.render().splitlines()
    assert lines[0][0] == "X"
    assert lines[18][18] == "O"
