from __future__ import annotations

import argparse
import logging

import orjson
import pytest

from gomoku.engine.bitboard import Player, Position
from gomoku.engine.errors import ConfigurationError
from gomoku.engine.game import Gomoku
from gomoku.engine.search import SearchConfig
from gomoku.logging_setup import log_event
from gomoku.tools import cli
from gomoku.tools.diag import DEFAULTS_PATH, ensure_config, load_config


def test_packaged_defaults_parse():
    cfg = load_config()
    engine = SearchConfig.from_mapping(cfg)
    assert engine.search_depth == 4
    assert engine.radius == 1
    assert engine.workers == 1
    assert cfg["logging"]["console_level"] == "WARNING"


def test_ensure_config_copies_defaults_once(tmp_path):
    path = tmp_path / "nested" / "config.toml"
    assert ensure_config(path) is True
    assert path.read_text(encoding="utf-8") == DEFAULTS_PATH.read_text(encoding="utf-8")
    path.write_text("[engine]\nsearch_depth = 6\n", encoding="utf-8")
    assert ensure_config(path) is False
    assert SearchConfig.from_mapping(load_config(path)).search_depth == 6


@pytest.mark.parametrize(
    "engine",
    [{"search_depth": 3}, {"search_depth": 0}, {"radius": 0}, {"workers": 0}],
)
def test_from_mapping_validates(engine):
    with pytest.raises(ConfigurationError):
        SearchConfig.from_mapping({"engine": engine})


def test_missing_engine_table_uses_defaults():
    assert SearchConfig.from_mapping({}) == SearchConfig()


def test_cli_flags_override_config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("[engine]\nsearch_depth = 6\nradius = 2\n", encoding="utf-8")
    args = cli.build_parser().parse_args(["--config", str(path), "--search-depth", "2"])
    cfg = cli.resolve_config(args)
    assert cfg["engine"] == {"search_depth": 2, "radius": 2}


def test_cli_loop_reports_errors_and_stops_on_eof(capsys):
    game = Gomoku(SearchConfig(search_depth=2, zobrist_seed=1))
    inputs = iter(["Z99", "J10", "J10"])

    def read_line(prompt):
        try:
            return next(inputs)
        except StopIteration:
            raise EOFError

    state = cli.run(game, read_line=read_line)
    out = capsys.readouterr().out

    assert not state.is_over
    assert "Invalid notation" in out
    assert "already occupied" in out
    assert "Computer plays" in out
    assert game.board.get(Position(9, 9)) is Player.OPPONENT
    assert game.board.stone_count() == 2


def test_cli_loop_announces_human_win(capsys):
    game = Gomoku(SearchConfig(search_depth=2, zobrist_seed=1))
    for col in range(4):
        game.board.set(Position(0, col), Player.OPPONENT)
    state = cli.run(game, read_line=lambda prompt: "E19")
    assert state.winner is Player.OPPONENT
    assert "You Won !" in capsys.readouterr().out


def test_log_event_emits_one_json_line(caplog):
    with caplog.at_level(logging.INFO, logger="event.search"):
        log_event("search", "choose_move", depth=4, nodes=12)
    records = [r for r in caplog.records if r.name == "event.search"]
    assert len(records) == 1
    payload = orjson.loads(records[0].getMessage())
    assert payload["event"] == "choose_move"
    assert payload["depth"] == 4 and payload["nodes"] == 12


def test_parser_defaults_leave_config_values():
    args = cli.build_parser().parse_args([])
    assert isinstance(args, argparse.Namespace)
    assert args.search_depth is None and args.workers is None and args.config is None


@pytest.mark.parametrize(
    "content",
    [
        None,
        "[engine\nsearch_depth = 2\n",
        '[logging]\nlevel = "VERBOSE"\n',
        "[engine]\nsearch_depth = 3\n",
    ],
    ids=["missing", "malformed", "unknown-level", "odd-depth"],
)
def test_main_rejects_bad_config_with_status_2(tmp_path, capsys, content):
    path = tmp_path / "config.toml"
    if content is not None:
        path.write_text(content, encoding="utf-8")
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(path)])
    assert exc_info.value.code == 2
    assert capsys.readouterr().err.startswith("gomoku: ")


def test_parse_level_accepts_known_names_only():
    assert cli.parse_level("debug") == logging.DEBUG
    assert cli.parse_level("WARNING") == logging.WARNING
    with pytest.raises(ConfigurationError):
        cli.parse_level("VERBOSE")
