import logging

from holdem.__main__ import main, parse_args, run_session
from holdem.models import TableConfig


def test_parse_args_defaults():
    args = parse_args([])
    assert (args.players, args.starting_stack, args.sb, args.bb, args.hands) == (4, 1_000, 10, 20, 100)
    assert args.seed is None
    assert not args.secure


def test_run_session_is_reproducible_with_seed():
    config = TableConfig(seats=3, starting_stack=500, small_blind=5, big_blind=10)
    first = run_session(config, hands=25, seed=5)
    second = run_session(config, hands=25, seed=5)
    assert [p.stack for p in first.players] == [p.stack for p in second.players]
    assert sum(p.stack for p in first.players) == 1_500


def test_main_runs_session(caplog):
    with caplog.at_level(logging.INFO, logger="holdem_sim"):
        assert main(["--players", "3", "--hands", "20", "--seed", "5"]) == 0
    assert "Player0 (seat 0)" in caplog.text


def test_main_rejects_invalid_table():
    assert main(["--players", "1", "--hands", "1", "--seed", "1"]) == 2
    assert main(["--sb", "30", "--bb", "20", "--hands", "1"]) == 2
    assert main(["--players", "23", "--hands", "1"]) == 2
