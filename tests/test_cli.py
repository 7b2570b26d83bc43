"""Tests pour le point d'entrée en ligne de commande."""

from unittest.mock import patch

import pytest
from loguru import logger

from bytespikes import cli
from bytespikes.errors import InvariantViolation


@pytest.fixture(autouse=True)
def detach_logger():
    """Le sink stderr ajouté par main() ne doit pas survivre au test."""
    yield
    logger.remove()


def test_parser_defaults():
    args = cli.build_parser().parse_args([])

    assert args.population == 10
    assert args.generations == 100
    assert args.ticks == 100
    assert args.seed == 0
    assert args.literal_recurrent_mutation is False


def test_main_prints_winner(capsys):
    status = cli.main(["-p", "4", "-g", "3", "-t", "10", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert status == 0
    assert "Génome gagnant:" in out
    assert "threshold:" in out


def test_main_history(capsys):
    status = cli.main(["-p", "3", "-g", "2", "-t", "5", "--history", "--log-level", "WARNING"])

    out = capsys.readouterr().out
    assert status == 0
    assert "gen    0" in out
    assert "gen    1" in out


def test_main_is_reproducible(capsys):
    argv = ["-p", "4", "-g", "3", "-t", "10", "-s", "99", "--log-level", "WARNING"]

    cli.main(argv)
    first = capsys.readouterr().out
    cli.main(argv)
    second = capsys.readouterr().out

    assert first == second


def test_main_aborts_on_failed_self_check(capsys):
    with patch.object(cli, "run_self_checks", side_effect=InvariantViolation("test")):
        status = cli.main(["-g", "1", "--log-level", "CRITICAL"])

    assert status == 1
    assert "Génome gagnant" not in capsys.readouterr().out


def test_main_rejects_bad_config():
    assert cli.main(["-p", "0", "--log-level", "CRITICAL"]) == 1


def test_main_rejects_negative_seed(capsys):
    status = cli.main(["-s", "-1", "--log-level", "CRITICAL"])

    assert status == 1
    assert "Génome gagnant" not in capsys.readouterr().out
