import sys

import pytest
from loguru import logger

from simulation.cli import main


def test_cli_prints_the_proportion_table(capsys):
    assert main(["-n", "200", "--seed", "42"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].split() == ["strategy", "LOSE", "WIN"]
    assert [line.split()[0] for line in lines[1:]] == ["stay", "switch"]


def test_cli_is_reproducible_with_a_seed(capsys):
    main(["-n", "50", "--seed", "3", "--precision", "3"])
    first = capsys.readouterr().out
    main(["-n", "50", "--seed", "3", "--precision", "3"])
    assert capsys.readouterr().out == first


@pytest.mark.parametrize("trials", ["0", "-5"])
def test_cli_rejects_invalid_trial_count(trials, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-n", trials])
    assert excinfo.value.code == 2
    assert "Invalid trial count" in capsys.readouterr().err


def test_cli_rejects_negative_precision(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["-n", "10", "--seed", "1", "--precision", "-1"])
    assert excinfo.value.code == 2
    assert "Invalid precision" in capsys.readouterr().err


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def test_cli_quiet_only_shows_warnings(restore_logger, capsys):
    assert main(["-n", "20", "--seed", "1", "-q"]) == 0
    logger.warning("still reported")
    err = capsys.readouterr().err
    assert "Win/lose proportions" not in err
    assert "still reported" in err
