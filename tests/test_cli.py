"""
Testing the command line driver through main(argv) and capsys.
"""

import pytest

import bullscows.cli as cli
from bullscows.solver import Solver


def test_guess_prints_score(capsys):
    assert cli.main(["guess", "1243", "--secret", "1234"]) == 0
    assert capsys.readouterr().out.strip() == "bulls=2 cows=2"


def test_guess_exact_reports_solved(capsys):
    assert cli.main(["guess", "1234", "--secret", "1234"]) == 0
    out = capsys.readouterr().out
    assert "bulls=4 cows=0" in out
    assert "solved" in out


@pytest.mark.parametrize("digits", ["123", "12345", "12a4", "1123"])
def test_guess_invalid_exits_1(capsys, digits):
    assert cli.main(["guess", digits, "--secret", "1234"]) == 1
    assert capsys.readouterr().out.strip() == "invalid"


def test_guess_against_random_secret(capsys):
    assert cli.main(["guess", "0123", "--length", "4"]) == 0
    assert capsys.readouterr().out.startswith("bulls=")


def test_solve_prints_each_step_and_count(capsys):
    assert cli.main(["solve", "--secret", "5678"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "0123 0 0"
    assert lines[-2] == "5678 4 0"
    assert lines[-1] == f"Secret is 5678, took {len(lines) - 1} guesses."


def test_solve_invalid_secret_exits_1(capsys):
    assert cli.main(["solve", "--secret", "5578"]) == 1
    assert capsys.readouterr().out.startswith("invalid")


def test_solve_many_trials(capsys):
    assert cli.main(["solve", "--trials", "20", "--length", "3"]) == 0
    assert capsys.readouterr().out.startswith("Solved 20 games")


class ContradictedSolver(Solver):
    """Already fed two scores that leave only 8 and 9 for four digits."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.apply_feedback("0123", 0, 0)
        self.apply_feedback("4567", 0, 0)


def test_solve_exhausted_exits_2(capsys, monkeypatch):
    monkeypatch.setattr(cli, "Solver", ContradictedSolver)
    assert cli.main(["solve", "--secret", "1234"]) == 2
    assert capsys.readouterr().out.startswith("exhausted")


def test_reset_reports_fresh_state(capsys):
    assert cli.main(["reset", "--length", "5"]) == 0
    assert capsys.readouterr().out.strip() == "length=5 candidates=30240"

    assert cli.main(["reset", "--length", "1"]) == 1


def scripted(lines):
    feed = iter(lines)

    def read(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError
    return read


def test_play_session(capsys):
    code = cli.play(4, read=scripted(["12", "0123", "hint", "1234", "1234", "reset", "solve", "quit"]), secret="1234")
    assert code == 0

    out = capsys.readouterr().out
    assert "invalid" in out
    assert "bulls=0 cows=3" in out
    assert "Solver suggests" in out
    assert "You win! It took you 2 attempts." in out
    assert "already been solved" in out
    assert "New secret chosen." in out
    assert "solver guesses." in out


def test_play_ends_on_eof(capsys):
    assert cli.play(4, read=scripted([]), secret="1234") == 0
    assert "Exiting." in capsys.readouterr().out


def test_play_solve_after_win_is_rejected(capsys):
    assert cli.play(4, read=scripted(["1234", "solve", "quit"]), secret="1234") == 0
    out = capsys.readouterr().out
    assert "You win!" in out
    assert "already been solved" in out
    assert "solver guesses." not in out


def test_unknown_log_level_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--log-level", "foo", "reset"])
    assert exc_info.value.code == 2
    assert "invalid choice" in capsys.readouterr().err


def test_log_level_is_case_insensitive(capsys):
    assert cli.main(["--log-level", "debug", "reset", "--length", "4"]) == 0
    assert capsys.readouterr().out.strip() == "length=4 candidates=5040"
