"""
Tests for the command-line driver.
"""

import io
import logging
import sys

import pytest

from classical_shor import clear_caches
from shor_cli import _log_level, build_parser, main


@pytest.fixture(autouse=True)
def fresh_caches():
    clear_caches()
    yield
    clear_caches()


@pytest.fixture(autouse=True)
def restore_log_level():
    logger = logging.getLogger("classical_shor")
    level = logger.level
    yield
    logger.setLevel(level)


class TestArguments:
    """Test argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.N is None
        assert args.seed is None
        assert args.verbose == 0
        assert not args.check_prime

    def test_negative_max_attempts_rejected(self):
        with pytest.raises(SystemExit) as exc:
            main(["15", "--max-attempts", "-1"])
        assert exc.value.code == 2


class TestMain:
    """Test the report and exit codes."""

    def test_factor_argument(self, capsys):
        assert main(["15", "--seed", "1"]) == 0
        out = capsys.readouterr().out
        assert "Attempting to factor N = 15" in out
        assert "Factors found:" in out
        assert "= 15" in out
        assert "Computation took:" in out

    def test_prompt_when_argument_missing(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("21\n"))
        assert main(["--seed", "7"]) == 0
        out = capsys.readouterr().out
        assert "Enter the number (N) to factor:" in out
        assert "Verification:" in out
        assert "= 21" in out

    def test_even_number(self, capsys):
        assert main(["1000000"]) == 0
        assert "Factors found: 2 and 500000" in capsys.readouterr().out

    def test_invalid_number(self, capsys):
        assert main(["twelve"]) == 2
        assert "Invalid number input." in capsys.readouterr().out

    def test_too_small(self, capsys):
        assert main(["3"]) == 2
        assert "greater than 3" in capsys.readouterr().out

    def test_prime_exhausts(self, capsys):
        assert main(["13", "--seed", "0", "--max-attempts", "5"]) == 1
        out = capsys.readouterr().out
        assert "Failed to find factors." in out
        assert "Computation took:" in out

    def test_prime_check(self, capsys):
        assert main(["101", "--check-prime"]) == 1
        assert "prime" in capsys.readouterr().out

    def test_timeout(self, capsys):
        assert main(["15", "--timeout", "0"]) == 1
        out = capsys.readouterr().out
        assert "Failed to find factors." in out
        assert "time budget" in out

    def test_negative_number_rejected(self, capsys, monkeypatch):
        """A sign is not part of a decimal number here."""
        monkeypatch.setattr("sys.stdin", io.StringIO("-5\n"))
        assert main([]) == 2
        assert "Invalid number input." in capsys.readouterr().out

    def test_non_decimal_forms_rejected(self, capsys):
        for raw in ["+15", "1_5", "0x0f", "١٥"]:
            assert main([raw]) == 2
            assert "Invalid number input." in capsys.readouterr().out

    def test_too_many_digits(self, capsys):
        limit = sys.get_int_max_str_digits()
        if limit == 0:
            pytest.skip("int string conversion limit disabled")
        digits = "9" * (limit + 1)
        assert main([digits]) == 2
        assert "Number is too long" in capsys.readouterr().out


class TestLogging:
    """Test the verbosity flags."""

    def test_log_level_mapping(self):
        assert _log_level(0) == logging.WARNING
        assert _log_level(1) == logging.INFO
        assert _log_level(2) == logging.DEBUG
        assert _log_level(3) == logging.DEBUG

    def _records(self, caplog):
        return [r for r in caplog.records if r.name == "classical_shor"]

    def test_quiet_by_default(self, caplog):
        assert main(["21", "--seed", "7"]) == 0
        assert self._records(caplog) == []

    def test_verbose_shows_progress(self, caplog):
        assert main(["21", "--seed", "7", "-v"]) == 0
        records = self._records(caplog)
        assert any(r.getMessage().startswith("Found factor") for r in records)
        assert all(r.levelno >= logging.INFO for r in records)

    def test_very_verbose_shows_attempts(self, caplog):
        assert main(["21", "--seed", "7", "-vv"]) == 0
        records = self._records(caplog)
        assert any(r.levelno == logging.DEBUG and r.getMessage().startswith("Trying a = ")
                   for r in records)
