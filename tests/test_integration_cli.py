"""Integration tests for CLI functionality."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from kalkulator_ilmiah import config
from kalkulator_ilmiah.cli import main_entry

ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture(autouse=True)
def restore_config(monkeypatch):
    """CLI flags patch config module constants; put them back afterwards."""
    monkeypatch.setattr(config, "DEFAULT_ANGLE_MODE", "deg")
    monkeypatch.setattr(config, "IEEE_DIVISION", False)
    monkeypatch.setattr(config, "HISTORY_LIMIT", 10)


def test_cli_version_subprocess():
    """Test --version flag."""
    result = subprocess.run(
        [sys.executable, "-m", "kalkulator_ilmiah", "--version"],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=ROOT,
    )
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_eval_human(capsys):
    assert main_entry(["-e", "3 + 4 × 2 ="]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["DEG", "14"]


def test_cli_eval_pending_and_memory(capsys):
    assert main_entry(["-e", "5 MS C 3 +"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["M DEG  3 +", "3"]


def test_cli_eval_json(capsys):
    assert main_entry(["-e", "5 ÷ 0 =", "--format", "json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is True
    assert data["display"] == "0"
    assert data["history"] == ["5 ÷ 0 = 0"]


def test_cli_ieee_division(capsys):
    assert main_entry(["--ieee-division", "-e", "1 ÷ 0 ="]) == 0
    assert capsys.readouterr().out.strip().splitlines()[-1] == "Infinity"


def test_cli_radians(capsys):
    assert main_entry(["--radians", "-e", "1 asin"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "RAD"
    assert float(lines[1]) == pytest.approx(1.570796327)


def test_cli_invalid_input(capsys):
    assert main_entry(["-e", "3 $ 4"]) == 1
    assert "Error:" in capsys.readouterr().out


def test_cli_invalid_input_json(capsys):
    assert main_entry(["-e", "3 foo", "--format", "json"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["ok"] is False
    assert data["code"] == "UNKNOWN_TOKEN"


def test_cli_empty_eval(capsys):
    assert main_entry(["-e", "  "]) == 1
    assert "Empty input" in capsys.readouterr().out


def test_cli_health_check(capsys):
    assert main_entry(["--health-check"]) == 0
    out = capsys.readouterr().out
    assert "health check" in out.lower()
    assert "[FAIL]" not in out


def test_repl_session(capsys, monkeypatch):
    lines = iter(["3 + 4 =", "", "history", "bogus!", "2 x²", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main_entry([]) == 0
    out = capsys.readouterr().out
    assert " 0: 3 + 4 = 7" in out
    assert "Error:" in out
    assert "\n4\n" in out
    assert out.rstrip().endswith("Goodbye.")


def test_repl_exits_on_eof(capsys, monkeypatch):
    def raise_eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", raise_eof)
    assert main_entry([]) == 0
    assert "Goodbye." in capsys.readouterr().out
