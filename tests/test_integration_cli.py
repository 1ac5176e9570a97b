"""Integration tests for CLI functionality."""

import json
import subprocess
import sys

import pytest

from pecahan_pkg.cli import main_entry


def _run(*args):
    return subprocess.run(
        [sys.executable, "-m", "pecahan_pkg", *args],
        capture_output=True,
        text=True,
        timeout=30,
    )


def test_cli_version():
    """Test --version flag."""
    result = _run("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_health_check():
    """Test --health-check command."""
    result = _run("--health-check")
    assert result.returncode == 0
    assert "health check" in result.stdout.lower()


def test_cli_eval_human():
    """Test CLI evaluation with human-readable output."""
    result = _run("-e", "7/6")
    assert result.returncode == 0
    assert "1.16666666667" in result.stdout
    assert "Fraction: 7/6" in result.stdout
    assert "Decimal: 1.1(6)" in result.stdout


def test_cli_eval_json():
    """Test CLI evaluation with JSON output."""
    result = _run("--format", "json", "-e", "1/3")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["ok"] is True
    assert data["fraction"] == {"num": 1, "den": 3}
    assert data["repeating"] == "0.(3)"


def test_cli_eval_error():
    """Test CLI exit code on evaluation errors."""
    result = _run("-e", "1/0")
    assert result.returncode == 1
    assert "Error" in result.stdout


@pytest.mark.parametrize(
    "argv,expected",
    [
        (["-e", "5!"], "120"),
        (["-d", "-e", "sin(90)"], "1"),
        (["--ans", "4", "-e", "ANS^2"], "16"),
    ],
)
def test_main_entry_in_process(capsys, argv, expected):
    assert main_entry(argv) == 0
    assert capsys.readouterr().out.splitlines()[0] == expected


def test_repl_commands(monkeypatch, capsys):
    lines = iter(["deg", "sin(30)", "ans", "history", "quit"])
    monkeypatch.setattr("builtins.input", lambda _prompt="": next(lines))
    assert main_entry([]) == 0
    out = capsys.readouterr().out
    assert "Angle unit: degrees" in out
    assert "Fraction: 1/2" in out
    assert "ANS = 0.5" in out
    assert "sin(30) = 0.5" in out
