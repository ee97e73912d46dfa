"""Tests for the deskcalc CLI, run through typer's CliRunner."""

import json

import pytest
from typer.testing import CliRunner

from deskcalc.__main__ import app


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DESKCALC_DIGIT_CAP", "DESKCALC_EXP_PRECISION", "DESKCALC_DISPLAY_WIDTH", "DESKCALC_ERROR_TEXT"):
        monkeypatch.delenv(name, raising=False)


def test_keys_lists_vocabulary(runner):
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "Calculator Keys" in result.output
    assert "memory" in result.output
    assert "M+" in result.output


def test_press_prints_display(runner):
    result = runner.invoke(app, ["press", "1", "2", "+", "8", "="])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "20"


def test_press_tokenizes_packed_input(runner):
    result = runner.invoke(app, ["press", "6*7="])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "42"


def test_press_json(runner):
    result = runner.invoke(app, ["press", "--json", "7", "M+", "3", "+"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "display": "3",
        "error": False,
        "memory_set": True,
        "pending_operator": "+",
    }


def test_press_trace(runner):
    result = runner.invoke(app, ["press", "--trace", "8", "/", "0", "="])
    assert result.exit_code == 0
    assert "Key presses" in result.output
    assert "Error" in result.output


def test_press_invalid_key_exits_2(runner):
    result = runner.invoke(app, ["press", "1", "sqrt"])
    assert result.exit_code == 2
    assert "Invalid key" in result.output


def test_press_bad_config_exits_2(runner, monkeypatch):
    monkeypatch.setenv("DESKCALC_DIGIT_CAP", "many")
    result = runner.invoke(app, ["press", "1"])
    assert result.exit_code == 2
    assert "Config error" in result.output


def test_press_respects_env_policy(runner, monkeypatch):
    monkeypatch.setenv("DESKCALC_ERROR_TEXT", "E")
    result = runner.invoke(app, ["press", "1", "/", "0", "="])
    assert result.exit_code == 0
    assert result.output.strip().splitlines()[-1] == "E"


def test_run_replays_script(runner, tmp_path):
    script = tmp_path / "memory.keys"
    script.write_text("# memory survives AC\n7 M+\nAC MR\n", encoding="utf-8")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 0
    assert "memory.keys" in result.output
    assert result.output.strip().splitlines()[-1] == "7"


def test_run_missing_script(runner, tmp_path):
    result = runner.invoke(app, ["run", str(tmp_path / "missing.keys")])
    assert result.exit_code != 0


def test_repl_session(runner):
    result = runner.invoke(app, ["repl"], input="12+8=\nquit\n")
    assert result.exit_code == 0
    assert "20" in result.output


def test_repl_reports_invalid_key_and_continues(runner):
    result = runner.invoke(app, ["repl"], input="2?\n*3=\n")
    assert result.exit_code == 0
    assert "Invalid key" in result.output
    assert "6" in result.output
