"""Tests for the rich renderables and the trace recorder."""

import pytest
from rich.console import Console

from deskcalc.engine import CalculatorEngine
from deskcalc.models import Button, DisplaySnapshot
from deskcalc.view import TraceRecorder, render_display, render_keypad, render_trace


def _render(renderable) -> str:
    console = Console(width=80, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def engine():
    return CalculatorEngine()


def test_display_panel_shows_value_and_indicators():
    text = _render(render_display(DisplaySnapshot(display="20", error=False, memory_set=True)))
    assert "20" in text
    assert "M" in text
    assert "E" in text
    assert "ON" in text


def test_display_panel_shows_error_marker():
    text = _render(render_display(DisplaySnapshot(display="Error", error=True, memory_set=False)))
    assert "Error" in text


def test_keypad_lists_all_caps():
    text = _render(render_keypad())
    for label in ("MR", "M+", "AC", "DEL", "×", "÷", "±", "="):
        assert label in text


def test_recorder_collects_steps(engine):
    recorder = TraceRecorder().attach(engine)
    engine.press_many(["8", "÷", "0", "="])
    assert [s.button for s in recorder.steps] == [Button.DIGIT_8, Button.DIVIDE, Button.DIGIT_0, Button.EQUALS]
    assert [s.index for s in recorder.steps] == [1, 2, 3, 4]
    assert recorder.steps[-1].display == "Error"
    assert recorder.steps[-1].error


def test_recorder_detach(engine):
    recorder = TraceRecorder().attach(engine)
    engine.press("1")
    recorder.detach()
    engine.press("2")
    assert len(recorder.steps) == 1


def test_trace_table_rows(engine):
    recorder = TraceRecorder().attach(engine)
    engine.press_many(["7", "M+", "AC", "MR"])
    text = _render(render_trace(recorder.steps, title="Memory"))
    assert "Memory" in text
    assert "M+" in text
    assert "MR" in text
    assert "7" in text
