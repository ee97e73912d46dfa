"""Rich renderables for the calculator: LCD panel, keypad, press trace.

Everything here reads DisplaySnapshots produced by the engine. Nothing here
writes engine state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from deskcalc.engine import CalculatorEngine
from deskcalc.keypad import KEYPAD_ROWS, KIND_STYLES
from deskcalc.models import Button, DisplaySnapshot

_LIT = "bold green"
_UNLIT = "#333333"


def _indicator(label: str, lit: bool) -> Text:
    return Text(label, style=_LIT if lit else _UNLIT)


def render_display(snapshot: DisplaySnapshot, width: int = 10) -> Panel:
    """LCD panel: status indicators on the left, value right-aligned."""
    grid = Table.grid(padding=(0, 2))
    grid.add_column(justify="left", width=3)
    grid.add_column(justify="right", min_width=width)

    value_style = "bold red" if snapshot.error else "bold green"
    pending = snapshot.pending_operator.value if snapshot.pending_operator else ""
    grid.add_row(_indicator("M", snapshot.memory_set), Text(pending, style="dim green"))
    grid.add_row(_indicator("E", snapshot.error), Text(snapshot.display, style=value_style))
    grid.add_row(_indicator("ON", True), "")

    return Panel(grid, border_style="green", expand=False)


def render_keypad() -> Table:
    """The key layout, each cap coloured by its kind."""
    table = Table.grid(padding=(0, 1))
    columns = max(len(row) for row in KEYPAD_ROWS)
    for _ in range(columns):
        table.add_column(justify="center", min_width=5)

    for row in KEYPAD_ROWS:
        table.add_row(*(Text(f" {b.value} ", style=KIND_STYLES[b.kind]) for b in row))
    return table


@dataclass
class TraceStep:
    """One press and the display it produced."""

    index: int
    button: Button
    display: str
    error: bool
    memory_set: bool


@dataclass
class TraceRecorder:
    """Engine subscriber that records every press for render_trace()."""

    steps: list[TraceStep] = field(default_factory=list)
    _unsubscribe: Optional[Callable[[], None]] = field(default=None, init=False, repr=False)

    def attach(self, engine: CalculatorEngine) -> TraceRecorder:
        self._unsubscribe = engine.subscribe(self.record)
        return self

    def detach(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def record(self, button: Button, snapshot: DisplaySnapshot) -> None:
        self.steps.append(
            TraceStep(
                index=len(self.steps) + 1,
                button=button,
                display=snapshot.display,
                error=snapshot.error,
                memory_set=snapshot.memory_set,
            )
        )


def render_trace(steps: list[TraceStep], title: str = "Key presses") -> Table:
    """Table of presses with the display after each one."""
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", min_width=4)
    table.add_column("Display", justify="right", style="green", min_width=10)
    table.add_column("M", justify="center")
    table.add_column("E", justify="center")

    for step in steps:
        table.add_row(
            str(step.index),
            Text(step.button.value, style=KIND_STYLES[step.button.kind]),
            Text(step.display, style="bold red" if step.error else "green"),
            "[green]M[/green]" if step.memory_set else "[dim]-[/dim]",
            "[red]E[/red]" if step.error else "[dim]-[/dim]",
        )
    return table
