"""CLI for the deskcalc calculator engine.

Usage:
    python -m deskcalc keys                      # Show the keypad vocabulary
    python -m deskcalc press 1 2 + 8 =           # Press keys, print the display
    python -m deskcalc press 7 M+ AC MR --trace  # ...with a per-press table
    python -m deskcalc run session.keys          # Replay a key script
    python -m deskcalc repl                      # Interactive calculator
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from deskcalc.config import ConfigError, load_policy
from deskcalc.engine import CalculatorEngine
from deskcalc.keypad import KIND_STYLES, list_keys, tokenize
from deskcalc.models import InvalidButtonError
from deskcalc.view import TraceRecorder, render_display, render_keypad, render_trace

app = typer.Typer(
    name="deskcalc",
    help="Four-function desk calculator engine",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = ("quit", "exit", "q")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every key press"),
) -> None:
    """Four-function desk calculator engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
    )


def _build_engine() -> CalculatorEngine:
    try:
        policy = load_policy()
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    return CalculatorEngine(policy)


def _press_all(engine: CalculatorEngine, labels: list[str]) -> None:
    try:
        engine.press_many(labels)
    except InvalidButtonError as e:
        console.print(f"[red]Invalid key: {escape(repr(e.label))}[/red]. Run 'deskcalc keys' for the keypad.")
        raise typer.Exit(2)


@app.command("keys")
def cmd_keys() -> None:
    """Show the keypad vocabulary."""
    table = Table(title="Calculator Keys", show_header=True, header_style="bold")
    table.add_column("Key", min_width=5)
    table.add_column("Kind", style="dim", min_width=10)
    table.add_column("Also accepts")

    for key in list_keys():
        table.add_row(
            f"[{KIND_STYLES[key.kind]}] {key.button.value} [/]",
            key.kind.value,
            " ".join(key.aliases),
        )

    out.print()
    out.print(table)
    out.print()


@app.command("press")
def cmd_press(
    labels: list[str] = typer.Argument(..., help="Keys to press in order (e.g. 1 2 + 8 = or 12+8=)"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Print a table of every press"),
    as_json: bool = typer.Option(False, "--json", help="Print the final state as JSON"),
) -> None:
    """Press keys in order and print the final display."""
    engine = _build_engine()
    recorder = TraceRecorder().attach(engine)
    _press_all(engine, [token for label in labels for token in tokenize(label)])

    if as_json:
        typer.echo(json.dumps(engine.snapshot().to_dict()))
        return
    if trace:
        out.print(render_trace(recorder.steps))
    out.print(engine.get_display(), markup=False, highlight=False)


@app.command("run")
def cmd_run(
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="Key script, whitespace separated; '#' starts a comment line"),
) -> None:
    """Replay a key script and print the trace."""
    labels: list[str] = []
    for line in script.read_text(encoding="utf-8").splitlines():
        if line.strip().startswith("#"):
            continue
        labels.extend(tokenize(line))

    engine = _build_engine()
    recorder = TraceRecorder().attach(engine)
    _press_all(engine, labels)

    out.print(render_trace(recorder.steps, title=f"Replay: {script.name}"))
    out.print(engine.get_display(), markup=False, highlight=False)


@app.command("repl")
def cmd_repl() -> None:
    """Interactive calculator. Type keys (e.g. 12+8=), 'quit' to leave."""
    engine = _build_engine()
    width = engine.policy.display_width

    out.print(render_display(engine.snapshot(), width))
    out.print(render_keypad())
    while True:
        try:
            line = console.input("[bold]> [/bold]")
        except (EOFError, KeyboardInterrupt):
            break
        if line.strip().lower() in _QUIT_WORDS:
            break
        for label in tokenize(line):
            try:
                engine.press(label)
            except InvalidButtonError as e:
                console.print(f"[red]Invalid key: {escape(repr(e.label))}[/red]")
                break
        out.print(render_display(engine.snapshot(), width))


if __name__ == "__main__":
    app()
