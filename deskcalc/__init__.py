"""deskcalc — the input/evaluation engine of a desk calculator.

Turns a stream of key presses into display text, an accumulator/operator
pair, a memory register and an error latch, the way a basic ten-digit
electronic calculator does. Presentation layers read the display and the
M/E flags; they never write calculator state.

Usage:
    python -m deskcalc press 1 2 + 8 =   # → 20
    python -m deskcalc repl              # Interactive calculator
"""

from deskcalc.config import DisplayPolicy, load_policy
from deskcalc.engine import CalculatorEngine
from deskcalc.models import Button, ButtonKind, DisplaySnapshot, InvalidButtonError, Operator

__all__ = [
    "Button",
    "ButtonKind",
    "CalculatorEngine",
    "DisplayPolicy",
    "DisplaySnapshot",
    "InvalidButtonError",
    "Operator",
    "load_policy",
]
