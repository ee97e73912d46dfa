"""Data models for the deskcalc engine.

Button, ButtonKind, Operator, EngineState, DisplaySnapshot: the typed
structures that flow through keypad → engine → view.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional


class InvalidButtonError(ValueError):
    """Raised when a label is outside the calculator's button vocabulary."""

    def __init__(self, label: object) -> None:
        self.label = label
        super().__init__(f"Unknown button: {label!r}")


class ButtonKind(str, Enum):
    """Button categories, used for dispatch and keypad styling."""

    NUMBER = "number"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    DECIMAL = "decimal"
    MEMORY = "memory"


class Operator(str, Enum):
    """Binary operators that can be pending between two operands."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    def apply(self, left: float, right: float) -> float:
        """Compute ``left <op> right``.

        Raises ZeroDivisionError for a zero divisor.
        """
        return _OPERATOR_FUNCS[self](left, right)


_OPERATOR_FUNCS: dict[Operator, Callable[[float, float], float]] = {
    Operator.ADD: operator.add,
    Operator.SUBTRACT: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
}


class Button(str, Enum):
    """The closed set of labels printed on the calculator keys."""

    DIGIT_0 = "0"
    DIGIT_1 = "1"
    DIGIT_2 = "2"
    DIGIT_3 = "3"
    DIGIT_4 = "4"
    DIGIT_5 = "5"
    DIGIT_6 = "6"
    DIGIT_7 = "7"
    DIGIT_8 = "8"
    DIGIT_9 = "9"
    DECIMAL = "."
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "×"
    DIVIDE = "÷"
    EQUALS = "="
    SIGN = "±"
    PERCENT = "%"
    ALL_CLEAR = "AC"
    DELETE = "DEL"
    MEMORY_RECALL = "MR"
    MEMORY_ADD = "M+"
    MEMORY_SUBTRACT = "M-"
    MEMORY_CLEAR = "MC"

    @classmethod
    def parse(cls, label: str | Button) -> Button:
        """Resolve a label (or one of its typing aliases) to a Button.

        Raises:
            InvalidButtonError: the label is not on the keypad.
        """
        if isinstance(label, Button):
            return label
        if not isinstance(label, str):
            raise InvalidButtonError(label)
        try:
            return cls(label)
        except ValueError:
            pass
        button = ALIASES.get(label.strip().upper())
        if button is None:
            raise InvalidButtonError(label)
        return button

    @property
    def kind(self) -> ButtonKind:
        if self.value.isdigit():
            return ButtonKind.NUMBER
        return _KINDS[self]

    @property
    def operator(self) -> Optional[Operator]:
        """The binary operator this key selects, if any."""
        return _BUTTON_OPERATORS.get(self)


_KINDS: dict[Button, ButtonKind] = {
    Button.DECIMAL: ButtonKind.DECIMAL,
    Button.ADD: ButtonKind.OPERATOR,
    Button.SUBTRACT: ButtonKind.OPERATOR,
    Button.MULTIPLY: ButtonKind.OPERATOR,
    Button.DIVIDE: ButtonKind.OPERATOR,
    Button.SIGN: ButtonKind.OPERATOR,
    Button.PERCENT: ButtonKind.OPERATOR,
    Button.EQUALS: ButtonKind.EQUALS,
    Button.ALL_CLEAR: ButtonKind.CLEAR,
    Button.DELETE: ButtonKind.CLEAR,
    Button.MEMORY_RECALL: ButtonKind.MEMORY,
    Button.MEMORY_ADD: ButtonKind.MEMORY,
    Button.MEMORY_SUBTRACT: ButtonKind.MEMORY,
    Button.MEMORY_CLEAR: ButtonKind.MEMORY,
}

_BUTTON_OPERATORS: dict[Button, Operator] = {
    Button.ADD: Operator.ADD,
    Button.SUBTRACT: Operator.SUBTRACT,
    Button.MULTIPLY: Operator.MULTIPLY,
    Button.DIVIDE: Operator.DIVIDE,
}

# Typing aliases, keyed upper-case. Word labels are listed so they match in any case.
ALIASES: dict[str, Button] = {
    "−": Button.SUBTRACT,  # minus sign
    "*": Button.MULTIPLY,
    "X": Button.MULTIPLY,
    "/": Button.DIVIDE,
    "+/-": Button.SIGN,
    "C": Button.ALL_CLEAR,
    "BS": Button.DELETE,
    "AC": Button.ALL_CLEAR,
    "DEL": Button.DELETE,
    "MR": Button.MEMORY_RECALL,
    "M+": Button.MEMORY_ADD,
    "M-": Button.MEMORY_SUBTRACT,
    "MC": Button.MEMORY_CLEAR,
}


@dataclass
class EngineState:
    """Mutable calculator state. Only CalculatorEngine.press writes to it."""

    display: str = "0"
    accumulator: Optional[float] = None
    pending_operator: Optional[Operator] = None
    awaiting_fresh_operand: bool = False
    memory: Optional[float] = None
    error: bool = False

    def clear(self) -> None:
        """Reset to the power-on state, keeping the memory register."""
        self.display = "0"
        self.accumulator = None
        self.pending_operator = None
        self.awaiting_fresh_operand = False
        self.error = False


@dataclass(frozen=True)
class DisplaySnapshot:
    """Read-only view of the engine after a press, for presentation."""

    display: str
    error: bool
    memory_set: bool
    pending_operator: Optional[Operator] = None

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "display": self.display,
            "error": self.error,
            "memory_set": self.memory_set,
            "pending_operator": self.pending_operator.value if self.pending_operator else None,
        }
