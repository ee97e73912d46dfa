"""Calculator engine: turns button presses into display state.

Data flow per press:
1. Resolve the label to a Button (unknown labels raise InvalidButtonError)
2. Apply exactly one rule, first match wins:
   error acknowledgement, AC, DEL, MR, M+, M-, MC, ±, %, operator/=, ".", digit
3. Notify subscribers with the pressed button and a DisplaySnapshot

The engine does no I/O. Views read it through get_display(), the status
flags, or a subscription; they never write to it.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Iterable, Optional

from deskcalc.config import DisplayPolicy
from deskcalc.formatting import count_digits, format_number, parse_display, to_decimal_string
from deskcalc.models import Button, ButtonKind, DisplaySnapshot, EngineState

log = logging.getLogger(__name__)

Subscriber = Callable[[Button, DisplaySnapshot], None]


class CalculatorEngine:
    """Four-function calculator with a memory register and error latch."""

    def __init__(self, policy: Optional[DisplayPolicy] = None) -> None:
        self.policy = policy or DisplayPolicy()
        self.state = EngineState()
        self._subscribers: list[Subscriber] = []

    # --- Read-out ---

    def get_display(self) -> str:
        """Current display text, cut to the LCD width."""
        return self.state.display[: self.policy.display_width]

    @property
    def error(self) -> bool:
        return self.state.error

    @property
    def memory_set(self) -> bool:
        return self.state.memory is not None

    def snapshot(self) -> DisplaySnapshot:
        return DisplaySnapshot(
            display=self.get_display(),
            error=self.state.error,
            memory_set=self.memory_set,
            pending_operator=self.state.pending_operator,
        )

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback(button, snapshot)`` after every press.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    # --- Input ---

    def press(self, label: str | Button) -> None:
        """Apply one button press.

        Raises:
            InvalidButtonError: the label is not a calculator key. State is
                left untouched.
        """
        button = Button.parse(label)
        self._dispatch(button)
        log.debug(
            "press %s -> display=%r acc=%r op=%s fresh=%s mem=%r error=%s",
            button.value,
            self.state.display,
            self.state.accumulator,
            self.state.pending_operator.value if self.state.pending_operator else None,
            self.state.awaiting_fresh_operand,
            self.state.memory,
            self.state.error,
        )
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(button, snap)

    def press_many(self, labels: Iterable[str | Button]) -> str:
        """Press each label in order and return the final display."""
        for label in labels:
            self.press(label)
        return self.get_display()

    def _dispatch(self, button: Button) -> None:
        s = self.state

        if s.error and button not in (Button.ALL_CLEAR, Button.DELETE):
            # Any key acknowledges the error. Only a digit or point goes on
            # to start the next number; everything else is discarded.
            self._clear_error()
            if button.kind not in (ButtonKind.NUMBER, ButtonKind.DECIMAL):
                return

        if button is Button.ALL_CLEAR:
            s.clear()
        elif button is Button.DELETE:
            self._delete()
        elif button is Button.MEMORY_RECALL:
            if s.memory is not None:
                s.display = to_decimal_string(s.memory)
                s.awaiting_fresh_operand = False
        elif button is Button.MEMORY_ADD:
            s.memory = (s.memory or 0.0) + parse_display(s.display)
            s.awaiting_fresh_operand = True
        elif button is Button.MEMORY_SUBTRACT:
            s.memory = (s.memory or 0.0) - parse_display(s.display)
            s.awaiting_fresh_operand = True
        elif button is Button.MEMORY_CLEAR:
            s.memory = None
        elif button is Button.SIGN:
            s.display = s.display[1:] if s.display.startswith("-") else f"-{s.display}"
        elif button is Button.PERCENT:
            s.display = to_decimal_string(parse_display(s.display) / 100)
        elif button is Button.EQUALS:
            self._evaluate()
        elif button.kind is ButtonKind.OPERATOR:
            s.accumulator = parse_display(s.display)
            s.pending_operator = button.operator
            s.awaiting_fresh_operand = True
        elif button is Button.DECIMAL:
            if s.awaiting_fresh_operand:
                s.display = "0."
                s.awaiting_fresh_operand = False
            elif "." not in s.display:
                s.display += "."
        else:
            self._enter_digit(button.value)

    def _clear_error(self) -> None:
        self.state.display = "0"
        self.state.error = False
        self.state.awaiting_fresh_operand = False

    def _delete(self) -> None:
        s = self.state
        if s.error:
            self._clear_error()
        elif len(s.display) > 1:
            remainder = s.display[:-1]
            s.display = remainder if remainder not in ("", "-") else "0"
        else:
            s.display = "0"

    def _enter_digit(self, digit: str) -> None:
        s = self.state
        if s.awaiting_fresh_operand:
            s.display = digit
            s.awaiting_fresh_operand = False
        elif count_digits(s.display) < self.policy.digit_cap:
            s.display = digit if s.display == "0" else s.display + digit

    def _evaluate(self) -> None:
        s = self.state
        if s.pending_operator is None or s.accumulator is None:
            return

        left, op = s.accumulator, s.pending_operator
        right = parse_display(s.display)
        try:
            result = op.apply(left, right)
        except ZeroDivisionError:
            result = math.nan

        if math.isfinite(result):
            s.display = format_number(result, self.policy)
        else:
            log.info("arithmetic error: %r %s %r", left, op.value, right)
            s.display = self.policy.error_text
            s.error = True

        s.accumulator = None
        s.pending_operator = None
        s.awaiting_fresh_operand = True
