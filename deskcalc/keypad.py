"""Keypad layout and input tokenising.

The layout mirrors the calculator face, top row first. Each key is styled by
its ButtonKind. tokenize() turns a typed line such as ``12+8=`` or
``7 M+ AC MR`` into button labels for CalculatorEngine.press().
"""

from __future__ import annotations

from dataclasses import dataclass

from deskcalc.models import ALIASES, Button, ButtonKind, InvalidButtonError

KEYPAD_ROWS: tuple[tuple[Button, ...], ...] = (
    (Button.MEMORY_RECALL, Button.MEMORY_ADD, Button.MEMORY_SUBTRACT, Button.MEMORY_CLEAR, Button.PERCENT),
    (Button.DIGIT_1, Button.DIGIT_2, Button.DIGIT_3, Button.DELETE, Button.ALL_CLEAR),
    (Button.DIGIT_4, Button.DIGIT_5, Button.DIGIT_6, Button.ADD, Button.SUBTRACT),
    (Button.DIGIT_7, Button.DIGIT_8, Button.DIGIT_9, Button.MULTIPLY, Button.DIVIDE),
    (Button.DIGIT_0, Button.DECIMAL, Button.SIGN, Button.EQUALS),
)

# Key cap colours
KIND_STYLES: dict[ButtonKind, str] = {
    ButtonKind.NUMBER: "bold white on #555555",
    ButtonKind.OPERATOR: "bold white on #ff9800",
    ButtonKind.EQUALS: "bold white on #2196f3",
    ButtonKind.CLEAR: "bold white on #f44336",
    ButtonKind.DECIMAL: "bold white on #607d8b",
    ButtonKind.MEMORY: "bold white on #4a148c",
}


@dataclass
class KeyInfo:
    """Metadata about one key, for listings."""

    button: Button
    kind: ButtonKind
    aliases: list[str]


def list_keys() -> list[KeyInfo]:
    """All keys in keypad order, with their typing aliases."""
    keys = []
    for row in KEYPAD_ROWS:
        for button in row:
            aliases = sorted(
                alias for alias, target in ALIASES.items()
                if target is button and alias != button.value
            )
            keys.append(KeyInfo(button=button, kind=button.kind, aliases=aliases))
    return keys


def _is_label(chunk: str) -> bool:
    try:
        Button.parse(chunk)
    except InvalidButtonError:
        return False
    return True


def tokenize(line: str) -> list[str]:
    """Split typed input into button labels.

    Whitespace separates tokens. A token that is not itself a label is split
    into single characters, so ``12+8=`` becomes ``1 2 + 8 =``. Characters
    that are not labels are passed through and rejected by press().
    """
    tokens: list[str] = []
    for chunk in line.split():
        if _is_label(chunk):
            tokens.append(chunk)
        else:
            tokens.extend(chunk)
    return tokens
