"""Tests for the button vocabulary, keypad layout and input tokenising."""

import pytest

from deskcalc.keypad import KEYPAD_ROWS, KIND_STYLES, list_keys, tokenize
from deskcalc.models import Button, ButtonKind, InvalidButtonError, Operator


# --- Button vocabulary ---

def test_keypad_holds_every_button_once():
    laid_out = [b for row in KEYPAD_ROWS for b in row]
    assert sorted(laid_out) == sorted(Button)
    assert len(laid_out) == len(set(laid_out))


def test_every_kind_has_a_style():
    assert set(KIND_STYLES) == set(ButtonKind)


@pytest.mark.parametrize("button,kind", [
    (Button.DIGIT_7, ButtonKind.NUMBER),
    (Button.DECIMAL, ButtonKind.DECIMAL),
    (Button.MULTIPLY, ButtonKind.OPERATOR),
    (Button.PERCENT, ButtonKind.OPERATOR),
    (Button.EQUALS, ButtonKind.EQUALS),
    (Button.DELETE, ButtonKind.CLEAR),
    (Button.MEMORY_CLEAR, ButtonKind.MEMORY),
])
def test_button_kind(button, kind):
    assert button.kind is kind


def test_button_operator():
    assert Button.DIVIDE.operator is Operator.DIVIDE
    assert Button.SUBTRACT.operator is Operator.SUBTRACT
    assert Button.SIGN.operator is None
    assert Button.EQUALS.operator is None


def test_parse_canonical_and_aliases():
    assert Button.parse("M+") is Button.MEMORY_ADD
    assert Button.parse("m-") is Button.MEMORY_SUBTRACT
    assert Button.parse("−") is Button.SUBTRACT
    assert Button.parse("+/-") is Button.SIGN
    assert Button.parse("bs") is Button.DELETE
    assert Button.parse(Button.EQUALS) is Button.EQUALS


@pytest.mark.parametrize("label", ["", "12", "sqrt", "M*", 7, None])
def test_parse_rejects_unknown(label):
    with pytest.raises(InvalidButtonError):
        Button.parse(label)


def test_operator_apply():
    assert Operator.ADD.apply(2.0, 3.0) == 5.0
    assert Operator.DIVIDE.apply(1.0, 4.0) == 0.25
    with pytest.raises(ZeroDivisionError):
        Operator.DIVIDE.apply(1.0, 0.0)


# --- list_keys ---

def test_list_keys_reports_aliases():
    keys = {k.button: k for k in list_keys()}
    assert keys[Button.MULTIPLY].aliases == ["*", "X"]
    assert keys[Button.ALL_CLEAR].aliases == ["C"]
    assert keys[Button.DIGIT_5].aliases == []
    assert keys[Button.MEMORY_RECALL].kind is ButtonKind.MEMORY


# --- tokenize ---

def test_tokenize_splits_packed_input():
    assert tokenize("12+8=") == ["1", "2", "+", "8", "="]


def test_tokenize_keeps_word_labels():
    assert tokenize("7 M+ AC MR") == ["7", "M+", "AC", "MR"]


def test_tokenize_mixed():
    assert tokenize(" 0.5 x 4 = ") == ["0", ".", "5", "x", "4", "="]


def test_tokenize_passes_unknown_characters_through():
    assert tokenize("2?") == ["2", "?"]
