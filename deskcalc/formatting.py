"""Number <-> display string conversion for the calculator LCD.

Results of ``=`` go through format_number(), which falls back to scientific
notation once the plain decimal no longer fits the digit cap. Memory recall
and percent use to_decimal_string() directly. parse_display() reads the
display back the way a lenient float parser does: it takes the longest
numeric prefix and ignores the rest.
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from deskcalc.config import DisplayPolicy

# Leading number: optional sign, digits with optional point (or a bare
# fraction), optional complete exponent.
_NUMERIC_PREFIX_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_display(text: str) -> float:
    """Parse the numeric prefix of a display string.

    "5." → 5.0, "-0." → -0.0, "1.2346e+" → 1.2346. Text with no numeric
    prefix gives NaN.
    """
    match = _NUMERIC_PREFIX_RE.match(text)
    if not match:
        return math.nan
    return float(match.group(0))


def to_decimal_string(value: float) -> str:
    """Render a float as a plain positional decimal.

    Uses the shortest digits that round-trip, never scientific notation,
    and drops a trailing ".0". Negative zero renders as "0".
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def to_scientific(value: float, precision: int) -> str:
    """Normalized scientific notation without exponent zero-padding.

    12345600000.0 with precision 4 → "1.2346e+10"; 0.3 → "3.0000e-1".
    """
    mantissa, exponent = f"{value:.{precision}e}".split("e")
    exp = int(exponent)
    sign = "+" if exp >= 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


def format_number(value: float, policy: DisplayPolicy) -> str:
    """Render an arithmetic result for the display."""
    text = to_decimal_string(value)
    if len(text) > policy.digit_cap:
        return to_scientific(value, policy.exponent_precision)
    return text


def count_digits(text: str) -> int:
    """Number of digit characters in a display string."""
    return sum(1 for ch in text if ch.isdigit())
