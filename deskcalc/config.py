"""Display policy for the calculator and its environment overrides.

Defaults match a basic ten-digit pocket calculator. Each field can be
overridden with a DESKCALC_* environment variable, read by load_policy().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

# Significant digits a typed number may hold, and the longest plain-decimal
# result before switching to scientific notation.
DIGIT_CAP = 10
# Fractional mantissa digits in scientific notation (1.2346e+10).
EXPONENT_PRECISION = 4
# Characters the LCD can show.
DISPLAY_WIDTH = 10
ERROR_TEXT = "Error"

ENV_DIGIT_CAP = "DESKCALC_DIGIT_CAP"
ENV_EXPONENT_PRECISION = "DESKCALC_EXP_PRECISION"
ENV_DISPLAY_WIDTH = "DESKCALC_DISPLAY_WIDTH"
ENV_ERROR_TEXT = "DESKCALC_ERROR_TEXT"


class ConfigError(ValueError):
    """Raised for an unusable DESKCALC_* environment value."""


@dataclass(frozen=True)
class DisplayPolicy:
    """How numbers are entered and rendered on the LCD."""

    digit_cap: int = DIGIT_CAP
    exponent_precision: int = EXPONENT_PRECISION
    display_width: int = DISPLAY_WIDTH
    error_text: str = ERROR_TEXT


def _read_int(
    env: Mapping[str, str],
    name: str,
    default: int,
    minimum: int,
    maximum: int,
) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None
    if not minimum <= value <= maximum:
        raise ConfigError(f"{name} must be between {minimum} and {maximum}, got {value}")
    return value


def load_policy(env: Optional[Mapping[str, str]] = None) -> DisplayPolicy:
    """Build a DisplayPolicy from defaults plus environment overrides.

    Args:
        env: Variables to read. Defaults to os.environ.

    Raises:
        ConfigError: a variable is set but not usable.
    """
    env = os.environ if env is None else env
    error_text = env.get(ENV_ERROR_TEXT, "").strip() or ERROR_TEXT
    return DisplayPolicy(
        digit_cap=_read_int(env, ENV_DIGIT_CAP, DIGIT_CAP, 1, 16),
        exponent_precision=_read_int(env, ENV_EXPONENT_PRECISION, EXPONENT_PRECISION, 0, 10),
        display_width=_read_int(env, ENV_DISPLAY_WIDTH, DISPLAY_WIDTH, 1, 64),
        error_text=error_text,
    )
