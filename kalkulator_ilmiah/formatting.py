"""Display formatting for calculator values.

Short values are shown as typed. Values longer than the display width are
re-rendered: very large or very small magnitudes in exponential form, the
rest with a fixed number of significant digits.
"""

from __future__ import annotations

import math

from . import config
from .arithmetic import to_number, to_text
from .types import CalculatorState


def to_exponential(num: float, digits: int) -> str:
    """Exponential form with ``digits`` fractional digits, e.g. ``1.234568e+12``."""
    mantissa, exponent = f"{num:.{digits}e}".split("e")
    return f"{mantissa}e{int(exponent):+d}"


def to_precision(num: float, digits: int) -> str:
    """Render ``num`` with ``digits`` significant digits, trailing zeros kept.

    Switches to exponential form when the decimal exponent is below -6 or
    not smaller than ``digits``.
    """
    if num == 0:
        return f"{0:.{max(digits - 1, 0)}f}"
    mantissa, exponent_text = f"{num:.{digits - 1}e}".split("e")
    exponent = int(exponent_text)
    if exponent < -6 or exponent >= digits:
        return f"{mantissa}e{exponent:+d}"
    return f"{num:.{digits - 1 - exponent}f}"


def format_display(value_text: str) -> str:
    """Format a stored value for the display.

    Args:
        value_text: Value as stored in the calculator state

    Returns:
        Text that fits the display
    """
    if len(value_text) <= config.DISPLAY_MAX_LENGTH:
        return value_text
    num = to_number(value_text)
    if not math.isfinite(num):
        return to_text(num)
    magnitude = abs(num)
    if magnitude > config.SCIENTIFIC_UPPER_BOUND or (
        magnitude < config.SCIENTIFIC_LOWER_BOUND and num != 0
    ):
        return to_exponential(num, config.EXPONENTIAL_DIGITS)
    return to_precision(num, config.DISPLAY_PRECISION)


def pending_expression(state: CalculatorState) -> str:
    """Left operand and operator awaiting a right operand, e.g. ``"3 +"``."""
    if state.previous_value and state.operation is not None:
        return f"{format_display(state.previous_value)} {state.operation.value}"
    return ""
