"""Numeric evaluators for binary operators, scientific functions and constants.

All evaluation happens on IEEE-754 doubles through NumPy ufuncs with floating
point warnings silenced, so domain errors and overflow come back as NaN or
infinity instead of raising. Those values are contagious through any later
arithmetic until the user clears them.

The only deliberate departure from IEEE results is the zero-collapse policy:
``x ÷ 0`` and ``1/x`` of ``0`` give ``0`` unless ``ieee_division`` is set.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
import sympy as sp

from .logging_config import get_logger
from .types import Constant, Operator, ScientificFunction

logger = get_logger("arithmetic")

# 171! overflows a double
MAX_EXACT_FACTORIAL = 170


def to_number(text: str) -> float:
    """Parse calculator text into a float. Unparsable text gives NaN."""
    try:
        return float(text)
    except (TypeError, ValueError):
        return math.nan


def to_text(value: float) -> str:
    """Render a computed number the way the display stores it.

    Uses the shortest digits that round-trip. Magnitudes from 1e-6 up to
    1e21 print as plain decimals (``0.00005``, ``18446744073709552000``),
    anything else in exponent form without zero padding (``1e-7``,
    ``1e+21``). Non-finite values use the ``NaN`` / ``Infinity`` /
    ``-Infinity`` sentinels.
    """
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if 1e-6 <= abs(value) < 1e21:
        return np.format_float_positional(value, unique=True, trim="-")
    return np.format_float_scientific(value, unique=True, trim="-", exp_digits=1)


def factorial(n: float) -> float:
    """Factorial of a non-negative integer, NaN for anything else.

    Arguments above MAX_EXACT_FACTORIAL overflow to infinity.
    """
    n = float(n)
    if math.isnan(n) or n < 0 or not n.is_integer():
        return math.nan
    if n > MAX_EXACT_FACTORIAL:
        return math.inf
    return float(sp.factorial(int(n)))


def _to_radians(x: float, radians: bool) -> float:
    return x if radians else x * math.pi / 180


def _from_radians(y: float, radians: bool) -> float:
    return y if radians else y * 180 / math.pi


_BINARY_OPERATIONS: dict[Operator, Callable[[np.float64, np.float64], np.float64]] = {
    Operator.ADD: np.add,
    Operator.SUBTRACT: np.subtract,
    Operator.MULTIPLY: np.multiply,
    Operator.DIVIDE: np.divide,
    Operator.POWER: np.power,
    # fmod truncates, so the sign follows the dividend
    Operator.MOD: np.fmod,
}

# Forward trig takes its *argument* in the current angle unit, inverse trig
# returns its *result* in the current angle unit. Keep the two directions
# different: sin(90) in degree mode is 1 and asin(1) is 90.
_UNARY_OPERATIONS: dict[ScientificFunction, Callable[[np.float64, bool], float]] = {
    ScientificFunction.SIN: lambda x, radians: np.sin(_to_radians(x, radians)),
    ScientificFunction.COS: lambda x, radians: np.cos(_to_radians(x, radians)),
    ScientificFunction.TAN: lambda x, radians: np.tan(_to_radians(x, radians)),
    ScientificFunction.ASIN: lambda x, radians: _from_radians(np.arcsin(x), radians),
    ScientificFunction.ACOS: lambda x, radians: _from_radians(np.arccos(x), radians),
    ScientificFunction.ATAN: lambda x, radians: _from_radians(np.arctan(x), radians),
    ScientificFunction.LOG: lambda x, _: np.log10(x),
    ScientificFunction.LN: lambda x, _: np.log(x),
    ScientificFunction.SQRT: lambda x, _: np.sqrt(x),
    ScientificFunction.SQUARE: lambda x, _: np.multiply(x, x),
    ScientificFunction.RECIPROCAL: lambda x, _: np.divide(1.0, x),
    ScientificFunction.FACTORIAL: lambda x, _: factorial(x),
    ScientificFunction.EXP: lambda x, _: np.exp(x),
    ScientificFunction.POW10: lambda x, _: np.power(10.0, x),
    ScientificFunction.ABS: lambda x, _: np.abs(x),
}

_CONSTANTS: dict[Constant, float] = {
    Constant.PI: math.pi,
    Constant.E: math.e,
}


def _ensure_complete(table: dict, vocabulary: type) -> None:
    missing = [member.name for member in vocabulary if member not in table]
    if missing:
        raise RuntimeError(
            f"No evaluator for {vocabulary.__name__} member(s): {', '.join(missing)}"
        )


_ensure_complete(_BINARY_OPERATIONS, Operator)
_ensure_complete(_UNARY_OPERATIONS, ScientificFunction)
_ensure_complete(_CONSTANTS, Constant)


def apply_operator(
    a: float, b: float, operator: Operator, ieee_division: bool = False
) -> float:
    """Apply a binary operator to two doubles.

    Args:
        a: Left operand
        b: Right operand
        operator: Operator to apply
        ieee_division: If True, division by zero follows IEEE rules instead
            of collapsing to 0

    Returns:
        The result as a float (may be NaN or infinite)
    """
    if operator is Operator.DIVIDE and b == 0 and not ieee_division:
        logger.debug("Division of %r by zero collapsed to 0", a)
        return 0.0
    with np.errstate(all="ignore"):
        result = float(_BINARY_OPERATIONS[operator](np.float64(a), np.float64(b)))
    if not math.isfinite(result):
        logger.debug("%r %s %r produced %r", a, operator.value, b, result)
    return result


def apply_function(
    function: ScientificFunction,
    x: float,
    radians: bool = False,
    ieee_division: bool = False,
) -> float:
    """Apply a unary scientific function to a double.

    Args:
        function: Function to apply
        x: Argument
        radians: Angle mode for trigonometric functions
        ieee_division: If True, the reciprocal of zero follows IEEE rules
            instead of collapsing to 0

    Returns:
        The result as a float (may be NaN or infinite)
    """
    if function is ScientificFunction.RECIPROCAL and x == 0 and not ieee_division:
        logger.debug("Reciprocal of zero collapsed to 0")
        return 0.0
    with np.errstate(all="ignore"):
        result = float(_UNARY_OPERATIONS[function](np.float64(x), radians))
    if not math.isfinite(result):
        logger.debug("%s(%r) produced %r", function.value, x, result)
    return result


def constant_value(constant: Constant) -> float:
    return _CONSTANTS[constant]
