"""Public API for Kalkulator Ilmiah - returns structured objects without side effects."""

from __future__ import annotations

from .config import Settings
from .engine import Engine
from .logging_config import get_logger
from .parser import parse_tokens
from .types import CalculationResult, ValidationError

logger = get_logger("api")


def calculate(tokens: str, settings: Settings | None = None) -> CalculationResult:
    """Run a sequence of key tokens on a fresh engine.

    Args:
        tokens: Key tokens (e.g., "3 + 4 × 2 =", "90 sin")
        settings: Optional engine settings (default: from configuration)

    Returns:
        CalculationResult with the final snapshot, or the validation error

    Example:
        >>> from kalkulator_ilmiah.api import calculate
        >>> calculate("3 + 4 × 2 =").snapshot.display_text
        '14'
        >>> calculate("5 ÷ 0 =").snapshot.display_text
        '0'
    """
    try:
        commands = parse_tokens(tokens)
    except ValidationError as e:
        logger.info("Rejected input %r: %s", tokens, e)
        return CalculationResult(ok=False, error=e.message, code=e.code)
    engine = Engine(settings)
    engine.dispatch_all(commands)
    return CalculationResult(ok=True, snapshot=engine.snapshot())
