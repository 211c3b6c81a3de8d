"""Centralized configuration for Kalkulator Ilmiah.

This module defines:
- History and display limits
- Display formatting thresholds and precision
- The numeric degeneracy policy for division and reciprocal by zero
- The angle mode a new session starts in

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KALKULATOR_)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-ilmiah")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# History ledger
HISTORY_LIMIT = int(os.getenv("KALKULATOR_HISTORY_LIMIT", "10"))

# Display formatting
DISPLAY_MAX_LENGTH = int(
    os.getenv("KALKULATOR_DISPLAY_MAX_LENGTH", "12")
)  # characters shown before reformatting
SCIENTIFIC_UPPER_BOUND = float(
    os.getenv("KALKULATOR_SCIENTIFIC_UPPER_BOUND", "999999999999")
)
SCIENTIFIC_LOWER_BOUND = float(os.getenv("KALKULATOR_SCIENTIFIC_LOWER_BOUND", "1e-6"))
EXPONENTIAL_DIGITS = int(
    os.getenv("KALKULATOR_EXPONENTIAL_DIGITS", "6")
)  # fractional digits in exponential form
DISPLAY_PRECISION = int(
    os.getenv("KALKULATOR_DISPLAY_PRECISION", "10")
)  # significant digits in fixed form

# Numeric policy
IEEE_DIVISION = os.getenv("KALKULATOR_IEEE_DIVISION", "false").lower() == "true"

# Session defaults
DEFAULT_ANGLE_MODE = os.getenv("KALKULATOR_DEFAULT_ANGLE_MODE", "deg").lower()
if DEFAULT_ANGLE_MODE not in ("deg", "rad"):
    DEFAULT_ANGLE_MODE = "deg"

REPL_COMMANDS = {"help", "quit", "exit", "history", "state"}


@dataclass(frozen=True)
class Settings:
    """Engine-relevant configuration values."""

    history_limit: int = 10
    ieee_division: bool = False
    start_in_radians: bool = False

    @classmethod
    def from_config(cls) -> "Settings":
        """Build settings from the module constants at call time.

        CLI flags patch the module constants before the engine is created,
        so reading them here picks the overrides up.
        """
        return cls(
            history_limit=max(0, HISTORY_LIMIT),
            ieee_division=IEEE_DIVISION,
            start_in_radians=DEFAULT_ANGLE_MODE == "rad",
        )
