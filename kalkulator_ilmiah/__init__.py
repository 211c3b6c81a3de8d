"""Kalkulator Ilmiah: scientific calculator engine with display formatting and history."""

__all__ = [
    "api",
    "arithmetic",
    "cli",
    "config",
    "engine",
    "formatting",
    "history",
    "logging_config",
    "parser",
    "types",
]

# Public API exports

__api_exports__ = [
    "calculate",
    "Engine",
    "transition",
    "snapshot",
    "format_display",
]
