"""Logging setup for the calculator.

Every module logs through a child of the ``kalkulator`` logger:

- ``kalkulator.engine``: each dispatched command (DEBUG)
- ``kalkulator.arithmetic``: zero-collapsed divisions and NaN/Infinity results (DEBUG)
- ``kalkulator.api``: token sequences rejected by ``calculate`` (INFO)
- ``kalkulator.cli``: input rejected at the prompt or by ``--eval`` (WARNING)

At DEBUG the arithmetic logger reports every degenerate result, so
``setup_logging`` can narrow the DEBUG/INFO output to selected components.
Warnings and errors are always shown.
"""

import logging
import sys
from datetime import datetime
from typing import Iterable, Optional

ROOT_LOGGER = "kalkulator"
COMPONENTS = ("engine", "arithmetic", "api", "cli")


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs structured log entries with timestamp, module, level, and message."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        message = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return message


class ComponentFilter(logging.Filter):
    """Pass records below WARNING only when they come from the given components."""

    def __init__(self, components: Iterable[str]):
        super().__init__()
        self.names = {f"{ROOT_LOGGER}.{component}" for component in components}

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.WARNING or record.name in self.names


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    components: Optional[Iterable[str]] = None,
) -> logging.Logger:
    """Configure the ``kalkulator`` logger and its handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file that receives the same records as stderr
        components: Names from ``COMPONENTS`` whose DEBUG/INFO records are
            shown; None shows all of them

    Returns:
        The ``kalkulator`` logger

    Raises:
        ValueError: a component name is not in ``COMPONENTS``
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    component_filter = None
    if components is not None:
        components = list(components)
        unknown = sorted(set(components) - set(COMPONENTS))
        if unknown:
            raise ValueError(f"Unknown logging component(s): {', '.join(unknown)}")
        component_filter = ComponentFilter(components)

    for handler in handlers:
        handler.setFormatter(StructuredFormatter())
        if component_filter is not None:
            handler.addFilter(component_filter)
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``kalkulator.<name>`` logger for one component."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
