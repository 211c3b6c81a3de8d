"""History ledger: newest-first list of calculation strings with a size cap."""

from __future__ import annotations

from typing import Iterable

from .config import HISTORY_LIMIT

SEPARATOR = " = "


def push(history: Iterable[str], entry: str, limit: int = HISTORY_LIMIT) -> tuple[str, ...]:
    """Prepend ``entry`` and drop everything past ``limit`` entries."""
    return ((entry,) + tuple(history))[: max(limit, 0)]


def clear() -> tuple[str, ...]:
    return ()


def recall(entry: str) -> str | None:
    """Return the result part of a history entry.

    The result is the text after the last ``" = "``. Returns None when the
    entry has no separator.
    """
    _, separator, result = entry.rpartition(SEPARATOR)
    if not separator:
        return None
    return result
