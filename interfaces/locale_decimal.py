"""
Locale-aware decimal parsing for option values.

The process locale decides which character separates the integer and
fractional parts ("3,5" under de_DE, "3.5" under C). Callers that need
deterministic behaviour inject an explicit separator instead of touching
process-wide locale state.
"""

from __future__ import annotations

import locale
from typing import Optional

CANONICAL_DECIMAL_POINT = "."


def local_decimal_point() -> str:
    """Return the decimal separator of the active ``LC_NUMERIC`` locale."""

    try:
        point = locale.localeconv().get("decimal_point")
    except Exception:
        return CANONICAL_DECIMAL_POINT
    if not isinstance(point, str) or len(point) != 1:
        return CANONICAL_DECIMAL_POINT
    return point


def parse_decimal(text: str, decimal_point: Optional[str] = None) -> Optional[float]:
    """Parse ``text`` as a decimal number using the locale separator.

    Returns ``None`` for anything that is not a plain number: empty text,
    embedded whitespace or underscores, a canonical ``.`` when the locale
    uses another separator, or text ``float`` rejects.
    """
    if not text:
        return None
    point = decimal_point or local_decimal_point()
    if point != CANONICAL_DECIMAL_POINT and CANONICAL_DECIMAL_POINT in text:
        return None
    if any(ch.isspace() or ch == "_" for ch in text):
        return None
    candidate = text.replace(point, CANONICAL_DECIMAL_POINT)
    try:
        return float(candidate)
    except ValueError:
        return None


class LocaleDecimalParser:
    """Callable decimal parser bound to a fixed (or locale-resolved) separator."""

    def __init__(self, decimal_point: Optional[str] = None) -> None:
        if decimal_point is not None and len(decimal_point) != 1:
            raise ValueError("decimal_point must be a single character")
        self._decimal_point = decimal_point

    @property
    def decimal_point(self) -> str:
        return self._decimal_point or local_decimal_point()

    def __call__(self, text: str) -> Optional[float]:
        return parse_decimal(text, self.decimal_point)

    def __repr__(self) -> str:
        return f"LocaleDecimalParser(decimal_point={self._decimal_point!r})"


__all__ = [
    "CANONICAL_DECIMAL_POINT",
    "LocaleDecimalParser",
    "local_decimal_point",
    "parse_decimal",
]
