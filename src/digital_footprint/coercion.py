"""Tolerant scalar coercion for survey answers and configuration values."""

from __future__ import annotations

import math

__all__ = ["coerce_flag", "coerce_number", "is_blank", "parse_number"]


def is_blank(value: object) -> bool:
    """Return ``True`` for unanswered fields (``None`` or whitespace)."""

    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def parse_number(value: object) -> float | None:
    """Parse a base-10 number from a raw answer.

    Args:
        value: Raw answer (number, numeric string, or anything else).

    Returns:
        The finite parsed value, or ``None`` when the answer is not numeric.
        Booleans are not treated as numbers.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def coerce_number(value: object) -> float:
    """Return a non-negative quantity for ``value``, defaulting to ``0.0``."""

    number = parse_number(value)
    if number is None or number < 0:
        return 0.0
    return number


def coerce_flag(value: object) -> bool:
    """Strict boolean read: only the literal ``True`` counts as set."""

    return value is True
