"""Rounding and overflow-safe arithmetic for footprint values."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, localcontext

__all__ = ["round_half_up", "saturate", "saturating_product", "saturating_sum"]

_FLOAT_MAX = sys.float_info.max


def round_half_up(value: float, decimals: int = 2) -> float:
    """Round ``value`` half-up at ``10**-decimals`` resolution.

    The float is quantized from its shortest ``repr`` so that values such as
    ``0.125`` round to ``0.13`` instead of following binary artefacts or the
    banker's rounding used by :func:`round`.

    Args:
        value: Number to round.
        decimals: Number of decimal places to keep.

    Returns:
        The rounded value as a float. Non-finite input returns ``0.0``.
    """

    number = float(value)
    if not math.isfinite(number):
        return 0.0
    exact = Decimal(repr(number))
    with localcontext() as ctx:
        # Keep every integer digit so quantize never overflows the context.
        ctx.prec = max(28, exact.adjusted() + decimals + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    return float(rounded) + 0.0


def saturate(value: float) -> float:
    """Clamp infinities to the largest finite float of the same sign.

    ``NaN`` becomes ``0.0``.
    """

    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        return math.copysign(_FLOAT_MAX, value)
    return value


def saturating_product(*factors: float) -> float:
    """Multiply ``factors`` left to right, clamping overflow.

    Any zero factor makes the product zero, even next to a factor that
    overflowed on its own.
    """

    if any(factor == 0 for factor in factors):
        return 0.0
    product = 1.0
    for factor in factors:
        product = saturate(product * factor)
    return product


def saturating_sum(values: Iterable[float]) -> float:
    """Sum ``values``, clamping overflow to the largest finite float."""

    total = 0.0
    for value in values:
        total = saturate(total + value)
    return total
