"""Tests for half-up rounding and saturating arithmetic."""

import math
import sys

import pytest

from digital_footprint.rounding import (
    round_half_up,
    saturate,
    saturating_product,
    saturating_sum,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0.125, 0.13),
        (2.675, 2.68),
        (1.005, 1.01),
        (5.109999999999999, 5.11),
        (113.568, 113.57),
        (0.16425, 0.16),
        (0.004, 0.0),
        (0.005, 0.01),
    ],
)
def test_round_half_up_two_decimals(value, expected):
    """Halves round away from zero using the shortest decimal repr."""
    assert round_half_up(value) == expected


def test_round_half_up_custom_precision():
    """Other resolutions are supported."""
    assert round_half_up(1.25, 1) == 1.3
    assert round_half_up(1234.5, 0) == 1235.0


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_round_half_up_non_finite_is_zero(value):
    """Non-finite input collapses to zero instead of propagating."""
    assert round_half_up(value) == 0.0


def test_round_half_up_large_values_keep_magnitude():
    """Values beyond the default decimal precision still round."""
    assert round_half_up(1e300) == pytest.approx(1e300)
    assert round_half_up(123456789012345678901234567890.0) == pytest.approx(
        123456789012345678901234567890.0
    )


def test_round_half_up_normalises_negative_zero():
    """Tiny negative values round to a positive zero."""
    result = round_half_up(-0.001)
    assert result == 0.0
    assert math.copysign(1.0, result) == 1.0


def test_saturate_clamps_non_finite():
    """Infinities keep their sign at the float limit and NaN becomes zero."""
    assert saturate(math.inf) == sys.float_info.max
    assert saturate(-math.inf) == -sys.float_info.max
    assert saturate(math.nan) == 0.0
    assert saturate(1.5) == 1.5


def test_saturating_product_clamps_overflow():
    """Overflow stops at the largest finite float."""
    assert saturating_product(1e308, 438.0, 0.7) == pytest.approx(
        0.7 * sys.float_info.max
    )
    assert saturating_product(2.0, 3.0, 4.0) == 24.0


def test_saturating_product_zero_factor_wins():
    """A zero factor gives zero even after an overflowing pair."""
    assert saturating_product(1e308, 1e308, 0.0) == 0.0


def test_saturating_sum_clamps_overflow():
    """Sums that overflow stay finite."""
    assert saturating_sum([sys.float_info.max, sys.float_info.max]) == (
        sys.float_info.max
    )
    assert saturating_sum([0.1, 0.2]) == 0.1 + 0.2
    assert saturating_sum([]) == 0.0
