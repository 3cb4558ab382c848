"""Monetary conversion of estimated emissions."""

from __future__ import annotations

from digital_footprint.coercion import parse_number
from digital_footprint.rounding import round_half_up, saturating_product

__all__ = ["kg_to_currency", "kg_to_tonnes"]


def kg_to_tonnes(total_kg: object) -> float:
    """Convert kilograms to tonnes, treating non-numeric input as ``0``."""

    number = parse_number(total_kg)
    return (number or 0.0) / 1000.0


def kg_to_currency(
    total_kg: object,
    carbon_price: float,
    social_cost_multiplier: float = 1.0,
) -> float:
    """Convert an emission total into a monetary externality.

    Args:
        total_kg: Emissions in kg CO2. Non-numeric values count as zero.
        carbon_price: Currency units per tonne of CO2.
        social_cost_multiplier: Scaling for externality severity.

    Returns:
        ``tonnes * carbon_price * social_cost_multiplier`` rounded half-up to
        two decimals.
    """

    return round_half_up(
        saturating_product(
            kg_to_tonnes(total_kg),
            float(carbon_price),
            float(social_cost_multiplier),
        )
    )
