"""Parsing and transformation helpers for :mod:`digital_footprint.config_loader`."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Final, cast

from digital_footprint.coercion import parse_number
from digital_footprint.config_loader.models import (
    AIModel,
    AnnualizationConvention,
    EmissionFactorConfig,
)
from digital_footprint.settings import FootprintSettings

LOGGER = logging.getLogger(__name__)

# Keys accepted in config files and override mappings. The second name in each
# tuple is the key used by the survey's original admin panel.
_SCALAR_KEYS: Final[dict[str, tuple[str, ...]]] = {
    "grid_intensity": ("gridIntensity", "gridKgCO2PerKWh"),
    "data_transfer_intensity": ("dataTransferIntensity", "kgCO2PerGB"),
    "carbon_price": ("carbonPrice", "inrPerTonneCO2"),
    "social_cost_multiplier": ("socialCostMultiplier",),
    "cloud_gb_per_hour": ("cloudDataRate",),
    "ai_kg_per_minute": ("aiKgPerMinute",),
}
_DEVICE_POWER_KEYS: Final[tuple[str, ...]] = ("devicePowerDraw", "devicePowerW")
_STREAMING_KEYS: Final[tuple[str, ...]] = ("streamingDataRate", "gbPerStreamingHour")
_AI_QUERY_KEYS: Final[tuple[str, ...]] = ("aiQueryIntensity",)
_FLAT_RATE_KEYS: Final[tuple[str, ...]] = ("flat", "default")


def apply_environment_overrides(
    config: EmissionFactorConfig, settings: FootprintSettings
) -> EmissionFactorConfig:
    """Apply environment-derived overrides to the configuration.

    Args:
        config: Base configuration instance.
        settings: Environment-derived settings.

    Returns:
        Configuration with environment overrides applied.
    """

    updated = config

    if settings.grid_intensity is not None and settings.grid_intensity >= 0:
        updated = replace(updated, grid_intensity=settings.grid_intensity)

    if settings.carbon_price is not None and settings.carbon_price >= 0:
        updated = replace(updated, carbon_price=settings.carbon_price)

    multiplier = settings.social_cost_multiplier
    if multiplier is not None and multiplier >= 0:
        updated = replace(updated, social_cost_multiplier=multiplier)

    if settings.annualization is not None:
        updated = replace(
            updated,
            annualization=cast(AnnualizationConvention, settings.annualization),
        )

    return updated


def apply_structured_overrides(
    config: EmissionFactorConfig, data: Mapping[str, object]
) -> EmissionFactorConfig:
    """Apply overrides sourced from a config file or an operator mapping.

    Unknown keys are ignored. Values that cannot be parsed leave the current
    setting untouched.

    Args:
        config: Base configuration instance.
        data: Mapping of camelCase keys to override values.

    Returns:
        Configuration updated according to the provided mapping.
    """

    updated = config

    for attribute, keys in _SCALAR_KEYS.items():
        raw = _first_present(data, keys)
        if raw is None:
            continue
        value = _coerce_non_negative(raw)
        if value is None:
            LOGGER.warning(
                "Ignoring invalid emission factor override",
                extra={"factor": attribute, "value": raw},
            )
            continue
        updated = replace(updated, **{attribute: value})

    device_power = _expect_mapping(_first_present(data, _DEVICE_POWER_KEYS))
    if device_power is not None:
        updated = _apply_device_power(updated, device_power)

    streaming_raw = _first_present(data, _STREAMING_KEYS)
    if streaming_raw is not None:
        updated = _apply_streaming_rate(updated, streaming_raw)

    ai_section = _expect_mapping(_first_present(data, _AI_QUERY_KEYS))
    if ai_section is not None:
        merged = dict(updated.ai_query_kg)
        merged.update(_coerce_float_mapping(ai_section))
        updated = replace(updated, ai_query_kg=merged)

    currency = _coerce_str(data.get("currency"))
    if currency is not None:
        updated = replace(updated, currency=currency)

    ai_model = _coerce_choice(data.get("aiModel"), {"extended", "simple"})
    if ai_model is not None:
        updated = replace(updated, ai_model=cast(AIModel, ai_model))

    annualization = _coerce_choice(data.get("annualization"), {"weekly", "monthly"})
    if annualization is not None:
        updated = replace(
            updated, annualization=cast(AnnualizationConvention, annualization)
        )

    return updated


def _apply_device_power(
    config: EmissionFactorConfig, section: Mapping[str, object]
) -> EmissionFactorConfig:
    """Merge per-category wattage overrides into the configuration.

    Args:
        config: Current configuration instance.
        section: Mapping of device category to watts.

    Returns:
        Updated configuration instance.
    """

    merged = dict(config.device_power_w)
    merged.update(_coerce_float_mapping(section))
    return replace(config, device_power_w=merged)


def _apply_streaming_rate(
    config: EmissionFactorConfig, raw: object
) -> EmissionFactorConfig:
    """Apply a flat streaming rate or a tiered ``{"flat", "SD", ...}`` mapping.

    Args:
        config: Current configuration instance.
        raw: Number, numeric string, or mapping of tier to GB per hour.

    Returns:
        Updated configuration instance.
    """

    section = _expect_mapping(raw)
    if section is None:
        flat = _coerce_non_negative(raw)
        if flat is None:
            return config
        return replace(config, streaming_gb_per_hour=flat)

    tiers = _coerce_float_mapping(section)
    updated = config
    for key in _FLAT_RATE_KEYS:
        if key in tiers:
            updated = replace(updated, streaming_gb_per_hour=tiers.pop(key))
            break
    for key in _FLAT_RATE_KEYS:
        tiers.pop(key, None)
    if tiers:
        merged = dict(updated.streaming_quality_gb_per_hour)
        merged.update(tiers)
        updated = replace(updated, streaming_quality_gb_per_hour=merged)
    return updated


def _first_present(data: Mapping[str, object], keys: tuple[str, ...]) -> object:
    """Return the value of the first key present in ``data``."""

    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _coerce_non_negative(value: object) -> float | None:
    """Parse a finite, non-negative float."""

    number = parse_number(value)
    if number is None or number < 0:
        return None
    return number


def _coerce_float_mapping(section: Mapping[str, object]) -> dict[str, float]:
    """Keep entries whose values parse as non-negative floats."""

    parsed: dict[str, float] = {}
    for key, value in section.items():
        number = _coerce_non_negative(value)
        if number is None:
            LOGGER.warning("Skipping invalid override for key %s", key)
            continue
        parsed[str(key)] = number
    return parsed


def _coerce_str(value: object) -> str | None:
    """Parse a string from arbitrary input.

    Args:
        value: Raw value.

    Returns:
        Normalised string when the input is textual, otherwise ``None``.
    """

    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return None


def _coerce_choice(value: object, choices: set[str]) -> str | None:
    """Return the lower-cased value when it is one of ``choices``."""

    text = _coerce_str(value)
    if text is None:
        return None
    lowered = text.lower()
    return lowered if lowered in choices else None


def _expect_mapping(value: object) -> Mapping[str, object] | None:
    """Return the value when it is a mapping with string keys.

    Args:
        value: Raw configuration value.

    Returns:
        Mapping with string keys suitable for further parsing, or ``None``.
    """

    if not isinstance(value, Mapping):
        return None
    if not all(isinstance(key, str) for key in value.keys()):
        return None
    return value
