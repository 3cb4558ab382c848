"""Public entry points for the :mod:`digital_footprint` configuration loader."""

from __future__ import annotations

from collections.abc import Mapping

from digital_footprint.config_loader.models import (
    AIModel,
    AnnualizationConvention,
    EmissionFactorConfig,
)
from digital_footprint.config_loader.parsing import (
    apply_environment_overrides,
    apply_structured_overrides,
)
from digital_footprint.config_loader.sources import load_structured_config
from digital_footprint.settings import FootprintSettings, get_settings

__all__ = [
    "AIModel",
    "AnnualizationConvention",
    "EmissionFactorConfig",
    "apply_structured_overrides",
    "load_config",
    "resolve_config",
]


def load_config(
    path: str | None = None, *, settings: FootprintSettings | None = None
) -> EmissionFactorConfig:
    """Load emission factors from environment and optional file sources.

    Args:
        path: Optional explicit path to a configuration file. When omitted the
            loader inspects the environment and default search locations.
        settings: Optional pre-instantiated environment settings. When omitted
            :func:`digital_footprint.settings.get_settings` is used.

    Returns:
        Fully populated :class:`EmissionFactorConfig` instance.
    """

    env_settings = settings or get_settings()
    base = apply_environment_overrides(EmissionFactorConfig(), env_settings)
    structured = load_structured_config(path, env_settings)
    if structured is None:
        return base
    return apply_structured_overrides(base, structured)


def resolve_config(
    config: EmissionFactorConfig | None = None,
    overrides: Mapping[str, object] | None = None,
) -> EmissionFactorConfig:
    """Combine a base configuration with operator overrides.

    Args:
        config: Base configuration. Built-in defaults are used when ``None``.
        overrides: Optional camelCase mapping applied on top of ``config``.

    Returns:
        A new configuration; ``config`` itself is never modified.
    """

    base = config if config is not None else EmissionFactorConfig()
    if not overrides:
        return base
    return apply_structured_overrides(base, overrides)
