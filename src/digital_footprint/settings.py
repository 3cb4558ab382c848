"""Environment-backed settings primitives for :mod:`digital_footprint`."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from digital_footprint.coercion import parse_number

__all__ = ["FootprintSettings", "get_settings"]


class FootprintSettings(BaseSettings):
    """Expose environment-derived configuration knobs.

    All environment lookups go through this class. Every attribute maps to a
    documented environment variable and defaults to ``None`` (or an inline
    default) when the variable is absent.

    Attributes:
        config_path: Explicit path to an emission-factor config file.
        webhook_url: Endpoint receiving survey submissions.
        submit_timeout: Timeout in seconds for submission requests.
        export_dir: Directory where exports are written by the CLI.
        grid_intensity: Grid intensity override in kg CO2/kWh.
        carbon_price: Carbon price override in currency per tonne.
        social_cost_multiplier: Social-cost multiplier override.
        annualization: Annualization convention override.
    """

    config_path: str | None = Field(default=None, alias="FOOTPRINT_CONFIG_PATH")
    webhook_url: str | None = Field(default=None, alias="FOOTPRINT_WEBHOOK_URL")
    submit_timeout: float = Field(default=10.0, alias="FOOTPRINT_SUBMIT_TIMEOUT")
    export_dir: str | None = Field(default=None, alias="FOOTPRINT_EXPORT_DIR")
    grid_intensity: float | None = Field(
        default=None, alias="FOOTPRINT_GRID_INTENSITY"
    )
    carbon_price: float | None = Field(default=None, alias="FOOTPRINT_CARBON_PRICE")
    social_cost_multiplier: float | None = Field(
        default=None, alias="FOOTPRINT_SOCIAL_COST_MULTIPLIER"
    )
    annualization: str | None = Field(default=None, alias="FOOTPRINT_ANNUALIZATION")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator(
        "grid_intensity",
        "carbon_price",
        "social_cost_multiplier",
        mode="before",
    )
    @classmethod
    def _parse_optional_float(cls, value: object) -> float | None:
        """Parse optional float fields while tolerating malformed input.

        Args:
            value: Raw environment value.

        Returns:
            Parsed float when conversion succeeds and the result is finite,
            otherwise ``None``.
        """

        return parse_number(value)

    @field_validator("submit_timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> float:
        """Fall back to the default timeout on malformed or non-positive input."""

        timeout = parse_number(value)
        return timeout if timeout is not None and timeout > 0 else 10.0

    @field_validator("annualization", mode="before")
    @classmethod
    def _parse_annualization(cls, value: object) -> str | None:
        """Accept only the supported annualization conventions."""

        if isinstance(value, str) and value.strip().lower() in {"weekly", "monthly"}:
            return value.strip().lower()
        return None


def get_settings() -> FootprintSettings:
    """Return a :class:`FootprintSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return FootprintSettings()
