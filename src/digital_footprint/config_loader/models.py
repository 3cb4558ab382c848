"""Typed configuration dataclasses for :mod:`digital_footprint.config_loader`."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final, Literal

AnnualizationConvention = Literal["weekly", "monthly"]
AIModel = Literal["extended", "simple"]

WEEKS_PER_YEAR: Final[float] = 52.0
WEEKS_PER_MONTH: Final[float] = 4.345
MONTHS_PER_YEAR: Final[int] = 12
DAYS_PER_YEAR: Final[int] = 365

DEFAULT_DEVICE_POWER_W: Final[dict[str, float]] = {
    "Smartphone": 5.0,
    "Laptop": 50.0,
    "Tablet": 10.0,
    "Desktop": 150.0,
    "Smart TV": 80.0,
    "Other": 30.0,
    "Gaming Console": 120.0,
    "Streaming Device": 15.0,
    "Smart Home Devices": 25.0,
    "Router": 10.0,
}

DEFAULT_STREAMING_QUALITY_GB_PER_HOUR: Final[dict[str, float]] = {
    "SD": 0.7,
    "HD": 3.0,
    "4K": 7.0,
}

DEFAULT_AI_QUERY_KG: Final[dict[str, float]] = {
    "text": 0.0001,
    "image": 0.002,
    "code": 0.00015,
    "voice": 0.0002,
    "mixed": 0.0005,
    "default": 0.0003,
}


_MAPPING_FIELDS: Final[tuple[str, ...]] = (
    "device_power_w",
    "streaming_quality_gb_per_hour",
    "ai_query_kg",
)


@dataclass(frozen=True, slots=True)
class EmissionFactorConfig:
    """Emission factors applied to a single footprint computation.

    Attributes:
        grid_intensity: Grid electricity intensity in kg CO2 per kWh.
        device_power_w: Average power draw in watts per device category.
        data_transfer_intensity: Network intensity in kg CO2 per gigabyte.
        carbon_price: Currency units per tonne of CO2.
        currency: Display code for ``carbon_price``.
        social_cost_multiplier: Externality scaling applied on conversion.
        streaming_gb_per_hour: Flat streaming data rate.
        streaming_quality_gb_per_hour: Optional per-quality streaming rates.
        cloud_gb_per_hour: Data rate attributed to cloud service usage.
        ai_query_kg: kg CO2 per AI query keyed by interaction type. The
            ``"default"`` key covers unrecognised types.
        ai_model: ``"extended"`` (per-query) or ``"simple"`` (per-minute).
        ai_kg_per_minute: Per-minute factor for the simple AI model.
        annualization: ``"weekly"`` multiplies weekly hours by 52,
            ``"monthly"`` by 4.345 weeks/month over 12 months.

    The mapping fields are stored as read-only views; use
    :func:`dataclasses.replace` to change them.
    """

    grid_intensity: float = 0.7
    device_power_w: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_DEVICE_POWER_W
    )
    data_transfer_intensity: float = 0.065
    carbon_price: float = 2000.0
    currency: str = "INR"
    social_cost_multiplier: float = 1.0
    streaming_gb_per_hour: float = 1.2
    streaming_quality_gb_per_hour: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_STREAMING_QUALITY_GB_PER_HOUR
    )
    cloud_gb_per_hour: float = 0.5
    ai_query_kg: Mapping[str, float] = field(
        default_factory=lambda: DEFAULT_AI_QUERY_KG
    )
    ai_model: AIModel = "extended"
    ai_kg_per_minute: float = 0.001
    annualization: AnnualizationConvention = "weekly"

    def __post_init__(self) -> None:
        # Stored as read-only copies of whatever mapping was passed in.
        for name in _MAPPING_FIELDS:
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @property
    def weeks_per_year(self) -> float:
        """Weeks per year implied by the annualization convention."""

        if self.annualization == "monthly":
            return WEEKS_PER_MONTH * MONTHS_PER_YEAR
        return WEEKS_PER_YEAR

    def ai_factor_for(self, interaction_type: str) -> float:
        """Return kg CO2 per query for ``interaction_type``."""

        if interaction_type in self.ai_query_kg:
            return self.ai_query_kg[interaction_type]
        return self.ai_query_kg.get("default", DEFAULT_AI_QUERY_KG["default"])

    def to_dict(self) -> dict[str, object]:
        """Return the configuration using its camelCase file keys."""

        return {
            "gridIntensity": self.grid_intensity,
            "devicePowerDraw": dict(self.device_power_w),
            "dataTransferIntensity": self.data_transfer_intensity,
            "carbonPrice": self.carbon_price,
            "currency": self.currency,
            "socialCostMultiplier": self.social_cost_multiplier,
            "streamingDataRate": {
                "flat": self.streaming_gb_per_hour,
                **self.streaming_quality_gb_per_hour,
            },
            "cloudDataRate": self.cloud_gb_per_hour,
            "aiQueryIntensity": dict(self.ai_query_kg),
            "aiModel": self.ai_model,
            "aiKgPerMinute": self.ai_kg_per_minute,
            "annualization": self.annualization,
        }
