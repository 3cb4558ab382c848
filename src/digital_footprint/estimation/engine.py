"""Core footprint formulas for devices, data transfer and AI usage."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from digital_footprint.config_loader.models import (
    DAYS_PER_YEAR,
    MONTHS_PER_YEAR,
    EmissionFactorConfig,
)
from digital_footprint.estimation.normalization import NormalizedResponse
from digital_footprint.models import DataVolume, DeviceUsageEntry, EmissionBreakdown
from digital_footprint.rounding import saturating_product, saturating_sum

_LOGGER = logging.getLogger("digital_footprint.estimation.engine")

_MINUTES_PER_QUERY = 2.0


@dataclass(slots=True)
class EstimationEngine:
    """Apply the emission formulas to a normalised response."""

    config: EmissionFactorConfig
    logger: logging.Logger = _LOGGER

    def device_emissions(
        self,
        entries: Iterable[DeviceUsageEntry],
        *,
        power_source_multiplier: float = 1.0,
        charging_multiplier: float = 1.0,
    ) -> dict[str, float]:
        """Return annual kg CO2 per device category.

        Categories without a configured power draw contribute nothing.
        """

        per_category: dict[str, float] = {}
        for entry in entries:
            if not entry.is_active:
                continue
            watts = self.config.device_power_w.get(entry.category)
            if watts is None:
                self.logger.debug(
                    "No power draw configured for device category",
                    extra={"category": entry.category},
                )
                continue
            kwh_per_year = (
                saturating_product(watts, entry.daily_hours, DAYS_PER_YEAR) / 1000.0
            )
            kg = saturating_product(
                entry.count,
                kwh_per_year,
                self.config.grid_intensity,
                power_source_multiplier,
                charging_multiplier,
            )
            per_category[entry.category] = saturating_sum(
                (per_category.get(entry.category, 0.0), kg)
            )
        return per_category

    def device_kg(self, normalized: NormalizedResponse) -> dict[str, float]:
        """Device emissions for a response, honouring the no-devices flag."""

        if normalized.no_devices:
            return {}
        return self.device_emissions(
            normalized.devices,
            power_source_multiplier=normalized.power_source_multiplier,
            charging_multiplier=normalized.charging_multiplier,
        )

    def streaming_rate(self, quality: str | None) -> float:
        """GB per streaming hour for ``quality``, or the flat rate."""

        if quality:
            for tier, rate in self.config.streaming_quality_gb_per_hour.items():
                if tier.upper() == quality:
                    return rate
        return self.config.streaming_gb_per_hour

    def data_volume(self, normalized: NormalizedResponse) -> DataVolume:
        """Annual data volume implied by streaming, cloud and bulk transfers."""

        weeks = self.config.weeks_per_year
        streaming_gb = saturating_product(
            normalized.streaming_hours,
            self.streaming_rate(normalized.streaming_quality),
            weeks,
        )
        cloud_gb = saturating_product(
            normalized.cloud_hours, self.config.cloud_gb_per_hour, weeks
        )
        bulk_gb = saturating_product(normalized.bulk_gb_per_month, MONTHS_PER_YEAR)
        return DataVolume(streaming_gb=streaming_gb, cloud_gb=cloud_gb, bulk_gb=bulk_gb)

    def data_kg(self, volume: DataVolume) -> float:
        return saturating_product(volume.total_gb, self.config.data_transfer_intensity)

    def ai_queries_per_year(self, normalized: NormalizedResponse) -> float:
        """Annual AI query count under the extended model (0 if unknown)."""

        interactions = normalized.ai_interactions_per_day
        minutes = normalized.ai_session_minutes
        # Two unknowns must not multiply into a non-zero estimate.
        if interactions <= 0 or minutes <= 0:
            return 0.0
        queries_per_session = max(1.0, minutes / _MINUTES_PER_QUERY)
        return saturating_product(interactions, queries_per_session, DAYS_PER_YEAR)

    def ai_kg(self, normalized: NormalizedResponse) -> float:
        """Annual AI emissions using the configured AI model."""

        if self.config.ai_model == "simple":
            return saturating_product(
                normalized.ai_interactions_per_day,
                normalized.ai_session_minutes,
                DAYS_PER_YEAR,
                self.config.ai_kg_per_minute,
            )
        queries = self.ai_queries_per_year(normalized)
        if queries <= 0:
            return 0.0
        return saturating_product(
            queries, self.config.ai_factor_for(normalized.ai_interaction_type)
        )

    def estimate(self, normalized: NormalizedResponse) -> EmissionBreakdown:
        """Compute the full breakdown for a normalised response."""

        per_device = self.device_kg(normalized)
        volume = self.data_volume(normalized)
        queries = (
            self.ai_queries_per_year(normalized)
            if self.config.ai_model == "extended"
            else 0.0
        )
        breakdown = EmissionBreakdown(
            raw_device_kg=saturating_sum(per_device.values()),
            raw_data_kg=self.data_kg(volume),
            raw_ai_kg=self.ai_kg(normalized),
            device_entries=per_device,
            data_volume=volume,
            ai_queries_per_year=queries,
        )
        self.logger.debug(
            "Footprint computed",
            extra={
                "device_kg": breakdown.device_kg,
                "data_kg": breakdown.data_kg,
                "ai_kg": breakdown.ai_kg,
                "total_kg": breakdown.total_kg,
            },
        )
        return breakdown
