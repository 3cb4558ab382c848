"""Footprint data models for the digital-footprint toolkit.

:class:`EmissionBreakdown` is returned by
:meth:`~digital_footprint.estimation.FootprintEstimator.estimate`. Use
:meth:`EmissionBreakdown.to_dict` for the export/results shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from digital_footprint.rounding import round_half_up, saturate, saturating_sum
from digital_footprint.types import DataVolumeDict, EmissionBreakdownDict


@dataclass(frozen=True, slots=True)
class DeviceUsageEntry:
    """A device category owned by the respondent.

    Attributes:
        category: Device category name as used by the power-draw table.
        count: Number of devices owned.
        daily_hours: Average hours of use per day.
        age_years: Approximate device age; informational only.
    """

    category: str
    count: float = 0.0
    daily_hours: float = 0.0
    age_years: float = 0.0

    @property
    def is_active(self) -> bool:
        """Whether the entry can contribute emissions."""

        return self.count > 0 and self.daily_hours > 0


@dataclass(frozen=True, slots=True)
class DataVolume:
    """Annual network transfer attributed to the respondent."""

    streaming_gb: float = 0.0
    cloud_gb: float = 0.0
    bulk_gb: float = 0.0

    @property
    def total_gb(self) -> float:
        """Total annual transfer in gigabytes."""

        return saturating_sum((self.streaming_gb, self.cloud_gb, self.bulk_gb))

    def to_dict(self) -> DataVolumeDict:
        """Return the volume split as a plain dictionary."""

        return {
            "streaming_gb": self.streaming_gb,
            "cloud_gb": self.cloud_gb,
            "bulk_gb": self.bulk_gb,
            "total_gb": self.total_gb,
        }


@dataclass(frozen=True)
class EmissionBreakdown:
    """
    Annual emissions split across devices, data transfer and AI usage.

    The rounded fields are what gets displayed and exported. The raw fields
    keep full precision so ``total_kg`` can be rounded once from the exact sum.
    """

    raw_device_kg: float
    raw_data_kg: float
    raw_ai_kg: float

    # Diagnostics
    device_entries: dict[str, float] = field(default_factory=dict)
    data_volume: DataVolume = field(default_factory=DataVolume)
    ai_queries_per_year: float = 0.0

    @classmethod
    def zero(cls) -> "EmissionBreakdown":
        """Return an all-zero breakdown."""

        return cls(raw_device_kg=0.0, raw_data_kg=0.0, raw_ai_kg=0.0)

    @property
    def device_kg(self) -> float:
        return round_half_up(saturate(self.raw_device_kg))

    @property
    def data_kg(self) -> float:
        return round_half_up(saturate(self.raw_data_kg))

    @property
    def ai_kg(self) -> float:
        return round_half_up(saturate(self.raw_ai_kg))

    @property
    def total_kg(self) -> float:
        """Total emissions, rounded once from the unrounded component sum."""

        return round_half_up(saturating_sum(self._raw_parts()))

    def to_dict(self) -> EmissionBreakdownDict:
        """Return the results shape used by exports and submissions."""

        return {
            "deviceKg": self.device_kg,
            "dataKg": self.data_kg,
            "aiKg": self.ai_kg,
            "totalKg": self.total_kg,
        }

    def shares(self) -> dict[str, float]:
        """Return each category's share of the total, as used for charting."""

        device, data, ai = self._raw_parts()
        total = saturating_sum((device, data, ai))
        if total <= 0:
            return {"Devices": 0.0, "Data & Streaming": 0.0, "AI": 0.0}
        return {
            "Devices": device / total,
            "Data & Streaming": data / total,
            "AI": ai / total,
        }

    def _raw_parts(self) -> tuple[float, float, float]:
        return (
            saturate(self.raw_device_kg),
            saturate(self.raw_data_kg),
            saturate(self.raw_ai_kg),
        )
