"""Convert raw survey answers into the quantities used by the formulas.

Both response shapes are accepted: the simple form with plain hour and count
numbers, and the extended form with range labels, device ages, charging
habits and renewable energy usage. Missing or unparseable answers resolve to
neutral values and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from digital_footprint.coercion import coerce_flag, coerce_number
from digital_footprint.estimation.tables import (
    AI_INTERACTIONS_PER_DAY,
    AI_INTERACTION_TYPES,
    AI_SESSION_MINUTES,
    CHARGING_MULTIPLIERS,
    CLOUD_HOURS,
    DEVICE_AGE_YEARS,
    DEVICE_DAILY_HOURS,
    POWER_SOURCE_MULTIPLIERS,
    STREAMING_ACADEMIC_HOURS,
    STREAMING_ENTERTAINMENT_HOURS,
)
from digital_footprint.models import DeviceUsageEntry
from digital_footprint.rounding import saturating_sum
from digital_footprint.types import SurveyResponse

__all__ = [
    "DEVICE_FIELDS",
    "DeviceFields",
    "NormalizedResponse",
    "normalize_response",
]


@dataclass(frozen=True, slots=True)
class DeviceFields:
    """Form field names describing one device category."""

    category: str
    count: str
    duration: str
    age: str


DEVICE_FIELDS: Final[tuple[DeviceFields, ...]] = (
    DeviceFields("Smartphone", "smartphone", "smartphoneDuration", "smartphoneAge"),
    DeviceFields("Laptop", "laptop", "laptopDuration", "laptopAge"),
    DeviceFields("Tablet", "tablet", "tabletDuration", "tabletAge"),
    DeviceFields("Desktop", "desktop", "desktopDuration", "desktopAge"),
    DeviceFields("Smart TV", "smartTV", "smartTVDuration", "smartTVAge"),
    DeviceFields(
        "Gaming Console", "gamingConsole", "gamingConsoleDuration", "gamingConsoleAge"
    ),
    DeviceFields(
        "Streaming Device",
        "streamingDevice",
        "streamingDeviceDuration",
        "streamingDeviceAge",
    ),
    DeviceFields(
        "Smart Home Devices",
        "smartHomeDevices",
        "smartHomeDevicesDuration",
        "smartHomeDevicesAge",
    ),
    DeviceFields("Router", "router", "routerDuration", "routerAge"),
    DeviceFields("Other", "otherDevices", "otherDevicesDuration", "otherDevicesAge"),
)


@dataclass(frozen=True, slots=True)
class NormalizedResponse:
    """Numeric view of a survey response.

    Attributes:
        devices: One entry per known device category, in form order.
        no_devices: Respondent declared owning no electronic devices.
        power_source_multiplier: Scaling from renewable energy usage.
        charging_multiplier: Scaling from charging habits.
        streaming_academic_hours: Academic streaming hours per week.
        streaming_entertainment_hours: Non-academic streaming hours per week.
        streaming_quality: Requested quality tier, if any.
        cloud_hours: Cloud service hours per week.
        bulk_gb_per_month: Large uploads/transfers per month in GB.
        ai_interactions_per_day: AI assistant interactions per day.
        ai_session_minutes: Typical AI session length in minutes.
        ai_interaction_type: Key into the AI query intensity table.
    """

    devices: tuple[DeviceUsageEntry, ...] = ()
    no_devices: bool = False
    power_source_multiplier: float = 1.0
    charging_multiplier: float = 1.0
    streaming_academic_hours: float = 0.0
    streaming_entertainment_hours: float = 0.0
    streaming_quality: str | None = None
    cloud_hours: float = 0.0
    bulk_gb_per_month: float = 0.0
    ai_interactions_per_day: float = 0.0
    ai_session_minutes: float = 0.0
    ai_interaction_type: str = "default"

    @property
    def streaming_hours(self) -> float:
        """Total streaming hours per week."""

        return saturating_sum(
            (self.streaming_academic_hours, self.streaming_entertainment_hours)
        )


def _normalize_devices(response: SurveyResponse) -> tuple[DeviceUsageEntry, ...]:
    entries: list[DeviceUsageEntry] = []
    for fields in DEVICE_FIELDS:
        entries.append(
            DeviceUsageEntry(
                category=fields.category,
                count=coerce_number(response.get(fields.count)),
                daily_hours=DEVICE_DAILY_HOURS.resolve(response.get(fields.duration)),
                age_years=DEVICE_AGE_YEARS.resolve(response.get(fields.age)),
            )
        )
    return tuple(entries)


def _normalize_quality(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    quality = value.strip().upper()
    return quality or None


def normalize_response(response: SurveyResponse | None) -> NormalizedResponse:
    """Normalise a raw survey response.

    Args:
        response: Mapping of form field names to raw answers. ``None`` is
            treated as an empty response.

    Returns:
        The numeric view consumed by the estimation engine. ``response`` is
        not modified.
    """

    if response is None:
        response = {}

    return NormalizedResponse(
        devices=_normalize_devices(response),
        no_devices=coerce_flag(response.get("noDevices")),
        power_source_multiplier=POWER_SOURCE_MULTIPLIERS.resolve(
            response.get("renewableEnergyUsage")
        ),
        charging_multiplier=CHARGING_MULTIPLIERS.resolve(
            response.get("chargingHabits")
        ),
        streaming_academic_hours=STREAMING_ACADEMIC_HOURS.resolve(
            response.get("streamingAcademicHrsPerWeek")
        ),
        streaming_entertainment_hours=STREAMING_ENTERTAINMENT_HOURS.resolve(
            response.get("streamingNonAcademicHrsPerWeek")
        ),
        streaming_quality=_normalize_quality(response.get("streamingQuality")),
        cloud_hours=CLOUD_HOURS.resolve(response.get("cloudHoursPerWeek")),
        bulk_gb_per_month=coerce_number(response.get("largeTransfersPerMonth")),
        ai_interactions_per_day=AI_INTERACTIONS_PER_DAY.resolve(
            response.get("aiInteractionsPerDay")
        ),
        ai_session_minutes=AI_SESSION_MINUTES.resolve(
            response.get("typicalAiSessionMinutes")
        ),
        ai_interaction_type=AI_INTERACTION_TYPES.resolve(response.get("aiTypes")),
    )
