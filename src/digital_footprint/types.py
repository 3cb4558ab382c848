"""Type definitions for digital footprint payloads."""

from __future__ import annotations

from typing import Mapping, TypedDict

SurveyResponse = Mapping[str, object]


class EmissionBreakdownDict(TypedDict):
    """Export shape of an emission breakdown (kg CO2 per year)."""

    deviceKg: float
    dataKg: float
    aiKg: float
    totalKg: float


class DataVolumeDict(TypedDict):
    """Annual data volume split in gigabytes."""

    streaming_gb: float
    cloud_gb: float
    bulk_gb: float
    total_gb: float


class ExportPayloadDict(TypedDict):
    """JSON export record written for a single respondent."""

    participantId: str
    timestamp: str
    form: dict[str, object]
    results: EmissionBreakdownDict
    cityState: str
