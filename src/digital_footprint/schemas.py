"""Pydantic models describing the public export schema."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PARTICIPANT_ID_PATTERN = r"^P\d+$"


class ResultsRecord(BaseModel):
    """Rounded emission breakdown as stored in an export."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    deviceKg: float = Field(..., ge=0.0, description="Device emissions (kg CO2/yr).")
    dataKg: float = Field(..., ge=0.0, description="Data transfer emissions (kg CO2/yr).")
    aiKg: float = Field(..., ge=0.0, description="AI usage emissions (kg CO2/yr).")
    totalKg: float = Field(..., ge=0.0, description="Total emissions (kg CO2/yr).")


class ExportRecord(BaseModel):
    """Immutable export of a single survey session."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    participantId: str = Field(
        ...,
        pattern=PARTICIPANT_ID_PATTERN,
        description="Participant identifier, 'P' followed by epoch milliseconds.",
    )
    timestamp: datetime = Field(
        ...,
        description="Moment the export was produced (ISO-8601, UTC).",
    )
    form: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw survey response exactly as captured.",
    )
    results: ResultsRecord = Field(
        ...,
        description="Emission breakdown computed from ``form``.",
    )
    cityState: str = Field(
        default="",
        description="Display string combining city and state.",
    )

    def model_dump_json_ready(self) -> dict[str, object]:
        """Return a JSON-serialisable payload."""

        return self.model_dump(mode="json")
