"""Helpers to serialise survey sessions to JSON exports and read them back."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import ValidationError

from .estimation import FootprintEstimator
from .models import EmissionBreakdown
from .schemas import ExportRecord
from .types import ExportPayloadDict, SurveyResponse

LOGGER = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

__all__ = [
    "ExportFormatError",
    "build_export_payload",
    "export_filename",
    "format_city_state",
    "format_timestamp",
    "generate_participant_id",
    "load_export",
    "recompute_export",
    "write_export",
]


class ExportFormatError(ValueError):
    """Raised when an export file cannot be read or fails validation."""


def _utc_now(now: datetime | None) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def generate_participant_id(now: datetime | None = None) -> str:
    """Return ``P<unix-epoch-millis>`` for ``now`` (defaults to current time)."""

    moment = _utc_now(now)
    return f"P{(moment - _EPOCH) // timedelta(milliseconds=1)}"


def format_timestamp(now: datetime | None = None) -> str:
    """Return an ISO-8601 UTC timestamp with millisecond precision and ``Z``."""

    moment = _utc_now(now)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_city_state(response: SurveyResponse) -> str:
    """Combine the ``city`` and ``state`` answers into a display string."""

    city = response.get("city")
    state = response.get("state")
    c = city.strip() if isinstance(city, str) else ""
    s = state.strip() if isinstance(state, str) else ""
    if c and s:
        return f"{c}, {s}"
    return c or s


def build_export_payload(
    response: SurveyResponse,
    breakdown: EmissionBreakdown,
    *,
    now: datetime | None = None,
) -> ExportPayloadDict:
    """Assemble the export record for a survey session.

    Args:
        response: Raw survey answers; copied verbatim into ``form``.
        breakdown: Breakdown computed from ``response``.
        now: Export moment. Defaults to the current UTC time.

    Returns:
        JSON-ready mapping with participant id, timestamp, form, results and
        the derived city/state string.
    """

    moment = _utc_now(now)
    return {
        "participantId": generate_participant_id(moment),
        "timestamp": format_timestamp(moment),
        "form": dict(response),
        "results": breakdown.to_dict(),
        "cityState": format_city_state(response),
    }


def export_filename(participant_id: str) -> str:
    """Return the conventional file name for an export."""

    return f"survey_{participant_id}.json"


def write_export(payload: ExportPayloadDict, directory: str | Path) -> Path:
    """Write ``payload`` as indented JSON into ``directory``.

    Args:
        payload: Export record produced by :func:`build_export_payload`.
        directory: Target directory; created when missing.

    Returns:
        Path of the written file.
    """

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)
    path = target_dir / export_filename(payload["participantId"])
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
    LOGGER.info(
        "Survey export written",
        extra={"participant_id": payload["participantId"], "path": str(path)},
    )
    return path


def load_export(path: str | Path) -> ExportRecord:
    """Read and validate an export file.

    Args:
        path: Location of a ``survey_<id>.json`` export.

    Returns:
        Validated :class:`ExportRecord`.

    Raises:
        ExportFormatError: If the file is unreadable, not JSON, or does not
            match the export schema.
    """

    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ExportFormatError(f"Cannot read export file: {path}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ExportFormatError(f"Export file is not valid JSON: {path}") from exc
    if not isinstance(data, dict):
        raise ExportFormatError("Export JSON must be an object at the top level.")
    try:
        return ExportRecord.model_validate(data)
    except ValidationError as exc:
        raise ExportFormatError(f"Export file does not match schema: {path}") from exc


def recompute_export(
    record: ExportRecord, estimator: FootprintEstimator | None = None
) -> EmissionBreakdown:
    """Re-run the estimation on an exported response."""

    engine = estimator or FootprintEstimator()
    return engine.estimate(record.form)
