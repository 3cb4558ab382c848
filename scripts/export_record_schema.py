"""Export the survey export record JSON Schema."""

from __future__ import annotations

import json
from pathlib import Path

from digital_footprint.schemas import ExportRecord


def main(output_path: Path | None = None) -> Path:
    """Write the JSON Schema for :class:`ExportRecord`.

    Args:
        output_path: Target file. Defaults to ``export_record_schema.json``
            at the repository root.

    Returns:
        Path of the written schema.
    """

    schema = ExportRecord.model_json_schema()
    target = output_path or (
        Path(__file__).resolve().parent.parent / "export_record_schema.json"
    )
    target.write_text(json.dumps(schema, indent=2), encoding="utf-8")
    return target


if __name__ == "__main__":
    main()
