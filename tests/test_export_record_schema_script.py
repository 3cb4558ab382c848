"""Tests for the schema export script."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "export_record_schema.py"


def test_script_writes_export_record_schema(tmp_path: Path) -> None:
    """The script emits a JSON Schema describing export records."""

    spec = importlib.util.spec_from_file_location("export_record_schema", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    path = module.main(tmp_path / "schema.json")

    schema = json.loads(path.read_text(encoding="utf-8"))
    assert schema["title"] == "ExportRecord"
    assert set(schema["required"]) == {"participantId", "timestamp", "results"}
    assert schema["properties"]["participantId"]["pattern"] == r"^P\d+$"
