"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

_FOOTPRINT_ENV_VARS = (
    "FOOTPRINT_CONFIG_PATH",
    "FOOTPRINT_WEBHOOK_URL",
    "FOOTPRINT_SUBMIT_TIMEOUT",
    "FOOTPRINT_EXPORT_DIR",
    "FOOTPRINT_GRID_INTENSITY",
    "FOOTPRINT_CARBON_PRICE",
    "FOOTPRINT_SOCIAL_COST_MULTIPLIER",
    "FOOTPRINT_ANNUALIZATION",
)


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Path:
    """Clear footprint env vars and run each test from an empty directory.

    The config loader searches ``config/`` and ``configs/`` relative to the
    working directory, so tests must not pick up files from the checkout.
    """

    for name in _FOOTPRINT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def smartphone_response() -> dict[str, object]:
    """One smartphone used four hours a day."""

    return {"smartphone": "1", "smartphoneDuration": "4"}


@pytest.fixture
def streaming_response() -> dict[str, object]:
    """Moderate academic and entertainment streaming."""

    return {
        "streamingAcademicHrsPerWeek": "6-15 hrs - Moderate usage",
        "streamingNonAcademicHrsPerWeek": "11-25 hrs - Moderate usage",
    }


@pytest.fixture
def ai_response() -> dict[str, object]:
    """Light text-generation usage."""

    return {
        "aiInteractionsPerDay": "1-5 times",
        "typicalAiSessionMinutes": "1-5 minutes",
        "aiTypes": "Text generation (ChatGPT, Claude, etc.)",
    }


@pytest.fixture
def full_response(
    smartphone_response: dict[str, object],
    streaming_response: dict[str, object],
    ai_response: dict[str, object],
) -> dict[str, object]:
    """A consenting respondent combining every usage section."""

    return {
        "age": "18-24",
        "gender": "Prefer not to say",
        "city": "Pune",
        "state": "Maharashtra",
        "consent": True,
        **smartphone_response,
        **streaming_response,
        **ai_response,
    }
