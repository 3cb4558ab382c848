"""Categorical answer tables used to normalise survey responses.

Every table is an ordered sequence of ``(pattern, value)`` pairs. A label
matches an entry when the pattern is a case-sensitive substring of the label,
and the first matching entry wins. The option lists mirror the select inputs
offered by the questionnaire so that each offered label has a defined value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Generic, TypeVar

from digital_footprint.coercion import (
    coerce_number,
    is_blank,
    parse_number,
)

__all__ = [
    "AI_INTERACTIONS_PER_DAY",
    "AI_INTERACTION_TYPES",
    "AI_SESSION_MINUTES",
    "CHARGING_MULTIPLIERS",
    "CLOUD_HOURS",
    "DEVICE_AGE_YEARS",
    "DEVICE_DAILY_HOURS",
    "KeyTable",
    "MidpointTable",
    "MultiplierTable",
    "POWER_SOURCE_MULTIPLIERS",
    "STREAMING_ACADEMIC_HOURS",
    "STREAMING_ENTERTAINMENT_HOURS",
    "TABLE_VERSION",
]

TABLE_VERSION: Final[str] = "2025.1"

_V = TypeVar("_V")


@dataclass(frozen=True, slots=True)
class _PatternTable(Generic[_V]):
    """Ordered substring table shared by the concrete table types."""

    name: str
    entries: tuple[tuple[str, _V], ...]
    default: _V
    options: tuple[str, ...] = ()

    def lookup(self, label: str) -> _V:
        """Return the value of the first entry whose pattern occurs in ``label``."""

        for pattern, value in self.entries:
            if pattern in label:
                return value
        return self.default


@dataclass(frozen=True, slots=True)
class MidpointTable(_PatternTable[float]):
    """Map range labels such as ``"6-15 hrs"`` to representative midpoints."""

    def resolve(self, value: object) -> float:
        """Resolve a raw answer to a non-negative quantity.

        Numbers and numeric strings are taken literally. Other strings are
        matched against the table. Anything else, including blanks, is ``0``.
        """

        if is_blank(value):
            return 0.0
        if parse_number(value) is not None:
            return coerce_number(value)
        if isinstance(value, str):
            return float(self.lookup(value))
        return 0.0


@dataclass(frozen=True, slots=True)
class MultiplierTable(_PatternTable[float]):
    """Map an answer to a scaling factor.

    ``neutral`` applies when the question was not answered at all, while
    ``default`` applies to answers that do not match any pattern.
    """

    neutral: float = 1.0

    def resolve(self, value: object) -> float:
        """Resolve a raw answer to its multiplier."""

        if is_blank(value) or not isinstance(value, str):
            return self.neutral
        return float(self.lookup(value))


@dataclass(frozen=True, slots=True)
class KeyTable(_PatternTable[str]):
    """Map an answer to a configuration key."""

    def resolve(self, value: object) -> str:
        """Resolve a raw answer to a key, falling back to ``default``."""

        if is_blank(value) or not isinstance(value, str):
            return self.default
        return self.lookup(value)


STREAMING_ACADEMIC_HOURS: Final = MidpointTable(
    name="streaming_academic_hours_per_week",
    entries=(
        ("1-5", 3.0),
        ("6-15", 10.0),
        ("16-30", 23.0),
        ("30+", 35.0),
    ),
    default=0.0,
    options=(
        "0 hrs - None",
        "1-5 hrs - Light usage",
        "6-15 hrs - Moderate usage",
        "16-30 hrs - Heavy usage",
        "30+ hrs - Very heavy usage",
    ),
)

STREAMING_ENTERTAINMENT_HOURS: Final = MidpointTable(
    name="streaming_entertainment_hours_per_week",
    entries=(
        ("1-10", 5.0),
        ("11-25", 18.0),
        ("26-40", 33.0),
        ("40+", 45.0),
    ),
    default=0.0,
    options=(
        "0 hrs - None",
        "1-10 hrs - Light usage",
        "11-25 hrs - Moderate usage",
        "26-40 hrs - Heavy usage",
        "40+ hrs - Very heavy usage",
    ),
)

CLOUD_HOURS: Final = MidpointTable(
    name="cloud_hours_per_week",
    entries=(
        ("Less than 1", 0.5),
        ("1-5", 3.0),
        ("6-10", 8.0),
        ("11-20", 15.0),
        ("20+", 25.0),
    ),
    default=0.0,
    options=(
        "None",
        "Less than 1 hr",
        "1-5 hrs",
        "6-10 hrs",
        "11-20 hrs",
        "20+ hrs",
    ),
)

DEVICE_DAILY_HOURS: Final = MidpointTable(
    name="device_daily_hours",
    entries=(
        ("Less than 1", 0.5),
        ("1-3", 2.0),
        ("4-6", 5.0),
        ("7-10", 8.5),
        ("More than 10", 12.0),
        ("Always on", 24.0),
    ),
    default=0.0,
    options=(
        "Not used",
        "Less than 1 hr",
        "1-3 hrs",
        "4-6 hrs",
        "7-10 hrs",
        "More than 10 hrs",
        "Always on (24 hrs)",
    ),
)

DEVICE_AGE_YEARS: Final = MidpointTable(
    name="device_age_years",
    entries=(
        ("Less than 1", 0.5),
        ("1-2", 1.5),
        ("3-4", 3.5),
        ("5+", 6.0),
    ),
    default=0.0,
    options=(
        "Less than 1 year",
        "1-2 years",
        "3-4 years",
        "5+ years",
    ),
)

AI_INTERACTIONS_PER_DAY: Final = MidpointTable(
    name="ai_interactions_per_day",
    entries=(
        ("1-5", 3.0),
        ("6-10", 8.0),
        ("11-20", 15.0),
        ("More than 20", 25.0),
    ),
    default=0.0,
    options=(
        "Never",
        "1-5 times",
        "6-10 times",
        "11-20 times",
        "More than 20 times",
    ),
)

AI_SESSION_MINUTES: Final = MidpointTable(
    name="ai_session_minutes",
    entries=(
        ("Less than 1", 0.5),
        ("1-5", 3.0),
        ("6-15", 10.0),
        ("16-30", 23.0),
        ("More than 30", 45.0),
    ),
    default=0.0,
    options=(
        "Less than 1 minute",
        "1-5 minutes",
        "6-15 minutes",
        "16-30 minutes",
        "More than 30 minutes",
    ),
)

AI_INTERACTION_TYPES: Final = KeyTable(
    name="ai_interaction_type",
    entries=(
        ("Text", "text"),
        ("Image", "image"),
        ("Code", "code"),
        ("Voice", "voice"),
        ("Mixed", "mixed"),
    ),
    default="default",
    options=(
        "Text generation (ChatGPT, Claude, etc.)",
        "Image generation (DALL-E, Midjourney, etc.)",
        "Code assistance (Copilot, etc.)",
        "Voice assistants (Siri, Alexa, etc.)",
        "Mixed usage",
    ),
)

POWER_SOURCE_MULTIPLIERS: Final = MultiplierTable(
    name="renewable_energy_usage",
    entries=(
        ("Yes - fully", 0.2),
        ("Mostly", 0.4),
        ("About half", 0.6),
        ("Partial", 0.75),
        ("Rarely", 0.9),
        ("Not sure", 0.8),
        ("Don't know", 0.8),
        ("No", 1.0),
    ),
    default=0.8,
    neutral=1.0,
    options=(
        "Yes - fully renewable (solar/wind)",
        "Mostly renewable (75%+)",
        "About half renewable",
        "Partial / Sometimes",
        "Rarely (under 10%)",
        "No - grid electricity only",
        "Don't know",
    ),
)

CHARGING_MULTIPLIERS: Final = MultiplierTable(
    name="charging_habits",
    entries=(
        ("Unplug when fully charged", 0.9),
        ("Only when battery is low", 0.95),
        ("Smart / optimized charging", 0.85),
        ("Charge overnight", 1.1),
        ("Always plugged in", 1.2),
    ),
    default=1.0,
    neutral=1.0,
    options=(
        "Unplug when fully charged",
        "Only when battery is low",
        "Smart / optimized charging",
        "Charge overnight",
        "Always plugged in",
    ),
)
