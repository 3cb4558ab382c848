"""Tests for answer coercion, lookup tables and response normalisation."""

import copy

import pytest

from digital_footprint.coercion import (
    coerce_flag,
    coerce_number,
    is_blank,
    parse_number,
)
from digital_footprint.estimation import normalize_response
from digital_footprint.estimation.normalization import DEVICE_FIELDS
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

MIDPOINT_TABLES = [
    STREAMING_ACADEMIC_HOURS,
    STREAMING_ENTERTAINMENT_HOURS,
    CLOUD_HOURS,
    DEVICE_DAILY_HOURS,
    DEVICE_AGE_YEARS,
    AI_INTERACTIONS_PER_DAY,
    AI_SESSION_MINUTES,
]


class TestCoercion:
    """Scalar coercion of raw answers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(3, 3.0), (2.5, 2.5), ("4", 4.0), (" 7.5 ", 7.5), ("-2", -2.0)],
    )
    def test_parse_number_accepts_numbers(self, value, expected):
        """Numbers and numeric strings parse to floats."""
        assert parse_number(value) == expected

    @pytest.mark.parametrize(
        "value", [None, "", "abc", "6-15 hrs", True, False, [], "nan", "inf"]
    )
    def test_parse_number_rejects_non_numbers(self, value):
        """Booleans, labels and non-finite strings are not numbers."""
        assert parse_number(value) is None

    @pytest.mark.parametrize("value", [None, "abc", -3, "-1", float("nan"), True])
    def test_coerce_number_defaults_to_zero(self, value):
        """Anything unusable or negative becomes zero."""
        assert coerce_number(value) == 0.0

    def test_is_blank(self):
        """Whitespace-only strings count as unanswered."""
        assert is_blank(None)
        assert is_blank("   ")
        assert not is_blank("0")
        assert not is_blank(0)

    def test_coerce_flag_is_strict(self):
        """Only the literal True sets a flag."""
        assert coerce_flag(True)
        assert not coerce_flag("true")
        assert not coerce_flag(1)
        assert not coerce_flag(None)


class TestTables:
    """Range-label and multiplier lookup tables."""

    @pytest.mark.parametrize("table", MIDPOINT_TABLES, ids=lambda t: t.name)
    def test_every_offered_label_resolves(self, table):
        """Each select option yields a finite, non-negative value."""
        for label in table.options:
            value = table.resolve(label)
            assert value >= 0.0, label

    @pytest.mark.parametrize(
        ("table", "label", "expected"),
        [
            (STREAMING_ACADEMIC_HOURS, "6-15 hrs - Moderate usage", 10.0),
            (STREAMING_ACADEMIC_HOURS, "16-30 hrs - Heavy usage", 23.0),
            (STREAMING_ACADEMIC_HOURS, "30+ hrs - Very heavy usage", 35.0),
            (STREAMING_ENTERTAINMENT_HOURS, "11-25 hrs - Moderate usage", 18.0),
            (STREAMING_ENTERTAINMENT_HOURS, "40+ hrs - Very heavy usage", 45.0),
            (CLOUD_HOURS, "Less than 1 hr", 0.5),
            (CLOUD_HOURS, "11-20 hrs", 15.0),
            (CLOUD_HOURS, "20+ hrs", 25.0),
            (DEVICE_DAILY_HOURS, "More than 10 hrs", 12.0),
            (DEVICE_DAILY_HOURS, "Always on (24 hrs)", 24.0),
            (DEVICE_AGE_YEARS, "5+ years", 6.0),
            (AI_INTERACTIONS_PER_DAY, "11-20 times", 15.0),
            (AI_INTERACTIONS_PER_DAY, "More than 20 times", 25.0),
            (AI_SESSION_MINUTES, "Less than 1 minute", 0.5),
            (AI_SESSION_MINUTES, "16-30 minutes", 23.0),
        ],
    )
    def test_range_labels_map_to_midpoints(self, table, label, expected):
        """Labels whose text overlaps earlier patterns still hit their own row."""
        assert table.resolve(label) == expected

    def test_unmatched_and_blank_labels_are_zero(self):
        """Unknown labels fall back to zero rather than raising."""
        assert STREAMING_ACADEMIC_HOURS.resolve("0 hrs - None") == 0.0
        assert CLOUD_HOURS.resolve("None") == 0.0
        assert AI_INTERACTIONS_PER_DAY.resolve("Never") == 0.0
        assert DEVICE_DAILY_HOURS.resolve("") == 0.0
        assert DEVICE_DAILY_HOURS.resolve(None) == 0.0
        assert DEVICE_DAILY_HOURS.resolve(["4"]) == 0.0

    def test_numeric_answers_are_taken_literally(self):
        """Simple-form numbers bypass the label table."""
        assert DEVICE_DAILY_HOURS.resolve("4") == 4.0
        assert STREAMING_ACADEMIC_HOURS.resolve(12) == 12.0
        assert CLOUD_HOURS.resolve(-3) == 0.0

    def test_lookup_is_case_sensitive(self):
        """Pattern matching does not fold case."""
        assert CLOUD_HOURS.resolve("less than 1 hr") == 0.0

    def test_power_source_multipliers(self):
        """Renewable answers scale device emissions down."""
        expected = [0.2, 0.4, 0.6, 0.75, 0.9, 1.0, 0.8]
        resolved = [
            POWER_SOURCE_MULTIPLIERS.resolve(label)
            for label in POWER_SOURCE_MULTIPLIERS.options
        ]
        assert resolved == expected

    def test_multiplier_neutral_versus_default(self):
        """Unanswered is neutral while unrecognised uses the table default."""
        assert POWER_SOURCE_MULTIPLIERS.resolve(None) == 1.0
        assert POWER_SOURCE_MULTIPLIERS.resolve("") == 1.0
        assert POWER_SOURCE_MULTIPLIERS.resolve("Something else") == 0.8
        assert CHARGING_MULTIPLIERS.resolve(None) == 1.0
        assert CHARGING_MULTIPLIERS.resolve("Whenever") == 1.0

    def test_charging_multipliers(self):
        """Each charging habit maps to its factor."""
        resolved = [
            CHARGING_MULTIPLIERS.resolve(label)
            for label in CHARGING_MULTIPLIERS.options
        ]
        assert resolved == [0.9, 0.95, 0.85, 1.1, 1.2]

    def test_ai_interaction_types(self):
        """Interaction labels resolve to intensity keys."""
        resolved = [
            AI_INTERACTION_TYPES.resolve(label)
            for label in AI_INTERACTION_TYPES.options
        ]
        assert resolved == ["text", "image", "code", "voice", "mixed"]
        assert AI_INTERACTION_TYPES.resolve("Something else") == "default"
        assert AI_INTERACTION_TYPES.resolve(None) == "default"


class TestNormalizeResponse:
    """Response-level normalisation."""

    def test_empty_response(self):
        """An empty (or missing) response normalises to neutral values."""
        for response in ({}, None):
            normalized = normalize_response(response)
            assert not any(entry.is_active for entry in normalized.devices)
            assert normalized.streaming_hours == 0.0
            assert normalized.cloud_hours == 0.0
            assert normalized.bulk_gb_per_month == 0.0
            assert normalized.power_source_multiplier == 1.0
            assert normalized.charging_multiplier == 1.0
            assert normalized.ai_interaction_type == "default"

    def test_device_categories_follow_form_order(self):
        """Every known device category is represented once."""
        normalized = normalize_response({})
        categories = [entry.category for entry in normalized.devices]
        assert categories == [fields.category for fields in DEVICE_FIELDS]
        assert "Other" in categories

    def test_simple_and_extended_device_answers(self):
        """Numeric hours and range labels feed the same entry fields."""
        normalized = normalize_response(
            {
                "smartphone": 2,
                "smartphoneDuration": "4",
                "laptop": "1",
                "laptopDuration": "7-10 hrs",
                "laptopAge": "3-4 years",
                "otherDevices": "1",
                "otherDevicesDuration": "Always on (24 hrs)",
            }
        )
        by_category = {entry.category: entry for entry in normalized.devices}
        assert by_category["Smartphone"].count == 2.0
        assert by_category["Smartphone"].daily_hours == 4.0
        assert by_category["Laptop"].daily_hours == 8.5
        assert by_category["Laptop"].age_years == 3.5
        assert by_category["Other"].daily_hours == 24.0

    def test_invalid_device_answers_are_inactive(self):
        """Negative, boolean and garbage counts contribute nothing."""
        normalized = normalize_response(
            {
                "smartphone": -1,
                "smartphoneDuration": "4",
                "laptop": True,
                "laptopDuration": "4",
                "tablet": "many",
                "tabletDuration": "4",
            }
        )
        assert not any(entry.is_active for entry in normalized.devices)

    def test_streaming_quality_is_upper_cased(self):
        """Quality tiers are matched case-insensitively."""
        quality = normalize_response({"streamingQuality": " hd "}).streaming_quality
        assert quality == "HD"
        assert normalize_response({"streamingQuality": ""}).streaming_quality is None
        assert normalize_response({"streamingQuality": 4}).streaming_quality is None

    def test_no_devices_flag(self):
        """The no-devices flag is read strictly."""
        assert normalize_response({"noDevices": True}).no_devices
        assert not normalize_response({"noDevices": "true"}).no_devices

    def test_response_is_not_mutated(self, full_response):
        """Normalisation leaves the caller's mapping untouched."""
        snapshot = copy.deepcopy(full_response)
        normalize_response(full_response)
        assert full_response == snapshot
