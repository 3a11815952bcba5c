"""Unit tests for severity classification.

Pure function tests - no mocks needed.
"""

import math

import pytest

from src.core.severity import (
    Severity,
    from_alert_level,
    from_category_label,
    from_magnitude,
)


class TestFromMagnitude:
    """Tests for from_magnitude()."""

    @pytest.mark.parametrize("magnitude", [6.0, 6.2, 7.8, 9.5])
    def test_six_and_above_is_emergency(self, magnitude):
        assert from_magnitude(magnitude) == Severity.EMERGENCY

    @pytest.mark.parametrize("magnitude", [4.0, 4.5, 5.99])
    def test_four_to_six_is_alert(self, magnitude):
        assert from_magnitude(magnitude) == Severity.ALERT

    @pytest.mark.parametrize("magnitude", [-1.0, 0.0, 2.5, 3.99])
    def test_below_four_is_info(self, magnitude):
        assert from_magnitude(magnitude) == Severity.INFO

    def test_absent_is_info(self):
        assert from_magnitude(None) == Severity.INFO

    def test_nan_is_info(self):
        assert from_magnitude(math.nan) == Severity.INFO


class TestFromCategoryLabel:
    """Tests for from_category_label()."""

    @pytest.mark.parametrize("label", ["Wildfires", "Volcanoes", "Severe Storms"])
    def test_emergency_categories(self, label):
        assert from_category_label(label) == Severity.EMERGENCY

    @pytest.mark.parametrize("label", ["Earthquakes", "Floods", "Hurricanes"])
    def test_alert_categories(self, label):
        assert from_category_label(label) == Severity.ALERT

    @pytest.mark.parametrize("label", ["Sea and Lake Ice", "Dust and Haze", "Drought"])
    def test_other_categories_are_info(self, label):
        assert from_category_label(label) == Severity.INFO

    @pytest.mark.parametrize("label", [None, ""])
    def test_absent_label_is_info(self, label):
        assert from_category_label(label) == Severity.INFO

    def test_match_is_case_insensitive(self):
        assert from_category_label("WILDFIRE") == Severity.EMERGENCY
        assert from_category_label("fLoOdS") == Severity.ALERT

    def test_emergency_wins_over_alert(self):
        """Emergency keywords are checked before alert keywords."""
        assert from_category_label("Floods after wildfire") == Severity.EMERGENCY
        assert from_category_label("Earthquake-triggered volcano") == Severity.EMERGENCY


class TestFromAlertLevel:
    """Tests for from_alert_level()."""

    @pytest.mark.parametrize("level", ["Extreme", "Severe", "extreme", "SEVERE"])
    def test_extreme_and_severe_are_emergency(self, level):
        assert from_alert_level(level) == Severity.EMERGENCY

    def test_moderate_is_alert(self):
        assert from_alert_level("Moderate") == Severity.ALERT

    @pytest.mark.parametrize("level", ["Minor", "Unknown", "", None])
    def test_anything_else_is_info(self, level):
        assert from_alert_level(level) == Severity.INFO


class TestSeverity:
    """Tests for the Severity enum."""

    def test_values(self):
        assert [s.value for s in Severity] == ["info", "alert", "emergency"]
