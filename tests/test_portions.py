"""Tests for portion count clamping."""
import sys

import pytest

from portion_calculator.nutrition.portions import (
    RecipeScale,
    clamp_desired_portions,
    clamp_original_portions,
)


class TestClampOriginalPortions:
    """Tests for clamp_original_portions."""

    @pytest.mark.parametrize("value", ["0", 0, "-3", -3, "abc", "", None])
    def test_invalid_becomes_one(self, value):
        """Test that zero, negatives and non-numeric input clamp to 1."""
        assert clamp_original_portions(value) == 1

    def test_no_upper_bound(self):
        """Test that large yields are kept."""
        assert clamp_original_portions("100") == 100
        assert clamp_original_portions(250) == 250

    def test_truncates_fractions(self):
        """Test that fractional input is truncated to an integer."""
        assert clamp_original_portions("3.7") == 3
        assert clamp_original_portions(3.7) == 3

    def test_overlong_digit_string(self):
        """Test that an enormous yield is kept as a very large count."""
        assert clamp_original_portions("9" * 5000) == sys.maxsize

    def test_reads_leading_integer(self):
        """Test that trailing text is ignored."""
        assert clamp_original_portions(" 12 people") == 12


class TestClampDesiredPortions:
    """Tests for clamp_desired_portions."""

    @pytest.mark.parametrize("value", ["0", 0, "-1", "x", None])
    def test_invalid_becomes_one(self, value):
        """Test that zero, negatives and non-numeric input clamp to 1."""
        assert clamp_desired_portions(value) == 1

    def test_in_range_kept(self):
        """Test that values inside [1, 20] are unchanged."""
        assert clamp_desired_portions("5") == 5
        assert clamp_desired_portions(1) == 1
        assert clamp_desired_portions(20) == 20

    def test_above_maximum(self):
        """Test that values above 20 clamp to 20."""
        assert clamp_desired_portions("25") == 20
        assert clamp_desired_portions(1000) == 20

    def test_overlong_digit_strings(self):
        """Test that thousands of digits clamp instead of failing to parse."""
        assert clamp_desired_portions("9" * 5000) == 20
        assert clamp_desired_portions("-" + "9" * 5000) == 1
        assert clamp_desired_portions("0" * 5000 + "7") == 7

    def test_custom_maximum(self):
        """Test clamping against a configured maximum."""
        assert clamp_desired_portions("15", maximum=10) == 10


class TestRecipeScale:
    """Tests for RecipeScale."""

    def test_defaults(self):
        """Test that both counts default to 4."""
        scale = RecipeScale()
        assert scale.original_portions == 4
        assert scale.desired_portions == 4
        assert scale.scale_ratio == 1.0

    def test_scale_ratio(self):
        """Test ratio = desired / original."""
        assert RecipeScale(4, 8).scale_ratio == 2.0
        assert RecipeScale(4, 1).scale_ratio == 0.25

    def test_from_inputs_clamps(self):
        """Test that raw inputs are clamped on construction."""
        scale = RecipeScale.from_inputs("0", "25")
        assert scale.original_portions == 1
        assert scale.desired_portions == 20
