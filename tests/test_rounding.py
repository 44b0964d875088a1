"""
Tests for coordinate rounding.
"""

import math

import pytest

from geocompact.rounding import is_number, round_coordinate, round_coordinates


class TestRoundCoordinate:
    """Test the decimal-shift rounder."""

    def test_standard_rounding_not_truncation(self):
        """Test that the last kept digit is rounded, not cut."""
        assert round_coordinate(139.7454331234, 4) == 139.7454
        assert round_coordinate(35.6585812345, 4) == 35.6586

    def test_ties_away_from_zero(self):
        """Test that exact halves move away from zero."""
        assert round_coordinate(2.5, 0) == 3
        assert round_coordinate(-2.5, 0) == -3
        assert round_coordinate(0.125, 2) == 0.13
        assert round_coordinate(-0.125, 2) == -0.13

    def test_precision_zero_gives_integer(self):
        """Test that precision 0 returns an int."""
        result = round_coordinate(12.7, 0)
        assert result == 13
        assert isinstance(result, int)

    def test_integral_result_becomes_int(self):
        """Test that a float rounding to a whole number serializes without '.0'."""
        result = round_coordinate(10.00001, 4)
        assert result == 10
        assert isinstance(result, int)

    def test_integers_unchanged(self):
        """Test that ints pass through."""
        assert round_coordinate(42, 3) == 42

    def test_negative_zero_collapses(self):
        """Test that tiny negatives round to plain 0."""
        assert round_coordinate(-0.0000001, 4) == 0

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_pass_through(self, value):
        """Test that NaN and infinities are not sanitized."""
        result = round_coordinate(value, 6)
        if math.isnan(value):
            assert math.isnan(result)
        else:
            assert result == value

    def test_huge_values_unchanged(self):
        """Test that values with no fractional bits to spare are returned as-is."""
        assert round_coordinate(1e300, 10) == 1e300
        assert round_coordinate(123456789.123456789, 10) == 123456789.123456789

    def test_just_below_half_rounds_down(self):
        """Test values a hair under .5 after scaling are not rounded up."""
        assert round_coordinate(0.49999999999999994, 0) == 0
        assert round_coordinate(-0.49999999999999994, 0) == 0
        assert round_coordinate(0.5, 0) == 1

    def test_idempotent(self):
        """Test that rounding twice equals rounding once."""
        values = [139.7454331234, -73.98513, 0.1 + 0.2, 1e-9, -179.9999995, 51.5, 2.675]
        for value in values:
            for precision in range(0, 11):
                once = round_coordinate(value, precision)
                assert round_coordinate(once, precision) == once


class TestRoundCoordinates:
    """Test nested rounding."""

    def test_nested_lists(self):
        """Test that every number at every depth is rounded."""
        coords = [[[1.23456, 2.34567], [3.45678, 4.56789, 100.55555]]]
        assert round_coordinates(coords, 2) == [[[1.23, 2.35], [3.46, 4.57, 100.56]]]

    def test_non_numbers_untouched(self):
        """Test that strings, bools and None come back unchanged."""
        assert round_coordinates(["a", True, None, 1.26], 1) == ["a", True, None, 1.3]

    def test_is_number_excludes_bool(self):
        """Test that booleans are not treated as numbers."""
        assert is_number(1.5)
        assert is_number(3)
        assert not is_number(True)
        assert not is_number("1")
