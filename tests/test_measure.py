"""
Tests for size and ratio measurement.
"""

import pytest

from geocompact.measure import (
    canonical_dumps,
    compression_ratio,
    format_bytes,
    measure_bytes,
    measure_text_bytes,
    savings,
)


class TestMeasureBytes:
    """Test byte size measurement."""

    def test_canonical_has_no_whitespace(self):
        """Test the minified encoding."""
        assert canonical_dumps({"a": [1, 2], "b": {"c": True}}) == '{"a":[1,2],"b":{"c":true}}'

    def test_utf8_length(self):
        """Test that non-ASCII text counts in UTF-8 bytes."""
        assert canonical_dumps({"name": "é"}) == '{"name":"é"}'
        assert measure_bytes({"name": "é"}) == 13

    def test_whitespace_does_not_count(self):
        """Test that equal values measure equal whatever their formatting."""
        assert measure_bytes({"a": 1}) == measure_text_bytes('{"a":1}')

    def test_text_bytes(self):
        """Test raw text measurement."""
        assert measure_text_bytes('{ "a" : 1 }') == 11
        assert measure_text_bytes(b"abc") == 3


class TestRatio:
    """Test compression ratio and savings."""

    def test_ratio(self):
        """Test compressed size as a percentage of original."""
        assert compression_ratio(200, 50) == 25.0
        assert compression_ratio(3, 1) == 33.3

    def test_ratio_zero_original(self):
        """Test that an empty original gives 0, not NaN."""
        assert compression_ratio(0, 0) == 0
        assert compression_ratio(0, 10) == 0

    def test_savings(self):
        """Test bytes saved."""
        assert savings(1000, 400) == 600


class TestFormatBytes:
    """Test human-readable sizes."""

    @pytest.mark.parametrize("num_bytes, expected", [
        (0, "0 Bytes"),
        (512, "512 Bytes"),
        (1024, "1 KB"),
        (1536, "1.5 KB"),
        (1048576, "1 MB"),
        (5 * 1024 ** 3, "5 GB"),
        (3 * 1024 ** 4, "3072 GB"),
    ])
    def test_format(self, num_bytes, expected):
        """Test unit selection and rounding."""
        assert format_bytes(num_bytes) == expected
