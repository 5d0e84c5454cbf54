"""Tests for utility functions."""

from datetime import time

import pytest

from commission_planner.utils import (
    format_time,
    minutes_of_day,
    normalize_day_name,
    parse_time,
    safe_float,
)


class TestParseTime:
    """Tests for parse_time function."""

    def test_hh_mm(self):
        """Test the standard HH:MM format."""
        assert parse_time("09:30") == time(9, 30)

    def test_single_digit_hour(self):
        """Test an hour without leading zero."""
        assert parse_time("9:05") == time(9, 5)

    def test_dotted_format(self):
        """Test '9.30' as written in some catalog exports."""
        assert parse_time("9.30") == time(9, 30)

    def test_compact_format(self):
        """Test '0930' without separator."""
        assert parse_time("0930") == time(9, 30)

    def test_surrounding_whitespace(self):
        """Test whitespace is ignored."""
        assert parse_time(" 18:00 ") == time(18, 0)

    def test_time_object_passthrough(self):
        """Test an existing time drops seconds."""
        assert parse_time(time(10, 15, 42)) == time(10, 15)

    def test_invalid_string(self):
        """Test garbage raises ValueError."""
        with pytest.raises(ValueError):
            parse_time("nine")

    def test_out_of_range(self):
        """Test impossible hour raises ValueError."""
        with pytest.raises(ValueError):
            parse_time("25:00")


class TestFormatTime:
    """Tests for format_time and minutes_of_day functions."""

    def test_format_pads(self):
        """Test hours and minutes are zero padded."""
        assert format_time(time(9, 5)) == "09:05"

    def test_minutes_of_day(self):
        """Test minutes since midnight."""
        assert minutes_of_day(time(1, 30)) == 90
        assert minutes_of_day(time(0, 0)) == 0


class TestNormalizeDayName:
    """Tests for normalize_day_name function."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Monday", "monday"),
            ("  FRIDAY ", "friday"),
            ("sat", "saturday"),
            ("martes", "tuesday"),
            ("Miércoles", "wednesday"),
            ("miercoles", "wednesday"),
            ("SÁBADO", "saturday"),
            ("any", "any"),
        ],
    )
    def test_known_names(self, raw, expected):
        """Test English, abbreviated and Spanish names."""
        assert normalize_day_name(raw) == expected

    def test_unknown_name(self):
        """Test unknown names return None."""
        assert normalize_day_name("domingo") is None

    def test_empty(self):
        """Test empty input returns None."""
        assert normalize_day_name("") is None


class TestSafeFloat:
    """Tests for safe_float function."""

    def test_number_string(self):
        assert safe_float("1.5") == 1.5

    def test_empty_uses_default(self):
        assert safe_float("", default=2.0) == 2.0
        assert safe_float(None) == 0.0

    def test_invalid_uses_default(self):
        assert safe_float("abc", default=-1.0) == -1.0
