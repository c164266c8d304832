"""Unit tests for date, duration and timestamp helpers."""

from datetime import datetime

import pytest

from smart_link_formatter.utils.dates import (
    format_date,
    format_duration,
    format_timestamp,
    parse_date,
    parse_timestamp_seconds,
    render_date,
)


class TestParseDate:
    @pytest.mark.parametrize(
        "value",
        [
            "20240105",
            "2024/01/05",
            "2024-01-05",
            "January 5, 2024",
            "Jan 5, 2024",
            "5 January 2024",
        ],
    )
    def test_known_formats(self, value):
        """Test parsing of the supported date formats."""
        parsed = parse_date(value)
        assert parsed is not None
        assert (parsed.year, parsed.month, parsed.day) == (2024, 1, 5)

    def test_iso_with_zulu(self):
        """Test ISO dates with a Z suffix."""
        parsed = parse_date("2024-01-05T10:20:30Z")
        assert parsed is not None
        assert parsed.hour == 10
        assert parsed.utcoffset() is not None

    @pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45"])
    def test_invalid(self, value):
        """Test unparsable dates return None."""
        assert parse_date(value) is None


def test_format_date():
    """Test the default date rendering."""
    assert format_date("2009-10-24") == "2009/10/24"
    assert format_date("garbage") == "garbage"


class TestRenderDate:
    value = datetime(2024, 3, 9, 14, 5, 7)

    def test_moment_tokens(self):
        """Test moment-style year, month and day tokens."""
        assert render_date(self.value, "YYYY-MM-DD HH:mm:ss") == "2024-03-09 14:05:07"

    def test_short_tokens(self):
        assert render_date(self.value, "D/M/YY") == "9/3/24"

    def test_names(self):
        """Test month and weekday names."""
        assert render_date(self.value, "dddd, MMMM D") == "Saturday, March 9"

    def test_twelve_hour_clock(self):
        """Test twelve-hour clock tokens."""
        assert render_date(self.value, "h:mm A") == "2:05 PM"

    def test_bracketed_literal(self):
        """Test bracketed text is kept literally."""
        assert render_date(self.value, "[Day] D") == "Day 9"

    def test_strftime(self):
        """Test strftime-style formats."""
        assert render_date(self.value, "%Y.%m.%d") == "2024.03.09"


class TestDurations:
    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(0, "0:00"), (5, "0:05"), (90, "1:30"), (3600, "1:00:00"), (3723, "1:02:03")],
    )
    def test_format_duration(self, seconds, expected):
        """Test durations render as h:mm:ss."""
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("90", 90),
            ("90s", 90),
            ("1m30s", 90),
            ("1h2m3s", 3723),
            ("2h", 7200),
            ("", 0),
            (None, 0),
            ("abc", 0),
        ],
    )
    def test_parse_timestamp_seconds(self, value, expected):
        """Test plain and compound timestamps."""
        assert parse_timestamp_seconds(value) == expected

    def test_format_timestamp(self):
        assert format_timestamp(90) == "@1:30"
        assert format_timestamp(3661) == "@1:01:01"

    def test_zero_timestamp_is_empty(self):
        """Test a zero timestamp renders nothing."""
        assert format_timestamp(0) == ""
