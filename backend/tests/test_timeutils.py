"""Unit tests for clock-string and date parsing.

Run with: pytest backend/tests/test_timeutils.py -v
"""

from datetime import date

import pytest

from venuebook.domain import FormatError
from venuebook.domain.timeutils import (
    MINUTES_PER_DAY,
    minutes_to_time,
    overlaps,
    parse_date,
    time_to_minutes,
)


class TestTimeToMinutes:
    """Tests for time_to_minutes."""

    @pytest.mark.parametrize(
        "value, expected",
        [("00:00", 0), ("09:00", 540), ("9:05", 545), ("23:59", 1439), ("24:00", 1440)],
    )
    def test_parses_24_hour_clock(self, value, expected):
        """HH:MM strings convert to minutes since midnight."""
        assert time_to_minutes(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("12:00 AM", 0), ("9:30 am", 570), ("12:15 PM", 735), ("1:00PM", 780)],
    )
    def test_parses_12_hour_clock(self, value, expected):
        """AM/PM strings are accepted."""
        assert time_to_minutes(value) == expected

    @pytest.mark.parametrize("value", ["25:00", "12:60", "24:01", "noon", "", "13:00 PM", "0:30 AM"])
    def test_rejects_malformed(self, value):
        """Malformed clock strings raise FormatError."""
        with pytest.raises(FormatError):
            time_to_minutes(value)

    def test_rejects_non_string(self):
        """Non-string input raises FormatError."""
        with pytest.raises(FormatError):
            time_to_minutes(900)


class TestMinutesToTime:
    """Tests for minutes_to_time."""

    def test_zero_pads(self):
        """Output is always HH:MM."""
        assert minutes_to_time(65) == "01:05"

    def test_wraps_at_midnight(self):
        """A slot ending at midnight renders as 00:00."""
        assert minutes_to_time(MINUTES_PER_DAY) == "00:00"

    def test_rejects_negative(self):
        """Negative offsets raise FormatError."""
        with pytest.raises(FormatError):
            minutes_to_time(-1)

    def test_round_trips_day_grid(self):
        """Every minute of the day survives a round trip."""
        for minutes in range(0, MINUTES_PER_DAY, 17):
            assert time_to_minutes(minutes_to_time(minutes)) == minutes


class TestParseDate:
    """Tests for parse_date."""

    def test_parses_iso_date(self):
        """YYYY-MM-DD is parsed."""
        assert parse_date("2025-06-16") == date(2025, 6, 16)

    def test_passes_through_date(self):
        """A date instance is returned unchanged."""
        assert parse_date(date(2025, 6, 16)) == date(2025, 6, 16)

    @pytest.mark.parametrize("value", ["2025-6-16", "16/06/2025", "2025-02-30", "", None])
    def test_rejects_malformed(self, value):
        """Anything but a real YYYY-MM-DD date raises FormatError."""
        with pytest.raises(FormatError):
            parse_date(value)


class TestOverlaps:
    """Tests for half-open interval overlap."""

    def test_touching_intervals_do_not_overlap(self):
        """[10:00,11:00) and [11:00,12:00) share no minute."""
        assert not overlaps(600, 660, 660, 720)

    def test_partial_overlap(self):
        """Intervals sharing a minute overlap."""
        assert overlaps(600, 660, 630, 690)

    def test_containment(self):
        """An interval inside another overlaps it."""
        assert overlaps(540, 1020, 780, 840)
