"""Unit tests for time parsing and formatting helpers.

Run with: pytest tests/test_timefmt.py -v
"""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from festivals.domain.timefmt import (
    calendar_filename,
    combine_local,
    format_day_label,
    format_long_date,
    format_time_range,
    parse_clock,
    resolve_set_times,
)

DAY = date(2025, 8, 29)


class TestParseClock:
    def test_parses_hh_mm(self):
        assert parse_clock("09:05") == time(9, 5)
        assert parse_clock("9:05") == time(9, 5)

    @pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "12", ""])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValueError):
            parse_clock(value)


class TestResolveSetTimes:
    def test_combine_local_handles_daylight_saving(self):
        summer = combine_local(DAY, "12:00", "Europe/London")
        winter = combine_local(date(2025, 12, 1), "12:00", "Europe/London")
        assert summer.utcoffset() == timedelta(hours=1)
        assert winter.utcoffset() == timedelta(0)

    def test_same_day(self):
        r = resolve_set_times(DAY, "18:00", "19:00", "UTC")
        assert r.start == datetime(2025, 8, 29, 18, 0, tzinfo=timezone.utc)
        assert r.end == datetime(2025, 8, 29, 19, 0, tzinfo=timezone.utc)

    def test_midnight_end_is_clamped_to_end_of_day(self):
        """An end of 00:00 means the end of the same day."""
        r = resolve_set_times(DAY, "22:30", "00:00", "UTC")
        assert r.end == datetime(2025, 8, 29, 23, 59, tzinfo=timezone.utc)

    def test_end_before_start_rolls_to_next_day(self):
        r = resolve_set_times(DAY, "23:30", "01:30", "UTC")
        assert r.end == datetime(2025, 8, 30, 1, 30, tzinfo=timezone.utc)
        assert r.duration == timedelta(hours=2)

    def test_uses_festival_timezone(self):
        r = resolve_set_times(DAY, "18:00", "19:00", "America/Vancouver")
        assert r.start.astimezone(timezone.utc) == datetime(2025, 8, 30, 1, 0, tzinfo=timezone.utc)


class TestFormatting:
    def test_time_range_in_local_time(self):
        start = datetime(2025, 8, 30, 1, 0, tzinfo=timezone.utc)
        end = datetime(2025, 8, 30, 2, 15, tzinfo=timezone.utc)
        assert format_time_range(start, end, "America/Vancouver") == "18:00–19:15"

    def test_day_labels(self):
        assert format_day_label(DAY) == "Fri 29 Aug"
        assert format_long_date(DAY) == "Aug 29, 2025"


class TestCalendarFilename:
    def test_replaces_unsafe_characters(self):
        assert calendar_filename("My Plan: Day #1") == "my_plan__day__1.ics"

    def test_keeps_hyphen_and_underscore(self):
        assert calendar_filename("pacific-sound_2025") == "pacific-sound_2025.ics"

    def test_default_name(self):
        assert calendar_filename(None) == "schedule.ics"
