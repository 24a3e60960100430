"""Time parsing and formatting helpers shared by seeding, views and export."""

import re
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from festivals.domain.value_objects import TimeRange

END_OF_DAY_SENTINEL = "00:00"
END_OF_DAY = time(23, 59)

_CLOCK_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")
_FILENAME_RE = re.compile(r"[^a-z0-9\-_]", re.IGNORECASE)


def parse_clock(value: str) -> time:
    """Parse an ``HH:MM`` wall-clock string."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"Invalid time format: {value!r}")
    return time(int(match.group(1)), int(match.group(2)))


def combine_local(day: date, clock: str | time, tz: str) -> datetime:
    if isinstance(clock, str):
        clock = parse_clock(clock)
    return datetime.combine(day, clock, tzinfo=ZoneInfo(tz))


def resolve_set_times(day: date, start: str, end: str, tz: str) -> TimeRange:
    """Turn a set's listed wall-clock times into an aware interval.

    An end of ``00:00`` is the end-of-day sentinel and is clamped to 23:59
    of the same day. Any other end at or before the start belongs to the
    following day.
    """
    start_at = combine_local(day, start, tz)
    if end.strip() == END_OF_DAY_SENTINEL:
        end_at = combine_local(day, END_OF_DAY, tz)
    else:
        end_at = combine_local(day, end, tz)
        if end_at <= start_at:
            end_at = combine_local(day + timedelta(days=1), end, tz)
    return TimeRange(start=start_at, end=end_at)


def to_local(value: datetime, tz: str) -> datetime:
    return value.astimezone(ZoneInfo(tz))


def format_clock(value: datetime, tz: str) -> str:
    return to_local(value, tz).strftime("%H:%M")


def format_time_range(start: datetime, end: datetime, tz: str) -> str:
    return f"{format_clock(start, tz)}–{format_clock(end, tz)}"


def format_day_label(day: date) -> str:
    return f"{day:%a} {day.day} {day:%b}"


def format_long_date(day: date) -> str:
    return f"{day:%b} {day.day}, {day.year}"


def calendar_filename(name: str | None) -> str:
    """Build a download name; characters outside ``[a-z0-9-_]`` become ``_``."""
    base = name or "schedule"
    return f"{_FILENAME_RE.sub('_', base).lower()}.ics"
