"""Calendar export - renders a plan as an iCalendar (RFC 5545) document."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger

from festivals.domain import Festival, Plan, PlanId, Set
from festivals.domain.errors import CalendarExportError, InvalidPlanIdError, PlanNotFoundError
from festivals.domain.timefmt import calendar_filename, format_long_date
from festivals.stores.interfaces import FestivalStore, PlanStore

PRODUCT_ID = "-//FestivalPlanner//EN"
CONTENT_TYPE = "text/calendar; charset=utf-8"

_MAX_LINE_OCTETS = 75


@dataclass(frozen=True)
class CalendarFile:
    filename: str
    content: str
    event_count: int


def ics_datetime(value: datetime) -> str:
    return value.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\r", "\\n")
        .replace("\n", "\\n")
    )


def fold_line(line: str) -> list[str]:
    """Split a content line into chunks of at most 75 octets.

    Continuation lines start with a single space; multi-byte characters are
    never split.
    """
    parts: list[str] = []
    current = ""
    for char in line:
        if len((current + char).encode("utf-8")) > _MAX_LINE_OCTETS:
            parts.append(current)
            current = " "
        current += char
    parts.append(current)
    return parts


def event_lines(plan: Plan, festival: Festival, s: Set, stamp: datetime) -> list[str]:
    return [
        "BEGIN:VEVENT",
        f"UID:{plan.id}-{s.id}@festival-planner",
        f"DTSTAMP:{ics_datetime(stamp)}",
        f"DTSTART:{ics_datetime(s.start_time)}",
        f"DTEND:{ics_datetime(s.end_time)}",
        f"SUMMARY:{escape_text(f'{s.artist} @ {s.stage}')}",
        f"DESCRIPTION:{escape_text(f'{festival.name} • {format_long_date(s.date)}')}",
        f"LOCATION:{escape_text(festival.location)}",
        "STATUS:CONFIRMED",
        "END:VEVENT",
    ]


def render_calendar(plan: Plan, festival: Festival, sets: list[Set], stamp: datetime) -> str:
    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODUCT_ID}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
        f"X-WR-CALNAME:{escape_text(plan.name or festival.name)}",
    ]
    for s in sets:
        lines += event_lines(plan, festival, s, stamp)
    lines.append("END:VCALENDAR")

    folded = [part for line in lines for part in fold_line(line)]
    return "\r\n".join(folded) + "\r\n"


class CalendarService:
    """Service for exporting plans to calendar files."""

    def __init__(
        self,
        festival_store: FestivalStore,
        plan_store: PlanStore,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self._festivals = festival_store
        self._plans = plan_store
        self._clock = clock

    def export_plan(self, plan_id: str) -> CalendarFile:
        """Render one VEVENT per set in the plan.

        Raises:
            InvalidPlanIdError: If the plan_id is not a valid UUID.
            PlanNotFoundError: If the plan does not exist.
            CalendarExportError: If the document cannot be rendered.
        """
        try:
            pid = PlanId.from_string(plan_id)
        except ValueError:
            raise InvalidPlanIdError() from None

        plan = self._plans.get_plan(pid)
        if plan is None:
            raise PlanNotFoundError(plan_id)
        festival = self._festivals.get_festival_by_id(plan.festival_id)
        if festival is None:
            raise PlanNotFoundError(plan_id)

        sets = self._plans.get_plan_sets(pid)
        try:
            content = render_calendar(plan, festival, sets, self._clock())
        except (ValueError, TypeError, OverflowError) as exc:
            logger.exception(f"Calendar generation failed for plan {plan_id}: {exc}")
            raise CalendarExportError() from exc

        return CalendarFile(
            filename=calendar_filename(plan.name),
            content=content,
            event_count=len(sets),
        )
