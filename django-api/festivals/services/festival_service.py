"""Festival service - read side of the festival catalog.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors
"""

from dataclasses import dataclass
from datetime import date

from festivals.domain import Festival, FestivalSlug, Lineup
from festivals.domain.errors import FestivalNotFoundError, InvalidDayError, InvalidFestivalSlugError
from festivals.domain.scheduling import StageGrouping, festival_days, group_by_stage
from festivals.stores.interfaces import FestivalStore


@dataclass(frozen=True)
class Schedule:
    """Timetable of one festival day, one column per stage."""

    festival: Festival
    days: tuple[date, ...]
    grouping: StageGrouping


def parse_slug(slug: str) -> FestivalSlug:
    try:
        return FestivalSlug(slug)
    except ValueError:
        raise InvalidFestivalSlugError() from None


def parse_day(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise InvalidDayError(value) from None


def resolve_day(lineup: Lineup, value: str | None) -> date | None:
    """Parse ``value`` and check it falls on a day of the festival."""
    chosen = parse_day(value)
    if chosen is None:
        return None
    festival = lineup.festival
    if chosen not in festival_days(lineup.sets) and not festival.start_date <= chosen <= festival.end_date:
        raise InvalidDayError(value or "")
    return chosen


class FestivalService:
    """Service for festival catalog operations."""

    def __init__(self, store: FestivalStore) -> None:
        self._store = store

    def list_festivals(self) -> list[Festival]:
        """Return all festivals ordered by start date."""
        return self._store.list_festivals()

    def get_festival(self, slug: str) -> Festival:
        """Return a festival by slug.

        Raises:
            InvalidFestivalSlugError: If the slug is malformed.
            FestivalNotFoundError: If the festival does not exist.
        """
        festival = self._store.get_festival(parse_slug(slug))
        if festival is None:
            raise FestivalNotFoundError(slug)
        return festival

    def get_lineup(self, slug: str) -> Lineup:
        """Return a festival with its stages and sets.

        Raises:
            InvalidFestivalSlugError: If the slug is malformed.
            FestivalNotFoundError: If the festival does not exist.
        """
        lineup = self._store.get_lineup(parse_slug(slug))
        if lineup is None:
            raise FestivalNotFoundError(slug)
        return lineup

    def get_schedule(self, slug: str, day: str | None = None) -> Schedule:
        """Return stage columns for ``day`` (first day with sets by default).

        Raises:
            InvalidDayError: If the day is malformed or outside the festival.
        """
        lineup = self.get_lineup(slug)
        festival = lineup.festival
        days = tuple(festival_days(lineup.sets))

        chosen = resolve_day(lineup, day)
        if chosen is None:
            chosen = days[0] if days else festival.start_date

        return Schedule(
            festival=festival,
            days=days,
            grouping=group_by_stage(lineup.sets, lineup.stage_names, day=chosen),
        )
