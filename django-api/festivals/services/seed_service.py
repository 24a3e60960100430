"""Seed service - bulk-loads festival reference data.

Input describes wall-clock times as listed on a printed timetable; the
service resolves them into aware intervals in the festival's timezone and
replaces the festival's stages and sets in one go.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from festivals.domain import FestivalSlug, Lineup
from festivals.domain.errors import SeedValidationError
from festivals.domain.timefmt import resolve_set_times
from festivals.stores.interfaces import FestivalSeed, FestivalStore, SetSeed


@dataclass(frozen=True)
class SetListing:
    """One timetable row: ``start``/``end`` are ``HH:MM`` strings."""

    artist: str
    date: date
    start: str
    end: str
    stage: str


@dataclass(frozen=True)
class SeedResult:
    lineup: Lineup
    stage_count: int
    set_count: int


class SeedService:
    """Service for loading festival lineups."""

    def __init__(self, store: FestivalStore) -> None:
        self._store = store

    def seed_festival(
        self,
        festival: FestivalSeed,
        stages: Sequence[str],
        listings: Sequence[SetListing],
    ) -> SeedResult:
        """Upsert a festival by slug and replace its stages and sets.

        Raises:
            SeedValidationError: If the payload is internally inconsistent.
        """
        self._validate_festival(festival, stages)
        known = set(stages)

        sets: list[SetSeed] = []
        for row in listings:
            if row.stage not in known:
                raise SeedValidationError(f"Set {row.artist!r} references unknown stage {row.stage!r}")
            try:
                times = resolve_set_times(row.date, row.start, row.end, festival.timezone)
            except ValueError as exc:
                raise SeedValidationError(f"Set {row.artist!r} has invalid times: {exc}") from exc
            sets.append(
                SetSeed(
                    artist=row.artist,
                    date=row.date,
                    start_time=times.start,
                    end_time=times.end,
                    stage=row.stage,
                )
            )

        lineup = self._store.replace_lineup(festival, list(stages), sets)
        logger.info(f"Seeded festival: {lineup.festival.name}")
        logger.info(f"Location: {lineup.festival.location}")
        logger.info(f"Stages: {len(lineup.stages)}")
        logger.info(f"Sets: {len(lineup.sets)}")
        return SeedResult(lineup=lineup, stage_count=len(lineup.stages), set_count=len(lineup.sets))

    @staticmethod
    def _validate_festival(festival: FestivalSeed, stages: Sequence[str]) -> None:
        try:
            FestivalSlug(festival.slug)
        except ValueError as exc:
            raise SeedValidationError(str(exc)) from exc
        if festival.start_date > festival.end_date:
            raise SeedValidationError("Festival start_date is after end_date")
        try:
            ZoneInfo(festival.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise SeedValidationError(f"Unknown timezone {festival.timezone!r}") from None
        duplicates = sorted({name for name in stages if list(stages).count(name) > 1})
        if duplicates:
            raise SeedValidationError(f"Duplicate stage names: {', '.join(duplicates)}")
