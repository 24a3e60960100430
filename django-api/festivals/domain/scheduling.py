"""Conflict detection and day/stage grouping of sets.

All functions are pure: they take domain sets and return new structures,
never touching storage.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from itertools import combinations

from loguru import logger

from festivals.domain.models import Set
from festivals.domain.value_objects import SetId


@dataclass(frozen=True)
class StageColumn:
    """Sets of one stage on one day, ordered by start time."""

    stage: str
    sets: tuple[Set, ...] = ()


@dataclass(frozen=True)
class StageGrouping:
    """Stage columns for a day plus sets whose stage is not known."""

    day: date | None
    columns: tuple[StageColumn, ...] = ()
    unplaced: tuple[Set, ...] = field(default_factory=tuple)

    @property
    def placed_count(self) -> int:
        return sum(len(column.sets) for column in self.columns)

    def column(self, stage: str) -> StageColumn:
        for candidate in self.columns:
            if candidate.stage == stage:
                return candidate
        raise KeyError(stage)


def sets_overlap(a: Set, b: Set) -> bool:
    return a.time_range.overlaps(b.time_range)


def conflict_pairs(sets: Iterable[Set]) -> list[tuple[Set, Set]]:
    """Return every overlapping pair once, earlier-starting set first."""
    ordered = sort_by_start(sets)
    return [(a, b) for a, b in combinations(ordered, 2) if a.id != b.id and sets_overlap(a, b)]


def find_conflicts(sets: Iterable[Set]) -> frozenset[SetId]:
    """Return ids of sets that overlap at least one other set.

    Pairwise comparison over all pairs; touching endpoints are not a
    conflict and no transitive grouping is done.
    """
    conflicting: set[SetId] = set()
    for a, b in combinations(list(sets), 2):
        if a.id != b.id and sets_overlap(a, b):
            conflicting.add(a.id)
            conflicting.add(b.id)
    return frozenset(conflicting)


def sort_by_start(sets: Iterable[Set]) -> list[Set]:
    # sorted() is stable, so ties keep input order.
    return sorted(sets, key=lambda s: s.start_time)


def group_by_day(sets: Iterable[Set]) -> dict[date, list[Set]]:
    """Partition sets by their calendar ``date``, days ascending.

    The set's own date is used rather than its start timestamp so a set
    starting after midnight stays on the day it is billed under.
    """
    by_day: dict[date, list[Set]] = {}
    for s in sets:
        by_day.setdefault(s.date, []).append(s)
    return {day: sort_by_start(by_day[day]) for day in sorted(by_day)}


def festival_days(sets: Iterable[Set]) -> list[date]:
    return sorted({s.date for s in sets})


def group_by_stage(
    sets: Iterable[Set],
    stages: Sequence[str],
    day: date | None = None,
) -> StageGrouping:
    """Build one column per known stage for ``day`` (or for all sets).

    Every known stage yields a column even when empty. Sets referencing an
    unknown stage are returned in ``unplaced`` and logged.
    """
    buckets: dict[str, list[Set]] = {stage: [] for stage in stages}
    unplaced: list[Set] = []

    for s in sets:
        if day is not None and s.date != day:
            continue
        bucket = buckets.get(s.stage)
        if bucket is None:
            unplaced.append(s)
        else:
            bucket.append(s)

    if unplaced:
        logger.warning(
            f"{len(unplaced)} set(s) reference unknown stages "
            f"{sorted({s.stage for s in unplaced})}; left out of stage columns"
        )

    columns = tuple(StageColumn(stage=stage, sets=tuple(sort_by_start(buckets[stage]))) for stage in stages)
    return StageGrouping(day=day, columns=columns, unplaced=tuple(sort_by_start(unplaced)))
