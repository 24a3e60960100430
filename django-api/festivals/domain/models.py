"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in festivals/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from festivals.domain.value_objects import FestivalId, FestivalSlug, PlanId, SetId, StageId, TimeRange


@dataclass(frozen=True)
class Festival:
    """Domain representation of a Festival."""

    id: FestivalId
    slug: FestivalSlug
    name: str
    start_date: date
    end_date: date
    location: str
    city: str
    country: str
    image_url: str | None
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise ValueError("Festival start_date must not be after end_date")


@dataclass(frozen=True)
class Stage:
    """Domain representation of a Stage."""

    id: StageId
    festival_id: FestivalId
    name: str


@dataclass(frozen=True)
class Set:
    """A single artist performance on a stage.

    ``stage`` carries the stage name so grouping and calendar export never
    need a second lookup.
    """

    id: SetId
    festival_id: FestivalId
    artist: str
    date: date
    start_time: datetime
    end_time: datetime
    stage: str

    def __post_init__(self) -> None:
        if self.start_time >= self.end_time:
            raise ValueError("Set start_time must be before end_time")

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start_time, end=self.end_time)


@dataclass(frozen=True)
class Plan:
    """A user's personal selection of sets for one festival."""

    id: PlanId
    user_id: int
    festival_id: FestivalId
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Lineup:
    """A festival with its reference data."""

    festival: Festival
    stages: tuple[Stage, ...] = ()
    sets: tuple[Set, ...] = ()

    @property
    def stage_names(self) -> list[str]:
        return [stage.name for stage in self.stages]


@dataclass(frozen=True)
class MembershipChange:
    """Outcome of a plan mutation."""

    plan: Plan
    set_id: SetId
    selected: bool
    set_ids: frozenset[SetId] = field(default_factory=frozenset)
    conflicts: frozenset[SetId] = field(default_factory=frozenset)
