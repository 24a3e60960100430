"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime

from festivals.domain import Festival, FestivalId, FestivalSlug, Lineup, Plan, PlanId, Set, SetId


@dataclass(frozen=True)
class SetSeed:
    """A set to be written by a lineup replacement."""

    artist: str
    date: date
    start_time: datetime
    end_time: datetime
    stage: str


@dataclass(frozen=True)
class FestivalSeed:
    """Festival fields written by a lineup replacement."""

    slug: str
    name: str
    start_date: date
    end_date: date
    location: str = ""
    city: str = ""
    country: str = ""
    image_url: str | None = None
    timezone: str = "UTC"


class FestivalStore(ABC):
    """Interface for festival reference data."""

    @abstractmethod
    def list_festivals(self) -> list[Festival]:
        """Return all festivals ordered by start_date ascending."""
        ...

    @abstractmethod
    def get_festival(self, slug: FestivalSlug) -> Festival | None:
        """Return a festival by slug, or None if not found."""
        ...

    @abstractmethod
    def get_festival_by_id(self, festival_id: FestivalId) -> Festival | None:
        """Return a festival by ID, or None if not found."""
        ...

    @abstractmethod
    def get_lineup(self, slug: FestivalSlug) -> Lineup | None:
        """Return a festival with its stages (in position order) and sets."""
        ...

    @abstractmethod
    def replace_lineup(self, festival: FestivalSeed, stages: Sequence[str], sets: Sequence[SetSeed]) -> Lineup:
        """Upsert the festival by slug and replace all of its stages and sets.

        Must be atomic: either the whole lineup is written or nothing is.
        """
        ...


class PlanStore(ABC):
    """Interface for plan persistence operations."""

    @abstractmethod
    def upsert_plan(self, user_id: int, festival: Festival, name: str) -> Plan:
        """Return the user's plan for the festival, creating it if missing.

        Uniqueness of (user, festival) is enforced by the store.
        """
        ...

    @abstractmethod
    def get_plan(self, plan_id: PlanId) -> Plan | None:
        """Return a plan by ID, or None if not found."""
        ...

    @abstractmethod
    def get_plan_sets(self, plan_id: PlanId) -> list[Set]:
        """Return the sets of a plan ordered by start_time ascending."""
        ...

    @abstractmethod
    def add_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        """Insert the item if absent. Return True if a row was created."""
        ...

    @abstractmethod
    def remove_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        """Delete the item if present. Return True if a row was deleted."""
        ...

    def toggle_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        """Flip membership. Return True if the set is now in the plan.

        A conditional delete followed, only when nothing was deleted, by a
        conditional insert.
        """
        if self.remove_item(plan_id, set_id):
            return False
        self.add_item(plan_id, set_id)
        return True
