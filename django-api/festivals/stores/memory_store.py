"""In-memory stores used by service tests and local tooling."""

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone

from festivals.domain import (
    Festival,
    FestivalId,
    FestivalSlug,
    Lineup,
    Plan,
    PlanId,
    Set,
    SetId,
    Stage,
    StageId,
)
from festivals.stores.interfaces import FestivalSeed, FestivalStore, PlanStore, SetSeed


class InMemoryFestivalStore(FestivalStore):
    """Dict-backed store for lineups, keyed by slug."""

    def __init__(self) -> None:
        self._lineups: dict[str, Lineup] = {}

    def list_festivals(self) -> list[Festival]:
        festivals = [lineup.festival for lineup in self._lineups.values()]
        return sorted(festivals, key=lambda f: (f.start_date, f.name))

    def get_festival(self, slug: FestivalSlug) -> Festival | None:
        lineup = self._lineups.get(slug.value)
        return lineup.festival if lineup else None

    def get_festival_by_id(self, festival_id: FestivalId) -> Festival | None:
        for lineup in self._lineups.values():
            if lineup.festival.id == festival_id:
                return lineup.festival
        return None

    def get_lineup(self, slug: FestivalSlug) -> Lineup | None:
        return self._lineups.get(slug.value)

    def replace_lineup(self, festival: FestivalSeed, stages: Sequence[str], sets: Sequence[SetSeed]) -> Lineup:
        existing = self._lineups.get(festival.slug)
        festival_id = existing.festival.id if existing else FestivalId(uuid.uuid4())
        domain_festival = Festival(
            id=festival_id,
            slug=FestivalSlug(festival.slug),
            name=festival.name,
            start_date=festival.start_date,
            end_date=festival.end_date,
            location=festival.location,
            city=festival.city,
            country=festival.country,
            image_url=festival.image_url,
            timezone=festival.timezone,
        )
        lineup = Lineup(
            festival=domain_festival,
            stages=tuple(Stage(id=StageId(uuid.uuid4()), festival_id=festival_id, name=name) for name in stages),
            sets=tuple(
                sorted(
                    (
                        Set(
                            id=SetId(uuid.uuid4()),
                            festival_id=festival_id,
                            artist=s.artist,
                            date=s.date,
                            start_time=s.start_time,
                            end_time=s.end_time,
                            stage=s.stage,
                        )
                        for s in sets
                    ),
                    key=lambda s: s.start_time,
                )
            ),
        )
        self._lineups[festival.slug] = lineup
        return lineup

    def find_set(self, set_id: SetId) -> Set | None:
        for lineup in self._lineups.values():
            for s in lineup.sets:
                if s.id == set_id:
                    return s
        return None


class InMemoryPlanStore(PlanStore):
    """Dict-backed store for plans and their items.

    Needs the festival store to resolve set ids into sets.
    """

    def __init__(self, festivals: InMemoryFestivalStore) -> None:
        self._festivals = festivals
        self._plans: dict[PlanId, Plan] = {}
        self._by_owner: dict[tuple[int, FestivalId], PlanId] = {}
        self._items: dict[PlanId, set[SetId]] = {}

    def upsert_plan(self, user_id: int, festival: Festival, name: str) -> Plan:
        key = (user_id, festival.id)
        plan_id = self._by_owner.get(key)
        if plan_id is not None:
            return self._plans[plan_id]
        plan = Plan(
            id=PlanId(uuid.uuid4()),
            user_id=user_id,
            festival_id=festival.id,
            name=name,
            created_at=datetime.now(timezone.utc),
        )
        self._plans[plan.id] = plan
        self._by_owner[key] = plan.id
        self._items[plan.id] = set()
        return plan

    def get_plan(self, plan_id: PlanId) -> Plan | None:
        return self._plans.get(plan_id)

    def get_plan_sets(self, plan_id: PlanId) -> list[Set]:
        sets = [self._festivals.find_set(set_id) for set_id in self._items.get(plan_id, ())]
        return sorted((s for s in sets if s is not None), key=lambda s: s.start_time)

    def add_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        items = self._items.setdefault(plan_id, set())
        if set_id in items:
            return False
        items.add(set_id)
        return True

    def remove_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        items = self._items.get(plan_id, set())
        if set_id not in items:
            return False
        items.remove(set_id)
        return True
