"""Django ORM implementations of the festival and plan stores."""

from collections.abc import Sequence

from django.db import transaction

from festivals import models
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


def festival_to_domain(row: models.Festival) -> Festival:
    return Festival(
        id=FestivalId(row.id),
        slug=FestivalSlug(row.slug),
        name=row.name,
        start_date=row.start_date,
        end_date=row.end_date,
        location=row.location,
        city=row.city,
        country=row.country,
        image_url=row.image_url,
        timezone=row.timezone,
    )


def stage_to_domain(row: models.Stage) -> Stage:
    return Stage(id=StageId(row.id), festival_id=FestivalId(row.festival_id), name=row.name)


def set_to_domain(row: models.Set) -> Set:
    return Set(
        id=SetId(row.id),
        festival_id=FestivalId(row.festival_id),
        artist=row.artist,
        date=row.date,
        start_time=row.start_time,
        end_time=row.end_time,
        stage=row.stage.name,
    )


def plan_to_domain(row: models.Plan) -> Plan:
    return Plan(
        id=PlanId(row.id),
        user_id=row.user_id,
        festival_id=FestivalId(row.festival_id),
        name=row.name,
        created_at=row.created_at,
    )


class DjangoFestivalStore(FestivalStore):
    """Database-backed festival store using Django ORM."""

    def list_festivals(self) -> list[Festival]:
        return [festival_to_domain(row) for row in models.Festival.objects.order_by("start_date", "name")]

    def get_festival(self, slug: FestivalSlug) -> Festival | None:
        row = models.Festival.objects.filter(slug=slug.value).first()
        return festival_to_domain(row) if row else None

    def get_festival_by_id(self, festival_id: FestivalId) -> Festival | None:
        row = models.Festival.objects.filter(pk=festival_id.value).first()
        return festival_to_domain(row) if row else None

    def get_lineup(self, slug: FestivalSlug) -> Lineup | None:
        row = models.Festival.objects.filter(slug=slug.value).first()
        if row is None:
            return None
        stages = row.stages.order_by("position", "name")
        sets = row.sets.select_related("stage").order_by("start_time")
        return Lineup(
            festival=festival_to_domain(row),
            stages=tuple(stage_to_domain(s) for s in stages),
            sets=tuple(set_to_domain(s) for s in sets),
        )

    @transaction.atomic
    def replace_lineup(self, festival: FestivalSeed, stages: Sequence[str], sets: Sequence[SetSeed]) -> Lineup:
        row, _ = models.Festival.objects.update_or_create(
            slug=festival.slug,
            defaults={
                "name": festival.name,
                "start_date": festival.start_date,
                "end_date": festival.end_date,
                "location": festival.location,
                "city": festival.city,
                "country": festival.country,
                "image_url": festival.image_url,
                "timezone": festival.timezone,
            },
        )

        models.Set.objects.filter(festival=row).delete()
        models.Stage.objects.filter(festival=row).delete()

        stage_rows = {
            name: models.Stage.objects.create(festival=row, name=name, position=position)
            for position, name in enumerate(stages)
        }
        set_rows = models.Set.objects.bulk_create(
            [
                models.Set(
                    festival=row,
                    stage=stage_rows[s.stage],
                    artist=s.artist,
                    date=s.date,
                    start_time=s.start_time,
                    end_time=s.end_time,
                )
                for s in sets
            ]
        )

        return Lineup(
            festival=festival_to_domain(row),
            stages=tuple(stage_to_domain(s) for s in stage_rows.values()),
            sets=tuple(set_to_domain(s) for s in sorted(set_rows, key=lambda s: s.start_time)),
        )


class DjangoPlanStore(PlanStore):
    """Database-backed plan store using Django ORM."""

    def upsert_plan(self, user_id: int, festival: Festival, name: str) -> Plan:
        # get_or_create retries the lookup when the unique constraint
        # rejects a concurrent insert.
        row, _ = models.Plan.objects.get_or_create(
            user_id=user_id,
            festival_id=festival.id.value,
            defaults={"name": name},
        )
        return plan_to_domain(row)

    def get_plan(self, plan_id: PlanId) -> Plan | None:
        row = models.Plan.objects.filter(pk=plan_id.value).first()
        return plan_to_domain(row) if row else None

    def get_plan_sets(self, plan_id: PlanId) -> list[Set]:
        rows = models.Set.objects.filter(plan_items__plan_id=plan_id.value).select_related("stage").order_by("start_time")
        return [set_to_domain(row) for row in rows]

    def add_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        # get_or_create falls back to a lookup when the unique constraint
        # rejects a concurrent insert of the same item.
        _, created = models.PlanItem.objects.get_or_create(plan_id=plan_id.value, set_id=set_id.value)
        return created

    def remove_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        deleted, _ = models.PlanItem.objects.filter(plan_id=plan_id.value, set_id=set_id.value).delete()
        return deleted > 0

    @transaction.atomic
    def toggle_item(self, plan_id: PlanId, set_id: SetId) -> bool:
        return super().toggle_item(plan_id, set_id)
