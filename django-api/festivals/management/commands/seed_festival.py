"""Load festival lineups from JSON seed files.

Usage: python manage.py seed_festival path/to/festival.json [...]
"""

import json
from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from festivals.domain.errors import SeedValidationError
from festivals.handlers.serializers import FestivalSeedSerializer
from festivals.services import SeedService
from festivals.services.seed_service import SetListing
from festivals.stores import FestivalSeed
from festivals.stores.django_store import DjangoFestivalStore


def load_seed(data: dict, default_timezone: str) -> tuple[FestivalSeed, list[str], list[SetListing]]:
    """Validate a seed document and split it into service inputs."""
    serializer = FestivalSeedSerializer(data=data)
    if not serializer.is_valid():
        raise CommandError(f"Invalid seed file: {json.dumps(serializer.errors)}")
    payload = serializer.validated_data

    festival = FestivalSeed(
        slug=payload["slug"],
        name=payload["name"],
        start_date=payload["startDate"],
        end_date=payload["endDate"],
        location=payload["location"],
        city=payload["city"],
        country=payload["country"],
        image_url=payload["imageUrl"],
        timezone=payload.get("timezone") or default_timezone,
    )
    listings = [
        SetListing(
            artist=row["name"],
            date=row["date"],
            start=row["startTime"],
            end=row["endTime"],
            stage=row["stage"],
        )
        for row in payload["sets"]
    ]
    return festival, list(payload["stages"]), listings


class Command(BaseCommand):
    help = "Upsert festivals from JSON files, replacing their stages and sets."

    def add_arguments(self, parser):
        parser.add_argument("paths", nargs="+", type=Path)

    def handle(self, *args, **options):
        service = SeedService(DjangoFestivalStore())
        for path in options["paths"]:
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                raise CommandError(f"Cannot read {path}: {exc}") from exc

            festival, stages, listings = load_seed(data, settings.TIME_ZONE)
            try:
                result = service.seed_festival(festival, stages, listings)
            except SeedValidationError as err:
                raise CommandError(f"{path}: {err.message}") from err

            self.stdout.write(
                self.style.SUCCESS(
                    f"Seeded {result.lineup.festival.name}: {result.stage_count} stages, {result.set_count} sets"
                )
            )
