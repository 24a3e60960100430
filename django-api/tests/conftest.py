"""Pytest configuration and shared fixtures."""

import uuid
from datetime import date, datetime, timezone

import pytest
from rest_framework.test import APIClient

from festivals.domain import FestivalId, Set, SetId
from festivals.services.seed_service import SeedService, SetListing
from festivals.stores import FestivalSeed

FESTIVAL_DAY = date(2025, 8, 29)

TEST_FESTIVAL = FestivalSeed(
    slug="test-fest",
    name="Test Fest",
    start_date=date(2025, 8, 29),
    end_date=date(2025, 8, 30),
    location="Harbour Park",
    city="Vancouver",
    country="Canada",
    image_url="https://example.com/fest.jpg",
    timezone="UTC",
)
TEST_STAGES = ["Main", "Forest"]
TEST_LISTINGS = [
    SetListing(artist="Foo", date=date(2025, 8, 29), start="18:00", end="19:00", stage="Main"),
    SetListing(artist="Bar", date=date(2025, 8, 29), start="18:30", end="19:30", stage="Main"),
    SetListing(artist="Baz", date=date(2025, 8, 29), start="19:00", end="20:00", stage="Forest"),
    SetListing(artist="Late", date=date(2025, 8, 30), start="23:00", end="00:00", stage="Forest"),
]


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def make_set():
    """Factory for domain sets on FESTIVAL_DAY, times given as HH:MM in UTC."""
    festival_id = FestivalId(uuid.uuid4())

    def _make(artist: str, stage: str, start: str, end: str, day: date = FESTIVAL_DAY) -> Set:
        sh, sm = (int(p) for p in start.split(":"))
        eh, em = (int(p) for p in end.split(":"))
        return Set(
            id=SetId(uuid.uuid4()),
            festival_id=festival_id,
            artist=artist,
            date=day,
            start_time=datetime(day.year, day.month, day.day, sh, sm, tzinfo=timezone.utc),
            end_time=datetime(day.year, day.month, day.day, eh, em, tzinfo=timezone.utc),
            stage=stage,
        )

    return _make


@pytest.fixture
def memory_stores():
    """Seeded in-memory festival and plan stores."""
    from festivals.stores.memory_store import InMemoryFestivalStore, InMemoryPlanStore

    festivals = InMemoryFestivalStore()
    SeedService(festivals).seed_festival(TEST_FESTIVAL, TEST_STAGES, TEST_LISTINGS)
    return festivals, InMemoryPlanStore(festivals)


@pytest.fixture
def lineup(db):
    """Test Fest written to the database."""
    from festivals.stores.django_store import DjangoFestivalStore

    return SeedService(DjangoFestivalStore()).seed_festival(TEST_FESTIVAL, TEST_STAGES, TEST_LISTINGS).lineup


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(username="ana", email="ana@example.com", password="pw")


@pytest.fixture
def auth_client(api_client: APIClient, user) -> APIClient:
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def ids(lineup) -> dict[str, str]:
    """Set ids of the seeded lineup keyed by artist."""
    return {s.artist: str(s.id) for s in lineup.sets}
