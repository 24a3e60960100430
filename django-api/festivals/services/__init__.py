from festivals.services.calendar_service import CalendarService
from festivals.services.festival_service import FestivalService
from festivals.services.plan_service import PlanService
from festivals.services.seed_service import SeedService

__all__ = [
    "FestivalService",
    "PlanService",
    "CalendarService",
    "SeedService",
]
