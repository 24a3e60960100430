from festivals.domain.models import Festival, Lineup, MembershipChange, Plan, Set, Stage
from festivals.domain.value_objects import FestivalId, FestivalSlug, PlanId, SetId, StageId, TimeRange

__all__ = [
    "Festival",
    "Stage",
    "Set",
    "Plan",
    "Lineup",
    "MembershipChange",
    "FestivalId",
    "FestivalSlug",
    "StageId",
    "SetId",
    "PlanId",
    "TimeRange",
]
