"""Planner state machine.

A set is either selected (in the plan) or unselected. Membership is a
frozenset of set ids and every user action is a pure transition
``(membership, action) -> membership``; derived views (conflicts, grouping)
are rebuilt from the new membership after each transition.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from enum import Enum

from festivals.domain.models import Set
from festivals.domain.scheduling import StageGrouping, find_conflicts, group_by_day, group_by_stage, sort_by_start
from festivals.domain.value_objects import SetId


class ActionKind(Enum):
    TOGGLE = "toggle"
    ADD = "add"
    REMOVE = "remove"
    DROP_ON_SCHEDULE = "drop_on_schedule"
    DROP_ON_STAGE = "drop_on_stage"


@dataclass(frozen=True)
class PlannerAction:
    """A user intent against one set.

    ``stage`` is only meaningful for DROP_ON_STAGE and names the column the
    card was dropped on; ``origin_stage`` is the set's own stage.
    """

    kind: ActionKind
    set_id: SetId
    stage: str | None = None
    origin_stage: str | None = None


def transition(membership: frozenset[SetId], action: PlannerAction) -> frozenset[SetId]:
    """Apply one action and return the new membership."""
    set_id = action.set_id
    match action.kind:
        case ActionKind.TOGGLE:
            return membership - {set_id} if set_id in membership else membership | {set_id}
        case ActionKind.ADD | ActionKind.DROP_ON_SCHEDULE:
            return membership | {set_id}
        case ActionKind.REMOVE:
            return membership - {set_id}
        case ActionKind.DROP_ON_STAGE:
            if action.stage is not None and action.stage == action.origin_stage:
                return membership - {set_id}
            return membership
    raise ValueError(f"Unknown planner action: {action.kind!r}")


def toggle(membership: frozenset[SetId], set_id: SetId) -> frozenset[SetId]:
    return transition(membership, PlannerAction(kind=ActionKind.TOGGLE, set_id=set_id))


@dataclass(frozen=True)
class PlannerView:
    """Everything the planner page renders for one membership state."""

    membership: frozenset[SetId]
    selected: tuple[Set, ...]
    conflicts: frozenset[SetId]
    selected_by_day: dict[date, list[Set]]
    days: tuple[date, ...]
    day: date | None
    stage_grouping: StageGrouping


def build_planner_view(
    sets: Sequence[Set],
    stages: Sequence[str],
    membership: frozenset[SetId],
    day: date | None = None,
) -> PlannerView:
    """Derive the planner view; ``day`` defaults to the first day with sets."""
    by_day = group_by_day(sets)
    days = tuple(by_day)
    if day is None and days:
        day = days[0]

    # Ids that no longer match a set of this festival are ignored.
    selected = tuple(sort_by_start(s for s in sets if s.id in membership))

    return PlannerView(
        membership=frozenset(s.id for s in selected),
        selected=selected,
        conflicts=find_conflicts(selected),
        selected_by_day=group_by_day(selected),
        days=days,
        day=day,
        stage_grouping=group_by_stage(sets, stages, day=day),
    )
