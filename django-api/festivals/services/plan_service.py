"""Plan service - a user's selection of sets for one festival."""

from dataclasses import dataclass

from loguru import logger

from festivals.domain import Festival, Lineup, MembershipChange, Plan, Set, SetId
from festivals.domain.errors import InvalidSetIdError, SetNotFoundError
from festivals.domain.planner import ActionKind, PlannerAction, PlannerView, build_planner_view, transition
from festivals.domain.scheduling import conflict_pairs, find_conflicts
from festivals.services.festival_service import FestivalService, resolve_day
from festivals.stores.interfaces import FestivalStore, PlanStore

DEFAULT_PLAN_NAME = "My Plan"


@dataclass(frozen=True)
class PlanView:
    """A plan with its sets ordered by start time and their conflicts."""

    festival: Festival
    plan: Plan
    sets: tuple[Set, ...]
    conflicts: frozenset[SetId]
    conflict_pairs: tuple[tuple[Set, Set], ...]
    planner: PlannerView


def parse_set_id(value: str) -> SetId:
    try:
        return SetId.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidSetIdError() from None


class PlanService:
    """Service for plan membership operations."""

    def __init__(
        self,
        festival_store: FestivalStore,
        plan_store: PlanStore,
        default_plan_name: str = DEFAULT_PLAN_NAME,
    ) -> None:
        self._festivals = FestivalService(festival_store)
        self._store = plan_store
        self._default_plan_name = default_plan_name

    def get_or_create_plan(self, user_id: int, slug: str) -> Plan:
        """Return the user's plan for a festival, creating it on first access.

        Raises:
            InvalidFestivalSlugError: If the slug is malformed.
            FestivalNotFoundError: If the festival does not exist.
        """
        festival = self._festivals.get_festival(slug)
        return self._store.upsert_plan(user_id, festival, self._default_plan_name)

    def get_plan_view(self, user_id: int, slug: str, day: str | None = None) -> PlanView:
        """Return the plan with its sets, conflicts and the planner for ``day``.

        Raises:
            InvalidDayError: If the day is malformed or outside the festival.
        """
        lineup = self._festivals.get_lineup(slug)
        chosen = resolve_day(lineup, day)
        plan = self._store.upsert_plan(user_id, lineup.festival, self._default_plan_name)
        sets = self._store.get_plan_sets(plan.id)
        membership = frozenset(s.id for s in sets)
        return PlanView(
            festival=lineup.festival,
            plan=plan,
            sets=tuple(sets),
            conflicts=find_conflicts(sets),
            conflict_pairs=tuple(conflict_pairs(sets)),
            planner=build_planner_view(lineup.sets, lineup.stage_names, membership, day=chosen),
        )

    def get_planner(self, user_id: int, slug: str, day: str | None = None) -> PlannerView:
        """Return the full planner view: stage columns plus the user's selection."""
        return self.get_plan_view(user_id, slug, day).planner

    def toggle_set(self, user_id: int, slug: str, set_id: str) -> MembershipChange:
        """Flip membership of a set in the user's plan.

        Raises:
            InvalidSetIdError: If the set_id is not a valid UUID.
            SetNotFoundError: If the set is not part of the festival.
        """
        return self.apply_action(user_id, slug, set_id, ActionKind.TOGGLE)

    def add_set(self, user_id: int, slug: str, set_id: str) -> MembershipChange:
        """Select a set; adding an already selected set changes nothing."""
        return self.apply_action(user_id, slug, set_id, ActionKind.ADD)

    def remove_set(self, user_id: int, slug: str, set_id: str) -> MembershipChange:
        """Unselect a set; removing an unselected set changes nothing."""
        return self.apply_action(user_id, slug, set_id, ActionKind.REMOVE)

    def apply_action(
        self,
        user_id: int,
        slug: str,
        raw_set_id: str,
        kind: ActionKind,
        stage: str | None = None,
    ) -> MembershipChange:
        """Run one planner action against the stored plan.

        ``stage`` is the column a card was dropped on for DROP_ON_STAGE.
        """
        set_id = parse_set_id(raw_set_id)
        lineup = self._festivals.get_lineup(slug)
        target = _find_set(lineup, set_id)
        if target is None:
            raise SetNotFoundError(raw_set_id)

        plan = self._store.upsert_plan(user_id, lineup.festival, self._default_plan_name)
        action = PlannerAction(kind=kind, set_id=set_id, stage=stage, origin_stage=target.stage)

        if kind is ActionKind.TOGGLE:
            selected = self._store.toggle_item(plan.id, set_id)
        else:
            # Non-toggle actions have an absolute target state.
            before = frozenset(s.id for s in self._store.get_plan_sets(plan.id))
            selected = set_id in transition(before, action)
            if selected:
                self._store.add_item(plan.id, set_id)
            else:
                self._store.remove_item(plan.id, set_id)

        sets = self._store.get_plan_sets(plan.id)
        logger.info(
            f"Plan {plan.id}: {kind.value} {target.artist} @ {target.stage} -> "
            f"{'selected' if selected else 'unselected'}"
        )
        return MembershipChange(
            plan=plan,
            set_id=set_id,
            selected=selected,
            set_ids=frozenset(s.id for s in sets),
            conflicts=find_conflicts(sets),
        )


def _find_set(lineup: Lineup, set_id: SetId) -> Set | None:
    for s in lineup.sets:
        if s.id == set_id:
            return s
    return None
