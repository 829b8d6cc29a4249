"""Meal plan aggregation and timeslot editing."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol
from uuid import UUID

from meal_planner.domain.foods import Catalog, Nutrition
from meal_planner.domain.goals import NutritionGoal
from meal_planner.domain.plans import (
    DEFAULT_TIMESLOTS,
    EMPTY_TIMESLOT,
    DailyCost,
    DailyPlan,
    SelectedFood,
    TimeslotPlan,
)
from meal_planner.domain.preview import CostPreview, NutritionPreview
from meal_planner.services.catalog import CatalogService
from meal_planner.services.costs import cost_for, total_cost_for
from meal_planner.services.goals import goal_progress
from meal_planner.services.macros import accumulate_macros, sum_nutrition
from meal_planner.services.units import default_amount

_logger = logging.getLogger(__name__)


def aggregate(
    entries: Iterable[SelectedFood], external: Nutrition, catalog: Catalog
) -> Nutrition:
    """Return food macros plus unscaled external nutrition."""
    return accumulate_macros(external, entries, catalog)


def aggregate_across_slots(
    slots: Iterable[TimeslotPlan], catalog: Catalog
) -> Nutrition:
    """Return the combined totals of every timeslot."""
    return sum_nutrition(
        aggregate(slot.selected_foods, slot.external_nutrition, catalog)
        for slot in slots
    )


def daily_cost(timeslots: Mapping[str, TimeslotPlan], catalog: Catalog) -> DailyCost:
    """Return per-timeslot cost breakdowns and the day total."""
    per_timeslot = {
        timeslot_id: total_cost_for(slot.selected_foods, catalog)
        for timeslot_id, slot in timeslots.items()
    }
    return DailyCost(
        per_timeslot=per_timeslot,
        total=sum(cost.total for cost in per_timeslot.values()),
    )


def add_food(plan: TimeslotPlan, entry: SelectedFood) -> TimeslotPlan:
    """Append an entry to a timeslot."""
    return replace(plan, selected_foods=(*plan.selected_foods, entry))


def update_amount(plan: TimeslotPlan, index: int, amount: float) -> TimeslotPlan:
    """Change the amount of the entry at ``index``."""
    entries = list(plan.selected_foods)
    entries[index] = replace(entries[index], amount=amount)
    return replace(plan, selected_foods=tuple(entries))


def remove_food(plan: TimeslotPlan, index: int) -> TimeslotPlan:
    """Remove the entry at ``index``."""
    entries = list(plan.selected_foods)
    del entries[index]
    return replace(plan, selected_foods=tuple(entries))


def set_external_nutrition(plan: TimeslotPlan, nutrition: Nutrition) -> TimeslotPlan:
    """Replace a timeslot's externally logged nutrition."""
    return replace(plan, external_nutrition=nutrition)


def quick_add_favorite(
    plan: TimeslotPlan, food_name: str, catalog: Catalog
) -> TimeslotPlan:
    """Append a food at its default amount."""
    amount = default_amount(catalog.get(food_name))
    return add_food(plan, SelectedFood(name=food_name, amount=amount))


def next_timeslot_id(timeslot_ids: list[str], current_id: str) -> str:
    """Return the timeslot after ``current_id``, wrapping around."""
    position = timeslot_ids.index(current_id)
    return timeslot_ids[(position + 1) % len(timeslot_ids)]


def swap_food(
    timeslots: Mapping[str, TimeslotPlan],
    from_id: str,
    index: int,
    to_id: str | None = None,
) -> dict[str, TimeslotPlan]:
    """Move an entry to another timeslot, keeping its amount.

    Without ``to_id`` the entry moves to the next timeslot in order. The
    entry is appended to the target timeslot.
    """
    target_id = to_id or next_timeslot_id(list(timeslots), from_id)
    source = timeslots[from_id]
    entry = source.selected_foods[index]
    updated = dict(timeslots)
    updated[from_id] = remove_food(source, index)
    updated[target_id] = add_food(updated.get(target_id, EMPTY_TIMESLOT), entry)
    return updated


def empty_timeslots(timeslot_ids: Iterable[str]) -> dict[str, TimeslotPlan]:
    """Return one empty timeslot per id."""
    return {timeslot_id: EMPTY_TIMESLOT for timeslot_id in timeslot_ids}


class PlanRepository(Protocol):
    """Persistence interface for daily plans."""

    def get_plan(self, user_id: UUID, day: date) -> DailyPlan | None:
        """Return the plan stored for a user and day."""

    def save_plan(self, plan: DailyPlan, totals: Nutrition) -> None:
        """Create or replace a daily plan with its computed totals."""

    def list_recent_plans(self, user_id: UUID, limit: int) -> list[DailyPlan]:
        """Return the most recent plans for a user."""


@dataclass
class PlanService:
    """Loads, edits and stores daily plans; totals come from fresh snapshots."""

    repository: PlanRepository
    catalog_service: CatalogService
    timeslot_ids: tuple[str, ...] = field(
        default_factory=lambda: tuple(slot.id for slot in DEFAULT_TIMESLOTS)
    )
    debug: bool = False

    def load(self, user_id: UUID, day: date) -> DailyPlan:
        """Return the stored plan, or an empty one, with every timeslot present."""
        stored = self.repository.get_plan(user_id, day)
        timeslots = empty_timeslots(self.timeslot_ids)
        if stored is not None:
            timeslots.update(stored.timeslots)
        return DailyPlan(user_id=user_id, day=day, timeslots=timeslots)

    def save(self, plan: DailyPlan) -> Nutrition:
        """Persist a plan with totals recomputed from the current catalog."""
        totals = self.totals(plan)
        self.repository.save_plan(plan, totals)
        if self.debug:
            _logger.info(
                "Plan saved: id=%s calories=%.1f", plan.document_id, totals.calories
            )
        return totals

    def totals(self, plan: DailyPlan) -> Nutrition:
        """Return the day's combined nutrition."""
        return aggregate_across_slots(
            plan.timeslots.values(), self.catalog_service.snapshot()
        )

    def cost(self, plan: DailyPlan) -> DailyCost:
        """Return the day's cost breakdown."""
        return daily_cost(plan.timeslots, self.catalog_service.snapshot())

    def preview(
        self,
        plan: DailyPlan,
        timeslot_id: str,
        candidate: SelectedFood,
        goal: NutritionGoal | None = None,
    ) -> tuple[NutritionPreview, CostPreview]:
        """Return before/after figures for a candidate not yet added to a timeslot.

        ``after`` is computed from the plan with the candidate appended, so it
        matches what saving that plan reports.
        """
        catalog = self.catalog_service.snapshot()
        committed = dict(plan.timeslots)
        committed[timeslot_id] = add_food(
            committed.get(timeslot_id, EMPTY_TIMESLOT), candidate
        )
        before = aggregate_across_slots(plan.timeslots.values(), catalog)
        after = aggregate_across_slots(committed.values(), catalog)
        nutrition = NutritionPreview(before=before, after=after)
        if goal is not None:
            nutrition = replace(
                nutrition,
                before_progress=goal_progress(before, goal),
                after_progress=goal_progress(after, goal),
            )
        candidate_cost = cost_for(catalog.get(candidate.name), candidate.amount)
        cost = CostPreview(
            before=daily_cost(plan.timeslots, catalog).total,
            after=daily_cost(committed, catalog).total,
            candidate_priced=candidate_cost is not None,
        )
        return nutrition, cost

    def swap(
        self,
        user_id: UUID,
        day: date,
        from_id: str,
        index: int,
        to_id: str | None = None,
    ) -> DailyPlan:
        """Move an entry between timeslots of a stored plan."""
        plan = self.load(user_id, day)
        updated = replace(
            plan, timeslots=swap_food(plan.timeslots, from_id, index, to_id)
        )
        self.save(updated)
        return updated

    def quick_add(
        self, user_id: UUID, day: date, timeslot_id: str, food_name: str
    ) -> DailyPlan:
        """Add a food at its default amount to a stored plan."""
        plan = self.load(user_id, day)
        timeslots = dict(plan.timeslots)
        timeslots[timeslot_id] = quick_add_favorite(
            timeslots.get(timeslot_id, EMPTY_TIMESLOT),
            food_name,
            self.catalog_service.snapshot(),
        )
        updated = replace(plan, timeslots=timeslots)
        self.save(updated)
        return updated

    def recent_plans(self, user_id: UUID, limit: int = 30) -> list[DailyPlan]:
        """Return recent plans, used to rank favorites."""
        return self.repository.list_recent_plans(user_id, limit)
