"""Before/after deltas for a candidate entry that is not yet committed."""

from meal_planner.domain.foods import Catalog, Nutrition
from meal_planner.domain.goals import NutritionGoal
from meal_planner.domain.plans import SelectedFood
from meal_planner.domain.preview import CostPreview, NutritionPreview
from meal_planner.services.costs import cost_for
from meal_planner.services.goals import goal_progress
from meal_planner.services.macros import accumulate_macros


def preview(
    committed: Nutrition,
    candidate: SelectedFood,
    catalog: Catalog,
    goal: NutritionGoal | None = None,
) -> NutritionPreview:
    """Return committed totals and totals with the candidate added.

    ``after`` equals what aggregation returns once the candidate is appended
    to the committed entries.
    """
    after = accumulate_macros(committed, [candidate], catalog)
    if goal is None:
        return NutritionPreview(before=committed, after=after)
    return NutritionPreview(
        before=committed,
        after=after,
        before_progress=goal_progress(committed, goal),
        after_progress=goal_progress(after, goal),
    )


def preview_cost(
    committed_cost: float, candidate: SelectedFood, catalog: Catalog
) -> CostPreview:
    """Return committed cost and cost with the candidate added."""
    cost = cost_for(catalog.get(candidate.name), candidate.amount)
    if cost is None:
        return CostPreview(
            before=committed_cost, after=committed_cost, candidate_priced=False
        )
    return CostPreview(before=committed_cost, after=committed_cost + cost)
