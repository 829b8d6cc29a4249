"""Domain models for live what-if previews."""

from dataclasses import dataclass

from meal_planner.domain.foods import Nutrition
from meal_planner.domain.goals import GoalProgress


@dataclass(frozen=True)
class NutritionPreview:
    """Committed totals next to totals including an uncommitted candidate."""

    before: Nutrition
    after: Nutrition
    before_progress: GoalProgress | None = None
    after_progress: GoalProgress | None = None


@dataclass(frozen=True)
class CostPreview:
    """Committed cost next to cost including an uncommitted candidate.

    ``candidate_priced`` is False when the candidate food has no cost data.
    """

    before: float
    after: float
    candidate_priced: bool = True
