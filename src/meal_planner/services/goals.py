"""Goal progress percentages and macro target derivation."""

import math
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_planner.domain.foods import Nutrition
from meal_planner.domain.goals import (
    DEFAULT_GOAL,
    ActivityLevel,
    CalculatedTargets,
    GoalProgress,
    GoalType,
    NutritionGoal,
    Sex,
    UserProfile,
)

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

GOAL_ADJUSTMENTS: dict[GoalType, float] = {
    GoalType.LOSE_20_25: -0.225,
    GoalType.LOSE_15_20: -0.175,
    GoalType.LOSE_10_15: -0.125,
    GoalType.LOSE_5_10: -0.075,
    GoalType.LOSE_3_5: -0.04,
    GoalType.LOSE_2_3: -0.025,
    GoalType.MAINTAIN: 0.0,
    GoalType.GAIN_2_3: 0.025,
    GoalType.GAIN_3_5: 0.04,
    GoalType.GAIN_5_10: 0.075,
    GoalType.GAIN_10_15: 0.125,
    GoalType.GAIN_15_20: 0.175,
    GoalType.GAIN_20_25: 0.225,
}

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


class GoalValidationError(ValueError):
    """Raised when nutrition targets cannot be stored."""


def percentage(value: float, goal: float) -> float:
    """Return progress towards a goal clamped to [0, 100].

    Goals below 1 are treated as 1, so a zero goal never divides by zero.
    """
    if math.isnan(value):
        return 0.0
    ratio = value / max(1.0, goal) * 100.0
    return min(100.0, max(0.0, ratio))


def goal_progress(totals: Nutrition, goal: NutritionGoal) -> GoalProgress:
    """Return per-macro percentages of the goal."""
    return GoalProgress(
        protein=percentage(totals.protein, goal.protein),
        fats=percentage(totals.fats, goal.fats),
        carbs=percentage(totals.carbs, goal.carbs),
        calories=percentage(totals.calories, goal.calories),
    )


def calculate_bmr(sex: Sex, weight_kg: float, height_cm: float, age: int) -> float:
    """Mifflin-St Jeor basal metabolic rate."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if sex is Sex.MALE:
        return base + 5
    return base - 161


def calculate_macro_targets(profile: UserProfile) -> CalculatedTargets:
    """Derive daily targets from body metrics, activity and weight goal."""
    bmr = calculate_bmr(profile.sex, profile.weight_kg, profile.height_cm, profile.age)
    tdee = bmr * ACTIVITY_MULTIPLIERS[profile.activity_level]
    adjusted = _round_half_up(tdee * (1 + GOAL_ADJUSTMENTS[profile.goal]))
    protein_share, carbs_share, fat_share = _macro_split(profile.goal)
    goal = NutritionGoal(
        protein=_round_half_up(adjusted * protein_share / KCAL_PER_GRAM_PROTEIN),
        fats=_round_half_up(adjusted * fat_share / KCAL_PER_GRAM_FAT),
        carbs=_round_half_up(adjusted * carbs_share / KCAL_PER_GRAM_CARBS),
        calories=adjusted,
    )
    return CalculatedTargets(
        bmr=_round_half_up(bmr),
        tdee=_round_half_up(tdee),
        adjusted_calories=adjusted,
        goal=goal,
    )


def _macro_split(goal: GoalType) -> tuple[float, float, float]:
    """Return (protein, carbs, fat) calorie shares."""
    if goal in {GoalType.LOSE_15_20, GoalType.LOSE_20_25}:
        return 0.35, 0.35, 0.30
    if goal is GoalType.LOSE_10_15:
        return 0.30, 0.40, 0.30
    if goal.value.startswith("gain_"):
        return 0.25, 0.50, 0.25
    return 0.25, 0.45, 0.30


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class GoalRepository(Protocol):
    """Persistence interface for user nutrition goals."""

    def get_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the stored goal for a user, if any."""

    def save_goal(self, user_id: UUID, goal: NutritionGoal) -> None:
        """Create or replace a user's goal."""


@dataclass
class GoalService:
    """Reads and stores user goals with a static fallback."""

    repository: GoalRepository
    default_goal: NutritionGoal = DEFAULT_GOAL

    def get_goal(self, user_id: UUID) -> NutritionGoal:
        """Return the user's goal or the default one."""
        return self.repository.get_goal(user_id) or self.default_goal

    def save_goal(self, user_id: UUID, goal: NutritionGoal) -> NutritionGoal:
        """Persist a goal after checking every target is non-negative."""
        if min(goal.protein, goal.fats, goal.carbs, goal.calories) < 0:
            raise GoalValidationError("Macro targets must be non-negative numbers")
        self.repository.save_goal(user_id, goal)
        return goal
