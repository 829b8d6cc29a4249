"""Domain models for nutrition goals and user profiles."""

from dataclasses import dataclass
from enum import StrEnum


@dataclass(frozen=True)
class NutritionGoal:
    """Daily macronutrient targets."""

    protein: float
    fats: float
    carbs: float
    calories: float


DEFAULT_GOAL = NutritionGoal(protein=125, fats=61, carbs=287, calories=2150)


@dataclass(frozen=True)
class GoalProgress:
    """Percentage of goal reached per macro, each within [0, 100]."""

    protein: float
    fats: float
    carbs: float
    calories: float


class Sex(StrEnum):
    """Sex used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class GoalType(StrEnum):
    """Weight goal expressed as a percentage range of change."""

    LOSE_20_25 = "lose_20_25"
    LOSE_15_20 = "lose_15_20"
    LOSE_10_15 = "lose_10_15"
    LOSE_5_10 = "lose_5_10"
    LOSE_3_5 = "lose_3_5"
    LOSE_2_3 = "lose_2_3"
    MAINTAIN = "maintain"
    GAIN_2_3 = "gain_2_3"
    GAIN_3_5 = "gain_3_5"
    GAIN_5_10 = "gain_5_10"
    GAIN_10_15 = "gain_10_15"
    GAIN_15_20 = "gain_15_20"
    GAIN_20_25 = "gain_20_25"


@dataclass(frozen=True)
class UserProfile:
    """Body metrics used to derive macro targets."""

    sex: Sex
    age: int
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: GoalType = GoalType.MAINTAIN


@dataclass(frozen=True)
class CalculatedTargets:
    """Energy expenditure and derived macro targets."""

    bmr: int
    tdee: int
    adjusted_calories: int
    goal: NutritionGoal
