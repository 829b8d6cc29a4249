"""Pydantic models for API request payloads."""

from pydantic import BaseModel, Field

from meal_planner.domain.foods import Nutrition
from meal_planner.domain.goals import (
    ActivityLevel,
    GoalType,
    NutritionGoal,
    Sex,
    UserProfile,
)
from meal_planner.domain.plans import SelectedFood, TimeslotPlan
from meal_planner.domain.recipes import IngredientUnit, RecipeDraft, RecipeIngredient


class NutritionPayload(BaseModel):
    """Macro values entered directly."""

    protein: float = 0.0
    fats: float = 0.0
    carbs: float = 0.0
    calories: float = 0.0

    def to_domain(self) -> Nutrition:
        """Convert to domain nutrition."""
        return Nutrition(
            protein=self.protein,
            fats=self.fats,
            carbs=self.carbs,
            calories=self.calories,
        )


class SelectedFoodPayload(BaseModel):
    """Food name and amount in grams or units."""

    name: str
    amount: float

    def to_domain(self) -> SelectedFood:
        """Convert to a plan entry."""
        return SelectedFood(name=self.name, amount=self.amount)


class TimeslotPayload(BaseModel):
    """Foods and external nutrition for one timeslot."""

    selected_foods: list[SelectedFoodPayload] = Field(default_factory=list)
    external_nutrition: NutritionPayload = Field(default_factory=NutritionPayload)

    def to_domain(self) -> TimeslotPlan:
        """Convert to a timeslot plan."""
        return TimeslotPlan(
            selected_foods=tuple(entry.to_domain() for entry in self.selected_foods),
            external_nutrition=self.external_nutrition.to_domain(),
        )


class PlanPayload(BaseModel):
    """Whole-day plan keyed by timeslot id."""

    timeslots: dict[str, TimeslotPayload] = Field(default_factory=dict)


class PreviewPayload(SelectedFoodPayload):
    """Candidate food previewed in a timeslot before it is added."""

    timeslot_id: str


class SwapPayload(BaseModel):
    """Move one entry to another timeslot."""

    from_timeslot: str
    index: int = Field(ge=0)
    to_timeslot: str | None = None


class QuickAddPayload(BaseModel):
    """Add a favorite food at its default amount."""

    timeslot_id: str
    food_name: str


class IngredientPayload(BaseModel):
    """Recipe ingredient."""

    food_name: str
    amount: float = Field(ge=0)
    unit: IngredientUnit | None = None


class RecipePayload(BaseModel):
    """Recipe draft as authored."""

    id: str | None = None
    name: str = ""
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    servings: int = 1
    is_fixed_serving: bool = False
    description: str = ""
    instructions: list[str] = Field(default_factory=list)
    category: str = "Other"
    cooking_time_minutes: int | None = None
    difficulty: str | None = None
    tags: list[str] = Field(default_factory=list)

    def to_domain(self) -> RecipeDraft:
        """Convert to a recipe draft; ingredient order is kept."""
        return RecipeDraft(
            id=self.id,
            name=self.name,
            ingredients=tuple(
                RecipeIngredient(
                    food_name=ingredient.food_name,
                    amount=ingredient.amount,
                    unit=ingredient.unit,
                )
                for ingredient in self.ingredients
            ),
            servings=self.servings,
            is_fixed_serving=self.is_fixed_serving,
            description=self.description,
            instructions=tuple(self.instructions),
            category=self.category,
            cooking_time_minutes=self.cooking_time_minutes,
            difficulty=self.difficulty,
            tags=tuple(self.tags),
        )


class GoalPayload(BaseModel):
    """Daily macro targets."""

    protein: float
    fats: float
    carbs: float
    calories: float

    def to_domain(self) -> NutritionGoal:
        """Convert to a nutrition goal."""
        return NutritionGoal(
            protein=self.protein,
            fats=self.fats,
            carbs=self.carbs,
            calories=self.calories,
        )


class ProfilePayload(BaseModel):
    """Body metrics for target calculation."""

    sex: Sex
    age: int = Field(gt=0)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: GoalType = GoalType.MAINTAIN

    def to_domain(self) -> UserProfile:
        """Convert to a user profile."""
        return UserProfile(
            sex=self.sex,
            age=self.age,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            goal=self.goal,
        )
