"""Domain models for recipes."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from meal_planner.domain.foods import FoodRecord, Nutrition


class IngredientUnit(StrEnum):
    """Unit an ingredient amount is expressed in."""

    GRAMS = "g"
    MILLILITRES = "ml"
    UNITS = "units"


WEIGHT_UNITS = frozenset({IngredientUnit.GRAMS, IngredientUnit.MILLILITRES})


@dataclass(frozen=True)
class RecipeIngredient:
    """An amount of a catalog food used in a recipe.

    When ``unit`` is None it is resolved from the catalog food.
    """

    food_name: str
    amount: float
    unit: IngredientUnit | None = None


@dataclass(frozen=True)
class RecipeDraft:
    """Recipe as authored, before normalization."""

    name: str
    ingredients: tuple[RecipeIngredient, ...]
    servings: int = 1
    is_fixed_serving: bool = False
    description: str = ""
    instructions: tuple[str, ...] = ()
    category: str = "Other"
    cooking_time_minutes: int | None = None
    difficulty: str | None = None
    tags: tuple[str, ...] = ()
    id: str | None = None


@dataclass(frozen=True)
class NormalizedRecipe:
    """Recipe totals and the catalog food synthesized from them.

    The per-100 g and per-serving figures are independent measures.
    """

    food: FoodRecord
    total_weight_g: float
    total_nutrition: Nutrition
    total_cost: float
    nutrition_per_100g: Nutrition
    cost_per_kilogram: float
    nutrition_per_serving: Nutrition
    cost_per_serving: float


@dataclass(frozen=True)
class RecipeRecord:
    """Persisted recipe document."""

    id: str
    draft: RecipeDraft
    normalized: NormalizedRecipe
    created_at: datetime
    updated_at: datetime
