"""Recipe validation, normalization and persistence."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from meal_planner.domain.foods import (
    ZERO_NUTRITION,
    Catalog,
    CostUnit,
    FoodCost,
    FoodRecord,
    MeasureKind,
    Nutrition,
)
from meal_planner.domain.plans import SelectedFood
from meal_planner.domain.recipes import (
    WEIGHT_UNITS,
    IngredientUnit,
    NormalizedRecipe,
    RecipeDraft,
    RecipeIngredient,
    RecipeRecord,
)
from meal_planner.services.catalog import CatalogService
from meal_planner.services.costs import GRAMS_PER_KILOGRAM, total_cost_for
from meal_planner.services.macros import macros_for_many, scale_nutrition

RECIPE_FOOD_SUFFIX = " (Recipe)"

_logger = logging.getLogger(__name__)


class RecipeValidationError(ValueError):
    """Raised when a draft cannot be finalized into a catalog food."""

    def __init__(self, problems: list[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = problems


class RecipeRepository(Protocol):
    """Persistence interface for recipe documents."""

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a recipe by id, if present."""

    def list_recipes(self) -> list[RecipeRecord]:
        """Return recipes, most recently updated first."""

    def save_recipe(self, record: RecipeRecord) -> None:
        """Create or replace a recipe document."""


def draft_problems(draft: RecipeDraft, catalog: Catalog | None = None) -> list[str]:
    """Return every reason the draft cannot be saved.

    With a catalog, ingredients whose unit contradicts how the food is
    measured are reported too.
    """
    problems: list[str] = []
    if not draft.name.strip():
        problems.append("Recipe name is required.")
    if not draft.ingredients:
        problems.append("At least one ingredient is required.")
    if draft.servings < 1:
        problems.append("Servings must be at least 1.")
    if catalog is not None:
        problems.extend(
            f"{ingredient.food_name} is measured in "
            f"{ingredient_unit(ingredient, catalog)}, not {ingredient.unit}."
            for ingredient in draft.ingredients
            if unit_conflicts(ingredient, catalog)
        )
    return problems


def validate_draft(draft: RecipeDraft, catalog: Catalog | None = None) -> None:
    """Raise RecipeValidationError when the draft is incomplete."""
    problems = draft_problems(draft, catalog)
    if problems:
        raise RecipeValidationError(problems)


def recipe_food_name(recipe_name: str, suffix: str = RECIPE_FOOD_SUFFIX) -> str:
    """Return the catalog name of the food synthesized from a recipe."""
    return f"{recipe_name.strip()}{suffix}"


def ingredient_unit(ingredient: RecipeIngredient, catalog: Catalog) -> IngredientUnit:
    """Return the unit an ingredient amount is counted in.

    A catalog food fixes the kind: unit foods are always counted in units and
    weight foods in grams or millilitres. The explicit unit only decides for
    names missing from the catalog and for g versus ml.
    """
    food = catalog.get(ingredient.food_name)
    if food is None:
        return ingredient.unit or IngredientUnit.GRAMS
    if food.measure is MeasureKind.UNIT:
        return IngredientUnit.UNITS
    if ingredient.unit in WEIGHT_UNITS:
        return ingredient.unit
    return IngredientUnit.GRAMS


def unit_conflicts(ingredient: RecipeIngredient, catalog: Catalog) -> bool:
    """Return True when the explicit unit contradicts the catalog food."""
    if ingredient.unit is None or ingredient.food_name not in catalog:
        return False
    return ingredient.unit is not ingredient_unit(ingredient, catalog)


def total_weight(ingredients: tuple[RecipeIngredient, ...], catalog: Catalog) -> float:
    """Sum grams and millilitres (1:1); counted ingredients are left out."""
    return sum(
        ingredient.amount
        for ingredient in ingredients
        if ingredient_unit(ingredient, catalog) in WEIGHT_UNITS
    )


def normalize_recipe(
    draft: RecipeDraft,
    catalog: Catalog,
    *,
    food_suffix: str = RECIPE_FOOD_SUFFIX,
) -> NormalizedRecipe:
    """Compute recipe totals and re-express them as a per-100 g food.

    A zero total weight yields zero per-100 g nutrition and zero cost per
    kilogram instead of dividing by zero.
    """
    entries = [
        SelectedFood(name=ingredient.food_name, amount=ingredient.amount)
        for ingredient in draft.ingredients
    ]
    weight = total_weight(draft.ingredients, catalog)
    nutrition = macros_for_many(entries, catalog)
    cost = total_cost_for(entries, catalog).total

    if weight > 0:
        per_100g = scale_nutrition(nutrition, 100.0 / weight)
        cost_per_kg = cost / (weight / GRAMS_PER_KILOGRAM)
    else:
        per_100g = ZERO_NUTRITION
        cost_per_kg = 0.0

    per_serving, cost_per_serving = _per_serving(nutrition, cost, draft.servings)
    fixed_amounts: tuple[float, ...] = ()
    if draft.is_fixed_serving and weight > 0 and draft.servings >= 1:
        fixed_amounts = (weight / draft.servings,)
    food = FoodRecord(
        name=recipe_food_name(draft.name, food_suffix),
        nutrition=per_100g,
        measure=MeasureKind.WEIGHT,
        cost=FoodCost(amount=cost_per_kg, unit=CostUnit.PER_KILOGRAM),
        category=draft.category or "Other",
        use_fixed_amount=bool(fixed_amounts),
        fixed_amounts=fixed_amounts,
        derived_from_recipe_id=draft.id,
    )
    return NormalizedRecipe(
        food=food,
        total_weight_g=weight,
        total_nutrition=nutrition,
        total_cost=cost,
        nutrition_per_100g=per_100g,
        cost_per_kilogram=cost_per_kg,
        nutrition_per_serving=per_serving,
        cost_per_serving=cost_per_serving,
    )


def _per_serving(
    nutrition: Nutrition, cost: float, servings: int
) -> tuple[Nutrition, float]:
    if servings <= 0:
        return ZERO_NUTRITION, 0.0
    return scale_nutrition(nutrition, 1.0 / servings), cost / servings


@dataclass
class RecipeService:
    """Turns recipe drafts into stored recipes and reusable catalog foods."""

    repository: RecipeRepository
    catalog_service: CatalogService
    food_suffix: str = RECIPE_FOOD_SUFFIX
    debug: bool = False

    def preview(self, draft: RecipeDraft) -> NormalizedRecipe:
        """Normalize a draft against the current catalog without saving."""
        return normalize_recipe(
            draft, self.catalog_service.snapshot(), food_suffix=self.food_suffix
        )

    def save(self, draft: RecipeDraft) -> RecipeRecord:
        """Validate, normalize and persist a recipe and its catalog food."""
        catalog = self.catalog_service.snapshot()
        validate_draft(draft, catalog)
        now = datetime.now(tz=UTC)
        existing = self.repository.get_recipe(draft.id) if draft.id else None
        recipe_id = draft.id or uuid4().hex
        stored_draft = replace(draft, id=recipe_id)
        normalized = normalize_recipe(
            stored_draft, catalog, food_suffix=self.food_suffix
        )
        record = RecipeRecord(
            id=recipe_id,
            draft=stored_draft,
            normalized=normalized,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self.repository.save_recipe(record)
        self.catalog_service.upsert(normalized.food)
        if existing is not None:
            self._retire_renamed_food(existing, normalized.food.name)
        if self.debug:
            _logger.info(
                "Recipe saved: id=%s food=%s weight_g=%s",
                recipe_id,
                normalized.food.name,
                normalized.total_weight_g,
            )
        return record

    def _retire_renamed_food(self, existing: RecipeRecord, current_name: str) -> None:
        previous_name = existing.normalized.food.name
        if previous_name == current_name:
            return
        previous = self.catalog_service.get(previous_name) or existing.normalized.food
        self.catalog_service.upsert(replace(previous, hidden=True))
        _logger.info("Recipe food renamed: %s -> %s", previous_name, current_name)

    def list_recipes(self) -> list[RecipeRecord]:
        """Return stored recipes."""
        return self.repository.list_recipes()
