"""Supabase repository for recipe documents."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    nutrition_from_json,
    nutrition_to_json,
    to_float,
)
from meal_planner.domain.foods import CostUnit, FoodCost, FoodRecord
from meal_planner.domain.recipes import (
    IngredientUnit,
    NormalizedRecipe,
    RecipeDraft,
    RecipeIngredient,
    RecipeRecord,
)
from meal_planner.services.recipes import RecipeRepository


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe storage."""

    client: Client

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        """Return a recipe by id, if present."""
        response = (
            self.client.table("recipes")
            .select("*")
            .eq("id", recipe_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def list_recipes(self) -> list[RecipeRecord]:
        """Return recipes, most recently updated first."""
        response = (
            self.client.table("recipes")
            .select("*")
            .order("updated_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def save_recipe(self, record: RecipeRecord) -> None:
        """Create or replace a recipe document."""
        response = (
            self.client.table("recipes")
            .upsert(_serialize_recipe(record), on_conflict="id")
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to save recipe {record.id}")


def _serialize_recipe(record: RecipeRecord) -> dict[str, object]:
    draft = record.draft
    normalized = record.normalized
    return {
        "id": record.id,
        "name": draft.name,
        "description": draft.description,
        "instructions": [step for step in draft.instructions if step.strip()],
        "ingredients": [
            {
                "food_name": ingredient.food_name,
                "amount": ingredient.amount,
                "unit": ingredient.unit.value if ingredient.unit else None,
            }
            for ingredient in draft.ingredients
        ],
        "servings": draft.servings,
        "is_fixed_serving": draft.is_fixed_serving,
        "category": draft.category,
        "cooking_time_minutes": draft.cooking_time_minutes,
        "difficulty": draft.difficulty,
        "tags": list(draft.tags),
        "food_name": normalized.food.name,
        "total_weight_g": normalized.total_weight_g,
        "total_nutrition": nutrition_to_json(normalized.total_nutrition),
        "total_cost": normalized.total_cost,
        "nutrition_per_100g": nutrition_to_json(normalized.nutrition_per_100g),
        "cost_per_kilogram": normalized.cost_per_kilogram,
        "nutrition_per_serving": nutrition_to_json(normalized.nutrition_per_serving),
        "cost_per_serving": normalized.cost_per_serving,
        "created_at": record.created_at.isoformat(),
        "updated_at": record.updated_at.isoformat(),
    }


def _parse_ingredient(raw: dict[str, object]) -> RecipeIngredient:
    unit_raw = raw.get("unit")
    return RecipeIngredient(
        food_name=str(raw.get("food_name", "")),
        amount=to_float(raw.get("amount")),
        unit=IngredientUnit(unit_raw) if unit_raw else None,
    )


def _parse_recipe(row: dict[str, object]) -> RecipeRecord:
    """Parse a recipe row into a domain model."""
    recipe_id = str(row["id"])
    ingredients = row.get("ingredients") or []
    draft = RecipeDraft(
        id=recipe_id,
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        instructions=tuple(row.get("instructions") or ()),
        ingredients=tuple(
            _parse_ingredient(raw) for raw in ingredients if isinstance(raw, dict)
        ),
        servings=int(row.get("servings") or 1),
        is_fixed_serving=bool(row.get("is_fixed_serving")),
        category=str(row.get("category") or "Other"),
        cooking_time_minutes=row.get("cooking_time_minutes"),
        difficulty=row.get("difficulty"),
        tags=tuple(row.get("tags") or ()),
    )
    per_100g = nutrition_from_json(row.get("nutrition_per_100g"))
    cost_per_kilogram = to_float(row.get("cost_per_kilogram"))
    total_weight_g = to_float(row.get("total_weight_g"))
    fixed_amounts: tuple[float, ...] = ()
    if draft.is_fixed_serving and total_weight_g > 0 and draft.servings >= 1:
        fixed_amounts = (total_weight_g / draft.servings,)
    normalized = NormalizedRecipe(
        food=FoodRecord(
            name=str(row.get("food_name", "")),
            nutrition=per_100g,
            cost=FoodCost(amount=cost_per_kilogram, unit=CostUnit.PER_KILOGRAM),
            category=draft.category,
            use_fixed_amount=bool(fixed_amounts),
            fixed_amounts=fixed_amounts,
            derived_from_recipe_id=recipe_id,
        ),
        total_weight_g=total_weight_g,
        total_nutrition=nutrition_from_json(row.get("total_nutrition")),
        total_cost=to_float(row.get("total_cost")),
        nutrition_per_100g=per_100g,
        cost_per_kilogram=cost_per_kilogram,
        nutrition_per_serving=nutrition_from_json(row.get("nutrition_per_serving")),
        cost_per_serving=to_float(row.get("cost_per_serving")),
    )
    return RecipeRecord(
        id=recipe_id,
        draft=draft,
        normalized=normalized,
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
    )
