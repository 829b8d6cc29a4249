"""Supabase implementation of the food catalog."""

from dataclasses import dataclass

from supabase import Client

from meal_planner.adapters.supabase_rows import to_float
from meal_planner.domain.foods import (
    CostUnit,
    FoodCost,
    FoodRecord,
    MeasureKind,
    Nutrition,
)
from meal_planner.services.catalog import CatalogRepository


@dataclass
class SupabaseCatalogRepository(CatalogRepository):
    """Supabase-backed catalog keyed by food name."""

    client: Client

    def list_foods(self) -> list[FoodRecord]:
        """Return every catalog food ordered by name."""
        response = self.client.table("foods").select("*").order("name").execute()
        return [_parse_food(row) for row in response.data or []]

    def upsert_food(self, food: FoodRecord) -> FoodRecord:
        """Create or replace a food keyed by name."""
        response = (
            self.client.table("foods")
            .upsert(_serialize_food(food), on_conflict="name")
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to upsert food {food.name!r}")
        return _parse_food(response.data[0])


def _serialize_food(food: FoodRecord) -> dict[str, object]:
    return {
        "name": food.name,
        "protein": food.nutrition.protein,
        "fats": food.nutrition.fats,
        "carbs": food.nutrition.carbs,
        "calories": food.nutrition.calories,
        "is_unit_food": food.is_unit_food,
        "cost_amount": food.cost.amount if food.cost else None,
        "cost_unit": food.cost.unit.value if food.cost else None,
        "category": food.category,
        "use_fixed_amount": food.use_fixed_amount,
        "fixed_amounts": list(food.fixed_amounts),
        "hidden": food.hidden,
        "derived_from_recipe_id": food.derived_from_recipe_id,
    }


def _parse_food(row: dict[str, object]) -> FoodRecord:
    """Parse a catalog row into a domain model."""
    cost_amount = row.get("cost_amount")
    cost = None
    if isinstance(cost_amount, int | float):
        cost = FoodCost(
            amount=float(cost_amount),
            unit=CostUnit(row.get("cost_unit") or CostUnit.PER_KILOGRAM),
        )
    fixed_raw = row.get("fixed_amounts")
    if isinstance(fixed_raw, list):
        fixed_amounts = tuple(to_float(value) for value in fixed_raw)
    elif isinstance(row.get("fixed_amount"), int | float):
        fixed_amounts = (float(row["fixed_amount"]),)
    else:
        fixed_amounts = ()
    return FoodRecord(
        name=str(row.get("name", "")),
        nutrition=Nutrition(
            protein=to_float(row.get("protein")),
            fats=to_float(row.get("fats")),
            carbs=to_float(row.get("carbs")),
            calories=to_float(row.get("calories")),
        ),
        measure=MeasureKind.UNIT if row.get("is_unit_food") else MeasureKind.WEIGHT,
        cost=cost,
        category=str(row.get("category") or "Other"),
        use_fixed_amount=bool(row.get("use_fixed_amount")),
        fixed_amounts=fixed_amounts,
        hidden=bool(row.get("hidden")),
        derived_from_recipe_id=row.get("derived_from_recipe_id"),
    )
