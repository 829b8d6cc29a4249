"""Domain models for the food catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum


@dataclass(frozen=True)
class Nutrition:
    """Macronutrient values for a reference quantity or a computed total."""

    protein: float = 0.0
    fats: float = 0.0
    carbs: float = 0.0
    calories: float = 0.0


ZERO_NUTRITION = Nutrition()


class MeasureKind(StrEnum):
    """How quantities of a food are interpreted."""

    WEIGHT = "weight"
    UNIT = "unit"


class CostUnit(StrEnum):
    """Reference quantity a food price is expressed against."""

    PER_KILOGRAM = "kg"
    PER_UNIT = "unit"


@dataclass(frozen=True)
class FoodCost:
    """Price of a food per reference quantity."""

    amount: float
    unit: CostUnit = CostUnit.PER_KILOGRAM


@dataclass(frozen=True)
class FoodRecord:
    """Catalog entry.

    ``nutrition`` is per 100 g for weight foods and per single item for unit
    foods. Fixed amounts only change the default selection quantity.
    """

    name: str
    nutrition: Nutrition
    measure: MeasureKind = MeasureKind.WEIGHT
    cost: FoodCost | None = None
    category: str = "Other"
    use_fixed_amount: bool = False
    fixed_amounts: tuple[float, ...] = field(default_factory=tuple)
    hidden: bool = False
    derived_from_recipe_id: str | None = None

    @property
    def is_unit_food(self) -> bool:
        """Return True when quantities are counted in whole items."""
        return self.measure is MeasureKind.UNIT

    @property
    def is_recipe(self) -> bool:
        """Return True when the entry was synthesized from a recipe."""
        return self.derived_from_recipe_id is not None


Catalog = Mapping[str, FoodRecord]


def catalog_from_foods(foods: list[FoodRecord]) -> dict[str, FoodRecord]:
    """Index foods by name; later entries win on duplicate names."""
    return {food.name: food for food in foods}
