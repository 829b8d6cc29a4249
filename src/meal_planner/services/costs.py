"""Cost calculation over catalog foods."""

import logging
from collections.abc import Iterable

from meal_planner.domain.foods import Catalog, CostUnit, FoodRecord
from meal_planner.domain.plans import MealCost, SelectedFood

_logger = logging.getLogger(__name__)

GRAMS_PER_KILOGRAM = 1000.0


def cost_for(food: FoodRecord | None, amount: float) -> float | None:
    """Return the cost of an amount of food.

    None means the food carries no cost data, which is distinct from a cost
    of zero.
    """
    if food is None or food.cost is None:
        return None
    if food.cost.unit is CostUnit.PER_UNIT:
        return food.cost.amount * amount
    return food.cost.amount / GRAMS_PER_KILOGRAM * amount


def total_cost_for(entries: Iterable[SelectedFood], catalog: Catalog) -> MealCost:
    """Return per-name costs and their total.

    Repeated names accumulate. Unpriced or unknown names record 0 and are
    listed in ``unpriced``; the total is never None.
    """
    per_entry: dict[str, float] = {}
    unpriced: set[str] = set()
    total = 0.0
    for entry in entries:
        cost = cost_for(catalog.get(entry.name), entry.amount)
        if cost is None:
            _logger.debug("No cost data for %s", entry.name)
            per_entry.setdefault(entry.name, 0.0)
            unpriced.add(entry.name)
            continue
        per_entry[entry.name] = per_entry.get(entry.name, 0.0) + cost
        total += cost
    return MealCost(per_entry=per_entry, total=total, unpriced=frozenset(unpriced))


def cost_per_protein_gram(food: FoodRecord | None) -> float | None:
    """Return the price of one gram of protein.

    Uses one unit for unit-priced foods and 100 g for weight-priced foods.
    """
    if food is None or food.cost is None or food.nutrition.protein <= 0:
        return None
    if food.cost.unit is CostUnit.PER_UNIT:
        reference_cost = food.cost.amount
    else:
        reference_cost = food.cost.amount / GRAMS_PER_KILOGRAM * 100
    return reference_cost / food.nutrition.protein
