"""Macronutrient calculation over catalog foods."""

import logging
from collections.abc import Iterable

from meal_planner.domain.foods import ZERO_NUTRITION, Catalog, FoodRecord, Nutrition
from meal_planner.domain.plans import SelectedFood
from meal_planner.services.units import resolve_multiplier

_logger = logging.getLogger(__name__)


def macros_for(food: FoodRecord | None, amount: float) -> Nutrition:
    """Scale a food's reference nutrition to the given amount."""
    if food is None:
        return ZERO_NUTRITION
    return scale_nutrition(food.nutrition, resolve_multiplier(food, amount))


def macros_for_many(entries: Iterable[SelectedFood], catalog: Catalog) -> Nutrition:
    """Sum macros for entries, looking foods up by name.

    Names missing from the catalog contribute zero.
    """
    return accumulate_macros(ZERO_NUTRITION, entries, catalog)


def accumulate_macros(
    start: Nutrition, entries: Iterable[SelectedFood], catalog: Catalog
) -> Nutrition:
    """Add each entry's macros onto ``start`` in list order.

    Adding one more entry to a returned total gives the same floats as
    recomputing with that entry appended.
    """
    total = start
    for entry in entries:
        food = catalog.get(entry.name)
        if food is None:
            _logger.debug("Food not in catalog snapshot: %s", entry.name)
            continue
        total = add_nutrition(total, macros_for(food, entry.amount))
    return total


def add_nutrition(left: Nutrition, right: Nutrition) -> Nutrition:
    """Add two nutrition values element-wise."""
    return Nutrition(
        protein=left.protein + right.protein,
        fats=left.fats + right.fats,
        carbs=left.carbs + right.carbs,
        calories=left.calories + right.calories,
    )


def sum_nutrition(values: Iterable[Nutrition]) -> Nutrition:
    """Add any number of nutrition values element-wise."""
    total = ZERO_NUTRITION
    for value in values:
        total = add_nutrition(total, value)
    return total


def scale_nutrition(nutrition: Nutrition, factor: float) -> Nutrition:
    """Multiply every macro by the same factor."""
    return Nutrition(
        protein=nutrition.protein * factor,
        fats=nutrition.fats * factor,
        carbs=nutrition.carbs * factor,
        calories=nutrition.calories * factor,
    )
