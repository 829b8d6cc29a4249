"""Quantity interpretation for catalog foods."""

from meal_planner.domain.foods import FoodRecord, MeasureKind

DEFAULT_WEIGHT_AMOUNT_G = 100.0
DEFAULT_UNIT_AMOUNT = 1.0


def resolve_multiplier(food: FoodRecord | None, amount: float) -> float:
    """Return the factor applied to a food's reference nutrition.

    Weight foods are expressed per 100 g and unit foods per item. An unknown
    food yields 0 so batch totals degrade instead of failing.
    """
    if food is None:
        return 0.0
    if food.measure is MeasureKind.UNIT:
        return amount
    return amount / 100.0


def default_amount(food: FoodRecord | None) -> float:
    """Return the quantity used when a food is first selected."""
    if food is None:
        return DEFAULT_WEIGHT_AMOUNT_G
    if food.use_fixed_amount:
        preset = next((value for value in food.fixed_amounts if value > 0), None)
        if preset is not None:
            return preset
    if food.is_unit_food:
        return DEFAULT_UNIT_AMOUNT
    return DEFAULT_WEIGHT_AMOUNT_G


def unit_label(food: FoodRecord | None) -> str:
    """Return the display unit for a food's quantities."""
    if food is not None and food.is_unit_food:
        return "units"
    return "g"
