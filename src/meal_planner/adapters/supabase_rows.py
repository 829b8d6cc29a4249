"""Row conversion helpers shared by Supabase adapters."""

from meal_planner.domain.foods import Nutrition


def nutrition_to_json(nutrition: Nutrition) -> dict[str, float]:
    """Serialize nutrition into a JSON column value."""
    return {
        "protein": nutrition.protein,
        "fats": nutrition.fats,
        "carbs": nutrition.carbs,
        "calories": nutrition.calories,
    }


def nutrition_from_json(raw: object) -> Nutrition:
    """Parse a JSON column value, treating missing macros as zero."""
    if not isinstance(raw, dict):
        return Nutrition()
    return Nutrition(
        protein=to_float(raw.get("protein")),
        fats=to_float(raw.get("fats")),
        carbs=to_float(raw.get("carbs")),
        calories=to_float(raw.get("calories")),
    )


def to_float(value: object) -> float:
    """Coerce a stored number to float, defaulting to 0."""
    if isinstance(value, int | float):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return 0.0
    return 0.0
