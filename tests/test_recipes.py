"""Tests for recipe normalization and storage."""

import pytest

from meal_planner.domain.foods import ZERO_NUTRITION, CostUnit, MeasureKind
from meal_planner.domain.recipes import IngredientUnit, RecipeDraft, RecipeIngredient
from meal_planner.services.recipes import (
    RecipeValidationError,
    draft_problems,
    ingredient_unit,
    normalize_recipe,
    recipe_food_name,
    total_weight,
    validate_draft,
)
from meal_planner.services.units import default_amount
from tests.conftest import InMemoryCatalogRepository, InMemoryRecipeRepository


def _draft(*ingredients: RecipeIngredient, **kwargs: object) -> RecipeDraft:
    kwargs.setdefault("name", "Chicken Bowl")
    return RecipeDraft(ingredients=ingredients, **kwargs)  # type: ignore[arg-type]


def test_normalize_single_ingredient_per_hundred_grams(catalog) -> None:
    normalized = normalize_recipe(
        _draft(RecipeIngredient(food_name="Chicken Breast", amount=200)), catalog
    )

    assert normalized.total_weight_g == 200
    assert normalized.total_nutrition.protein == 40
    assert normalized.nutrition_per_100g.protein == 20
    assert normalized.food.nutrition == normalized.nutrition_per_100g


def test_normalize_combines_ingredients_and_servings(catalog) -> None:
    normalized = normalize_recipe(
        _draft(
            RecipeIngredient(food_name="Rice", amount=300),
            RecipeIngredient(food_name="Chicken Breast", amount=200),
            servings=5,
        ),
        catalog,
    )

    assert normalized.total_weight_g == 500
    assert normalized.total_nutrition.protein == pytest.approx(47.5)
    assert normalized.nutrition_per_100g.protein == pytest.approx(9.5)
    assert normalized.nutrition_per_100g.calories == pytest.approx(122)
    assert normalized.nutrition_per_serving.protein == pytest.approx(9.5)
    assert normalized.nutrition_per_serving.carbs == pytest.approx(16.8)
    assert normalized.total_cost == pytest.approx(1.96)
    assert normalized.cost_per_kilogram == pytest.approx(3.92)
    assert normalized.cost_per_serving == pytest.approx(0.392)


def test_normalize_excludes_counted_ingredients_from_weight(catalog) -> None:
    normalized = normalize_recipe(
        _draft(
            RecipeIngredient(food_name="Chicken Breast", amount=200),
            RecipeIngredient(food_name="Eggs", amount=2),
        ),
        catalog,
    )

    assert normalized.total_weight_g == 200
    assert normalized.total_nutrition.protein == 52
    assert normalized.nutrition_per_100g.protein == 26


def test_normalize_zero_weight_yields_zero_density(catalog) -> None:
    normalized = normalize_recipe(
        _draft(RecipeIngredient(food_name="Eggs", amount=2)), catalog
    )

    assert normalized.total_weight_g == 0
    assert normalized.nutrition_per_100g == ZERO_NUTRITION
    assert normalized.cost_per_kilogram == 0
    assert normalized.nutrition_per_serving.protein == 12
    assert normalized.cost_per_serving == 0.5


def test_normalize_guards_non_positive_servings(catalog) -> None:
    normalized = normalize_recipe(
        _draft(RecipeIngredient(food_name="Rice", amount=100), servings=0), catalog
    )

    assert normalized.nutrition_per_serving == ZERO_NUTRITION
    assert normalized.cost_per_serving == 0


def test_normalized_food_is_a_weight_food(catalog) -> None:
    normalized = normalize_recipe(
        _draft(
            RecipeIngredient(food_name="Rice", amount=100),
            category="Bowls",
            id="recipe-1",
        ),
        catalog,
    )

    food = normalized.food
    assert food.name == "Chicken Bowl (Recipe)"
    assert food.measure is MeasureKind.WEIGHT
    assert food.cost is not None
    assert food.cost.unit is CostUnit.PER_KILOGRAM
    assert food.category == "Bowls"
    assert food.derived_from_recipe_id == "recipe-1"
    assert food.is_recipe


def test_ingredient_unit_resolution(catalog) -> None:
    assert ingredient_unit(RecipeIngredient("Eggs", 2), catalog) is IngredientUnit.UNITS
    assert ingredient_unit(RecipeIngredient("Rice", 2), catalog) is IngredientUnit.GRAMS
    assert ingredient_unit(RecipeIngredient("Unknown", 2), catalog) is (
        IngredientUnit.GRAMS
    )
    explicit = RecipeIngredient("Olive Oil", 10, unit=IngredientUnit.MILLILITRES)
    assert ingredient_unit(explicit, catalog) is IngredientUnit.MILLILITRES


def test_total_weight_counts_millilitres(catalog) -> None:
    ingredients = (
        RecipeIngredient("Olive Oil", 10, unit=IngredientUnit.MILLILITRES),
        RecipeIngredient("Chicken Breast", 100),
        RecipeIngredient("Eggs", 1),
    )

    assert total_weight(ingredients, catalog) == 110


def test_recipe_food_name_strips_whitespace() -> None:
    assert recipe_food_name("  Stew ") == "Stew (Recipe)"
    assert recipe_food_name("Stew", suffix=" [R]") == "Stew [R]"


def test_draft_problems_lists_every_issue() -> None:
    draft = RecipeDraft(name=" ", ingredients=(), servings=0)

    problems = draft_problems(draft)

    assert len(problems) == 3
    with pytest.raises(RecipeValidationError) as exc_info:
        validate_draft(draft)
    assert exc_info.value.problems == problems


def test_service_save_registers_catalog_food(
    recipe_service,
    recipe_repository: InMemoryRecipeRepository,
    catalog_repository: InMemoryCatalogRepository,
    catalog_service,
) -> None:
    catalog_service.snapshot()

    record = recipe_service.save(
        _draft(RecipeIngredient(food_name="Chicken Breast", amount=200))
    )

    assert record.id in recipe_repository.recipes
    assert record.draft.id == record.id
    food = catalog_service.get("Chicken Bowl (Recipe)")
    assert food is not None
    assert food.derived_from_recipe_id == record.id
    assert food.nutrition.protein == 20
    assert any(item.name == food.name for item in catalog_repository.foods)


def test_service_resave_keeps_created_at(recipe_service) -> None:
    first = recipe_service.save(
        _draft(RecipeIngredient(food_name="Rice", amount=100), id="bowl")
    )
    second = recipe_service.save(
        _draft(RecipeIngredient(food_name="Rice", amount=200), id="bowl")
    )

    assert second.id == "bowl"
    assert second.created_at == first.created_at
    assert second.normalized.total_weight_g == 200
    assert [record.id for record in recipe_service.list_recipes()] == ["bowl"]


def test_service_save_rejects_invalid_draft(
    recipe_service, recipe_repository: InMemoryRecipeRepository
) -> None:
    with pytest.raises(RecipeValidationError):
        recipe_service.save(RecipeDraft(name="", ingredients=()))

    assert recipe_repository.recipes == {}


def test_service_preview_does_not_persist(
    recipe_service,
    recipe_repository: InMemoryRecipeRepository,
    catalog_repository: InMemoryCatalogRepository,
) -> None:
    normalized = recipe_service.preview(
        _draft(RecipeIngredient(food_name="Rice", amount=100))
    )

    assert normalized.total_weight_g == 100
    assert recipe_repository.recipes == {}
    assert all(not food.is_recipe for food in catalog_repository.foods)


def test_counted_food_ignores_weight_unit(catalog) -> None:
    normalized = normalize_recipe(
        _draft(RecipeIngredient("Eggs", 2, unit=IngredientUnit.GRAMS)), catalog
    )

    assert normalized.total_weight_g == 0
    assert normalized.total_nutrition.protein == 12
    assert normalized.nutrition_per_100g == ZERO_NUTRITION


def test_draft_problems_report_unit_conflicts(catalog) -> None:
    draft = _draft(
        RecipeIngredient("Eggs", 120, unit=IngredientUnit.GRAMS),
        RecipeIngredient("Rice", 2, unit=IngredientUnit.UNITS),
        RecipeIngredient("Olive Oil", 10, unit=IngredientUnit.MILLILITRES),
        RecipeIngredient("Saffron", 1, unit=IngredientUnit.UNITS),
    )

    assert draft_problems(draft) == []
    assert draft_problems(draft, catalog) == [
        "Eggs is measured in units, not g.",
        "Rice is measured in g, not units.",
    ]


def test_service_save_rejects_unit_conflict(
    recipe_service, recipe_repository: InMemoryRecipeRepository
) -> None:
    with pytest.raises(RecipeValidationError) as exc_info:
        recipe_service.save(
            _draft(RecipeIngredient("Eggs", 120, unit=IngredientUnit.GRAMS))
        )

    assert exc_info.value.problems == ["Eggs is measured in units, not g."]
    assert recipe_repository.recipes == {}


def test_fixed_serving_recipe_defaults_to_one_serving(catalog) -> None:
    fixed = normalize_recipe(
        _draft(RecipeIngredient("Rice", 400), servings=2, is_fixed_serving=True),
        catalog,
    )
    loose = normalize_recipe(_draft(RecipeIngredient("Rice", 400), servings=2), catalog)
    counted_only = normalize_recipe(
        _draft(RecipeIngredient("Eggs", 4), servings=2, is_fixed_serving=True),
        catalog,
    )

    assert fixed.food.use_fixed_amount
    assert fixed.food.fixed_amounts == (200,)
    assert default_amount(fixed.food) == 200
    assert default_amount(loose.food) == 100
    assert counted_only.food.fixed_amounts == ()
    assert default_amount(counted_only.food) == 100


def test_service_rename_hides_previous_food(recipe_service, catalog_service) -> None:
    recipe_service.save(_draft(RecipeIngredient("Rice", 100), name="Bowl", id="bowl"))
    recipe_service.save(
        _draft(RecipeIngredient("Rice", 100), name="Rice Bowl", id="bowl")
    )

    visible = [food.name for food in catalog_service.visible_foods() if food.is_recipe]
    previous = catalog_service.get("Bowl (Recipe)")
    assert visible == ["Rice Bowl (Recipe)"]
    assert previous is not None
    assert previous.hidden
    assert previous.derived_from_recipe_id == "bowl"
