"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

import pytest

from meal_planner.config import Settings
from meal_planner.containers import AppContainer
from meal_planner.domain.foods import (
    CostUnit,
    FoodCost,
    FoodRecord,
    MeasureKind,
    Nutrition,
    catalog_from_foods,
)
from meal_planner.domain.goals import NutritionGoal
from meal_planner.domain.plans import DailyPlan, plan_document_id
from meal_planner.domain.recipes import RecipeRecord
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.catalog import CatalogRepository, CatalogService
from meal_planner.services.goals import GoalRepository, GoalService
from meal_planner.services.plans import PlanRepository, PlanService
from meal_planner.services.recipes import RecipeRepository, RecipeService

EGGS = FoodRecord(
    name="Eggs",
    nutrition=Nutrition(protein=6, fats=5, carbs=0.5, calories=70),
    measure=MeasureKind.UNIT,
    cost=FoodCost(amount=0.25, unit=CostUnit.PER_UNIT),
    category="Protein",
)
RICE = FoodRecord(
    name="Rice",
    nutrition=Nutrition(protein=2.5, fats=0.5, carbs=28, calories=130),
    cost=FoodCost(amount=1.2, unit=CostUnit.PER_KILOGRAM),
    category="Grains",
)
CHICKEN = FoodRecord(
    name="Chicken Breast",
    nutrition=Nutrition(protein=20, fats=2, carbs=0, calories=110),
    cost=FoodCost(amount=8, unit=CostUnit.PER_KILOGRAM),
    category="Protein",
)
OLIVE_OIL = FoodRecord(
    name="Olive Oil",
    nutrition=Nutrition(protein=0, fats=100, carbs=0, calories=884),
    category="Fats",
)
WHEY = FoodRecord(
    name="Whey",
    nutrition=Nutrition(protein=80, fats=6, carbs=8, calories=400),
    cost=FoodCost(amount=25, unit=CostUnit.PER_KILOGRAM),
    category="Supplements",
    use_fixed_amount=True,
    fixed_amounts=(30,),
)
OLD_SAUCE = FoodRecord(
    name="Old Sauce",
    nutrition=Nutrition(protein=1, fats=1, carbs=10, calories=50),
    hidden=True,
)

CATALOG_FOODS = [EGGS, RICE, CHICKEN, OLIVE_OIL, WHEY, OLD_SAUCE]


@dataclass
class InMemoryCatalogRepository(CatalogRepository):
    """In-memory catalog repository for tests."""

    foods: list[FoodRecord] = field(default_factory=list)
    list_calls: int = 0

    def list_foods(self) -> list[FoodRecord]:
        self.list_calls += 1
        return list(self.foods)

    def upsert_food(self, food: FoodRecord) -> FoodRecord:
        self.foods = [item for item in self.foods if item.name != food.name]
        self.foods.append(food)
        return food


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan repository for tests."""

    plans: dict[str, DailyPlan] = field(default_factory=dict)
    totals: dict[str, Nutrition] = field(default_factory=dict)

    def get_plan(self, user_id: UUID, day: date) -> DailyPlan | None:
        return self.plans.get(plan_document_id(user_id, day))

    def save_plan(self, plan: DailyPlan, totals: Nutrition) -> None:
        self.plans[plan.document_id] = plan
        self.totals[plan.document_id] = totals

    def list_recent_plans(self, user_id: UUID, limit: int) -> list[DailyPlan]:
        plans = [plan for plan in self.plans.values() if plan.user_id == user_id]
        return sorted(plans, key=lambda plan: plan.day, reverse=True)[:limit]


@dataclass
class InMemoryRecipeRepository(RecipeRepository):
    """In-memory recipe repository for tests."""

    recipes: dict[str, RecipeRecord] = field(default_factory=dict)

    def get_recipe(self, recipe_id: str) -> RecipeRecord | None:
        return self.recipes.get(recipe_id)

    def list_recipes(self) -> list[RecipeRecord]:
        return sorted(
            self.recipes.values(), key=lambda record: record.updated_at, reverse=True
        )

    def save_recipe(self, record: RecipeRecord) -> None:
        self.recipes[record.id] = record


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """In-memory goal repository for tests."""

    goals: dict[UUID, NutritionGoal] = field(default_factory=dict)

    def get_goal(self, user_id: UUID) -> NutritionGoal | None:
        return self.goals.get(user_id)

    def save_goal(self, user_id: UUID, goal: NutritionGoal) -> None:
        self.goals[user_id] = goal


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
    )


@pytest.fixture
def catalog() -> dict[str, FoodRecord]:
    return catalog_from_foods(CATALOG_FOODS)


@pytest.fixture
def catalog_repository() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository(foods=list(CATALOG_FOODS))


@pytest.fixture
def catalog_service(catalog_repository: InMemoryCatalogRepository) -> CatalogService:
    return CatalogService(repository=catalog_repository, cache=InMemoryCache())


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def recipe_repository() -> InMemoryRecipeRepository:
    return InMemoryRecipeRepository()


@pytest.fixture
def goal_repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def plan_service(
    plan_repository: InMemoryPlanRepository, catalog_service: CatalogService
) -> PlanService:
    return PlanService(repository=plan_repository, catalog_service=catalog_service)


@pytest.fixture
def recipe_service(
    recipe_repository: InMemoryRecipeRepository, catalog_service: CatalogService
) -> RecipeService:
    return RecipeService(repository=recipe_repository, catalog_service=catalog_service)


@pytest.fixture
def container(
    settings: Settings,
    catalog_service: CatalogService,
    plan_service: PlanService,
    recipe_service: RecipeService,
    goal_repository: InMemoryGoalRepository,
) -> AppContainer:
    async def close_resources() -> None:
        catalog_service.invalidate()

    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        plan_service=plan_service,
        recipe_service=recipe_service,
        goal_service=GoalService(
            repository=goal_repository, default_goal=settings.default_goal
        ),
        close_resources=close_resources,
    )
