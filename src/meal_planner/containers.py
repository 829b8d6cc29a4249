"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_catalog_repository import (
    SupabaseCatalogRepository,
)
from meal_planner.adapters.supabase_goal_repository import SupabaseGoalRepository
from meal_planner.adapters.supabase_plan_repository import SupabasePlanRepository
from meal_planner.adapters.supabase_recipe_repository import (
    SupabaseRecipeRepository,
)
from meal_planner.config import Settings, parse_timeslot_ids
from meal_planner.services.cache import InMemoryCache
from meal_planner.services.catalog import CatalogService
from meal_planner.services.goals import GoalService
from meal_planner.services.plans import PlanService
from meal_planner.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    plan_service: PlanService
    recipe_service: RecipeService
    goal_service: GoalService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = CatalogService(
        repository=SupabaseCatalogRepository(supabase_client),
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.catalog_ttl_seconds,
        debug=resolved_settings.debug,
    )
    plan_service = PlanService(
        repository=SupabasePlanRepository(supabase_client),
        catalog_service=catalog_service,
        timeslot_ids=parse_timeslot_ids(resolved_settings.timeslot_ids),
        debug=resolved_settings.debug,
    )
    recipe_service = RecipeService(
        repository=SupabaseRecipeRepository(supabase_client),
        catalog_service=catalog_service,
        food_suffix=resolved_settings.recipe_food_suffix,
        debug=resolved_settings.debug,
    )
    goal_service = GoalService(
        repository=SupabaseGoalRepository(supabase_client),
        default_goal=resolved_settings.default_goal,
    )

    async def close_resources() -> None:
        catalog_service.invalidate()

    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        plan_service=plan_service,
        recipe_service=recipe_service,
        goal_service=goal_service,
        close_resources=close_resources,
    )
