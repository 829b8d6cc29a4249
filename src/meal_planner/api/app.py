"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from meal_planner.api.schemas import (
    GoalPayload,
    PlanPayload,
    ProfilePayload,
    QuickAddPayload,
    RecipePayload,
    PreviewPayload,
    SwapPayload,
)
from meal_planner.app_logging import configure_logging
from meal_planner.containers import AppContainer
from meal_planner.domain.plans import DailyPlan
from meal_planner.services.goals import (
    GoalValidationError,
    calculate_macro_targets,
    goal_progress,
)
from meal_planner.services.recipes import RecipeValidationError


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.container.catalog_service.snapshot()
        except Exception:
            logger.exception("Failed to warm the catalog snapshot")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    def _container(request: Request) -> AppContainer:
        return request.app.state.container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/catalog")
    async def catalog(request: Request) -> dict[str, object]:
        """Return foods offered for selection."""
        return {"foods": _container(request).catalog_service.visible_foods()}

    @app.get("/catalog/favorites")
    async def favorites(
        user_id: UUID, request: Request, limit: int = 5
    ) -> dict[str, object]:
        """Return the user's most frequently planned foods."""
        state = _container(request)
        plans = state.plan_service.recent_plans(user_id)
        return {"foods": state.catalog_service.favorites(plans, limit=limit)}

    @app.get("/plans/{user_id}/{day}")
    async def get_plan(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return the plan for a day, empty when none is stored."""
        return {"plan": _container(request).plan_service.load(user_id, day)}

    @app.put("/plans/{user_id}/{day}")
    async def put_plan(
        user_id: UUID, day: date, payload: PlanPayload, request: Request
    ) -> dict[str, object]:
        """Replace the plan for a day and return its totals."""
        plan_service = _container(request).plan_service
        stored = plan_service.load(user_id, day)
        timeslots = dict(stored.timeslots)
        timeslots.update(
            {key: value.to_domain() for key, value in payload.timeslots.items()}
        )
        plan = DailyPlan(user_id=user_id, day=day, timeslots=timeslots)
        totals = plan_service.save(plan)
        return {"plan": plan, "totals": totals}

    @app.get("/plans/{user_id}/{day}/summary")
    async def plan_summary(
        user_id: UUID, day: date, request: Request
    ) -> dict[str, object]:
        """Return totals, cost breakdown and goal progress for a day."""
        state = _container(request)
        plan = state.plan_service.load(user_id, day)
        totals = state.plan_service.totals(plan)
        cost = state.plan_service.cost(plan)
        goal = state.goal_service.get_goal(user_id)
        return {
            "totals": totals,
            "goal": goal,
            "progress": goal_progress(totals, goal),
            "cost": {
                "per_timeslot": cost.per_timeslot,
                "total": cost.total,
                "unpriced": sorted(cost.unpriced),
            },
        }

    @app.post("/plans/{user_id}/{day}/preview")
    async def plan_preview(
        user_id: UUID,
        day: date,
        payload: PreviewPayload,
        request: Request,
    ) -> dict[str, object]:
        """Return before/after figures for a candidate food."""
        state = _container(request)
        plan = state.plan_service.load(user_id, day)
        goal = state.goal_service.get_goal(user_id)
        nutrition, cost = state.plan_service.preview(
            plan, payload.timeslot_id, payload.to_domain(), goal
        )
        return {"nutrition": nutrition, "cost": cost}

    @app.post("/plans/{user_id}/{day}/swap")
    async def plan_swap(
        user_id: UUID, day: date, payload: SwapPayload, request: Request
    ) -> dict[str, object]:
        """Move an entry between timeslots."""
        try:
            plan = _container(request).plan_service.swap(
                user_id,
                day,
                payload.from_timeslot,
                payload.index,
                payload.to_timeslot,
            )
        except (IndexError, KeyError, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found"
            ) from exc
        return {"plan": plan}

    @app.post("/plans/{user_id}/{day}/favorites")
    async def plan_quick_add(
        user_id: UUID, day: date, payload: QuickAddPayload, request: Request
    ) -> dict[str, object]:
        """Add a favorite food at its default amount."""
        state = _container(request)
        if state.catalog_service.get(payload.food_name) is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Food not found"
            )
        plan = state.plan_service.quick_add(
            user_id, day, payload.timeslot_id, payload.food_name
        )
        return {"plan": plan}

    @app.get("/recipes")
    async def list_recipes(request: Request) -> dict[str, object]:
        """Return stored recipes."""
        return {"recipes": _container(request).recipe_service.list_recipes()}

    @app.post("/recipes/preview")
    async def recipe_preview(
        payload: RecipePayload, request: Request
    ) -> dict[str, object]:
        """Normalize a draft without saving it."""
        normalized = _container(request).recipe_service.preview(payload.to_domain())
        return {"recipe": normalized}

    @app.post("/recipes", status_code=status.HTTP_201_CREATED)
    async def save_recipe(
        payload: RecipePayload, request: Request
    ) -> dict[str, object]:
        """Save a recipe and register it as a catalog food."""
        try:
            record = _container(request).recipe_service.save(payload.to_domain())
        except RecipeValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=exc.problems,
            ) from exc
        return {"id": record.id, "recipe": record.normalized}

    @app.get("/goals/{user_id}")
    async def get_goal(user_id: UUID, request: Request) -> dict[str, object]:
        """Return the user's goal or the default."""
        return {"goal": _container(request).goal_service.get_goal(user_id)}

    @app.put("/goals/{user_id}")
    async def put_goal(
        user_id: UUID, payload: GoalPayload, request: Request
    ) -> dict[str, object]:
        """Store the user's goal."""
        try:
            goal = _container(request).goal_service.save_goal(
                user_id, payload.to_domain()
            )
        except GoalValidationError as exc:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {"goal": goal}

    @app.post("/goals/calculate")
    async def calculate_goal(payload: ProfilePayload) -> dict[str, object]:
        """Derive macro targets from body metrics."""
        return {"targets": calculate_macro_targets(payload.to_domain())}

    return app
