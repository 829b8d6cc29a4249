"""Supabase repository for user nutrition goals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import to_float
from meal_planner.domain.goals import NutritionGoal
from meal_planner.services.goals import GoalRepository


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase implementation for nutrition goals."""

    client: Client

    def get_goal(self, user_id: UUID) -> NutritionGoal | None:
        """Return the stored goal for a user."""
        response = (
            self.client.table("nutrition_goals")
            .select("*")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return NutritionGoal(
            protein=to_float(row.get("protein")),
            fats=to_float(row.get("fats")),
            carbs=to_float(row.get("carbs")),
            calories=to_float(row.get("calories")),
        )

    def save_goal(self, user_id: UUID, goal: NutritionGoal) -> None:
        """Create or replace a user's goal."""
        self.client.table("nutrition_goals").upsert(
            {
                "user_id": str(user_id),
                "protein": goal.protein,
                "fats": goal.fats,
                "carbs": goal.carbs,
                "calories": goal.calories,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id",
        ).execute()
