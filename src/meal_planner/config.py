"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from meal_planner.domain.goals import NutritionGoal

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    environment: str = _ENVIRONMENT
    catalog_ttl_seconds: int = 300
    recipe_food_suffix: str = " (Recipe)"
    timeslot_ids: str = "6pm,9:30pm"
    default_protein_goal: float = 125
    default_fats_goal: float = 61
    default_carbs_goal: float = 287
    default_calories_goal: float = 2150
    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def default_goal(self) -> NutritionGoal:
        """Goal used when a user has not stored one."""
        return NutritionGoal(
            protein=self.default_protein_goal,
            fats=self.default_fats_goal,
            carbs=self.default_carbs_goal,
            calories=self.default_calories_goal,
        )


def parse_timeslot_ids(raw: str | None) -> tuple[str, ...]:
    """Parse a comma-separated list of timeslot ids, dropping blanks and repeats."""
    if raw is None:
        return ()
    ids: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip()
        if value and value not in ids:
            ids.append(value)
    return tuple(ids)
