"""Supabase repository for daily meal plans."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from meal_planner.adapters.supabase_rows import (
    nutrition_from_json,
    nutrition_to_json,
    to_float,
)
from meal_planner.domain.foods import Nutrition
from meal_planner.domain.plans import (
    DailyPlan,
    SelectedFood,
    TimeslotPlan,
    plan_document_id,
)
from meal_planner.services.plans import PlanRepository


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Stores one plan document per user per calendar day."""

    client: Client

    def get_plan(self, user_id: UUID, day: date) -> DailyPlan | None:
        """Return the plan stored for a user and day."""
        response = (
            self.client.table("daily_plans")
            .select("*")
            .eq("id", plan_document_id(user_id, day))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def save_plan(self, plan: DailyPlan, totals: Nutrition) -> None:
        """Create or replace the plan document with its totals."""
        response = (
            self.client.table("daily_plans")
            .upsert(
                {
                    "id": plan.document_id,
                    "user_id": str(plan.user_id),
                    "date": plan.day.isoformat(),
                    "timeslots": {
                        timeslot_id: _serialize_timeslot(slot)
                        for timeslot_id, slot in plan.timeslots.items()
                    },
                    "total_macros": nutrition_to_json(totals),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to save plan {plan.document_id}")

    def list_recent_plans(self, user_id: UUID, limit: int) -> list[DailyPlan]:
        """Return the most recent plans for a user."""
        response = (
            self.client.table("daily_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]


def _serialize_timeslot(slot: TimeslotPlan) -> dict[str, object]:
    return {
        "selected_foods": [
            {"name": entry.name, "amount": entry.amount}
            for entry in slot.selected_foods
        ],
        "external_nutrition": nutrition_to_json(slot.external_nutrition),
    }


def _parse_timeslot(raw: object) -> TimeslotPlan:
    if not isinstance(raw, dict):
        return TimeslotPlan()
    entries = raw.get("selected_foods") or []
    return TimeslotPlan(
        selected_foods=tuple(
            SelectedFood(
                name=str(entry.get("name", "")),
                amount=to_float(entry.get("amount")),
            )
            for entry in entries
            if isinstance(entry, dict)
        ),
        external_nutrition=nutrition_from_json(raw.get("external_nutrition")),
    )


def _parse_plan(row: dict[str, object]) -> DailyPlan:
    """Parse a plan row into a domain model."""
    timeslots_raw = row.get("timeslots")
    timeslots = (
        {str(key): _parse_timeslot(value) for key, value in timeslots_raw.items()}
        if isinstance(timeslots_raw, dict)
        else {}
    )
    return DailyPlan(
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        timeslots=timeslots,
    )
