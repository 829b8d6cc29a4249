"""Domain models for daily meal plans."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from meal_planner.domain.foods import ZERO_NUTRITION, Nutrition


@dataclass(frozen=True)
class SelectedFood:
    """A food placed in a timeslot or recipe.

    ``amount`` is grams for weight foods and a count for unit foods.
    """

    name: str
    amount: float


@dataclass(frozen=True)
class TimeslotPlan:
    """Foods and externally logged nutrition for one meal window."""

    selected_foods: tuple[SelectedFood, ...] = ()
    external_nutrition: Nutrition = ZERO_NUTRITION


EMPTY_TIMESLOT = TimeslotPlan()


@dataclass(frozen=True)
class TimeslotConfig:
    """Display configuration of a named meal window."""

    id: str
    name: str
    time: str


DEFAULT_TIMESLOTS: tuple[TimeslotConfig, ...] = (
    TimeslotConfig(id="6pm", name="Afternoon", time="6:00 PM"),
    TimeslotConfig(id="9:30pm", name="Evening", time="9:30 PM"),
)


@dataclass(frozen=True)
class DailyPlan:
    """All timeslots planned for one user on one calendar day."""

    user_id: UUID
    day: date
    timeslots: dict[str, TimeslotPlan] = field(default_factory=dict)

    @property
    def document_id(self) -> str:
        """Storage key, one plan per user per day."""
        return plan_document_id(self.user_id, self.day)


def plan_document_id(user_id: UUID, day: date) -> str:
    """Return the storage key for a user's plan on a day."""
    return f"{user_id}_{day.isoformat()}"


@dataclass(frozen=True)
class MealCost:
    """Cost breakdown for a list of selected foods.

    Names in ``unpriced`` had no cost data; their ``per_entry`` value is 0 and
    must not be presented as a verified free item.
    """

    per_entry: dict[str, float]
    total: float
    unpriced: frozenset[str] = frozenset()

    @property
    def fully_priced(self) -> bool:
        """Return True when every entry had cost data."""
        return not self.unpriced


@dataclass(frozen=True)
class DailyCost:
    """Cost breakdown for every timeslot of a day."""

    per_timeslot: dict[str, MealCost]
    total: float

    @property
    def unpriced(self) -> frozenset[str]:
        """Return names without cost data in any timeslot."""
        names: set[str] = set()
        for cost in self.per_timeslot.values():
            names.update(cost.unpriced)
        return frozenset(names)
