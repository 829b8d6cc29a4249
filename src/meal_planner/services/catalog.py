"""Catalog snapshot access and favorites ranking."""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol

from meal_planner.domain.foods import FoodRecord, catalog_from_foods
from meal_planner.domain.plans import DailyPlan
from meal_planner.services.cache import Cache

_SNAPSHOT_KEY = "catalog:snapshot"

_logger = logging.getLogger(__name__)


class CatalogRepository(Protocol):
    """Persistence interface for the food catalog."""

    def list_foods(self) -> list[FoodRecord]:
        """Return every catalog food, hidden ones included."""

    def upsert_food(self, food: FoodRecord) -> FoodRecord:
        """Create or replace a food keyed by name and return it."""


@dataclass
class CatalogService:
    """Serves whole catalog snapshots to the calculation engine.

    A snapshot is always replaced as a unit. Totals are recomputed from the
    current snapshot on every call and never cached here.
    """

    repository: CatalogRepository
    cache: Cache
    ttl_seconds: int = 300
    debug: bool = False

    def snapshot(self) -> dict[str, FoodRecord]:
        """Return the current catalog keyed by food name."""
        cached = self.cache.get(_SNAPSHOT_KEY)
        if isinstance(cached, dict):
            return cached
        return self.replace(self.repository.list_foods())

    def replace(self, foods: list[FoodRecord]) -> dict[str, FoodRecord]:
        """Install a fresh snapshot, e.g. from a storage subscription."""
        catalog = catalog_from_foods(foods)
        self.cache.set(_SNAPSHOT_KEY, catalog, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info("Catalog snapshot replaced: foods=%s", len(catalog))
        return catalog

    def invalidate(self) -> None:
        """Discard the snapshot so the next read reloads it."""
        self.cache.delete(_SNAPSHOT_KEY)

    def upsert(self, food: FoodRecord) -> FoodRecord:
        """Persist a food and invalidate the snapshot."""
        stored = self.repository.upsert_food(food)
        self.invalidate()
        return stored

    def get(self, name: str) -> FoodRecord | None:
        """Return a food by name, hidden foods included."""
        return self.snapshot().get(name)

    def visible_foods(self) -> list[FoodRecord]:
        """Return foods offered for selection, sorted by name."""
        return sorted(
            (food for food in self.snapshot().values() if not food.hidden),
            key=lambda food: food.name,
        )

    def favorites(self, plans: Iterable[DailyPlan], limit: int = 5) -> list[FoodRecord]:
        """Rank visible foods by how often they appear across plans."""
        catalog = self.snapshot()
        counts: Counter[str] = Counter()
        for plan in plans:
            for timeslot in plan.timeslots.values():
                counts.update(entry.name for entry in timeslot.selected_foods)
        ranked = sorted(
            (
                (count, name)
                for name, count in counts.items()
                if name in catalog and not catalog[name].hidden
            ),
            key=lambda item: (-item[0], item[1]),
        )
        return [catalog[name] for _, name in ranked[:limit]]
