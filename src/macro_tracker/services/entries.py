"""Meal entry logging service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.errors import EntryNotFoundError
from macro_tracker.domain.ingredients import IngredientBreakdown
from macro_tracker.services.cache import Cache, stats_cache_prefix
from macro_tracker.services.ingredients import totals_from_ingredients
from macro_tracker.services.metabolism import round_half_up

ENTRY_FIELDS = frozenset(
    {
        "name",
        "calories",
        "protein_g",
        "carbs_g",
        "fat_g",
        "fiber_g",
        "description",
        "image_url",
        "ingredient_breakdown",
        "consumed_at",
    }
)
MACRO_FIELDS = frozenset({"calories", "protein_g", "carbs_g", "fat_g", "fiber_g"})

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for nutrition entries."""

    def list_entries(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[NutritionEntry]:
        """Return entries consumed within an inclusive range, newest first."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> NutritionEntry | None:
        """Return an owned entry by id, if present."""

    def create_entry(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry:
        """Create an entry and return it."""

    def update_entry(
        self, user_id: UUID, entry_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry | None:
        """Update an owned entry and return it, or None when missing."""

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry and return whether it existed."""

    def delete_all_entries(self, user_id: UUID) -> None:
        """Delete every entry owned by a user."""


@dataclass
class EntryService:
    """Application service for logging, editing and removing meals.

    Every mutation drops the owner's cached stats.
    """

    repository: EntryRepository
    cache: Cache

    def list_entries(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[NutritionEntry]:
        """Return a user's entries, optionally limited to a range."""
        return self.repository.list_entries(user_id, start, end)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> NutritionEntry:
        """Return an owned entry or raise EntryNotFoundError."""
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def log_entry(
        self, user_id: UUID, payload: Mapping[str, object]
    ) -> NutritionEntry:
        """Create an entry, defaulting fiber to 0 and consumption time to now."""
        values = _normalize(payload)
        values.setdefault("fiber_g", 0.0)
        if values.get("consumed_at") is None:
            values["consumed_at"] = datetime.now(tz=UTC)
        entry = self.repository.create_entry(user_id, values)
        self._invalidate(user_id)
        _logger.info("Entry logged: user_id=%s entry_id=%s", user_id, entry.id)
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, patch: Mapping[str, object]
    ) -> NutritionEntry:
        """Apply a partial update to an owned entry."""
        values = _normalize(patch)
        if "consumed_at" in values and values["consumed_at"] is None:
            del values["consumed_at"]
        if not values:
            return self.get_entry(user_id, entry_id)
        updated = self.repository.update_entry(user_id, entry_id, values)
        if updated is None:
            raise EntryNotFoundError(entry_id)
        self._invalidate(user_id)
        return updated

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an owned entry."""
        if not self.repository.delete_entry(user_id, entry_id):
            raise EntryNotFoundError(entry_id)
        self._invalidate(user_id)
        _logger.info("Entry deleted: user_id=%s entry_id=%s", user_id, entry_id)

    def _invalidate(self, user_id: UUID) -> None:
        self.cache.invalidate_prefix(stats_cache_prefix(user_id))


def _normalize(payload: Mapping[str, object]) -> dict[str, object]:
    """Keep known fields; a breakdown sent without macros supplies them."""
    values = {key: value for key, value in payload.items() if key in ENTRY_FIELDS}
    breakdown = values.get("ingredient_breakdown")
    if isinstance(breakdown, IngredientBreakdown) and not MACRO_FIELDS & values.keys():
        totals = totals_from_ingredients(breakdown.ingredients)
        values.update(
            calories=totals.calories,
            protein_g=totals.protein_g,
            carbs_g=totals.carbs_g,
            fat_g=totals.fat_g,
            fiber_g=totals.fiber_g,
        )
    calories = values.get("calories")
    if isinstance(calories, int | float):
        values["calories"] = int(round_half_up(calories))
    return values
