"""Goal normalization and persistence."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from macro_tracker.domain.goals import MetabolicMetrics, UserGoals
from macro_tracker.services.metabolism import compute_metrics, round_half_up

PROFILE_FIELDS = frozenset({"age", "sex", "weight", "height", "activity_level"})
TARGET_FIELDS = frozenset(
    {"daily_calories", "daily_protein", "daily_carbs", "daily_fat"}
)
GOAL_FIELDS = PROFILE_FIELDS | TARGET_FIELDS | {"goal_type"}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoalDefaults:
    """Macro targets applied when a new record omits them."""

    daily_calories: int
    daily_protein: float
    daily_carbs: float
    daily_fat: float


# The goals wizard and the profile editor seed different protein/carb targets.
WIZARD_DEFAULTS = GoalDefaults(
    daily_calories=2000, daily_protein=50, daily_carbs=250, daily_fat=65
)
PROFILE_DEFAULTS = GoalDefaults(
    daily_calories=2000, daily_protein=150, daily_carbs=200, daily_fat=65
)


def round_weight(weight: float | None) -> float | None:
    """Round a weight to one decimal place."""
    if weight is None:
        return None
    return round_half_up(weight, 1)


def upsert_goals(
    user_id: UUID,
    existing: UserGoals | None,
    patch: Mapping[str, object],
    defaults: GoalDefaults = WIZARD_DEFAULTS,
) -> UserGoals:
    """Merge a partial update into a goals record.

    Only keys present in ``patch`` overwrite; unknown keys are ignored.
    Targets are never cleared, so a ``None`` target counts as absent.
    """
    updates = {
        key: value
        for key, value in patch.items()
        if key in GOAL_FIELDS and not (key in TARGET_FIELDS and value is None)
    }
    if "weight" in updates:
        updates["weight"] = round_weight(updates["weight"])

    base = existing or UserGoals(
        user_id=user_id,
        daily_calories=defaults.daily_calories,
        daily_protein=defaults.daily_protein,
        daily_carbs=defaults.daily_carbs,
        daily_fat=defaults.daily_fat,
    )
    if not updates:
        return base
    return replace(base, **updates)


class GoalsRepository(Protocol):
    """Persistence interface for user goals."""

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the user's goals record, if present."""

    def save_goals(self, goals: UserGoals) -> UserGoals:
        """Insert or update the goals record and return it."""

    def delete_goals(self, user_id: UUID) -> None:
        """Delete the user's goals record."""


@dataclass
class GoalsService:
    """Application service for goal targets and body profile."""

    repository: GoalsRepository

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return goals with weight rounded, or None before onboarding."""
        goals = self.repository.get_goals(user_id)
        if goals is None:
            return None
        return replace(goals, weight=round_weight(goals.weight))

    def save_goals(
        self, user_id: UUID, patch: Mapping[str, object]
    ) -> tuple[UserGoals, bool]:
        """Save goals from the wizard. Returns the record and whether it is new."""
        return self._upsert(user_id, patch, WIZARD_DEFAULTS)

    def update_profile(
        self, user_id: UUID, patch: Mapping[str, object]
    ) -> tuple[UserGoals, bool]:
        """Update body stats only, creating a record with defaults if needed."""
        profile_patch = {
            key: value for key, value in patch.items() if key in PROFILE_FIELDS
        }
        return self._upsert(user_id, profile_patch, PROFILE_DEFAULTS)

    def get_metrics(self, user_id: UUID) -> MetabolicMetrics | None:
        """Return metabolic metrics against the stored calorie target."""
        goals = self.repository.get_goals(user_id)
        if goals is None:
            return None
        return compute_metrics(goals.profile(), goals.daily_calories)

    def _upsert(
        self, user_id: UUID, patch: Mapping[str, object], defaults: GoalDefaults
    ) -> tuple[UserGoals, bool]:
        existing = self.repository.get_goals(user_id)
        merged = upsert_goals(user_id, existing, patch, defaults)
        if merged == existing:
            return existing, False
        saved = self.repository.save_goals(merged)
        _logger.info(
            "Goals saved: user_id=%s created=%s fields=%s",
            user_id,
            existing is None,
            sorted(patch),
        )
        return saved, existing is None
