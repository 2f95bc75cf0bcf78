"""Domain models for logged meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from macro_tracker.domain.ingredients import IngredientBreakdown


@dataclass(frozen=True)
class NutritionEntry:
    """A single logged meal with its macro breakdown."""

    id: UUID
    user_id: UUID
    name: str
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    consumed_at: datetime
    created_at: datetime
    fiber_g: float = 0.0
    description: str | None = None
    image_url: str | None = None
    ingredient_breakdown: IngredientBreakdown | None = None
