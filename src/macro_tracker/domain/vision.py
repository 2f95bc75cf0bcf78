"""Models for vision estimation results."""

from pydantic import BaseModel, Field


class MealEstimate(BaseModel):
    """Structured macro estimate for a photographed meal."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    description: str | None = None
