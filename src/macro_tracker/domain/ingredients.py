"""Per-ingredient breakdown stored alongside a logged meal."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class Ingredient(BaseModel):
    """One ingredient with its quantity and macro contribution."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1)
    quantity: float = Field(gt=0)
    unit: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)


class IngredientBreakdown(BaseModel):
    """Ingredients of a meal plus optional context for later recalculation.

    Ids and the calculation timestamp are filled in when a client omits them.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ingredients: list[Ingredient]
    context_notes: str | None = None
    last_calculated_at: datetime = Field(default_factory=_utc_now)
