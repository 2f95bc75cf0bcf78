"""Pydantic request and response models for the JSON API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.goals import (
    ActivityLevel,
    GoalType,
    MetabolicMetrics,
    Sex,
    UserGoals,
)
from macro_tracker.domain.ingredients import IngredientBreakdown
from macro_tracker.domain.stats import DailyTotals
from macro_tracker.domain.vision import MealEstimate
from macro_tracker.services.metabolism import round_half_up
from macro_tracker.services.stats import DashboardSummary, ProgressSummary

_ENTRY_FIELD_NAMES = {
    "protein": "protein_g",
    "carbs": "carbs_g",
    "fat": "fat_g",
    "fiber": "fiber_g",
}
_REQUIRED_ENTRY_FIELDS = {"name", "calories", "protein", "carbs", "fat", "fiber"}


class CamelModel(BaseModel):
    """Base model that reads and writes camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntryCreate(CamelModel):
    """Payload for logging a meal."""

    name: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None
    ingredient_breakdown: IngredientBreakdown | None = None
    consumed_at: datetime | None = None

    def to_payload(self) -> dict[str, object]:
        """Return service-level field names, omitting unset values."""
        values = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }
        return _entry_payload(values)


class EntryPatch(CamelModel):
    """Partial update for a logged meal."""

    name: str | None = Field(default=None, min_length=1)
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)
    description: str | None = None
    image_url: str | None = None
    ingredient_breakdown: IngredientBreakdown | None = None
    consumed_at: datetime | None = None

    def to_payload(self) -> dict[str, object]:
        """Return only the fields the client sent; required columns skip nulls."""
        values = {
            name: getattr(self, name)
            for name in self.model_fields_set
            if not (name in _REQUIRED_ENTRY_FIELDS and getattr(self, name) is None)
        }
        return _entry_payload(values)


def _entry_payload(values: dict[str, object]) -> dict[str, object]:
    return {_ENTRY_FIELD_NAMES.get(key, key): value for key, value in values.items()}


class EntryOut(CamelModel):
    """Serialized meal entry."""

    id: UUID
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    description: str | None
    image_url: str | None
    ingredient_breakdown: IngredientBreakdown | None
    consumed_at: datetime
    created_at: datetime

    @classmethod
    def from_entry(cls, entry: NutritionEntry) -> "EntryOut":
        return cls(
            id=entry.id,
            name=entry.name,
            calories=entry.calories,
            protein=entry.protein_g,
            carbs=entry.carbs_g,
            fat=entry.fat_g,
            fiber=entry.fiber_g,
            description=entry.description,
            image_url=entry.image_url,
            ingredient_breakdown=entry.ingredient_breakdown,
            consumed_at=entry.consumed_at,
            created_at=entry.created_at,
        )


class ProfileUpdate(CamelModel):
    """Body stats that can be edited without the goals wizard."""

    age: int | None = Field(default=None, gt=0)
    sex: Sex | None = None
    weight: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    activity_level: ActivityLevel | None = None


class GoalsUpdate(ProfileUpdate):
    """Goals wizard payload."""

    goal_type: GoalType | None = None
    daily_calories: int | None = Field(default=None, ge=0)
    daily_protein: float | None = Field(default=None, ge=0)
    daily_carbs: float | None = Field(default=None, ge=0)
    daily_fat: float | None = Field(default=None, ge=0)


class GoalsOut(CamelModel):
    """Serialized goals record."""

    age: int | None
    sex: Sex | None
    weight: float | None
    height: float | None
    activity_level: ActivityLevel | None
    goal_type: GoalType | None
    daily_calories: int
    daily_protein: float
    daily_carbs: float
    daily_fat: float

    @classmethod
    def from_goals(cls, goals: UserGoals) -> "GoalsOut":
        return cls(
            age=goals.age,
            sex=goals.sex,
            weight=goals.weight,
            height=goals.height,
            activity_level=goals.activity_level,
            goal_type=goals.goal_type,
            daily_calories=goals.daily_calories,
            daily_protein=goals.daily_protein,
            daily_carbs=goals.daily_carbs,
            daily_fat=goals.daily_fat,
        )


class MetricsOut(CamelModel):
    """Metabolic metrics for the stored profile and calorie goal."""

    bmr: int
    tdee: int
    deficit: int
    projected_weekly_change: float

    @classmethod
    def from_metrics(cls, metrics: MetabolicMetrics) -> "MetricsOut":
        return cls(
            bmr=metrics.bmr,
            tdee=metrics.tdee,
            deficit=metrics.deficit,
            projected_weekly_change=metrics.projected_weekly_change,
        )


class TimezoneUpdate(CamelModel):
    timezone: str = Field(min_length=1)


class TimezoneOut(CamelModel):
    timezone: str


class TotalsOut(CamelModel):
    """Macro totals for a day or range."""

    day: date
    calories: int
    protein: float
    carbs: float
    fat: float

    @classmethod
    def from_totals(cls, totals: DailyTotals) -> "TotalsOut":
        return cls(
            day=totals.day,
            calories=totals.calories,
            protein=totals.protein_g,
            carbs=totals.carbs_g,
            fat=totals.fat_g,
        )


class DashboardOut(CamelModel):
    """Today's dashboard."""

    totals: TotalsOut
    meals_today: int
    remaining_calories: int
    streak: int
    entries: list[EntryOut]
    goals: GoalsOut | None

    @classmethod
    def from_summary(cls, summary: DashboardSummary) -> "DashboardOut":
        return cls(
            totals=TotalsOut.from_totals(summary.totals),
            meals_today=len(summary.entries),
            remaining_calories=summary.remaining_calories,
            streak=summary.streak,
            entries=[EntryOut.from_entry(entry) for entry in summary.entries],
            goals=GoalsOut.from_goals(summary.goals) if summary.goals else None,
        )


class ProgressOut(CamelModel):
    """Progress view over recent days."""

    daily: list[TotalsOut]
    avg_calories: int
    total_entries: int
    days_logged: int
    window_totals: TotalsOut
    macro_distribution: dict[str, float]

    @classmethod
    def from_summary(cls, summary: ProgressSummary) -> "ProgressOut":
        return cls(
            daily=[TotalsOut.from_totals(day) for day in summary.daily],
            avg_calories=summary.avg_calories,
            total_entries=summary.total_entries,
            days_logged=summary.days_logged,
            window_totals=TotalsOut.from_totals(summary.window_totals),
            macro_distribution=summary.macro_distribution,
        )


class AnalyzeRequest(CamelModel):
    """Meal photo as base64 (raw or data URL)."""

    image_base64: str = Field(min_length=1)


class AnalyzeOut(CamelModel):
    """Vision estimate with calories rounded for logging."""

    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    description: str | None

    @classmethod
    def from_estimate(cls, estimate: MealEstimate) -> "AnalyzeOut":
        return cls(
            name=estimate.name,
            calories=int(round_half_up(estimate.calories)),
            protein=estimate.protein,
            carbs=estimate.carbs,
            fat=estimate.fat,
            fiber=estimate.fiber or 0.0,
            description=estimate.description,
        )
