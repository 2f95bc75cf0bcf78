"""Domain models for user goals and body profile."""

from dataclasses import dataclass
from typing import Literal
from uuid import UUID

Sex = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
GoalType = Literal["lose", "maintain", "gain"]


@dataclass(frozen=True)
class BodyProfile:
    """Inputs for metabolic calculations. Any field may be unknown."""

    age: int | None = None
    sex: Sex | None = None
    weight: float | None = None
    height: float | None = None
    activity_level: ActivityLevel | None = None


@dataclass(frozen=True)
class UserGoals:
    """Per-user goal record with optional profile and required targets."""

    user_id: UUID
    daily_calories: int
    daily_protein: float
    daily_carbs: float
    daily_fat: float
    age: int | None = None
    sex: Sex | None = None
    weight: float | None = None
    height: float | None = None
    activity_level: ActivityLevel | None = None
    goal_type: GoalType | None = None

    def profile(self) -> BodyProfile:
        """Return the body profile portion of the record."""
        return BodyProfile(
            age=self.age,
            sex=self.sex,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
        )


@dataclass(frozen=True)
class MetabolicMetrics:
    """Derived energy metrics for a profile and calorie target."""

    bmr: int
    tdee: int
    deficit: int
    projected_weekly_change: float
