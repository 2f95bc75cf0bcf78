"""Supabase repository for user goals."""

from dataclasses import asdict, dataclass
from uuid import UUID

from supabase import Client

from macro_tracker.domain.goals import UserGoals
from macro_tracker.services.goals import GoalsRepository

_COLUMNS = (
    "user_id, age, sex, weight, height, activity_level, goal_type, "
    "daily_calories, daily_protein, daily_carbs, daily_fat"
)


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for the user_goals table."""

    client: Client

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        """Return the goals row for a user."""
        response = (
            self.client.table("user_goals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save_goals(self, goals: UserGoals) -> UserGoals:
        """Upsert the goals row keyed by user_id."""
        row = asdict(goals)
        row["user_id"] = str(goals.user_id)
        response = (
            self.client.table("user_goals")
            .upsert(row, on_conflict="user_id")
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user goals")
        return _parse_row(response.data[0])

    def delete_goals(self, user_id: UUID) -> None:
        """Delete the goals row for a user."""
        self.client.table("user_goals").delete().eq("user_id", str(user_id)).execute()


def _optional_float(value: object) -> float | None:
    return float(value) if value is not None else None


def _parse_row(row: dict[str, object]) -> UserGoals:
    age = row.get("age")
    return UserGoals(
        user_id=UUID(str(row["user_id"])),
        age=int(age) if age is not None else None,
        sex=row.get("sex"),
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        activity_level=row.get("activity_level"),
        goal_type=row.get("goal_type"),
        daily_calories=int(row["daily_calories"]),
        daily_protein=float(row["daily_protein"]),
        daily_carbs=float(row["daily_carbs"]),
        daily_fat=float(row["daily_fat"]),
    )
