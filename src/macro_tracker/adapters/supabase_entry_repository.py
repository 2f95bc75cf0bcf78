"""Supabase repository for nutrition entries."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.ingredients import IngredientBreakdown
from macro_tracker.services.entries import EntryRepository

_COLUMNS = (
    "id, user_id, name, calories, protein, carbs, fat, fiber, description, "
    "image_url, ingredient_breakdown, consumed_at, created_at"
)
_FIELD_TO_COLUMN = {
    "name": "name",
    "calories": "calories",
    "protein_g": "protein",
    "carbs_g": "carbs",
    "fat_g": "fat",
    "fiber_g": "fiber",
    "description": "description",
    "image_url": "image_url",
    "ingredient_breakdown": "ingredient_breakdown",
    "consumed_at": "consumed_at",
}


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for the food_entries table."""

    client: Client

    def list_entries(
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[NutritionEntry]:
        """Return entries in the inclusive range, newest first."""
        query = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("consumed_at", start.isoformat())
        if end is not None:
            query = query.lte("consumed_at", end.isoformat())
        response = query.order("consumed_at", desc=True).execute()
        return [_parse_row(row) for row in response.data or []]

    def get_entry(self, user_id: UUID, entry_id: UUID) -> NutritionEntry | None:
        """Return an owned entry by id."""
        response = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_entry(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry:
        """Insert an entry row and return it."""
        row = _to_row(payload)
        row["user_id"] = str(user_id)
        response = self.client.table("food_entries").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_row(response.data[0])

    def update_entry(
        self, user_id: UUID, entry_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry | None:
        """Update an owned entry row."""
        response = (
            self.client.table("food_entries")
            .update(_to_row(payload))
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        """Delete an owned entry row."""
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def delete_all_entries(self, user_id: UUID) -> None:
        """Delete every entry for a user."""
        self.client.table("food_entries").delete().eq(
            "user_id", str(user_id)
        ).execute()


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    row: dict[str, object] = {}
    for field_name, column in _FIELD_TO_COLUMN.items():
        if field_name not in payload:
            continue
        row[column] = _to_column_value(payload[field_name])
    return row


def _to_column_value(value: object) -> object:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, IngredientBreakdown):
        return value.model_dump_json(by_alias=True)
    return value


def _parse_breakdown(raw: object) -> IngredientBreakdown | None:
    """Read the breakdown from a JSON text or jsonb column."""
    if not raw:
        return None
    if isinstance(raw, str):
        return IngredientBreakdown.model_validate_json(raw)
    return IngredientBreakdown.model_validate(raw)


def _parse_timestamp(raw: object) -> datetime:
    if isinstance(raw, str) and raw:
        parsed = datetime.fromisoformat(raw)
    else:
        parsed = datetime.min
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_row(row: dict[str, object]) -> NutritionEntry:
    return NutritionEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        fiber_g=float(row.get("fiber") or 0.0),
        description=row.get("description"),
        image_url=row.get("image_url"),
        ingredient_breakdown=_parse_breakdown(row.get("ingredient_breakdown")),
        consumed_at=_parse_timestamp(row.get("consumed_at")),
        created_at=_parse_timestamp(row.get("created_at")),
    )
