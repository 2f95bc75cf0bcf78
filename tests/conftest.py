"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from macro_tracker.config import Settings
from macro_tracker.containers import AppContainer
from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.goals import UserGoals
from macro_tracker.services.cache import InMemoryCache
from macro_tracker.services.entries import EntryRepository, EntryService
from macro_tracker.services.goals import GoalsRepository, GoalsService
from macro_tracker.services.stats import StatsService
from macro_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from macro_tracker.services.users import UserRepository, UserService
from macro_tracker.services.vision import VisionClient, VisionService

FIXED_NOW = datetime(2024, 3, 15, 18, 30, tzinfo=UTC)
USER_ID = UUID("00000000-0000-0000-0000-000000000001")


def make_entry(  # noqa: PLR0913
    consumed_at: datetime,
    calories: int = 500,
    protein_g: float = 30.0,
    carbs_g: float = 50.0,
    fat_g: float = 10.0,
    user_id: UUID = USER_ID,
    name: str = "Meal",
) -> NutritionEntry:
    return NutritionEntry(
        id=uuid4(),
        user_id=user_id,
        name=name,
        calories=calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        consumed_at=consumed_at,
        created_at=consumed_at,
    )


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[UUID, NutritionEntry] = field(default_factory=dict)
    list_calls: int = 0

    def add(self, *entries: NutritionEntry) -> None:
        for entry in entries:
            self.entries[entry.id] = entry

    def list_entries(self, user_id: UUID, start=None, end=None) -> list[NutritionEntry]:
        self.list_calls += 1
        results = [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id
            and (start is None or entry.consumed_at >= start)
            and (end is None or entry.consumed_at <= end)
        ]
        return sorted(results, key=lambda entry: entry.consumed_at, reverse=True)

    def get_entry(self, user_id: UUID, entry_id: UUID) -> NutritionEntry | None:
        entry = self.entries.get(entry_id)
        if entry is None or entry.user_id != user_id:
            return None
        return entry

    def create_entry(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry:
        entry = NutritionEntry(
            id=uuid4(),
            user_id=user_id,
            created_at=datetime.now(tz=UTC),
            **payload,
        )
        self.entries[entry.id] = entry
        return entry

    def update_entry(
        self, user_id: UUID, entry_id: UUID, payload: dict[str, object]
    ) -> NutritionEntry | None:
        current = self.get_entry(user_id, entry_id)
        if current is None:
            return None
        updated = replace(current, **payload)
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> bool:
        if self.get_entry(user_id, entry_id) is None:
            return False
        del self.entries[entry_id]
        return True

    def delete_all_entries(self, user_id: UUID) -> None:
        self.entries = {
            key: entry
            for key, entry in self.entries.items()
            if entry.user_id != user_id
        }


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory goals repository for tests."""

    goals: dict[UUID, UserGoals] = field(default_factory=dict)
    saves: int = 0

    def get_goals(self, user_id: UUID) -> UserGoals | None:
        return self.goals.get(user_id)

    def save_goals(self, goals: UserGoals) -> UserGoals:
        self.saves += 1
        self.goals[goals.user_id] = goals
        return goals

    def delete_goals(self, user_id: UUID) -> None:
        self.goals.pop(user_id, None)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    user_ids: set[UUID] = field(default_factory=set)

    def delete_user(self, user_id: UUID) -> None:
        self.user_ids.discard(user_id)


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone

    def delete_settings(self, user_id: UUID) -> None:
        self.timezones.pop(user_id, None)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload or raising."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "name": "Chicken rice bowl",
            "calories": 612.6,
            "protein": 41.5,
            "carbs": 70.2,
            "fat": 14.8,
            "fiber": 3.1,
            "description": "Grilled chicken over white rice",
        }
    )
    error: Exception | None = None

    async def extract(
        self,
        *,
        model: str,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        openai_api_key="openai-key",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository()


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    repository = InMemoryUserRepository()
    repository.user_ids.add(USER_ID)
    return repository


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    entry_repository: InMemoryEntryRepository,
    goals_repository: InMemoryGoalsRepository,
    settings_repository: InMemoryUserSettingsRepository,
    user_repository: InMemoryUserRepository,
    vision_client: FakeVisionClient,
) -> AppContainer:
    cache = InMemoryCache()

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        entry_service=EntryService(repository=entry_repository, cache=cache),
        goals_service=GoalsService(goals_repository),
        stats_service=StatsService(
            repository=entry_repository, cache=cache, clock=lambda: FIXED_NOW
        ),
        user_service=UserService(
            repository=user_repository,
            entry_repository=entry_repository,
            goals_repository=goals_repository,
            settings_repository=settings_repository,
            cache=cache,
        ),
        user_settings_service=UserSettingsService(settings_repository),
        vision_service=VisionService(client=vision_client, model="gpt-4o"),
        close_resources=close_resources,
    )


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"X-Api-Token": "api-token", "X-User-Id": str(USER_ID)}
