"""Tests for account lifecycle."""

from datetime import UTC, datetime
from uuid import uuid4

from macro_tracker.domain.goals import UserGoals
from macro_tracker.services.cache import InMemoryCache, stats_cache_prefix
from macro_tracker.services.users import UserService
from tests.conftest import (
    USER_ID,
    InMemoryEntryRepository,
    InMemoryGoalsRepository,
    InMemoryUserRepository,
    InMemoryUserSettingsRepository,
    make_entry,
)


def test_delete_account_cascades(
    user_repository: InMemoryUserRepository,
    entry_repository: InMemoryEntryRepository,
    goals_repository: InMemoryGoalsRepository,
    settings_repository: InMemoryUserSettingsRepository,
) -> None:
    other_user = uuid4()
    entry_repository.add(
        make_entry(datetime(2024, 3, 15, 8, tzinfo=UTC)),
        make_entry(datetime(2024, 3, 15, 8, tzinfo=UTC), user_id=other_user),
    )
    goals_repository.goals[USER_ID] = UserGoals(
        user_id=USER_ID,
        daily_calories=2000,
        daily_protein=50,
        daily_carbs=250,
        daily_fat=65,
    )
    settings_repository.timezones[USER_ID] = "Europe/Berlin"
    cache = InMemoryCache()
    cache.set(f"{stats_cache_prefix(USER_ID)}UTC:2024-03-15", [], ttl_seconds=60)
    service = UserService(
        repository=user_repository,
        entry_repository=entry_repository,
        goals_repository=goals_repository,
        settings_repository=settings_repository,
        cache=cache,
    )

    service.delete_account(USER_ID)

    assert USER_ID not in user_repository.user_ids
    assert entry_repository.list_entries(USER_ID) == []
    assert len(entry_repository.list_entries(other_user)) == 1
    assert goals_repository.get_goals(USER_ID) is None
    assert settings_repository.get_timezone(USER_ID) is None
    assert cache.get(f"{stats_cache_prefix(USER_ID)}UTC:2024-03-15") is None
