"""Dependency container wiring."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from macro_tracker.adapters.openai_vision_client import OpenAIVisionClient
from macro_tracker.adapters.supabase_entry_repository import SupabaseEntryRepository
from macro_tracker.adapters.supabase_goals_repository import SupabaseGoalsRepository
from macro_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from macro_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from macro_tracker.config import Settings
from macro_tracker.services.cache import InMemoryCache
from macro_tracker.services.entries import EntryService
from macro_tracker.services.goals import GoalsService
from macro_tracker.services.stats import StatsService
from macro_tracker.services.user_settings import UserSettingsService
from macro_tracker.services.users import UserService
from macro_tracker.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    entry_service: EntryService
    goals_service: GoalsService
    stats_service: StatsService
    user_service: UserService
    user_settings_service: UserSettingsService
    vision_service: VisionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    cache = InMemoryCache()
    entry_repository = SupabaseEntryRepository(supabase_client)
    goals_repository = SupabaseGoalsRepository(supabase_client)
    settings_repository = SupabaseUserSettingsRepository(supabase_client)
    user_repository = SupabaseUserRepository(supabase_client)

    entry_service = EntryService(repository=entry_repository, cache=cache)
    goals_service = GoalsService(goals_repository)
    stats_service = StatsService(
        repository=entry_repository,
        cache=cache,
        streak_cap_days=resolved_settings.streak_cap_days,
        cache_ttl_seconds=resolved_settings.stats_cache_ttl_seconds,
    )
    user_settings_service = UserSettingsService(
        settings_repository, default_timezone=resolved_settings.default_timezone
    )
    user_service = UserService(
        repository=user_repository,
        entry_repository=entry_repository,
        goals_repository=goals_repository,
        settings_repository=settings_repository,
        cache=cache,
    )
    vision_client = (
        OpenAIVisionClient.create(
            resolved_settings.openai_api_key,
            timeout_seconds=resolved_settings.openai_timeout_seconds,
        )
        if resolved_settings.openai_api_key
        else None
    )
    vision_service = VisionService(
        client=vision_client,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
    )

    async def close_resources() -> None:
        if vision_client is not None:
            await vision_client.close()

    return AppContainer(
        settings=resolved_settings,
        entry_service=entry_service,
        goals_service=goals_service,
        stats_service=stats_service,
        user_service=user_service,
        user_settings_service=user_settings_service,
        vision_service=vision_service,
        close_resources=close_resources,
    )
