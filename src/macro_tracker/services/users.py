"""User account lifecycle."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from macro_tracker.services.cache import Cache, stats_cache_prefix
from macro_tracker.services.entries import EntryRepository
from macro_tracker.services.goals import GoalsRepository
from macro_tracker.services.user_settings import UserSettingsRepository

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user accounts."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""


@dataclass
class UserService:
    """Application service for account-level actions."""

    repository: UserRepository
    entry_repository: EntryRepository
    goals_repository: GoalsRepository
    settings_repository: UserSettingsRepository
    cache: Cache

    def delete_account(self, user_id: UUID) -> None:
        """Delete a user and everything they own, children first."""
        self.entry_repository.delete_all_entries(user_id)
        self.goals_repository.delete_goals(user_id)
        self.settings_repository.delete_settings(user_id)
        self.repository.delete_user(user_id)
        self.cache.invalidate_prefix(stats_cache_prefix(user_id))
        _logger.info("Account deleted: user_id=%s", user_id)
