"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from macro_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for the users table."""

    client: Client

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""
        self.client.table("users").delete().eq("id", str(user_id)).execute()
