"""Application error types."""

from enum import StrEnum
from uuid import UUID


class ProviderErrorCode(StrEnum):
    """Failure categories reported by the AI vision provider."""

    NO_API_KEY = "NO_API_KEY"
    INVALID_KEY = "INVALID_KEY"
    RATE_LIMIT = "RATE_LIMIT"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    NETWORK_ERROR = "NETWORK_ERROR"
    UNKNOWN = "UNKNOWN"


class AIProviderError(Exception):
    """Upstream AI failure mapped to a user-facing message and status."""

    def __init__(self, code: ProviderErrorCode, message: str, status: int) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status


class EntryNotFoundError(LookupError):
    """Raised when an entry does not exist for the requesting owner."""

    def __init__(self, entry_id: UUID) -> None:
        super().__init__(f"Entry {entry_id} not found")
        self.entry_id = entry_id
