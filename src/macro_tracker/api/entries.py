"""Meal entry endpoints."""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Request, status

from macro_tracker.api.auth import get_container, require_user
from macro_tracker.api.models import EntryCreate, EntryOut, EntryPatch

router = APIRouter(prefix="/api/food", tags=["food"])


@router.get("")
async def list_entries(
    request: Request,
    start: datetime | None = None,
    end: datetime | None = None,
    user_id: UUID = Depends(require_user),
) -> list[EntryOut]:
    """Return the user's entries newest first, optionally within a range."""
    entries = get_container(request).entry_service.list_entries(user_id, start, end)
    return [EntryOut.from_entry(entry) for entry in entries]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: EntryCreate, request: Request, user_id: UUID = Depends(require_user)
) -> EntryOut:
    """Log a meal."""
    entry = get_container(request).entry_service.log_entry(user_id, body.to_payload())
    return EntryOut.from_entry(entry)


@router.get("/{entry_id}")
async def get_entry(
    entry_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> EntryOut:
    """Return one entry."""
    entry = get_container(request).entry_service.get_entry(user_id, entry_id)
    return EntryOut.from_entry(entry)


@router.patch("/{entry_id}")
async def update_entry(
    entry_id: UUID,
    body: EntryPatch,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> EntryOut:
    """Apply a partial update to an entry."""
    entry = get_container(request).entry_service.update_entry(
        user_id, entry_id, body.to_payload()
    )
    return EntryOut.from_entry(entry)


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, bool]:
    """Delete an entry."""
    get_container(request).entry_service.delete_entry(user_id, entry_id)
    return {"success": True}
