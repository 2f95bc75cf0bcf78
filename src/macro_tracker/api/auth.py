"""Request authentication for the user-facing API.

The auth gateway terminates sessions and forwards the caller's id in
``X-User-Id`` along with the shared ``X-Api-Token``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Header, HTTPException, Request, status

if TYPE_CHECKING:
    from macro_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(
    request: Request,
    x_api_token: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
) -> UUID:
    """Return the authenticated user id or reject with 401."""
    container = get_container(request)
    if not x_api_token or x_api_token != container.settings.api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id or "")
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc
