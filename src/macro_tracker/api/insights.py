"""Dashboard and progress endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request

from macro_tracker.api.auth import get_container, require_user
from macro_tracker.api.models import DashboardOut, ProgressOut

router = APIRouter(prefix="/api", tags=["insights"])


@router.get("/dashboard")
async def dashboard(
    request: Request, user_id: UUID = Depends(require_user)
) -> DashboardOut:
    """Return today's totals, remaining calories and streak."""
    container = get_container(request)
    timezone = container.user_settings_service.get_timezone(user_id)
    goals = container.goals_service.get_goals(user_id)
    summary = container.stats_service.get_dashboard(user_id, timezone, goals)
    return DashboardOut.from_summary(summary)


@router.get("/progress")
async def progress(
    request: Request,
    days: int = Query(default=7, ge=1, le=30),
    user_id: UUID = Depends(require_user),
) -> ProgressOut:
    """Return daily totals for the last ``days`` days and 30-day figures."""
    container = get_container(request)
    timezone = container.user_settings_service.get_timezone(user_id)
    summary = container.stats_service.get_progress(user_id, timezone, days=days)
    return ProgressOut.from_summary(summary)
