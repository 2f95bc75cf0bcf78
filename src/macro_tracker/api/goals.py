"""Goals, profile and settings endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from macro_tracker.api.auth import get_container, require_user
from macro_tracker.api.models import (
    GoalsOut,
    GoalsUpdate,
    MetricsOut,
    ProfileUpdate,
    TimezoneOut,
    TimezoneUpdate,
)

router = APIRouter(prefix="/api", tags=["goals"])


@router.get("/goals")
async def get_goals(
    request: Request, user_id: UUID = Depends(require_user)
) -> GoalsOut | None:
    """Return goals, or null when onboarding hasn't been completed."""
    goals = get_container(request).goals_service.get_goals(user_id)
    return GoalsOut.from_goals(goals) if goals else None


@router.put("/goals")
async def save_goals(
    body: GoalsUpdate,
    request: Request,
    response: Response,
    user_id: UUID = Depends(require_user),
) -> GoalsOut:
    """Save goals from the wizard."""
    goals, created = get_container(request).goals_service.save_goals(
        user_id, body.model_dump(exclude_unset=True)
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return GoalsOut.from_goals(goals)


@router.put("/settings/profile")
async def update_profile(
    body: ProfileUpdate,
    request: Request,
    response: Response,
    user_id: UUID = Depends(require_user),
) -> GoalsOut:
    """Update body stats without running the goals wizard."""
    goals, created = get_container(request).goals_service.update_profile(
        user_id, body.model_dump(exclude_unset=True)
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
    return GoalsOut.from_goals(goals)


@router.get("/metrics")
async def get_metrics(
    request: Request, user_id: UUID = Depends(require_user)
) -> MetricsOut:
    """Return BMR, TDEE, deficit and projected weekly change."""
    metrics = get_container(request).goals_service.get_metrics(user_id)
    if metrics is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return MetricsOut.from_metrics(metrics)


@router.get("/settings/timezone")
async def get_timezone(
    request: Request, user_id: UUID = Depends(require_user)
) -> TimezoneOut:
    """Return the timezone used for day boundaries."""
    timezone = get_container(request).user_settings_service.get_timezone(user_id)
    return TimezoneOut(timezone=timezone)


@router.put("/settings/timezone")
async def set_timezone(
    body: TimezoneUpdate, request: Request, user_id: UUID = Depends(require_user)
) -> TimezoneOut:
    """Set the timezone used for day boundaries."""
    try:
        get_container(request).user_settings_service.set_timezone(
            user_id, body.timezone
        )
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return TimezoneOut(timezone=body.timezone)
