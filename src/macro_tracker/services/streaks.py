"""Consecutive-day logging streaks."""

from collections.abc import Iterable
from datetime import date, timedelta, tzinfo

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.services.aggregation import day_bucket

# Upper bound on the backward walk, not a product rule.
STREAK_CAP_DAYS = 365


def active_days(entries: Iterable[NutritionEntry], tz: tzinfo) -> set[date]:
    """Return the local days that have at least one entry."""
    return {day_bucket(entry.consumed_at, tz) for entry in entries}


def compute_streak(
    entries: Iterable[NutritionEntry],
    today: date,
    tz: tzinfo,
    max_days: int = STREAK_CAP_DAYS,
) -> int:
    """Count consecutive logged days ending today.

    When nothing is logged today the count starts from yesterday, so an
    unlogged today does not break the streak until a second day is missed.
    """
    days = active_days(entries, tz)
    cursor = today
    if cursor not in days:
        cursor = today - timedelta(days=1)
        if cursor not in days:
            return 0

    streak = 0
    while cursor in days and streak < max_days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak
