"""Dashboard and progress statistics over logged entries."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from uuid import UUID
from zoneinfo import ZoneInfo

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.goals import UserGoals
from macro_tracker.domain.stats import DailyTotals
from macro_tracker.services.aggregation import (
    aggregate_by_day,
    day_bucket,
    totals_for_day,
    totals_over_range,
)
from macro_tracker.services.cache import Cache, stats_cache_prefix
from macro_tracker.services.entries import EntryRepository
from macro_tracker.services.goals import WIZARD_DEFAULTS
from macro_tracker.services.metabolism import round_half_up
from macro_tracker.services.streaks import STREAK_CAP_DAYS, active_days, compute_streak

PROGRESS_WINDOW_DAYS = 30


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DashboardSummary:
    """Today's view: totals, meal count, remaining calories and streak."""

    totals: DailyTotals
    entries: list[NutritionEntry]
    remaining_calories: int
    streak: int
    goals: UserGoals | None


@dataclass
class ProgressSummary:
    """Daily series plus window-level figures for the progress view."""

    daily: list[DailyTotals]
    avg_calories: int
    total_entries: int
    days_logged: int
    window_totals: DailyTotals
    macro_distribution: dict[str, float]


@dataclass
class StatsService:
    """Service for computing user stats in the user's timezone."""

    repository: EntryRepository
    cache: Cache
    streak_cap_days: int = STREAK_CAP_DAYS
    cache_ttl_seconds: int = 300
    clock: Callable[[], datetime] = field(default=_utc_now)

    def get_today(
        self, user_id: UUID, timezone_name: str
    ) -> tuple[DailyTotals, list[NutritionEntry]]:
        """Return today's totals and the entries logged today."""
        tz = ZoneInfo(timezone_name)
        today = self._today(tz)
        entries = [
            entry
            for entry in self._recent_entries(user_id, tz, today)
            if day_bucket(entry.consumed_at, tz) == today
        ]
        return totals_for_day(aggregate_by_day(entries, tz), today), entries

    def get_streak(self, user_id: UUID, timezone_name: str) -> int:
        """Return the current logging streak."""
        tz = ZoneInfo(timezone_name)
        today = self._today(tz)
        entries = self._recent_entries(user_id, tz, today)
        return compute_streak(entries, today, tz, max_days=self.streak_cap_days)

    def get_dashboard(
        self, user_id: UUID, timezone_name: str, goals: UserGoals | None
    ) -> DashboardSummary:
        """Return the dashboard view for today."""
        totals, entries = self.get_today(user_id, timezone_name)
        target = goals.daily_calories if goals else WIZARD_DEFAULTS.daily_calories
        return DashboardSummary(
            totals=totals,
            entries=entries,
            remaining_calories=max(target - totals.calories, 0),
            streak=self.get_streak(user_id, timezone_name),
            goals=goals,
        )

    def get_progress(
        self,
        user_id: UUID,
        timezone_name: str,
        days: int = 7,
        window_days: int = PROGRESS_WINDOW_DAYS,
    ) -> ProgressSummary:
        """Return the last ``days`` daily totals and figures over the window."""
        tz = ZoneInfo(timezone_name)
        now = self.clock().astimezone(tz)
        today = now.date()
        entries = self._recent_entries(user_id, tz, today)

        buckets = aggregate_by_day(entries, tz)
        daily = [
            totals_for_day(buckets, today - timedelta(days=offset))
            for offset in range(days - 1, -1, -1)
        ]
        window = [
            entry
            for entry in entries
            if entry.consumed_at >= now - timedelta(days=window_days)
        ]
        window_totals = totals_over_range(
            window, now - timedelta(days=window_days), now
        )
        avg_calories = sum(day.calories for day in daily) / max(days, 1)
        return ProgressSummary(
            daily=daily,
            avg_calories=int(round_half_up(avg_calories)),
            total_entries=len(window),
            days_logged=len(active_days(window, tz)),
            window_totals=window_totals,
            macro_distribution=_macro_distribution(window_totals),
        )

    def _today(self, tz: ZoneInfo) -> date:
        return self.clock().astimezone(tz).date()

    def _recent_entries(
        self, user_id: UUID, tz: ZoneInfo, today: date
    ) -> list[NutritionEntry]:
        """Return entries from the lookback window, cached until the next write."""
        key = f"{stats_cache_prefix(user_id)}{tz.key}:{today.isoformat()}"
        cached = self.cache.get(key)
        if isinstance(cached, list):
            return cached

        lookback = max(self.streak_cap_days, PROGRESS_WINDOW_DAYS) + 1
        midnight = datetime.min.time()
        start = datetime.combine(today - timedelta(days=lookback), midnight, tz)
        end = datetime.combine(today + timedelta(days=1), midnight, tz)
        entries = self.repository.list_entries(
            user_id, start.astimezone(UTC), end.astimezone(UTC)
        )
        # Only the current day and zone stay cached per user.
        self.cache.invalidate_prefix(stats_cache_prefix(user_id))
        self.cache.set(key, entries, ttl_seconds=self.cache_ttl_seconds)
        return entries


def _macro_distribution(totals: DailyTotals) -> dict[str, float]:
    """Return each macro's share of total grams, rounded to one decimal percent."""
    grams = totals.protein_g + totals.carbs_g + totals.fat_g
    if grams <= 0:
        return {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
    return {
        "protein": round(totals.protein_g / grams * 100, 1),
        "carbs": round(totals.carbs_g / grams * 100, 1),
        "fat": round(totals.fat_g / grams * 100, 1),
    }
