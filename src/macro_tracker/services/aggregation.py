"""Per-day and per-range macro aggregation over logged entries."""

from collections.abc import Iterable
from datetime import date, datetime, tzinfo

from macro_tracker.domain.entries import NutritionEntry
from macro_tracker.domain.stats import DailyTotals


def day_bucket(moment: datetime, tz: tzinfo) -> date:
    """Return the local calendar day a timestamp falls in."""
    return moment.astimezone(tz).date()


def empty_totals(day: date) -> DailyTotals:
    """Return zeroed totals for a day."""
    return DailyTotals(day=day, calories=0, protein_g=0.0, carbs_g=0.0, fat_g=0.0)


def aggregate_by_day(
    entries: Iterable[NutritionEntry], tz: tzinfo
) -> dict[date, DailyTotals]:
    """Partition entries by local day and sum each bucket.

    Days without entries are absent from the result; use ``totals_for_day``
    to read a day with a zero default.
    """
    buckets: dict[date, DailyTotals] = {}
    for entry in entries:
        day = day_bucket(entry.consumed_at, tz)
        buckets[day] = _add(buckets.get(day) or empty_totals(day), entry)
    return buckets


def totals_for_day(buckets: dict[date, DailyTotals], day: date) -> DailyTotals:
    """Return a bucket's totals, or zeros when nothing was logged that day."""
    return buckets.get(day) or empty_totals(day)


def totals_over_range(
    entries: Iterable[NutritionEntry], start: datetime, end: datetime
) -> DailyTotals:
    """Sum entries consumed within ``[start, end]`` regardless of day buckets."""
    totals = empty_totals(start.date())
    for entry in entries:
        if start <= entry.consumed_at <= end:
            totals = _add(totals, entry)
    return totals


def _add(totals: DailyTotals, entry: NutritionEntry) -> DailyTotals:
    return DailyTotals(
        day=totals.day,
        calories=totals.calories + entry.calories,
        protein_g=totals.protein_g + entry.protein_g,
        carbs_g=totals.carbs_g + entry.carbs_g,
        fat_g=totals.fat_g + entry.fat_g,
    )
