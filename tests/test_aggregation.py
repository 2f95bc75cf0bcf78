"""Tests for day-bucket aggregation."""

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from macro_tracker.services.aggregation import (
    aggregate_by_day,
    totals_for_day,
    totals_over_range,
)
from tests.conftest import make_entry


def test_aggregate_by_day_sums_each_bucket() -> None:
    entries = [
        make_entry(datetime(2024, 3, 15, 8, tzinfo=UTC), 300, protein_g=20.5),
        make_entry(datetime(2024, 3, 15, 19, tzinfo=UTC), 700, protein_g=40.25),
        make_entry(datetime(2024, 3, 14, 12, tzinfo=UTC), 450, protein_g=10),
    ]

    buckets = aggregate_by_day(entries, UTC)

    assert set(buckets) == {date(2024, 3, 15), date(2024, 3, 14)}
    assert buckets[date(2024, 3, 15)].calories == 1000
    assert buckets[date(2024, 3, 15)].protein_g == 60.75
    assert buckets[date(2024, 3, 14)].calories == 450


def test_aggregate_by_day_partitions_every_entry_once() -> None:
    start = datetime(2024, 1, 1, 23, 45, tzinfo=UTC)
    entries = [
        make_entry(start + timedelta(hours=5 * index), calories=100 + index)
        for index in range(40)
    ]

    buckets = aggregate_by_day(entries, ZoneInfo("America/New_York"))

    assert sum(day.calories for day in buckets.values()) == sum(
        entry.calories for entry in entries
    )
    assert sum(day.fat_g for day in buckets.values()) == sum(
        entry.fat_g for entry in entries
    )


def test_aggregate_by_day_uses_local_calendar_day() -> None:
    # 02:00 UTC on the 15th is still the 14th in Los Angeles.
    entry = make_entry(datetime(2024, 3, 15, 2, tzinfo=UTC))

    buckets = aggregate_by_day([entry], ZoneInfo("America/Los_Angeles"))

    assert list(buckets) == [date(2024, 3, 14)]


def test_aggregate_by_day_empty_input() -> None:
    assert aggregate_by_day([], UTC) == {}


def test_totals_for_day_defaults_missing_day_to_zero() -> None:
    totals = totals_for_day({}, date(2024, 3, 15))

    assert totals.day == date(2024, 3, 15)
    assert totals.calories == 0
    assert totals.protein_g == 0
    assert totals.carbs_g == 0
    assert totals.fat_g == 0


def test_totals_over_range_is_inclusive() -> None:
    start = datetime(2024, 3, 10, tzinfo=UTC)
    end = datetime(2024, 3, 12, tzinfo=UTC)
    entries = [
        make_entry(start, calories=100),
        make_entry(end, calories=200),
        make_entry(end + timedelta(seconds=1), calories=400),
        make_entry(start - timedelta(seconds=1), calories=800),
    ]

    totals = totals_over_range(entries, start, end)

    assert totals.calories == 300


def test_totals_over_range_widening_never_decreases() -> None:
    base = datetime(2024, 3, 1, tzinfo=UTC)
    entries = [make_entry(base + timedelta(hours=7 * index)) for index in range(30)]
    day = timedelta(days=1)
    narrow = totals_over_range(entries, base + 2 * day, base + 4 * day)
    wide = totals_over_range(entries, base + day, base + 6 * day)

    assert wide.calories >= narrow.calories
    assert wide.protein_g >= narrow.protein_g
    assert wide.carbs_g >= narrow.carbs_g
    assert wide.fat_g >= narrow.fat_g
