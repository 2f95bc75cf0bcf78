"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class DailyTotals:
    """Macro totals for one day bucket or range."""

    day: date
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
