"""BMR/TDEE calculations and unit conversions."""

import math

from macro_tracker.domain.goals import BodyProfile, MetabolicMetrics

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2
SEX_OFFSETS: dict[str, float] = {"male": 5.0, "female": -161.0}
KCAL_PER_LB = 3500
LBS_PER_KG = 2.20462
CM_PER_INCH = 2.54


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves towards positive infinity."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def compute_bmr(profile: BodyProfile) -> float:
    """Mifflin-St Jeor BMR, or 0 when age, sex, weight or height is unknown."""
    if not profile.age or not profile.sex or not profile.weight or not profile.height:
        return 0.0
    base = 10 * profile.weight + 6.25 * profile.height - 5 * profile.age
    return base + SEX_OFFSETS.get(profile.sex, SEX_OFFSETS["female"])


def compute_tdee(profile: BodyProfile) -> float:
    """BMR scaled by the activity multiplier; 0 when BMR is unknown."""
    bmr = compute_bmr(profile)
    if bmr == 0:
        return 0.0
    multiplier = ACTIVITY_MULTIPLIERS.get(
        profile.activity_level or "", DEFAULT_ACTIVITY_MULTIPLIER
    )
    return bmr * multiplier


def compute_metrics(profile: BodyProfile, target_calories: float) -> MetabolicMetrics:
    """Return BMR, TDEE, deficit and projected weekly change in lbs."""
    bmr = compute_bmr(profile)
    tdee = compute_tdee(profile)
    deficit = tdee - target_calories
    weekly_change = deficit * 7 / KCAL_PER_LB
    return MetabolicMetrics(
        bmr=int(round_half_up(bmr)),
        tdee=int(round_half_up(tdee)),
        deficit=int(round_half_up(deficit)),
        projected_weekly_change=round_half_up(weekly_change, 1),
    )


def kg_to_lbs(kg: float) -> float:
    return kg * LBS_PER_KG


def lbs_to_kg(lbs: float) -> float:
    return lbs / LBS_PER_KG


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Split a height in centimeters into whole feet and rounded inches."""
    total_inches = cm / CM_PER_INCH
    feet = math.floor(total_inches / 12)
    inches = int(round_half_up(total_inches % 12))
    return feet, inches


def feet_inches_to_cm(feet: float, inches: float) -> float:
    return (feet * 12 + inches) * CM_PER_INCH
