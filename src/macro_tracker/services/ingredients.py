"""Macro totals derived from an ingredient breakdown."""

from collections.abc import Iterable
from dataclasses import dataclass

from macro_tracker.domain.ingredients import Ingredient


@dataclass(frozen=True)
class IngredientTotals:
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float


def totals_from_ingredients(ingredients: Iterable[Ingredient]) -> IngredientTotals:
    """Sum every ingredient's macros; a missing fiber value counts as 0."""
    calories = protein = carbs = fat = fiber = 0.0
    for ingredient in ingredients:
        calories += ingredient.calories
        protein += ingredient.protein
        carbs += ingredient.carbs
        fat += ingredient.fat
        fiber += ingredient.fiber or 0.0
    return IngredientTotals(
        calories=calories,
        protein_g=protein,
        carbs_g=carbs,
        fat_g=fat,
        fiber_g=fiber,
    )
