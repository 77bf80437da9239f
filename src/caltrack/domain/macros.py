"""Macronutrient estimation from calories and a food category."""

import math
from dataclasses import dataclass

from caltrack.domain.catalog import Category

KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9


@dataclass(frozen=True)
class MacroRatio:
    """Fractions of total calories attributed to each macro."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class MacroEstimate:
    """Estimated grams of each macro."""

    protein: int
    carbs: int
    fat: int


PROTEIN_HEAVY_RATIO = MacroRatio(protein=0.40, carbs=0.20, fat=0.30)
CARB_HEAVY_RATIO = MacroRatio(protein=0.15, carbs=0.70, fat=0.15)
FAT_HEAVY_RATIO = MacroRatio(protein=0.10, carbs=0.10, fat=0.80)
MIXED_RATIO = MacroRatio(protein=0.30, carbs=0.40, fat=0.30)


def ratio_for(category: Category | str | None) -> MacroRatio:
    """Return the ratio for a category; anything unrecognised counts as mixed."""
    match Category.parse(category):
        case Category.PROTEIN_HEAVY:
            return PROTEIN_HEAVY_RATIO
        case Category.CARB_HEAVY:
            return CARB_HEAVY_RATIO
        case Category.FAT_HEAVY:
            return FAT_HEAVY_RATIO
        case _:
            return MIXED_RATIO


def estimate(total_kcal: float, category: Category | str | None) -> MacroEstimate:
    """Estimate protein, carbs and fat grams for a calorie amount.

    Each gram value is rounded on its own, so the calories implied by the
    result can be a few kcal away from ``total_kcal``.
    """
    ratio = ratio_for(category)
    return MacroEstimate(
        protein=_round_half_up(total_kcal * ratio.protein / KCAL_PER_GRAM_PROTEIN),
        carbs=_round_half_up(total_kcal * ratio.carbs / KCAL_PER_GRAM_CARBS),
        fat=_round_half_up(total_kcal * ratio.fat / KCAL_PER_GRAM_FAT),
    )


def calories_from_macros(protein: float, carbs: float, fat: float) -> int:
    """Return the calories implied by macro grams."""
    return _round_half_up(
        protein * KCAL_PER_GRAM_PROTEIN
        + carbs * KCAL_PER_GRAM_CARBS
        + fat * KCAL_PER_GRAM_FAT
    )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
