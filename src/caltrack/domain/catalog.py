"""Domain models for the food catalog."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID


class Category(StrEnum):
    """Coarse macro profile used to estimate nutrients."""

    PROTEIN_HEAVY = "protein-heavy"
    CARB_HEAVY = "carb-heavy"
    FAT_HEAVY = "fat-heavy"
    MIXED = "mixed"

    @classmethod
    def parse(cls, value: "str | Category | None") -> "Category":
        """Return the matching category, falling back to mixed."""
        if isinstance(value, Category):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MIXED


@dataclass
class FoodItem:
    """A named catalog food.

    Not frozen: the catalog updates cached instances in place so callers
    holding a reference see edits.
    """

    id: UUID
    name: str
    kcal: float
    protein: int
    carbs: int
    fat: int
    category: Category = Category.MIXED


@dataclass(frozen=True)
class FoodDraft:
    """Validated food fields ready to be persisted."""

    name: str
    kcal: float
    protein: int
    carbs: int
    fat: int
    category: Category
