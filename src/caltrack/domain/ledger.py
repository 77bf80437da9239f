"""Domain models for the daily ledger."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import StrEnum
from uuid import UUID

from caltrack.domain.catalog import Category


def exact_sum(*values: float) -> float:
    """Add amounts as decimals so typed values like 0.1 or 24.8 stay exact.

    Totals are stored as Postgres numerics, which keep every binary float
    artefact a plain float sum would introduce.
    """
    total = sum((Decimal(str(value)) for value in values), Decimal(0))
    if total == total.to_integral_value():
        return int(total)
    return float(total)


class TimeSlot(StrEnum):
    """Coarse bucket of the day a meal was eaten in."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macro grams, used both for totals and for deltas."""

    kcal: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0

    def __add__(self, other: "MacroTotals") -> "MacroTotals":
        return MacroTotals(
            kcal=exact_sum(self.kcal, other.kcal),
            protein=exact_sum(self.protein, other.protein),
            carbs=exact_sum(self.carbs, other.carbs),
            fat=exact_sum(self.fat, other.fat),
        )

    def __sub__(self, other: "MacroTotals") -> "MacroTotals":
        return self + other.negate()

    def negate(self) -> "MacroTotals":
        """Return the same amounts with the sign flipped."""
        return MacroTotals(
            kcal=-self.kcal,
            protein=-self.protein,
            carbs=-self.carbs,
            fat=-self.fat,
        )


@dataclass(frozen=True)
class LogEntry:
    """Snapshot of a food at the moment it was logged."""

    id: UUID
    name: str
    kcal: float
    protein: int
    carbs: int
    fat: int
    time: str
    time_slot: TimeSlot
    category: Category = Category.MIXED

    @property
    def macros(self) -> MacroTotals:
        return MacroTotals(
            kcal=self.kcal, protein=self.protein, carbs=self.carbs, fat=self.fat
        )


@dataclass(frozen=True)
class DailyLog:
    """All entries for one local calendar day with running totals."""

    date: date
    entries: list[LogEntry] = field(default_factory=list)
    total_kcal: float = 0
    total_protein: float = 0
    total_carbs: float = 0
    total_fat: float = 0

    @property
    def totals(self) -> MacroTotals:
        return MacroTotals(
            kcal=self.total_kcal,
            protein=self.total_protein,
            carbs=self.total_carbs,
            fat=self.total_fat,
        )

    def entry_sum(self) -> MacroTotals:
        """Sum the entries, independent of the stored totals."""
        total = MacroTotals()
        for entry in self.entries:
            total = total + entry.macros
        return total

    def find_entry(self, entry_id: UUID) -> LogEntry | None:
        """Return the entry with the given id, if logged on this day."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def recent_entries(self, limit: int = 5) -> list[LogEntry]:
        """Return the last ``limit`` entries, newest first."""
        return list(reversed(self.entries[-limit:])) if limit > 0 else []
