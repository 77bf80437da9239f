"""Domain models for statistics."""

from dataclasses import dataclass
from datetime import date

from caltrack.domain.ledger import DailyLog


@dataclass(frozen=True)
class DayTotal:
    """Calories consumed on one day; zero when nothing was logged."""

    day: date
    total_kcal: float


@dataclass(frozen=True)
class WeeklySeries:
    """Monday to Sunday of a calendar week."""

    start: date
    days: list[DayTotal]
    total_kcal: float


@dataclass(frozen=True)
class WeeklyReport:
    """Seven trailing days ending at a reference date."""

    start: date
    end: date
    days: list[DayTotal]
    total_kcal: float
    average_kcal: float


@dataclass(frozen=True)
class Dashboard:
    """Everything the dashboard view shows for today."""

    today: date
    log: DailyLog | None
    daily_goal: float
    week: WeeklySeries
    streak: int

    @property
    def consumed_kcal(self) -> float:
        return self.log.total_kcal if self.log else 0

    @property
    def remaining_kcal(self) -> float:
        return self.daily_goal - self.consumed_kcal

    @property
    def progress_percent(self) -> float:
        if self.daily_goal <= 0:
            return 0.0
        return min(100.0, self.consumed_kcal / self.daily_goal * 100)
