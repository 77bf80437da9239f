"""Statistics derived from the daily ledger."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from caltrack.clock import Clock, local_clock
from caltrack.domain.ledger import DailyLog
from caltrack.domain.stats import DayTotal, WeeklyReport, WeeklySeries
from caltrack.services.ledger import LedgerRepository

DAYS_PER_WEEK = 7
DEFAULT_STREAK_MAX_DAYS = 365


@dataclass
class StatsService:
    """Read-only views over historical logs."""

    repository: LedgerRepository
    streak_max_days: int = DEFAULT_STREAK_MAX_DAYS
    clock: Clock = field(default_factory=local_clock)

    async def weekly_series(self, reference: date) -> WeeklySeries:
        """Return Monday to Sunday of the week containing ``reference``."""
        start = reference - timedelta(days=reference.weekday())
        days = await self._day_totals(start, DAYS_PER_WEEK)
        return WeeklySeries(
            start=start,
            days=days,
            total_kcal=sum(day.total_kcal for day in days),
        )

    async def weekly_report(self, reference: date) -> WeeklyReport:
        """Return the seven days ending at ``reference`` with total and average."""
        start = reference - timedelta(days=DAYS_PER_WEEK - 1)
        days = await self._day_totals(start, DAYS_PER_WEEK)
        total = sum(day.total_kcal for day in days)
        return WeeklyReport(
            start=start,
            end=reference,
            days=days,
            total_kcal=total,
            average_kcal=total / DAYS_PER_WEEK,
        )

    async def streak(self, daily_goal: float, today: date | None = None) -> int:
        """Count consecutive on-goal days before today, plus today if on goal.

        A day is on goal when it has a log with ``0 < total_kcal <= daily_goal``.
        An unfinished today never breaks the run; it only adds to it.
        """
        today = today or self.clock().date()
        earliest = today - timedelta(days=self.streak_max_days)
        logs = await self.repository.list_days_between(earliest, today)
        by_day = _index_by_day(logs)

        streak = 0
        day = today - timedelta(days=1)
        while day >= earliest and _within_goal(by_day.get(day), daily_goal):
            streak += 1
            day -= timedelta(days=1)

        if _within_goal(by_day.get(today), daily_goal):
            streak += 1
        return streak

    async def _day_totals(self, start: date, days: int) -> list[DayTotal]:
        end = start + timedelta(days=days - 1)
        by_day = _index_by_day(await self.repository.list_days_between(start, end))
        totals = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            log = by_day.get(day)
            totals.append(DayTotal(day=day, total_kcal=log.total_kcal if log else 0))
        return totals


def _index_by_day(logs: list[DailyLog]) -> dict[date, DailyLog]:
    return {log.date: log for log in logs}


def _within_goal(log: DailyLog | None, daily_goal: float) -> bool:
    return log is not None and 0 < log.total_kcal <= daily_goal
