"""Dashboard snapshot assembled from independent reads."""

import asyncio
from dataclasses import dataclass

from caltrack.domain.stats import Dashboard
from caltrack.services.goals import GoalService
from caltrack.services.ledger import LedgerService
from caltrack.services.stats import StatsService


@dataclass
class DashboardService:
    """Reads today's log, goal, week and streak for the dashboard view."""

    ledger_service: LedgerService
    goal_service: GoalService
    stats_service: StatsService

    async def snapshot(self) -> Dashboard:
        """Return the dashboard for today.

        None of the reads mutate anything, so they run concurrently.
        """
        today = self.ledger_service.today()
        log, daily_goal, week = await asyncio.gather(
            self.ledger_service.get_day(today),
            self.goal_service.get_daily_goal(),
            self.stats_service.weekly_series(today),
        )
        streak = await self.stats_service.streak(daily_goal, today)
        return Dashboard(
            today=today,
            log=log,
            daily_goal=daily_goal,
            week=week,
            streak=streak,
        )
