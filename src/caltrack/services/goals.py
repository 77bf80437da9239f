"""Daily calorie goal settings."""

import logging
from dataclasses import dataclass
from typing import Protocol

from caltrack.services.validation import clean_goal

DEFAULT_DAILY_GOAL = 2000

_logger = logging.getLogger(__name__)


class ConfigRepository(Protocol):
    """Persistence interface for the settings singleton."""

    async def get_daily_goal(self) -> float | None:
        """Return the stored goal, or None when no settings row exists."""

    async def set_daily_goal(self, goal: float) -> None:
        """Create or overwrite the stored goal."""


@dataclass
class GoalService:
    """Service for reading and changing the daily goal."""

    repository: ConfigRepository
    default_goal: float = DEFAULT_DAILY_GOAL

    async def get_daily_goal(self) -> float:
        """Return the stored goal or the default when unset."""
        goal = await self.repository.get_daily_goal()
        return goal if goal is not None else self.default_goal

    async def set_daily_goal(self, goal: float) -> float:
        """Validate and persist a new goal."""
        cleaned = clean_goal(goal)
        await self.repository.set_daily_goal(cleaned)
        _logger.info("Daily goal updated to %s kcal", cleaned)
        return cleaned

    async def ensure_defaults(self) -> None:
        """Create the settings row with the default goal if it is missing."""
        if await self.repository.get_daily_goal() is None:
            _logger.info("Default config not found, creating one")
            await self.repository.set_daily_goal(self.default_goal)
