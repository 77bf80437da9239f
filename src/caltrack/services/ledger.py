"""Daily ledger: the only writer of per-day nutrition totals."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Protocol
from uuid import UUID, uuid4

from caltrack.clock import (
    Clock,
    day_key,
    local_clock,
    parse_day,
    time_of_day,
    time_slot_for,
)
from caltrack.domain.catalog import Category, FoodItem
from caltrack.domain.errors import EntryNotFound, ValidationError
from caltrack.domain.ledger import DailyLog, LogEntry, MacroTotals, TimeSlot
from caltrack.domain.macros import estimate
from caltrack.services.validation import clean_kcal, clean_name

AUTO_TIME_SLOT = "Auto"

_logger = logging.getLogger(__name__)


class LedgerRepository(Protocol):
    """Persistence interface for daily logs.

    Every mutating method is a single atomic operation against the store.
    """

    async def get_day(self, day: date) -> DailyLog | None:
        """Return the log for a day, if one exists."""

    async def list_days(self) -> list[DailyLog]:
        """Return every log, most recent first."""

    async def list_days_between(self, start: date, end: date) -> list[DailyLog]:
        """Return logs dated within ``start..end`` inclusive."""

    async def append_entry(self, day: date, entry: LogEntry) -> DailyLog:
        """Create the day if needed, append the entry and add it to the totals."""

    async def replace_entry(
        self, day: date, entry: LogEntry, delta: MacroTotals
    ) -> DailyLog | None:
        """Overwrite the entry with the same id and add ``delta`` to the totals.

        Returns None when the day holds no entry with that id.
        """

    async def remove_entry(
        self, day: date, entry_id: UUID, delta: MacroTotals
    ) -> DailyLog | None:
        """Pull the entry and add ``delta`` to the totals.

        Returns None when the day holds no entry with that id.
        """


@dataclass
class LedgerService:
    """Applies meal additions, edits and deletions as delta updates."""

    repository: LedgerRepository
    clock: Clock = field(default_factory=local_clock)

    def today(self) -> date:
        return self.clock().date()

    async def log_meal(
        self, food: FoodItem, time_slot: TimeSlot | str | None = None
    ) -> DailyLog:
        """Snapshot a food into today's log."""
        now = self.clock()
        slot = _resolve_time_slot(time_slot) or time_slot_for(now)
        entry = LogEntry(
            id=uuid4(),
            name=food.name,
            kcal=food.kcal,
            protein=food.protein,
            carbs=food.carbs,
            fat=food.fat,
            time=time_of_day(now),
            time_slot=slot,
            category=food.category,
        )
        log = await self.repository.append_entry(now.date(), entry)
        _logger.info(
            "Logged meal: day=%s name=%s kcal=%s slot=%s",
            day_key(log.date),
            entry.name,
            entry.kcal,
            slot,
        )
        return log

    async def edit_entry(  # noqa: PLR0913
        self,
        day: date | str,
        entry_id: UUID,
        name: str,
        kcal: float,
        category: Category | str = Category.MIXED,
    ) -> DailyLog:
        """Rename or re-weigh an entry, shifting the totals by the difference."""
        resolved_day = _as_day(day)
        cleaned_name = clean_name(name)
        cleaned_kcal = clean_kcal(kcal)
        current = await self._require_entry(resolved_day, entry_id)
        resolved_category = Category.parse(category)
        macros = estimate(cleaned_kcal, resolved_category)
        updated = replace(
            current,
            name=cleaned_name,
            kcal=cleaned_kcal,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
            category=resolved_category,
        )
        delta = updated.macros - current.macros
        log = await self.repository.replace_entry(resolved_day, updated, delta)
        if log is None:
            raise EntryNotFound(day_key(resolved_day), entry_id)
        _logger.info(
            "Edited entry: day=%s id=%s kcal_delta=%s",
            day_key(resolved_day),
            entry_id,
            delta.kcal,
        )
        return log

    async def delete_entry(self, day: date | str, entry_id: UUID) -> DailyLog:
        """Remove an entry, subtracting its logged values from the totals."""
        resolved_day = _as_day(day)
        current = await self._require_entry(resolved_day, entry_id)
        log = await self.repository.remove_entry(
            resolved_day, entry_id, current.macros.negate()
        )
        if log is None:
            raise EntryNotFound(day_key(resolved_day), entry_id)
        _logger.info("Deleted entry: day=%s id=%s", day_key(resolved_day), entry_id)
        return log

    async def get_day(self, day: date | str) -> DailyLog | None:
        return await self.repository.get_day(_as_day(day))

    async def list_days(self) -> list[DailyLog]:
        """Return every logged day, most recent first."""
        logs = await self.repository.list_days()
        return sorted(logs, key=lambda log: log.date, reverse=True)

    async def _require_entry(self, day: date, entry_id: UUID) -> LogEntry:
        log = await self.repository.get_day(day)
        entry = log.find_entry(entry_id) if log else None
        if entry is None:
            raise EntryNotFound(day_key(day), entry_id)
        return entry


def _resolve_time_slot(value: TimeSlot | str | None) -> TimeSlot | None:
    if value is None or isinstance(value, TimeSlot):
        return value
    cleaned = value.strip()
    if not cleaned or cleaned.lower() == AUTO_TIME_SLOT.lower():
        return None
    for slot in TimeSlot:
        if slot.value.lower() == cleaned.lower():
            return slot
    raise ValidationError(f"Unknown time slot: {value}")


def _as_day(value: date | str) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_day(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid date: {value}") from exc
