"""Supabase repository for daily logs.

Mutations go through Postgres functions (see ``supabase/schema.sql``) so each
one runs as a single statement inside one transaction.
"""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import AsyncClient

from caltrack.adapters.supabase_support import execute, number, rows
from caltrack.clock import day_key, parse_day
from caltrack.domain.catalog import Category
from caltrack.domain.ledger import DailyLog, LogEntry, MacroTotals, TimeSlot
from caltrack.services.ledger import LedgerRepository

LOGS_TABLE = "daily_logs"
LOG_MEAL_FUNCTION = "log_meal_entry"
EDIT_ENTRY_FUNCTION = "edit_log_entry"
DELETE_ENTRY_FUNCTION = "delete_log_entry"


@dataclass
class SupabaseLedgerRepository(LedgerRepository):
    """Supabase implementation for the daily ledger."""

    client: AsyncClient

    async def get_day(self, day: date) -> DailyLog | None:
        """Return the log for a day."""
        response = await execute(
            self.client.table(LOGS_TABLE)
            .select("*")
            .eq("date", day_key(day))
            .limit(1)
        )
        found = rows(response.data)
        if not found:
            return None
        return _parse_log(found[0])

    async def list_days(self) -> list[DailyLog]:
        """Return every log, most recent first."""
        response = await execute(
            self.client.table(LOGS_TABLE).select("*").order("date", desc=True)
        )
        return [_parse_log(row) for row in rows(response.data)]

    async def list_days_between(self, start: date, end: date) -> list[DailyLog]:
        """Return logs in the inclusive date range."""
        response = await execute(
            self.client.table(LOGS_TABLE)
            .select("*")
            .gte("date", day_key(start))
            .lte("date", day_key(end))
            .order("date", desc=False)
        )
        return [_parse_log(row) for row in rows(response.data)]

    async def append_entry(self, day: date, entry: LogEntry) -> DailyLog:
        """Upsert the day, append the entry and increment totals atomically."""
        response = await execute(
            self.client.rpc(
                LOG_MEAL_FUNCTION,
                {"p_date": day_key(day), "p_entry": _entry_payload(entry)},
            )
        )
        updated = rows(response.data)
        if not updated:
            raise RuntimeError("Failed to log meal entry")
        return _parse_log(updated[0])

    async def replace_entry(
        self, day: date, entry: LogEntry, delta: MacroTotals
    ) -> DailyLog | None:
        """Rewrite the matching entry and shift totals atomically."""
        response = await execute(
            self.client.rpc(
                EDIT_ENTRY_FUNCTION,
                {
                    "p_date": day_key(day),
                    "p_entry": _entry_payload(entry),
                    **_delta_params(delta),
                },
            )
        )
        updated = rows(response.data)
        if not updated:
            return None
        return _parse_log(updated[0])

    async def remove_entry(
        self, day: date, entry_id: UUID, delta: MacroTotals
    ) -> DailyLog | None:
        """Pull the matching entry and shift totals atomically."""
        response = await execute(
            self.client.rpc(
                DELETE_ENTRY_FUNCTION,
                {
                    "p_date": day_key(day),
                    "p_entry_id": str(entry_id),
                    **_delta_params(delta),
                },
            )
        )
        updated = rows(response.data)
        if not updated:
            return None
        return _parse_log(updated[0])


def _entry_payload(entry: LogEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "name": entry.name,
        "kcal": entry.kcal,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "time": entry.time,
        "time_slot": entry.time_slot.value,
        "category": entry.category.value,
    }


def _delta_params(delta: MacroTotals) -> dict[str, float]:
    return {
        "p_delta_kcal": delta.kcal,
        "p_delta_protein": delta.protein,
        "p_delta_carbs": delta.carbs,
        "p_delta_fat": delta.fat,
    }


def _parse_entry(raw: dict[str, object]) -> LogEntry:
    slot_raw = str(raw.get("time_slot") or TimeSlot.NIGHT.value)
    slot = next(
        (item for item in TimeSlot if item.value.lower() == slot_raw.lower()),
        TimeSlot.NIGHT,
    )
    return LogEntry(
        id=UUID(str(raw["id"])),
        name=str(raw.get("name", "")),
        kcal=number(raw.get("kcal")),
        protein=int(number(raw.get("protein"))),
        carbs=int(number(raw.get("carbs"))),
        fat=int(number(raw.get("fat"))),
        time=str(raw.get("time", "")),
        time_slot=slot,
        category=Category.parse(raw.get("category")),  # type: ignore[arg-type]
    )


def _parse_log(row: dict[str, object]) -> DailyLog:
    entries_raw = row.get("entries") or []
    return DailyLog(
        date=parse_day(str(row["date"])),
        entries=[
            _parse_entry(item)
            for item in entries_raw  # type: ignore[attr-defined]
            if isinstance(item, dict)
        ],
        total_kcal=number(row.get("total_kcal")),
        total_protein=number(row.get("total_protein")),
        total_carbs=number(row.get("total_carbs")),
        total_fat=number(row.get("total_fat")),
    )
