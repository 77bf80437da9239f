"""Supabase repository for the settings singleton."""

from dataclasses import dataclass

from supabase import AsyncClient

from caltrack.adapters.supabase_support import execute, number, rows
from caltrack.services.goals import ConfigRepository

CONFIG_TABLE = "app_config"
SETTINGS_KEY = "user_settings"


@dataclass
class SupabaseConfigRepository(ConfigRepository):
    """Supabase implementation for app configuration."""

    client: AsyncClient

    async def get_daily_goal(self) -> float | None:
        """Return the stored daily goal."""
        response = await execute(
            self.client.table(CONFIG_TABLE)
            .select("daily_goal")
            .eq("key", SETTINGS_KEY)
            .limit(1)
        )
        found = rows(response.data)
        if not found or found[0].get("daily_goal") is None:
            return None
        return number(found[0]["daily_goal"])

    async def set_daily_goal(self, goal: float) -> None:
        """Create or update the settings row."""
        await execute(
            self.client.table(CONFIG_TABLE).upsert(
                {"key": SETTINGS_KEY, "daily_goal": goal}, on_conflict="key"
            )
        )
