"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import AsyncClient, acreate_client

from caltrack.adapters.supabase_config_repository import SupabaseConfigRepository
from caltrack.adapters.supabase_food_repository import SupabaseFoodRepository
from caltrack.adapters.supabase_ledger_repository import SupabaseLedgerRepository
from caltrack.clock import local_clock
from caltrack.config import Settings
from caltrack.services.catalog import FoodCatalog
from caltrack.services.dashboard import DashboardService
from caltrack.services.goals import GoalService
from caltrack.services.ledger import LedgerService
from caltrack.services.stats import StatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies.

    The food catalog lives here and is handed to whichever code needs it.
    """

    settings: Settings
    catalog: FoodCatalog
    ledger_service: LedgerService
    stats_service: StatsService
    goal_service: GoalService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


async def create_store_client(settings: Settings) -> AsyncClient:
    """Create the async Supabase client."""
    return await acreate_client(settings.supabase_url, settings.supabase_service_key)


def build_container(settings: Settings, client: AsyncClient) -> AppContainer:
    """Create the default dependency container around a store client."""
    clock = local_clock(settings.timezone)
    catalog = FoodCatalog(
        repository=SupabaseFoodRepository(client),
        score_cutoff=settings.search_score_cutoff,
    )
    ledger_repository = SupabaseLedgerRepository(client)
    ledger_service = LedgerService(repository=ledger_repository, clock=clock)
    stats_service = StatsService(
        repository=ledger_repository,
        streak_max_days=settings.streak_max_days,
        clock=clock,
    )
    goal_service = GoalService(
        repository=SupabaseConfigRepository(client),
        default_goal=settings.default_daily_goal,
    )
    dashboard_service = DashboardService(
        ledger_service=ledger_service,
        goal_service=goal_service,
        stats_service=stats_service,
    )

    async def close_resources() -> None:
        await client.postgrest.aclose()

    return AppContainer(
        settings=settings,
        catalog=catalog,
        ledger_service=ledger_service,
        stats_service=stats_service,
        goal_service=goal_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
