"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from caltrack.config import Settings
from caltrack.containers import AppContainer
from caltrack.domain.catalog import FoodDraft, FoodItem
from caltrack.domain.errors import DuplicateName, StoreUnavailable
from caltrack.domain.ledger import DailyLog, LogEntry, MacroTotals, TimeSlot
from caltrack.services.catalog import FoodCatalog, FoodRepository
from caltrack.services.dashboard import DashboardService
from caltrack.services.goals import ConfigRepository, GoalService
from caltrack.services.ledger import LedgerRepository, LedgerService
from caltrack.services.stats import StatsService

NOW = datetime(2024, 5, 15, 13, 30)  # a Wednesday afternoon


@dataclass
class FixedClock:
    """Clock returning a settable local time."""

    now: datetime = NOW

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food store with a unique name index."""

    foods: dict[UUID, FoodItem] = field(default_factory=dict)
    unavailable: bool = False
    calls: list[str] = field(default_factory=list)

    async def list_foods(self) -> list[FoodItem]:
        self._check()
        return [replace(food) for food in self.foods.values()]

    async def create_food(self, draft: FoodDraft) -> FoodItem:
        self._check()
        self.calls.append("create")
        if any(food.name == draft.name for food in self.foods.values()):
            raise DuplicateName(draft.name)
        food = FoodItem(id=uuid4(), **_draft_fields(draft))
        self.foods[food.id] = food
        return replace(food)

    async def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem | None:
        self._check()
        self.calls.append("update")
        if food_id not in self.foods:
            return None
        if any(
            food.name == draft.name and food.id != food_id
            for food in self.foods.values()
        ):
            raise DuplicateName(draft.name)
        food = FoodItem(id=food_id, **_draft_fields(draft))
        self.foods[food_id] = food
        return replace(food)

    async def delete_food(self, food_id: UUID) -> bool:
        self._check()
        self.calls.append("delete")
        return self.foods.pop(food_id, None) is not None

    def _check(self) -> None:
        if self.unavailable:
            raise StoreUnavailable("store offline")


@dataclass
class InMemoryLedgerRepository(LedgerRepository):
    """In-memory ledger applying each mutation as one step."""

    logs: dict[date, DailyLog] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    unavailable: bool = False

    async def get_day(self, day: date) -> DailyLog | None:
        self._check()
        return self.logs.get(day)

    async def list_days(self) -> list[DailyLog]:
        self._check()
        return sorted(self.logs.values(), key=lambda log: log.date, reverse=True)

    async def list_days_between(self, start: date, end: date) -> list[DailyLog]:
        self._check()
        return sorted(
            (log for log in self.logs.values() if start <= log.date <= end),
            key=lambda log: log.date,
        )

    async def append_entry(self, day: date, entry: LogEntry) -> DailyLog:
        self._check()
        self.calls.append("append")
        current = self.logs.get(day) or DailyLog(date=day)
        self.logs[day] = _with_totals(
            current, [*current.entries, entry], current.totals + entry.macros
        )
        return self.logs[day]

    async def replace_entry(
        self, day: date, entry: LogEntry, delta: MacroTotals
    ) -> DailyLog | None:
        self._check()
        self.calls.append("replace")
        current = self.logs.get(day)
        if current is None or current.find_entry(entry.id) is None:
            return None
        entries = [entry if item.id == entry.id else item for item in current.entries]
        self.logs[day] = _with_totals(current, entries, current.totals + delta)
        return self.logs[day]

    async def remove_entry(
        self, day: date, entry_id: UUID, delta: MacroTotals
    ) -> DailyLog | None:
        self._check()
        self.calls.append("remove")
        current = self.logs.get(day)
        if current is None or current.find_entry(entry_id) is None:
            return None
        entries = [item for item in current.entries if item.id != entry_id]
        self.logs[day] = _with_totals(current, entries, current.totals + delta)
        return self.logs[day]

    def put_day(self, day: date, *kcal_values: float) -> DailyLog:
        """Store a day whose entries carry the given calories."""
        entries = [
            LogEntry(
                id=uuid4(),
                name=f"Meal {index}",
                kcal=kcal,
                protein=0,
                carbs=0,
                fat=0,
                time="12:00",
                time_slot=TimeSlot.AFTERNOON,
            )
            for index, kcal in enumerate(kcal_values, 1)
        ]
        log = DailyLog(date=day, entries=entries, total_kcal=sum(kcal_values))
        self.logs[day] = log
        return log

    def _check(self) -> None:
        if self.unavailable:
            raise StoreUnavailable("store offline")


@dataclass
class InMemoryConfigRepository(ConfigRepository):
    """In-memory settings singleton."""

    daily_goal: float | None = None

    async def get_daily_goal(self) -> float | None:
        return self.daily_goal

    async def set_daily_goal(self, goal: float) -> None:
        self.daily_goal = goal


def _draft_fields(draft: FoodDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "kcal": draft.kcal,
        "protein": draft.protein,
        "carbs": draft.carbs,
        "fat": draft.fat,
        "category": draft.category,
    }


def _with_totals(
    log: DailyLog, entries: list[LogEntry], totals: MacroTotals
) -> DailyLog:
    return DailyLog(
        date=log.date,
        entries=entries,
        total_kcal=totals.kcal,
        total_protein=totals.protein,
        total_carbs=totals.carbs,
        total_fat=totals.fat,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        retry_delay_seconds=0,
        log_file=None,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def ledger_repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def config_repository() -> InMemoryConfigRepository:
    return InMemoryConfigRepository()


@pytest.fixture
def catalog(food_repository: InMemoryFoodRepository) -> FoodCatalog:
    return FoodCatalog(food_repository)


@pytest.fixture
def ledger_service(
    ledger_repository: InMemoryLedgerRepository, clock: FixedClock
) -> LedgerService:
    return LedgerService(repository=ledger_repository, clock=clock)


@pytest.fixture
def stats_service(
    ledger_repository: InMemoryLedgerRepository, clock: FixedClock
) -> StatsService:
    return StatsService(repository=ledger_repository, clock=clock)


@pytest.fixture
def goal_service(config_repository: InMemoryConfigRepository) -> GoalService:
    return GoalService(config_repository)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    catalog: FoodCatalog,
    ledger_service: LedgerService,
    stats_service: StatsService,
    goal_service: GoalService,
) -> AppContainer:
    closed: list[bool] = []

    async def close_resources() -> None:
        closed.append(True)

    app_container = AppContainer(
        settings=settings,
        catalog=catalog,
        ledger_service=ledger_service,
        stats_service=stats_service,
        goal_service=goal_service,
        dashboard_service=DashboardService(
            ledger_service=ledger_service,
            goal_service=goal_service,
            stats_service=stats_service,
        ),
        close_resources=close_resources,
    )
    app_container.closed = closed  # type: ignore[attr-defined]
    return app_container
