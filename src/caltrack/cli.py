"""Terminal front end: dashboard, menus and prompts."""

import asyncio
import logging

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from caltrack.clock import day_key
from caltrack.containers import AppContainer
from caltrack.domain.catalog import Category, FoodItem
from caltrack.domain.errors import (
    CalTrackError,
    DuplicateName,
    EntryNotFound,
    FoodNotFound,
    StoreUnavailable,
    ValidationError,
)
from caltrack.domain.ledger import DailyLog, LogEntry, TimeSlot
from caltrack.domain.stats import Dashboard, WeeklyReport, WeeklySeries
from caltrack.services.ledger import AUTO_TIME_SLOT

console = Console()

_logger = logging.getLogger(__name__)

SEARCH_RESULTS_LIMIT = 10
RECENT_MEALS = 5
PROGRESS_BAR_WIDTH = 20
WARNING_PERCENT = 75
REPORT_DAY_WIDTH = 24
REPORT_KCAL_WIDTH = 14
TIME_SLOT_CHOICES = [AUTO_TIME_SLOT, *(slot.value for slot in TimeSlot)]
CATEGORY_CHOICES = [category.value for category in Category]


# ============== Helpers ==============


def print_success(message: str) -> None:
    console.print(f"[green]{message}[/green]")


def print_error(message: str) -> None:
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    console.print(f"[yellow]{message}[/yellow]")


def press_enter_to_continue() -> None:
    console.print()
    Prompt.ask("[dim]Press Enter to continue[/dim]", default="", show_default=False)


def format_kcal(value: float) -> str:
    return f"{round(value):,}"


def progress_color(percentage: float) -> str:
    if percentage >= 100:
        return "red"
    if percentage > WARNING_PERCENT:
        return "yellow"
    return "green"


def create_progress_bar(percentage: float, width: int = PROGRESS_BAR_WIDTH) -> str:
    """Render a coloured bar for a percentage of the daily goal."""
    clamped = min(max(percentage, 0.0), 100.0)
    filled = round(clamped / 100 * width)
    color = progress_color(percentage)
    return f"[{color}]{'█' * filled}[/{color}][dim]{'░' * (width - filled)}[/dim]"


def goal_percent(kcal: float, goal: float) -> float:
    return kcal / goal * 100 if goal > 0 else 0.0


def describe_entry(entry: LogEntry) -> str:
    return (
        f"([cyan]{entry.time_slot}[/cyan]) {entry.name} "
        f"([yellow]{format_kcal(entry.kcal)}[/yellow] kcal) at {entry.time}"
    )


# ============== Rendering ==============


def render_dashboard(dashboard: Dashboard) -> Panel:
    """Build the dashboard panel."""
    percent = dashboard.progress_percent
    lines = [
        f"[bold]Date: {day_key(dashboard.today)}[/bold]",
        f"[bold]{format_kcal(dashboard.consumed_kcal)}[/bold] kcal / "
        f"[bold]{format_kcal(dashboard.daily_goal)}[/bold] kcal",
        f"Progress: [{create_progress_bar(percent)}] {percent:.1f}%",
    ]
    if dashboard.remaining_kcal > 0:
        lines.append(
            f"[green bold]{format_kcal(dashboard.remaining_kcal)}[/green bold] "
            "kcal remaining"
        )
    else:
        lines.append(
            f"[red bold]{format_kcal(abs(dashboard.remaining_kcal))}[/red bold] "
            "kcal over goal"
        )
    if dashboard.streak:
        lines.append(f"Streak: [green]{dashboard.streak}[/green] days on goal")
    if dashboard.log and dashboard.log.entries:
        lines.append("")
        lines.append(f"--- [bold]Last {RECENT_MEALS} Meals[/bold] ---")
        for entry in dashboard.log.recent_entries(RECENT_MEALS):
            lines.append(f"  - {describe_entry(entry)}")
    lines.append("")
    lines.append(render_week_line(dashboard.week))
    return Panel(
        "\n".join(lines),
        title="CalTrack Terminal",
        box=box.ROUNDED,
        padding=(1, 2),
    )


def render_week_line(series: WeeklySeries) -> str:
    days = "  ".join(
        f"{day.day:%a} {format_kcal(day.total_kcal)}" for day in series.days
    )
    total = format_kcal(series.total_kcal)
    return f"[dim]This week:[/dim] {days}  [bold]= {total}[/bold]"


def render_day(log: DailyLog, daily_goal: float) -> Panel:
    """Build the detail panel for one day."""
    percent = goal_percent(log.total_kcal, daily_goal)
    lines = [
        f"[bold]Date: {day_key(log.date)}[/bold]",
        f"[bold]{format_kcal(log.total_kcal)}[/bold] kcal / "
        f"[bold]{format_kcal(daily_goal)}[/bold] kcal",
        f"Progress: [{create_progress_bar(percent)}] {percent:.1f}%",
        f"[dim]Protein {log.total_protein:g}g  Carbs {log.total_carbs:g}g  "
        f"Fat {log.total_fat:g}g[/dim]",
        "",
        "--- [bold]All Meals[/bold] ---",
    ]
    for index, entry in enumerate(log.entries, 1):
        lines.append(f"  [grey50]{index}.[/grey50] {describe_entry(entry)}")
    return Panel(
        "\n".join(lines), title="Daily Log Details", box=box.ROUNDED, padding=(1, 2)
    )


def render_food_table(foods: list[FoodItem]) -> Table:
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Name", style="cyan", min_width=20)
    table.add_column("Calories", justify="right")
    table.add_column("Protein", justify="right")
    table.add_column("Carbs", justify="right")
    table.add_column("Fat", justify="right")
    table.add_column("Category", style="dim")
    for index, food in enumerate(foods, 1):
        table.add_row(
            str(index),
            food.name,
            format_kcal(food.kcal),
            f"{food.protein}g",
            f"{food.carbs}g",
            f"{food.fat}g",
            food.category.value,
        )
    return table


def render_history(logs: list[DailyLog], daily_goal: float) -> Table:
    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=4)
    table.add_column("Date")
    table.add_column("Calories", justify="right")
    table.add_column("Meals", justify="right")
    for index, log in enumerate(logs, 1):
        color = progress_color(goal_percent(log.total_kcal, daily_goal))
        table.add_row(
            str(index),
            day_key(log.date),
            f"[{color}]{format_kcal(log.total_kcal)} / "
            f"{format_kcal(daily_goal)}[/{color}]",
            str(len(log.entries)),
        )
    return table


def render_report(report: WeeklyReport) -> Table:
    table = Table(
        title=f"Last 7 days: {day_key(report.start)} to {day_key(report.end)}",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Day", min_width=REPORT_DAY_WIDTH)
    table.add_column("Calories", justify="right", min_width=REPORT_KCAL_WIDTH)
    for day in report.days:
        table.add_row(day.day.strftime("%a %Y-%m-%d"), format_kcal(day.total_kcal))
    table.add_section()
    total = format_kcal(report.total_kcal)
    table.add_row("[bold]Total[/bold]", f"[bold]{total}[/bold]")
    table.add_row("Average", format_kcal(report.average_kcal))
    return table


# ============== Selection prompts ==============


def choose_index(count: int, label: str) -> int | None:
    """Ask for a 1-based row number; None when cancelled."""
    choice = IntPrompt.ask(f"Select {label} number (0 to cancel)", default=0)
    if choice <= 0 or choice > count:
        return None
    return choice - 1


def choose_food(foods: list[FoodItem]) -> FoodItem | None:
    if not foods:
        print_warning("No foods found.")
        return None
    console.print(render_food_table(foods))
    index = choose_index(len(foods), "food")
    return foods[index] if index is not None else None


def choose_entry(log: DailyLog, action: str) -> LogEntry | None:
    if not log.entries:
        print_warning(f"There are no entries to {action}.")
        return None
    index = choose_index(len(log.entries), "entry")
    return log.entries[index] if index is not None else None


def ask_name(current: str | None = None) -> str:
    if current:
        return Prompt.ask("Food name", default=current)
    return Prompt.ask("Food name (or 'cancel' to go back)")


def ask_kcal(name: str, current: float | None = None) -> float:
    prompt = f'Calories (kcal) for "{name}"'
    if current is not None:
        return FloatPrompt.ask(prompt, default=float(current))
    return FloatPrompt.ask(prompt)


def ask_category(current: str = Category.MIXED.value) -> str:
    return Prompt.ask(
        "Category [dim](macros are re-estimated from it)[/dim]",
        choices=CATEGORY_CHOICES,
        default=current,
    )


# ============== Actions ==============


async def create_food(container: AppContainer) -> FoodItem | None:
    """Learn a new food from prompts."""
    name = ask_name()
    if name.strip().lower() == "cancel":
        print_warning("Creation cancelled.")
        return None
    kcal = ask_kcal(name)
    category = ask_category()
    try:
        food = await container.catalog.learn(name, kcal, category)
    except (ValidationError, DuplicateName) as exc:
        print_error(str(exc))
        press_enter_to_continue()
        return None
    print_success(
        f'Learned "{food.name}" ({food.protein}g protein, {food.carbs}g carbs, '
        f"{food.fat}g fat)."
    )
    return food


async def add_meal(container: AppContainer) -> None:
    query = Prompt.ask(
        "Search for a food [dim](blank: all, 'new', 'cancel')[/dim]",
        default="",
        show_default=False,
    )
    command = query.strip().lower()
    if command == "cancel":
        print_warning("Action cancelled.")
        return
    if command == "new":
        food = await create_food(container)
    else:
        food = choose_food(container.catalog.search(query, limit=SEARCH_RESULTS_LIMIT))
    if food is None:
        return
    slot = Prompt.ask(
        "Which time slot for this meal?", choices=TIME_SLOT_CHOICES, default="Auto"
    )
    log = await container.ledger_service.log_meal(food, slot)
    print_success(f'Added "{food.name}" to {log.entries[-1].time_slot}!')


async def edit_entry(container: AppContainer, log: DailyLog) -> None:
    entry = choose_entry(log, "edit")
    if entry is None:
        return
    name = ask_name(entry.name)
    kcal = ask_kcal(name, entry.kcal)
    category = ask_category(entry.category.value)
    try:
        await container.ledger_service.edit_entry(
            log.date, entry.id, name, kcal, category
        )
    except (ValidationError, EntryNotFound) as exc:
        print_error(str(exc))
    else:
        print_success("Entry successfully updated.")
    press_enter_to_continue()


async def delete_entry(container: AppContainer, log: DailyLog) -> None:
    entry = choose_entry(log, "delete")
    if entry is None:
        return
    if not Confirm.ask("Are you sure you want to delete this entry?", default=False):
        return
    try:
        await container.ledger_service.delete_entry(log.date, entry.id)
    except EntryNotFound as exc:
        print_error(str(exc))
    else:
        print_success("Entry successfully deleted.")
    press_enter_to_continue()


async def show_day_detail(container: AppContainer, log: DailyLog) -> None:
    while True:
        console.clear()
        current = await container.ledger_service.get_day(log.date)
        if current is None:
            print_warning("Log for this day no longer exists.")
            press_enter_to_continue()
            return
        daily_goal = await container.goal_service.get_daily_goal()
        console.print(render_day(current, daily_goal))
        console.print("  [1] Edit an Entry")
        console.print("  [2] Delete an Entry")
        console.print("  [0] Back to History")
        choice = Prompt.ask("Choice", choices=["0", "1", "2"], default="0")
        if choice == "0":
            return
        if choice == "1":
            await edit_entry(container, current)
        else:
            await delete_entry(container, current)


async def view_history(container: AppContainer) -> None:
    console.clear()
    logs, daily_goal = await asyncio.gather(
        container.ledger_service.list_days(),
        container.goal_service.get_daily_goal(),
    )
    if not logs:
        print_warning("No history found.")
        press_enter_to_continue()
        return
    console.print(render_history(logs, daily_goal))
    index = choose_index(len(logs), "day")
    if index is not None:
        await show_day_detail(container, logs[index])


async def manage_foods(container: AppContainer) -> None:
    query = Prompt.ask("Search foods", default="", show_default=False)
    food = choose_food(container.catalog.search(query, limit=SEARCH_RESULTS_LIMIT))
    if food is None:
        return
    choice = Prompt.ask("[1] Edit  [2] Delete  [0] Back", choices=["0", "1", "2"])
    try:
        if choice == "1":
            name = ask_name(food.name)
            kcal = ask_kcal(name, food.kcal)
            category = ask_category(food.category.value)
            await container.catalog.update(food.id, name, kcal, category)
            print_success(f'Updated "{food.name}".')
        elif choice == "2" and Confirm.ask(f'Delete "{food.name}"?', default=False):
            await container.catalog.remove(food.id)
            print_success(f'Deleted "{food.name}".')
    except (ValidationError, DuplicateName, FoodNotFound) as exc:
        print_error(str(exc))
    press_enter_to_continue()


async def show_weekly_report(container: AppContainer) -> None:
    report = await container.stats_service.weekly_report(
        container.ledger_service.today()
    )
    console.print(render_report(report))
    press_enter_to_continue()


async def set_daily_goal(container: AppContainer) -> None:
    goal = FloatPrompt.ask("Enter your new daily calorie goal")
    try:
        saved = await container.goal_service.set_daily_goal(goal)
    except ValidationError as exc:
        print_error(str(exc))
    else:
        print_success(f"Goal updated to {format_kcal(saved)} kcal!")
    press_enter_to_continue()


# ============== Main loop ==============


async def show_dashboard(container: AppContainer) -> bool:
    """Draw the dashboard and run one menu choice; False means exit."""
    dashboard = await container.dashboard_service.snapshot()
    console.clear()
    console.print(render_dashboard(dashboard))
    console.print("  [1] Add Meal")
    console.print("  [2] View History")
    console.print("  [3] Manage Foods")
    console.print("  [4] Weekly Report")
    console.print("  [5] Set Daily Goal")
    console.print("  [6] Refresh Dashboard")
    console.print("  [0] Exit")
    choice = Prompt.ask(
        "What would you like to do?",
        choices=["0", "1", "2", "3", "4", "5", "6"],
        default="1",
    )
    if choice == "0":
        return False
    if choice == "1":
        await add_meal(container)
    elif choice == "2":
        await view_history(container)
    elif choice == "3":
        await manage_foods(container)
    elif choice == "4":
        await show_weekly_report(container)
    elif choice == "5":
        await set_daily_goal(container)
    return True


async def run_session(container: AppContainer) -> None:
    """Run the dashboard loop until the user exits.

    A lost store connection pauses and redraws instead of ending the session.
    """
    while True:
        try:
            if not await show_dashboard(container):
                return
        except StoreUnavailable:
            _logger.exception("Store unavailable during session")
            print_error("Lost connection to the database, retrying...")
            await asyncio.sleep(container.settings.retry_delay_seconds)
        except CalTrackError as exc:
            print_error(str(exc))
            press_enter_to_continue()
