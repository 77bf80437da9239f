"""Local calendar date and time-of-day helpers."""

from collections.abc import Callable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from caltrack.domain.ledger import TimeSlot

Clock = Callable[[], datetime]

MORNING_START = 5
AFTERNOON_START = 12
EVENING_START = 17
NIGHT_START = 21


def local_clock(timezone_name: str | None = None) -> Clock:
    """Return a clock reading local wall time.

    Uses the named zone when given, otherwise the system's local zone, so the
    calendar day always matches the user's perceived "today".
    """
    tz = ZoneInfo(timezone_name) if timezone_name else None

    def now() -> datetime:
        if tz is None:
            return datetime.now().astimezone()
        return datetime.now(tz=tz)

    return now


def day_key(day: date) -> str:
    """Format a calendar day the way logs are keyed in the store."""
    return day.isoformat()


def parse_day(value: str) -> date:
    return date.fromisoformat(value[:10])


def time_of_day(moment: datetime) -> str:
    """Format a local time as 24-hour ``HH:MM``."""
    return moment.strftime("%H:%M")


def time_slot_for(moment: datetime) -> TimeSlot:
    """Bucket a local time into a time slot."""
    hour = moment.hour
    if MORNING_START <= hour < AFTERNOON_START:
        return TimeSlot.MORNING
    if AFTERNOON_START <= hour < EVENING_START:
        return TimeSlot.AFTERNOON
    if EVENING_START <= hour < NIGHT_START:
        return TimeSlot.EVENING
    return TimeSlot.NIGHT
