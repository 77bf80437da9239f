"""Error taxonomy shared by services and adapters."""

from uuid import UUID


class CalTrackError(Exception):
    """Base class for recoverable application errors."""


class ValidationError(CalTrackError):
    """Raised for bad user input before anything is persisted."""


class DuplicateName(CalTrackError):
    """Raised when a food name is already taken."""

    def __init__(self, name: str) -> None:
        super().__init__(f'A food named "{name}" already exists.')
        self.name = name


class FoodNotFound(CalTrackError):
    """Raised when a catalog item no longer exists."""

    def __init__(self, food_id: UUID) -> None:
        super().__init__(f"Food {food_id} no longer exists.")
        self.food_id = food_id


class EntryNotFound(CalTrackError):
    """Raised when a log entry is absent from the referenced day."""

    def __init__(self, day: str, entry_id: UUID) -> None:
        super().__init__(f"Entry {entry_id} is not logged on {day}.")
        self.day = day
        self.entry_id = entry_id


class StoreUnavailable(CalTrackError):
    """Raised when the persistent store cannot be reached."""
