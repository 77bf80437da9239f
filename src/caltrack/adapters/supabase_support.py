"""Helpers shared by the Supabase repositories."""

from typing import Any

import httpx
from postgrest.exceptions import APIError

from caltrack.domain.errors import StoreUnavailable

UNIQUE_VIOLATION = "23505"


async def execute(query: Any) -> Any:
    """Run a query builder, translating transport failures."""
    try:
        return await query.execute()
    except httpx.TransportError as exc:
        raise StoreUnavailable(f"Store unreachable: {exc}") from exc


def is_unique_violation(exc: APIError) -> bool:
    return str(getattr(exc, "code", "")) == UNIQUE_VIOLATION


def rows(data: object) -> list[dict[str, Any]]:
    """Normalise a PostgREST payload into a list of rows."""
    if not data:
        return []
    if isinstance(data, dict):
        return [data]
    return [row for row in data if isinstance(row, dict)]


def number(value: object) -> float:
    """Parse a numeric column, keeping whole numbers as ints."""
    if value is None:
        return 0
    parsed = float(value)  # type: ignore[arg-type]
    return int(parsed) if parsed.is_integer() else parsed
