"""Supabase implementation for catalog foods."""

from dataclasses import dataclass
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import AsyncClient

from caltrack.adapters.supabase_support import (
    execute,
    is_unique_violation,
    number,
    rows,
)
from caltrack.domain.catalog import Category, FoodDraft, FoodItem
from caltrack.domain.errors import DuplicateName
from caltrack.services.catalog import FoodRepository

FOODS_TABLE = "foods"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for the food catalog."""

    client: AsyncClient

    async def list_foods(self) -> list[FoodItem]:
        """Return every stored food in insertion order."""
        response = await execute(
            self.client.table(FOODS_TABLE).select("*").order("created_at")
        )
        return [_parse_food(row) for row in rows(response.data)]

    async def create_food(self, draft: FoodDraft) -> FoodItem:
        """Insert a food; the unique index on name rejects duplicates."""
        try:
            response = await execute(
                self.client.table(FOODS_TABLE).insert(_payload(draft))
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateName(draft.name) from exc
            raise
        created = rows(response.data)
        if not created:
            raise RuntimeError("Failed to create food entry")
        return _parse_food(created[0])

    async def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem | None:
        """Overwrite a food entry and return it."""
        try:
            response = await execute(
                self.client.table(FOODS_TABLE)
                .update(_payload(draft))
                .eq("id", str(food_id))
            )
        except APIError as exc:
            if is_unique_violation(exc):
                raise DuplicateName(draft.name) from exc
            raise
        updated = rows(response.data)
        if not updated:
            return None
        return _parse_food(updated[0])

    async def delete_food(self, food_id: UUID) -> bool:
        """Delete a food entry by id."""
        response = await execute(
            self.client.table(FOODS_TABLE).delete().eq("id", str(food_id))
        )
        return bool(rows(response.data))


def _payload(draft: FoodDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "kcal": draft.kcal,
        "protein": draft.protein,
        "carbs": draft.carbs,
        "fat": draft.fat,
        "category": draft.category.value,
    }


def _parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row into a domain model."""
    return FoodItem(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        kcal=number(row.get("kcal")),
        protein=int(number(row.get("protein"))),
        carbs=int(number(row.get("carbs"))),
        fat=int(number(row.get("fat"))),
        category=Category.parse(row.get("category")),  # type: ignore[arg-type]
    )
