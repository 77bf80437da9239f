"""In-memory food catalog kept in step with the persistent store."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol
from uuid import UUID

from rapidfuzz import fuzz, process, utils

from caltrack.domain.catalog import Category, FoodDraft, FoodItem
from caltrack.domain.errors import DuplicateName, FoodNotFound
from caltrack.domain.macros import estimate
from caltrack.services.validation import clean_kcal, clean_name

DEFAULT_SCORE_CUTOFF = 60.0

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for catalog foods."""

    async def list_foods(self) -> list[FoodItem]:
        """Return every stored food."""

    async def create_food(self, draft: FoodDraft) -> FoodItem:
        """Insert a food and return it with its id; DuplicateName on conflict."""

    async def update_food(self, food_id: UUID, draft: FoodDraft) -> FoodItem | None:
        """Overwrite a food and return it, or None if it no longer exists."""

    async def delete_food(self, food_id: UUID) -> bool:
        """Delete a food; return False when nothing was deleted."""


@dataclass
class FoodCatalog:
    """Fuzzy-searchable mirror of the food store.

    The cache is only written after the store write has succeeded.
    """

    repository: FoodRepository
    score_cutoff: float = DEFAULT_SCORE_CUTOFF
    _foods: list[FoodItem] = field(default_factory=list, init=False, repr=False)

    @property
    def foods(self) -> list[FoodItem]:
        return list(self._foods)

    async def load(self) -> int:
        """Replace the cache with the full stored catalog."""
        self._foods = list(await self.repository.list_foods())
        _logger.info("%s food items loaded into memory for searching", len(self._foods))
        return len(self._foods)

    def get(self, food_id: UUID) -> FoodItem | None:
        for food in self._foods:
            if food.id == food_id:
                return food
        return None

    def search(self, query: str | None, limit: int | None = None) -> list[FoodItem]:
        """Return foods whose name approximately matches, best match first.

        A blank query lists everything in cache order.
        """
        if not query or not query.strip():
            results = list(self._foods)
        else:
            matches = process.extract(
                query,
                [food.name for food in self._foods],
                scorer=fuzz.WRatio,
                processor=utils.default_process,
                score_cutoff=self.score_cutoff,
                limit=None,
            )
            ranked = sorted(matches, key=lambda match: (-match[1], match[2]))
            results = [self._foods[index] for _, _, index in ranked]
        if limit is not None:
            return results[:limit]
        return results

    async def learn(
        self, name: str, kcal: float, category: Category | str = Category.MIXED
    ) -> FoodItem:
        """Create a food with estimated macros and add it to the cache."""
        draft = self._draft(name, kcal, category, editing=None)
        food = await self.repository.create_food(draft)
        self._foods.append(food)
        _logger.info("Learned food: name=%s kcal=%s", food.name, food.kcal)
        return food

    async def update(
        self,
        food_id: UUID,
        name: str,
        kcal: float,
        category: Category | str = Category.MIXED,
    ) -> FoodItem:
        """Edit a food and update the cached instance in place."""
        cached = self.get(food_id)
        if cached is None:
            raise FoodNotFound(food_id)
        draft = self._draft(name, kcal, category, editing=cached)
        stored = await self.repository.update_food(food_id, draft)
        if stored is None:
            self._drop(cached)
            raise FoodNotFound(food_id)
        cached.name = stored.name
        cached.kcal = stored.kcal
        cached.protein = stored.protein
        cached.carbs = stored.carbs
        cached.fat = stored.fat
        cached.category = stored.category
        _logger.info("Updated food: id=%s name=%s", food_id, cached.name)
        return cached

    async def remove(self, food_id: UUID) -> None:
        """Delete a food from the store, then from the cache."""
        cached = self.get(food_id)
        deleted = await self.repository.delete_food(food_id)
        if not deleted:
            _logger.warning("Food %s was already gone from the store", food_id)
        if cached is not None:
            self._drop(cached)
        _logger.info("Removed food: id=%s", food_id)

    async def seed(self, items: Iterable[Mapping[str, object]]) -> list[FoodItem]:
        """Learn seed foods whose names are not in the catalog yet."""
        created: list[FoodItem] = []
        for item in items:
            name = str(item.get("name") or "").strip()
            if not name or self._find_by_name(name) is not None:
                continue
            try:
                created.append(
                    await self.learn(
                        name,
                        item.get("kcal", 0),  # type: ignore[arg-type]
                        str(item.get("category") or Category.MIXED),
                    )
                )
            except DuplicateName:
                _logger.info("Seed food %s already stored, skipping", name)
        if created:
            _logger.info("Seeded %s new food items", len(created))
        return created

    def _draft(
        self,
        name: str,
        kcal: float,
        category: Category | str,
        *,
        editing: FoodItem | None,
    ) -> FoodDraft:
        cleaned_name = clean_name(name)
        cleaned_kcal = clean_kcal(kcal)
        existing = self._find_by_name(cleaned_name)
        if existing is not None and existing is not editing:
            raise DuplicateName(cleaned_name)
        resolved = Category.parse(category)
        macros = estimate(cleaned_kcal, resolved)
        return FoodDraft(
            name=cleaned_name,
            kcal=cleaned_kcal,
            protein=macros.protein,
            carbs=macros.carbs,
            fat=macros.fat,
            category=resolved,
        )

    def _find_by_name(self, name: str) -> FoodItem | None:
        for food in self._foods:
            if food.name == name:
                return food
        return None

    def _drop(self, food: FoodItem) -> None:
        self._foods = [item for item in self._foods if item is not food]
