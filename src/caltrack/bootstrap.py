"""Startup sequence: default settings, catalog cache and seed foods."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic import ValidationError as PayloadError

from caltrack.containers import AppContainer
from caltrack.domain.catalog import Category

_logger = logging.getLogger(__name__)


class SeedFood(BaseModel):
    """One entry of the seed foods file."""

    name: str = Field(min_length=1)
    kcal: float = Field(ge=0)
    category: str = Category.MIXED.value


def load_seed_foods(path: str | None) -> list[dict[str, object]]:
    """Read seed foods from a JSON list of ``{name, kcal, category}`` objects.

    An unreadable file or malformed entries are logged and skipped; seeding
    never stops startup.
    """
    if not path:
        return []
    seed_path = Path(path).expanduser()
    if not seed_path.exists():
        _logger.warning("Seed file %s does not exist, skipping", seed_path)
        return []
    try:
        payload = json.loads(seed_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        _logger.warning("Seed file %s is not valid JSON, skipping: %s", seed_path, exc)
        return []
    if not isinstance(payload, list):
        _logger.warning("Seed file %s must contain a JSON list, skipping", seed_path)
        return []
    foods: list[dict[str, object]] = []
    for item in payload:
        try:
            foods.append(SeedFood.model_validate(item).model_dump())
        except PayloadError as exc:
            _logger.warning("Skipping invalid seed food %r: %s", item, exc)
    return foods


async def bootstrap(container: AppContainer) -> None:
    """Prepare the store and warm the catalog cache.

    Store failures propagate: the application cannot run without them.
    """
    await container.goal_service.ensure_defaults()
    await container.catalog.load()
    seeds = load_seed_foods(container.settings.seed_foods_path)
    if seeds and not await container.catalog.seed(seeds):
        _logger.info("Food database is up to date")
