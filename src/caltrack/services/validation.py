"""Input validation shared by catalog and ledger mutations."""

import math

from caltrack.domain.errors import ValidationError


def clean_name(name: str | None) -> str:
    """Return the trimmed name or reject an empty one."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Please enter a name.")
    return cleaned


def clean_kcal(kcal: object) -> float:
    """Return calories as a finite, non-negative number."""
    if isinstance(kcal, bool):
        raise ValidationError("Please enter a valid number for calories.")
    try:
        value = float(kcal)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError("Please enter a valid number for calories.") from exc
    if not math.isfinite(value) or value < 0:
        raise ValidationError("Please enter a valid number for calories.")
    return int(value) if value.is_integer() else value


def clean_goal(goal: object) -> float:
    """Return a daily goal as a finite, positive number."""
    if isinstance(goal, bool):
        raise ValidationError("Please enter a valid positive number.")
    try:
        value = float(goal)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise ValidationError("Please enter a valid positive number.") from exc
    if not math.isfinite(value) or value <= 0:
        raise ValidationError("Please enter a valid positive number.")
    return int(value) if value.is_integer() else value
