"""Business rules for the concept graph."""
from __future__ import annotations
from typing import Any, Optional

from prereq_coach.domain.common.result import Result

# SQLite INTEGER is a signed 64-bit value
MAX_ID = 2 ** 63 - 1


def coerce_id(raw: Any) -> Optional[int]:
    """Turn a loosely-typed id into an int, or None when it is absent, garbage or out of range."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if text.lower() in {"", "null", "none", "undefined"}:
            return None
        try:
            value = int(text)
        except ValueError:
            return None
    return value if -MAX_ID - 1 <= value <= MAX_ID else None


def validate_concept_content(data: dict) -> Result[dict]:
    """Validates that a concept has the minimum required fields."""
    name = (data.get("name") or "").strip()
    if not name:
        return Result.fail("Concept 'name' is required and cannot be empty.")
    return Result.ok(data)


def validate_relationship(source_concept_id: Any, target_concept_id: Any) -> Result[tuple[int, int]]:
    """
    Both endpoints must be present and distinct.
    Returns Result.ok((source, target)) with ids coerced to int.
    """
    source = coerce_id(source_concept_id)
    target = coerce_id(target_concept_id)
    if source is None or target is None:
        return Result.fail("Source and target concept IDs are required.")
    if source == target:
        return Result.fail("A concept cannot be a prerequisite for itself.")
    return Result.ok((source, target))
