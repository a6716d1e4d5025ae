"""
Equipment filter.

An exercise is usable when it needs no equipment at all, or when the user
owns at least one of the items it lists.  Equipment ids are free strings
("barbell", "rower", "sled", ...) matching the catalog's equipment_ids.
"""

from __future__ import annotations

from collections.abc import Iterable

from .exercises.base import Exercise


def usable(exercise: Exercise, owned_equipment_ids: Iterable[str]) -> bool:
    """Return True if the exercise can be performed with the owned equipment."""
    if not exercise.equipment_ids:
        return True
    owned = set(owned_equipment_ids)
    return any(eq in owned for eq in exercise.equipment_ids)


def filter_usable(
    exercises: Iterable[Exercise], owned_equipment_ids: Iterable[str]
) -> list[Exercise]:
    """Keep only the exercises usable with the owned equipment, preserving order."""
    owned = list(owned_equipment_ids)
    return [ex for ex in exercises if usable(ex, owned)]
