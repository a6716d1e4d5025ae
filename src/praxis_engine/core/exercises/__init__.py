"""
Exercise catalog for praxis-engine.

Each exercise is an immutable Exercise record; the registry exposes
lookups by id, tag and movement pattern.
"""

from .base import Exercise
from .registry import (
    EXERCISE_REGISTRY,
    all_exercises,
    exercises_by_pattern,
    exercises_by_tag,
    get_exercise,
)

__all__ = [
    "Exercise",
    "EXERCISE_REGISTRY",
    "all_exercises",
    "exercises_by_pattern",
    "exercises_by_tag",
    "get_exercise",
]
