"""
Exercise registry.

The catalog is loaded once, at import time, from the YAML files in the
bundled ``src/praxis_engine/exercises/`` directory (plus any user files in
``~/.praxis/exercises/``).  If nothing can be loaded a RuntimeError is
raised: the engine cannot generate anything without a catalog.

Iteration order is load order (bundled files sorted by name, entries in
file order), which keeps rotation-based selection deterministic.
"""

from ..errors import UnknownExerciseError
from .base import Exercise


def _build_registry() -> dict[str, Exercise]:
    from .loader import load_exercises_from_yaml

    loaded = load_exercises_from_yaml()
    if not loaded:
        raise RuntimeError(
            "praxis: no exercises could be loaded from YAML. "
            "Check that src/praxis_engine/exercises/*.yaml files are present and valid."
        )
    return loaded


EXERCISE_REGISTRY: dict[str, Exercise] = _build_registry()


def get_exercise(exercise_id: str) -> Exercise:
    """
    Return the Exercise for the given id.

    Raises:
        UnknownExerciseError: If exercise_id is not in the catalog
    """
    if exercise_id not in EXERCISE_REGISTRY:
        raise UnknownExerciseError(f"Unknown exercise '{exercise_id}'")
    return EXERCISE_REGISTRY[exercise_id]


def all_exercises() -> list[Exercise]:
    return list(EXERCISE_REGISTRY.values())


def exercises_by_tag(tag: str) -> list[Exercise]:
    """All exercises carrying the tag, in catalog order."""
    return [ex for ex in EXERCISE_REGISTRY.values() if tag in ex.tags]


def exercises_by_pattern(pattern: str) -> list[Exercise]:
    """All exercises of a movement pattern, in catalog order."""
    return [ex for ex in EXERCISE_REGISTRY.values() if ex.pattern == pattern]
