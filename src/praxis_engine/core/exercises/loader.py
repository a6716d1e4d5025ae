"""
YAML → Exercise loader.

Loads the exercise catalog from the YAML files in the bundled
``src/praxis_engine/exercises/`` directory.  Each file (e.g. barbell.yaml)
holds an ``exercises:`` list of entries matching the Exercise schema.

User overrides: place YAML files of the same shape in
``~/.praxis/exercises/``.  An entry whose id matches a bundled exercise is
merged over it, so only changed keys need to be listed; an entry with a new
id is added to the catalog.

Usage (internal, called by registry.py):
    from .loader import load_exercises_from_yaml
    exercises = load_exercises_from_yaml()   # dict or None on failure
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Any

from ..engine.config_loader import deep_merge, load_yaml_file, package_root, praxis_home
from .base import Exercise

_REQUIRED_EXERCISE_FIELDS: frozenset[str] = frozenset(
    {
        "id",
        "name",
        "pattern",
        "modality",
    }
)


def _str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def exercise_from_dict(d: dict) -> Exercise:
    """Convert a raw dict (from YAML) to an Exercise.

    Raises ValueError if any required field is absent or a value is invalid.
    """
    missing = _REQUIRED_EXERCISE_FIELDS - set(d)
    if missing:
        raise ValueError(f"Exercise missing fields: {sorted(missing)}")

    description = d.get("description")
    return Exercise(
        id=str(d["id"]),
        name=str(d["name"]),
        pattern=str(d["pattern"]),
        modality=str(d["modality"]),
        difficulty=str(d.get("difficulty", "beginner")),
        equipment_ids=_str_tuple(d.get("equipment_ids")),
        primary_muscles=_str_tuple(d.get("primary_muscles")),
        tags=_str_tuple(d.get("tags")),
        description=str(description) if description is not None else None,
    )


def _raw_entries(path: Path) -> list[dict]:
    """Return the raw exercise entries of one catalog file."""
    data = load_yaml_file(path)
    entries = data.get("exercises") or []
    if not isinstance(entries, list):
        warnings.warn(f"praxis: {path.name}: 'exercises' is not a list", stacklevel=3)
        return []
    return [e for e in entries if isinstance(e, dict)]


def get_bundled_exercises_dir() -> Path | None:
    """Return path to the bundled exercises/ data directory, or None if not found."""
    candidate = package_root() / "exercises"
    return candidate if candidate.is_dir() else None


def get_user_exercises_dir() -> Path | None:
    """Return ~/.praxis/exercises/ if it exists, else None."""
    p = praxis_home() / "exercises"
    return p if p.is_dir() else None


def load_exercises_from_yaml(
    bundled_dir: Path | None = None,
    user_dir: Path | None = None,
) -> dict[str, Exercise] | None:
    """Return {exercise_id: Exercise} loaded from the catalog YAML files.

    Bundled entries are read first, in file-name order; user entries are then
    merged over them by id.  Entries that fail validation are skipped with a
    warning.  Returns None when nothing could be loaded so the registry can
    decide how to fail.
    """
    if bundled_dir is None:
        bundled_dir = get_bundled_exercises_dir()
    if user_dir is None:
        user_dir = get_user_exercises_dir()

    raw_by_id: dict[str, dict] = {}
    for directory in (bundled_dir, user_dir):
        if directory is None:
            continue
        for path in sorted(directory.glob("*.yaml")):
            for entry in _raw_entries(path):
                ex_id = entry.get("id")
                if ex_id is None:
                    warnings.warn(
                        f"praxis: skipping entry without id in {path.name}",
                        stacklevel=2,
                    )
                    continue
                ex_id = str(ex_id)
                if ex_id in raw_by_id:
                    raw_by_id[ex_id] = deep_merge(raw_by_id[ex_id], entry)
                else:
                    raw_by_id[ex_id] = entry

    result: dict[str, Exercise] = {}
    for ex_id, raw in raw_by_id.items():
        try:
            result[ex_id] = exercise_from_dict(raw)
        except ValueError as exc:
            warnings.warn(f"praxis: skipping exercise '{ex_id}': {exc}", stacklevel=2)

    return result if result else None
