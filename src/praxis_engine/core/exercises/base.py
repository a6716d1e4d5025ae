"""
Base type for exercise catalog entries.

An Exercise is immutable reference data: the engine selects from the
catalog but never changes it.
"""

from dataclasses import dataclass

DIFFICULTIES: tuple[str, ...] = ("beginner", "intermediate", "advanced")


@dataclass(frozen=True)
class Exercise:
    """
    One catalog entry.

    equipment_ids lists alternatives: owning any one of them is enough.
    An empty tuple means no equipment is needed.
    """

    # Identity
    id: str                   # e.g. "back_squat"
    name: str                 # e.g. "Back Squat"

    # Classification
    pattern: str              # movement pattern, e.g. "squat", "horizontal_pull"
    modality: str             # "barbell" | "dumbbell" | "kettlebell" | "bodyweight" | "machine" | ...
    difficulty: str = "beginner"

    equipment_ids: tuple[str, ...] = ()
    primary_muscles: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()  # selection tags: "strength", "warmup", "core", ...
    description: str | None = None

    def __post_init__(self) -> None:
        if self.difficulty not in DIFFICULTIES:
            raise ValueError(
                f"difficulty must be one of {DIFFICULTIES}, got {self.difficulty!r}"
            )

    def has_tag(self, tag: str) -> bool:
        return tag in self.tags
