"""
Data models for praxis-engine.

All core dataclasses representing profiles, plan days, workout blocks,
session logs and personal records.  Plan structures are frozen so that the
adaptation step can only ever build new values with dataclasses.replace().

Dates are ISO strings (YYYY-MM-DD), timestamps ISO-8601 datetime strings.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Literal

Goal = Literal["strength", "conditioning", "hybrid", "general"]
ExperienceLevel = Literal["beginner", "intermediate", "advanced"]
TimeAvailability = Literal["short", "standard", "full"]
AdaptationMode = Literal["conservative", "automatic", "aggressive"]
Units = Literal["metric", "imperial"]
Focus = Literal["strength", "conditioning", "mixed", "rest"]
ConditioningMode = Literal["interval", "steady"]

GOALS: tuple[str, ...] = ("strength", "conditioning", "hybrid", "general")
EXPERIENCE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")
TIME_AVAILABILITIES: tuple[str, ...] = ("short", "standard", "full")
ADAPTATION_MODES: tuple[str, ...] = ("conservative", "automatic", "aggressive")
UNIT_SYSTEMS: tuple[str, ...] = ("metric", "imperial")

# Lift id (or lift family such as "squat") → known one-rep max.
StrengthNumbers = dict[str, float]


# =============================================================================
# PROFILE
# =============================================================================


@dataclass
class Preferences:
    """Training preferences that drive plan generation and adaptation."""

    goal: Goal
    experience_level: ExperienceLevel
    training_days_per_week: int
    time_availability: TimeAvailability = "standard"
    equipment_ids: list[str] = field(default_factory=list)
    adaptation_mode: AdaptationMode = "automatic"
    readiness_scaling_enabled: bool = True

    def __post_init__(self) -> None:
        """Validate enumerated fields."""
        if self.goal not in GOALS:
            raise ValueError(f"goal must be one of {GOALS}, got {self.goal!r}")
        if self.experience_level not in EXPERIENCE_LEVELS:
            raise ValueError(
                f"experience_level must be one of {EXPERIENCE_LEVELS}, "
                f"got {self.experience_level!r}"
            )
        if self.time_availability not in TIME_AVAILABILITIES:
            raise ValueError(
                f"time_availability must be one of {TIME_AVAILABILITIES}, "
                f"got {self.time_availability!r}"
            )
        if self.adaptation_mode not in ADAPTATION_MODES:
            raise ValueError(
                f"adaptation_mode must be one of {ADAPTATION_MODES}, "
                f"got {self.adaptation_mode!r}"
            )


@dataclass
class UserProfile:
    """
    The athlete the engine generates for.

    Owned by the caller; the engine reads it and never mutates it.
    """

    id: str
    preferences: Preferences
    name: str | None = None
    email: str | None = None
    units: Units = "metric"
    strength_numbers: StrengthNumbers = field(default_factory=dict)
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self) -> None:
        """Validate profile data."""
        if self.units not in UNIT_SYSTEMS:
            raise ValueError(f"units must be one of {UNIT_SYSTEMS}, got {self.units!r}")
        for lift, value in self.strength_numbers.items():
            if value < 0:
                raise ValueError(f"strength number for {lift!r} must be non-negative")


@dataclass(frozen=True)
class GenerationParams:
    """
    Explicit inputs for workout generation.

    Built by the caller (usually from a UserProfile) and passed into every
    generator call; the engine holds no ambient preference state.
    """

    goal: Goal
    experience_level: ExperienceLevel
    equipment_ids: tuple[str, ...] = ()
    units: Units = "metric"
    strength_numbers: StrengthNumbers = field(default_factory=dict)
    time_availability: TimeAvailability = "standard"
    user_id: str = "local-user"

    def __post_init__(self) -> None:
        if self.goal not in GOALS:
            raise ValueError(f"goal must be one of {GOALS}, got {self.goal!r}")
        if self.experience_level not in EXPERIENCE_LEVELS:
            raise ValueError(
                f"experience_level must be one of {EXPERIENCE_LEVELS}, "
                f"got {self.experience_level!r}"
            )
        if self.units not in UNIT_SYSTEMS:
            raise ValueError(f"units must be one of {UNIT_SYSTEMS}, got {self.units!r}")
        if self.time_availability not in TIME_AVAILABILITIES:
            raise ValueError(
                f"time_availability must be one of {TIME_AVAILABILITIES}, "
                f"got {self.time_availability!r}"
            )

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "GenerationParams":
        prefs = profile.preferences
        return cls(
            goal=prefs.goal,
            experience_level=prefs.experience_level,
            equipment_ids=tuple(prefs.equipment_ids),
            units=profile.units,
            strength_numbers=dict(profile.strength_numbers),
            time_availability=prefs.time_availability,
            user_id=profile.id,
        )


# =============================================================================
# PRESCRIPTIONS AND BLOCKS
# =============================================================================


@dataclass(frozen=True)
class SetPrescription:
    """
    Target for one set.

    target_percent_1rm uses the 0–100 scale.  Either load driver may be
    absent; both may coexist.
    """

    target_reps: int
    target_percent_1rm: float | None = None
    target_rpe: float | None = None

    def __post_init__(self) -> None:
        if self.target_reps < 0:
            raise ValueError("target_reps must be non-negative")
        if self.target_percent_1rm is not None and self.target_percent_1rm < 0:
            raise ValueError("target_percent_1rm must be non-negative")


@dataclass(frozen=True)
class ExercisePrescription:
    """An exercise plus its ordered set targets."""

    exercise_id: str
    sets: list[SetPrescription] = field(default_factory=list)


@dataclass(frozen=True)
class ConditioningPrescription:
    """Work/rest structure of a conditioning piece. target_zone has the form 'Z<1-5>'."""

    mode: ConditioningMode
    work_seconds: int | None = None
    rest_seconds: int | None = None
    rounds: int | None = None
    target_zone: str | None = None
    notes: str | None = None
    exercise_id: str | None = None

    def __post_init__(self) -> None:
        if self.mode not in ("interval", "steady"):
            raise ValueError(f"mode must be 'interval' or 'steady', got {self.mode!r}")
        for name in ("work_seconds", "rest_seconds", "rounds"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValueError(f"{name} must be non-negative")


@dataclass(frozen=True)
class WarmupBlock:
    """Warm-up: a short list of named movements."""

    block_type: ClassVar[str] = "warmup"

    id: str
    title: str
    estimated_duration_minutes: int
    items: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class StrengthBlock:
    """Main lift plus optional secondary lifts."""

    block_type: ClassVar[str] = "strength"

    id: str
    title: str
    estimated_duration_minutes: int
    main: ExercisePrescription
    secondary: list[ExercisePrescription] = field(default_factory=list)


@dataclass(frozen=True)
class AccessoryBlock:
    """Rep-driven accessory work."""

    block_type: ClassVar[str] = "accessory"

    id: str
    title: str
    estimated_duration_minutes: int
    exercises: list[ExercisePrescription] = field(default_factory=list)


@dataclass(frozen=True)
class ConditioningBlock:
    """A single conditioning piece (intervals or steady state)."""

    block_type: ClassVar[str] = "conditioning"

    id: str
    title: str
    estimated_duration_minutes: int
    conditioning: ConditioningPrescription


@dataclass(frozen=True)
class CooldownBlock:
    """Cooldown: a fixed list of easy movements."""

    block_type: ClassVar[str] = "cooldown"

    id: str
    title: str
    estimated_duration_minutes: int
    items: list[str] = field(default_factory=list)


WorkoutBlock = WarmupBlock | StrengthBlock | AccessoryBlock | ConditioningBlock | CooldownBlock

BLOCK_TYPES: dict[str, type] = {
    cls.block_type: cls
    for cls in (WarmupBlock, StrengthBlock, AccessoryBlock, ConditioningBlock, CooldownBlock)
}


@dataclass(frozen=True)
class WorkoutPlanDay:
    """
    One calendar day of a plan.

    A rest day has no blocks and zero duration.  adjusted_for_readiness is
    set only on values returned by the adaptation step.
    """

    id: str
    user_id: str
    date: str  # YYYY-MM-DD
    day_index: int
    focus_tags: list[str]
    blocks: list[WorkoutBlock]
    estimated_duration_minutes: int
    adjusted_for_readiness: bool = False
    created_at: str = ""

    def __post_init__(self) -> None:
        if self.day_index < 0:
            raise ValueError("day_index must be non-negative")
        if self.estimated_duration_minutes < 0:
            raise ValueError("estimated_duration_minutes must be non-negative")

    @property
    def is_rest_day(self) -> bool:
        return not self.blocks

    def blocks_of_type(self, block_type: str) -> list[WorkoutBlock]:
        return [b for b in self.blocks if b.block_type == block_type]


@dataclass(frozen=True)
class TrainingCycle:
    """Consecutive microcycles; weeks[i] holds the seven days of week i."""

    id: str
    start_date: str
    end_date: str
    weeks: list[list[WorkoutPlanDay]]

    @property
    def days(self) -> list[WorkoutPlanDay]:
        """All days of the cycle in calendar order."""
        return [day for week in self.weeks for day in week]


# =============================================================================
# READINESS
# =============================================================================


@dataclass(frozen=True)
class ReadinessInput:
    """Four subjective 1–5 ratings. Higher soreness/stress means worse."""

    sleep_quality: int
    energy: int
    soreness: int
    stress: int


@dataclass(frozen=True)
class ReadinessFactors:
    """Normalized 0–100 contributions; soreness and stress already inverted."""

    sleep: float
    energy: float
    soreness: float
    stress: float


@dataclass(frozen=True)
class ReadinessScore:
    score: int
    factors: ReadinessFactors


# =============================================================================
# SESSION LOGS AND RECORDS
# =============================================================================


@dataclass
class CompletedSet:
    """A set as actually performed. weight/reps are None when not recorded."""

    block_id: str
    exercise_id: str
    set_index: int
    weight: float | None = None
    reps: int | None = None
    rpe: float | None = None
    completed_at: str = ""

    def __post_init__(self) -> None:
        """Validate set data."""
        if self.set_index < 0:
            raise ValueError("set_index must be non-negative")
        if self.weight is not None and self.weight < 0:
            raise ValueError("weight must be non-negative")
        if self.reps is not None and self.reps < 0:
            raise ValueError("reps must be non-negative")


@dataclass
class ConditioningRoundLog:
    block_id: str
    round_index: int
    work_seconds: int | None = None
    rest_seconds: int | None = None
    perceived_intensity: float | None = None

    def __post_init__(self) -> None:
        if self.round_index < 0:
            raise ValueError("round_index must be non-negative")


@dataclass
class WorkoutSessionLog:
    """
    A performed session.

    Contains the completed strength/accessory sets and any conditioning
    rounds that were logged.
    """

    id: str
    user_id: str
    date: str  # YYYY-MM-DD
    started_at: str
    completed_at: str | None = None
    plan_day_id: str | None = None
    completed_sets: list[CompletedSet] = field(default_factory=list)
    conditioning_rounds: list[ConditioningRoundLog] = field(default_factory=list)
    session_rpe: float | None = None
    notes: str | None = None
    created_at: str = ""


@dataclass
class PersonalRecord:
    """
    Best estimated 1RM for an exercise, and the set it came from.

    change_from_previous is None for an exercise's first record.
    """

    id: str
    user_id: str
    exercise_id: str
    estimated_1rm: float
    date: str
    achieved_at: str
    weight: float
    reps: int
    set_index: int
    block_id: str
    session_id: str
    change_from_previous: float | None = None

    def __post_init__(self) -> None:
        if self.estimated_1rm < 0:
            raise ValueError("estimated_1rm must be non-negative")
