"""
Configuration constants for the training engine.

All adjustable parameters are centralized here for easy tuning.  Lookup
tables (focus patterns, durations, waves, rep schemes) are plain data so
they can be tested in isolation.
"""

from dataclasses import dataclass
from typing import Final

# =============================================================================
# READINESS SCORING
# =============================================================================

READINESS_SCALE_MIN: Final[int] = 1
READINESS_SCALE_MAX: Final[int] = 5

SLEEP_WEIGHT: Final[float] = 0.30
ENERGY_WEIGHT: Final[float] = 0.30
SORENESS_WEIGHT: Final[float] = 0.20  # inverted: higher soreness = lower readiness
STRESS_WEIGHT: Final[float] = 0.20  # inverted

# =============================================================================
# ADAPTATION (readiness → prescription scaling)
# =============================================================================

READINESS_LOW_THRESHOLD: Final[int] = 40
READINESS_MID_THRESHOLD: Final[int] = 60
READINESS_HIGH_THRESHOLD: Final[int] = 80

READINESS_LOW_SCALER: Final[float] = 0.75  # score < 40
READINESS_MID_SCALER: Final[float] = 0.90  # 40 <= score < 60
READINESS_NORMAL_SCALER: Final[float] = 1.00  # 60 <= score <= 80
READINESS_HIGH_SCALER: Final[float] = 1.10  # score > 80

ADAPTATION_MODE_MULTIPLIERS: Final[dict[str, float]] = {
    "conservative": 0.90,
    "automatic": 1.00,
    "aggressive": 1.15,
}

PERCENT_1RM_INCREMENT: Final[float] = 2.5  # percent-1RM quantization step
REP_SCALING_CEILING: Final[int] = 20  # reps >= this are left alone (timed / high-rep work)
ACCESSORY_DAMPING: Final[float] = 0.5  # accessories get half the scaler effect
RPE_MIN: Final[float] = 1.0
RPE_MAX: Final[float] = 10.0
ZONE_MIN: Final[int] = 1
ZONE_MAX: Final[int] = 5
DEFAULT_ZONE: Final[int] = 3  # used when a zone string cannot be parsed

# =============================================================================
# MICROCYCLE
# =============================================================================

MIN_TRAINING_DAYS: Final[int] = 3
MAX_TRAINING_DAYS: Final[int] = 7
DAYS_PER_WEEK: Final[int] = 7
DEFAULT_CYCLE_WEEKS: Final[int] = 4

# Offset within the week → focus.  Unlisted offsets are rest.
FOCUS_PATTERN_3_DAYS: Final[dict[int, str]] = {0: "mixed", 2: "strength", 4: "conditioning"}
FOCUS_PATTERN_4_DAYS: Final[dict[int, str]] = {
    0: "mixed",
    1: "strength",
    3: "conditioning",
    5: "mixed",
}
FOCUS_PATTERN_5_DAYS: Final[dict[int, str]] = {
    0: "strength",
    1: "mixed",
    2: "conditioning",
    3: "strength",
    4: "mixed",
}
FOCUS_PATTERN_6_PLUS_EXTRA: Final[dict[int, str]] = {5: "conditioning"}

FOCUS_DURATION_MINUTES: Final[dict[str, int]] = {
    "strength": 50,
    "conditioning": 35,
    "mixed": 60,
    "rest": 0,
}

FOCUS_TO_GOAL: Final[dict[str, str]] = {
    "strength": "strength",
    "conditioning": "conditioning",
    "mixed": "hybrid",
}

# =============================================================================
# STRENGTH PRESCRIPTION
# =============================================================================


@dataclass(frozen=True)
class IntensityWave:
    """One step of the four-day intensity wave."""

    wave: str
    rpe: float
    percent: float  # percent of 1RM, 0–100 scale


INTENSITY_WAVES: Final[list[IntensityWave]] = [
    IntensityWave(wave="base", rpe=7, percent=70.0),
    IntensityWave(wave="load", rpe=8, percent=75.0),
    IntensityWave(wave="peak", rpe=9, percent=80.0),
    IntensityWave(wave="deload", rpe=6, percent=60.0),
]

# experience → wave → (sets, reps)
REP_SCHEMES: Final[dict[str, dict[str, tuple[int, int]]]] = {
    "beginner": {
        "base": (3, 10),
        "load": (3, 10),
        "peak": (3, 10),
        "deload": (3, 10),
    },
    "intermediate": {
        "base": (3, 8),
        "load": (4, 6),
        "peak": (5, 5),
        "deload": (2, 10),
    },
    "advanced": {
        "base": (4, 6),
        "load": (5, 5),
        "peak": (6, 3),
        "deload": (3, 8),
    },
}

SECONDARY_SETS: Final[int] = 3
SECONDARY_EXTRA_REPS: Final[int] = 2
SECONDARY_PERCENT_DROP: Final[float] = 10.0
SECONDARY_RPE_DROP: Final[float] = 1.0

STRENGTH_BLOCK_BASE_MINUTES: Final[int] = 25
MINUTES_PER_STRENGTH_SET: Final[int] = 2

# Rotation used when no explicit pattern is requested.
PRIMARY_PATTERN_ROTATION: Final[list[str]] = [
    "squat",
    "hinge",
    "horizontal_push",
    "horizontal_pull",
]

FALLBACK_PATTERNS: Final[dict[str, list[str]]] = {
    "squat": ["hinge", "lunge"],
    "hinge": ["squat", "lunge"],
    "horizontal_push": ["vertical_push"],
    "vertical_push": ["horizontal_push"],
    "horizontal_pull": ["vertical_pull", "hinge"],
    "vertical_pull": ["horizontal_pull", "hinge"],
    "lunge": ["squat", "hinge"],
    "carry": ["core"],
    "core": ["carry"],
    "locomotion": ["conditioning"],
    "conditioning": ["locomotion"],
}
DEFAULT_FALLBACK_PATTERNS: Final[list[str]] = ["squat", "hinge"]

SECONDARY_PATTERNS: Final[dict[str, str]] = {
    "squat": "hinge",
    "hinge": "squat",
    "horizontal_push": "horizontal_pull",
    "horizontal_pull": "horizontal_push",
    "vertical_push": "vertical_pull",
    "vertical_pull": "vertical_push",
}

# Strength numbers may be keyed by exercise id or by lift family.
LIFT_FAMILIES: Final[dict[str, str]] = {
    "back_squat": "squat",
    "front_squat": "squat",
    "bench_press": "bench",
    "db_bench_press": "bench",
    "incline_bench": "bench",
    "deadlift": "deadlift",
    "sumo_deadlift": "deadlift",
    "rdl": "deadlift",
    "overhead_press": "press",
}

# =============================================================================
# ACCESSORY PRESCRIPTION
# =============================================================================

ACCESSORY_TAGS: Final[dict[str, list[str]]] = {
    "squat": ["unilateral_lower", "posterior_chain", "core"],
    "hinge": ["posterior_chain", "unilateral_lower", "core"],
    "horizontal_push": ["horizontal_pull", "triceps", "scapular_stability"],
    "horizontal_pull": ["horizontal_push", "biceps", "core_anti_rotation"],
    "vertical_push": ["vertical_pull", "triceps", "scapular_stability"],
    "vertical_pull": ["vertical_push", "biceps", "core"],
}
ACCESSORY_DEFAULT_TAGS: Final[list[str]] = ["core", "posterior_chain"]
ACCESSORY_FALLBACK_TAGS: Final[list[str]] = ["core", "posterior_chain", "hypertrophy"]

# wave → (sets, reps)
ACCESSORY_VOLUME: Final[dict[str, tuple[int, int]]] = {
    "base": (2, 10),
    "load": (3, 10),
    "peak": (4, 8),
    "deload": (2, 12),
}
ACCESSORY_RPE: Final[float] = 7
ACCESSORY_MAX_COUNT: Final[dict[str, int]] = {
    "beginner": 2,
    "intermediate": 2,
    "advanced": 3,
}
MINUTES_PER_ACCESSORY: Final[int] = 10

# =============================================================================
# CONDITIONING PRESCRIPTION
# =============================================================================


@dataclass(frozen=True)
class ConditioningTemplate:
    """Work/rest structure of one conditioning piece."""

    work_seconds: int
    rest_seconds: int | None
    rounds: int


CONDITIONING_BY_TIME: Final[dict[str, ConditioningTemplate]] = {
    "short": ConditioningTemplate(work_seconds=40, rest_seconds=20, rounds=8),
    "standard": ConditioningTemplate(work_seconds=60, rest_seconds=60, rounds=8),
    "full": ConditioningTemplate(work_seconds=120, rest_seconds=90, rounds=6),
}

# Goal overrides applied after the time-availability template.
CONDITIONING_BY_GOAL: Final[dict[str, ConditioningTemplate]] = {
    "conditioning": ConditioningTemplate(work_seconds=120, rest_seconds=90, rounds=6),
    "general": ConditioningTemplate(work_seconds=600, rest_seconds=None, rounds=1),
}

CONDITIONING_ZONE_BY_GOAL: Final[dict[str, int]] = {
    "conditioning": 4,
    "hybrid": 3,
    "general": 2,
}
STEADY_ZONE_CEILING: Final[int] = 2  # zones at or below this are steady-state

CARDIO_MACHINE_IDS: Final[list[str]] = ["rower", "assault_bike", "ski_erg"]

# =============================================================================
# WARM-UP / COOLDOWN
# =============================================================================

WARMUP_TAGS: Final[list[str]] = ["warmup", "primer", "core_anti_extension"]
WARMUP_MAX_ITEMS: Final[int] = 3
WARMUP_BASE_MINUTES: Final[int] = 5
MINUTES_PER_WARMUP_ITEM: Final[int] = 2

COOLDOWN_ITEMS: Final[list[str]] = [
    "3–5 minutes easy movement",
    "Light stretch: quads, hamstrings, glutes",
]
COOLDOWN_MINUTES: Final[int] = 5

# =============================================================================
# ONE-REP MAX
# =============================================================================

EPLEY_DIVISOR: Final[float] = 30.0  # 1RM = weight × (1 + reps / 30)

LOAD_INCREMENT: Final[dict[str, float]] = {
    "metric": 2.5,  # kg
    "imperial": 5.0,  # lb
}
