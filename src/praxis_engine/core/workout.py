"""
Daily workout generation.

Builds one day's ordered block sequence:

    warm-up → strength (main + secondary) → accessory → conditioning → cooldown

Selection is fully deterministic.  Every choice that needs variety rotates
through its candidate list by day index (candidates[day_index % n]), and
the intensity wave cycles base → load → peak → deload on day_index % 4.

Nothing here knows about readiness; the adaptation step rescales a
generated day afterwards.  Selection never fails outright: a missing
pattern degrades through fallback patterns to any usable strength lift,
and a block is omitted only when no exercise at all is usable.
"""

from __future__ import annotations

import logging
import math
from datetime import date as date_cls
from datetime import datetime, timezone

from .config import (
    ACCESSORY_DEFAULT_TAGS,
    ACCESSORY_FALLBACK_TAGS,
    ACCESSORY_MAX_COUNT,
    ACCESSORY_RPE,
    ACCESSORY_TAGS,
    ACCESSORY_VOLUME,
    CARDIO_MACHINE_IDS,
    COOLDOWN_ITEMS,
    COOLDOWN_MINUTES,
    CONDITIONING_BY_GOAL,
    CONDITIONING_BY_TIME,
    CONDITIONING_ZONE_BY_GOAL,
    DEFAULT_FALLBACK_PATTERNS,
    FALLBACK_PATTERNS,
    INTENSITY_WAVES,
    LIFT_FAMILIES,
    MINUTES_PER_ACCESSORY,
    MINUTES_PER_STRENGTH_SET,
    MINUTES_PER_WARMUP_ITEM,
    PRIMARY_PATTERN_ROTATION,
    REP_SCHEMES,
    SECONDARY_EXTRA_REPS,
    SECONDARY_PATTERNS,
    SECONDARY_PERCENT_DROP,
    SECONDARY_RPE_DROP,
    SECONDARY_SETS,
    STEADY_ZONE_CEILING,
    STRENGTH_BLOCK_BASE_MINUTES,
    WARMUP_BASE_MINUTES,
    WARMUP_MAX_ITEMS,
    WARMUP_TAGS,
    ConditioningTemplate,
    IntensityWave,
)
from .equipment import filter_usable
from .exercises import Exercise, all_exercises, exercises_by_tag
from .models import (
    AccessoryBlock,
    ConditioningBlock,
    ConditioningPrescription,
    CooldownBlock,
    ExercisePrescription,
    GenerationParams,
    SetPrescription,
    StrengthBlock,
    StrengthNumbers,
    WarmupBlock,
    WorkoutBlock,
    WorkoutPlanDay,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Small helpers
# ---------------------------------------------------------------------------


def _unique(exercises: list[Exercise]) -> list[Exercise]:
    """Drop repeated ids, keeping the first occurrence."""
    seen: set[str] = set()
    out: list[Exercise] = []
    for ex in exercises:
        if ex.id not in seen:
            seen.add(ex.id)
            out.append(ex)
    return out


def _tagged(tags: list[str], equipment_ids: tuple[str, ...]) -> list[Exercise]:
    """Usable exercises carrying any of the tags, grouped in tag order."""
    found: list[Exercise] = []
    for tag in tags:
        found.extend(exercises_by_tag(tag))
    return filter_usable(_unique(found), equipment_ids)


def _prefer_difficulty(candidates: list[Exercise], level: str) -> list[Exercise]:
    matching = [ex for ex in candidates if ex.difficulty == level]
    return matching if matching else candidates


def _block_id(prefix: str, day_date: str, day_index: int) -> str:
    return f"{prefix}-{day_date}-{day_index}"


def intensity_wave(day_index: int) -> IntensityWave:
    """Wave step for a day: base, load, peak, deload, repeating."""
    return INTENSITY_WAVES[day_index % len(INTENSITY_WAVES)]


def rep_scheme(experience_level: str, wave: str) -> tuple[int, int]:
    """(sets, reps) for an experience level at a wave step."""
    schemes = REP_SCHEMES.get(experience_level, REP_SCHEMES["beginner"])
    return schemes[wave]


def primary_pattern_for_day(day_index: int) -> str:
    return PRIMARY_PATTERN_ROTATION[day_index % len(PRIMARY_PATTERN_ROTATION)]


def one_rm_for(exercise_id: str, strength_numbers: StrengthNumbers | None) -> float | None:
    """
    Known 1RM for a lift, looked up by exercise id then by lift family.

    Returns None when nothing positive is on record.
    """
    if not strength_numbers:
        return None
    value = strength_numbers.get(exercise_id)
    if not value:
        family = LIFT_FAMILIES.get(exercise_id)
        value = strength_numbers.get(family) if family else None
    return float(value) if value and value > 0 else None


# ---------------------------------------------------------------------------
# Warm-up
# ---------------------------------------------------------------------------


def build_warmup_block(params: GenerationParams, day_date: str, day_index: int) -> WarmupBlock:
    candidates = _tagged(WARMUP_TAGS, params.equipment_ids)
    count = min(WARMUP_MAX_ITEMS, len(candidates))
    items = [candidates[(day_index + i) % len(candidates)].name for i in range(count)]
    return WarmupBlock(
        id=_block_id("warmup", day_date, day_index),
        title="Warm-Up",
        estimated_duration_minutes=WARMUP_BASE_MINUTES + len(items) * MINUTES_PER_WARMUP_ITEM,
        items=items,
    )


# ---------------------------------------------------------------------------
# Strength
# ---------------------------------------------------------------------------


def _strength_candidates(
    pattern: str,
    params: GenerationParams,
    exclude: set[str],
) -> list[Exercise]:
    pool = [
        ex
        for ex in all_exercises()
        if ex.pattern == pattern and ex.has_tag("strength") and ex.id not in exclude
    ]
    pool = filter_usable(pool, params.equipment_ids)
    return _prefer_difficulty(pool, params.experience_level)


def select_strength_exercise(
    pattern: str,
    params: GenerationParams,
    day_index: int,
    exclude: set[str] | None = None,
) -> Exercise | None:
    """
    Pick a strength lift for a movement pattern.

    Tries the pattern itself, then its fallback patterns in order, then any
    usable strength lift.  Within each stage exercises matching the athlete's
    experience level are preferred and the pick rotates by day index.
    """
    exclude = exclude or set()

    candidates = _strength_candidates(pattern, params, exclude)
    if candidates:
        return candidates[day_index % len(candidates)]

    for fallback in FALLBACK_PATTERNS.get(pattern, DEFAULT_FALLBACK_PATTERNS):
        candidates = _strength_candidates(fallback, params, exclude)
        if candidates:
            logger.debug("strength: no %s lift usable, fell back to %s", pattern, fallback)
            return candidates[day_index % len(candidates)]

    pool = [ex for ex in all_exercises() if ex.has_tag("strength") and ex.id not in exclude]
    pool = _prefer_difficulty(filter_usable(pool, params.equipment_ids), params.experience_level)
    if pool:
        logger.debug("strength: global fallback for pattern %s", pattern)
        return pool[day_index % len(pool)]

    logger.debug("strength: nothing usable with equipment %s", list(params.equipment_ids))
    return None


def build_strength_sets(
    sets: int,
    reps: int,
    percent: float,
    rpe: float,
    one_rm: float | None,
) -> list[SetPrescription]:
    """Percent-1RM targets when a 1RM is known, RPE targets otherwise."""
    if one_rm is not None:
        return [SetPrescription(target_reps=reps, target_percent_1rm=percent) for _ in range(sets)]
    return [SetPrescription(target_reps=reps, target_rpe=rpe) for _ in range(sets)]


def build_strength_block(
    params: GenerationParams,
    pattern: str,
    day_date: str,
    day_index: int,
) -> StrengthBlock | None:
    """Main lift (plus secondary for trained strength athletes), or None if nothing is usable."""
    main_ex = select_strength_exercise(pattern, params, day_index)
    if main_ex is None:
        return None

    wave = intensity_wave(day_index)
    n_sets, reps = rep_scheme(params.experience_level, wave.wave)
    main_1rm = one_rm_for(main_ex.id, params.strength_numbers)
    main = ExercisePrescription(
        exercise_id=main_ex.id,
        sets=build_strength_sets(n_sets, reps, wave.percent, wave.rpe, main_1rm),
    )
    total_sets = n_sets

    secondary: list[ExercisePrescription] = []
    if params.goal == "strength" and params.experience_level in ("intermediate", "advanced"):
        second_pattern = SECONDARY_PATTERNS.get(main_ex.pattern)
        second_ex = (
            select_strength_exercise(second_pattern, params, day_index, exclude={main_ex.id})
            if second_pattern
            else None
        )
        if second_ex is not None:
            second_1rm = one_rm_for(second_ex.id, params.strength_numbers)
            secondary.append(
                ExercisePrescription(
                    exercise_id=second_ex.id,
                    sets=build_strength_sets(
                        SECONDARY_SETS,
                        reps + SECONDARY_EXTRA_REPS,
                        wave.percent - SECONDARY_PERCENT_DROP,
                        wave.rpe - SECONDARY_RPE_DROP,
                        second_1rm,
                    ),
                )
            )
            total_sets += SECONDARY_SETS

    logger.debug(
        "strength: %s (%s wave, %dx%d, 1RM %s), secondary %s",
        main_ex.id,
        wave.wave,
        n_sets,
        reps,
        main_1rm,
        [p.exercise_id for p in secondary],
    )
    return StrengthBlock(
        id=_block_id("strength", day_date, day_index),
        title=f"Main Lift – {main_ex.name}",
        estimated_duration_minutes=STRENGTH_BLOCK_BASE_MINUTES + total_sets * MINUTES_PER_STRENGTH_SET,
        main=main,
        secondary=secondary,
    )


# ---------------------------------------------------------------------------
# Accessories
# ---------------------------------------------------------------------------


def select_accessories(
    pattern: str,
    params: GenerationParams,
    day_index: int,
    exclude: set[str],
) -> list[Exercise]:
    """
    One accessory per balancing tag for the main pattern, capped by experience.

    Falls back to generic core/posterior-chain/hypertrophy work when no tag
    yields anything.
    """
    cap = ACCESSORY_MAX_COUNT.get(params.experience_level, 2)
    used = set(exclude)
    chosen: list[Exercise] = []

    for tag in ACCESSORY_TAGS.get(pattern, ACCESSORY_DEFAULT_TAGS):
        matches = [ex for ex in _tagged([tag], params.equipment_ids) if ex.id not in used]
        if matches:
            pick = matches[day_index % len(matches)]
            chosen.append(pick)
            used.add(pick.id)
        if len(chosen) >= cap:
            break

    if chosen:
        return chosen

    pool = [ex for ex in _tagged(ACCESSORY_FALLBACK_TAGS, params.equipment_ids) if ex.id not in used]
    count = min(cap, len(pool))
    picks: list[Exercise] = []
    for i in range(count):
        pick = pool[(day_index * 2 + i) % len(pool)]
        if pick not in picks:
            picks.append(pick)
    if picks:
        logger.debug("accessory: used fallback tags, picked %s", [ex.id for ex in picks])
    return picks


def build_accessory_block(
    params: GenerationParams,
    pattern: str,
    strength: StrengthBlock,
    day_date: str,
    day_index: int,
) -> AccessoryBlock | None:
    exclude = {strength.main.exercise_id} | {p.exercise_id for p in strength.secondary}
    picks = select_accessories(pattern, params, day_index, exclude)
    if not picks:
        return None

    n_sets, reps = ACCESSORY_VOLUME[intensity_wave(day_index).wave]
    exercises = [
        ExercisePrescription(
            exercise_id=ex.id,
            sets=[SetPrescription(target_reps=reps, target_rpe=ACCESSORY_RPE) for _ in range(n_sets)],
        )
        for ex in picks
    ]
    return AccessoryBlock(
        id=_block_id("accessory", day_date, day_index),
        title="Accessory Work",
        estimated_duration_minutes=MINUTES_PER_ACCESSORY * len(exercises),
        exercises=exercises,
    )


# ---------------------------------------------------------------------------
# Conditioning
# ---------------------------------------------------------------------------


def includes_conditioning(goal: str, day_index: int) -> bool:
    """Conditioning every day, every other day (hybrid) or twice a week (general)."""
    if goal == "conditioning":
        return True
    if goal == "hybrid":
        return day_index % 2 == 0
    if goal == "general":
        return day_index in (2, 5)
    return False


def select_conditioning_exercise(
    equipment_ids: tuple[str, ...], day_index: int
) -> Exercise | None:
    """Conditioning/hyrox movement, preferring an owned cardio machine."""
    candidates = _tagged(["conditioning", "hyrox"], equipment_ids)
    if not candidates:
        return None
    owned_machines = {m for m in CARDIO_MACHINE_IDS if m in equipment_ids}
    on_machines = [ex for ex in candidates if owned_machines & set(ex.equipment_ids)]
    if on_machines:
        candidates = on_machines
    return candidates[day_index % len(candidates)]


def conditioning_template(goal: str, time_availability: str) -> ConditioningTemplate:
    """Work/rest structure: time availability first, then the goal override."""
    template = CONDITIONING_BY_TIME.get(time_availability, CONDITIONING_BY_TIME["standard"])
    return CONDITIONING_BY_GOAL.get(goal, template)


def conditioning_minutes(template: ConditioningTemplate) -> int:
    rest = template.rest_seconds or 0
    total = template.work_seconds * template.rounds + rest * (template.rounds - 1)
    return math.ceil(total / 60)


def build_conditioning_block(
    params: GenerationParams, day_date: str, day_index: int
) -> ConditioningBlock | None:
    exercise = select_conditioning_exercise(params.equipment_ids, day_index)
    if exercise is None:
        logger.debug("conditioning: nothing usable with %s", list(params.equipment_ids))
        return None

    template = conditioning_template(params.goal, params.time_availability)
    zone = CONDITIONING_ZONE_BY_GOAL.get(params.goal, 3)
    logger.debug(
        "conditioning: %s Z%d %dx%ss", exercise.id, zone, template.rounds, template.work_seconds
    )
    return ConditioningBlock(
        id=_block_id("conditioning", day_date, day_index),
        title=f"Engine – {exercise.name}",
        estimated_duration_minutes=conditioning_minutes(template),
        conditioning=ConditioningPrescription(
            mode="steady" if zone <= STEADY_ZONE_CEILING else "interval",
            work_seconds=template.work_seconds,
            rest_seconds=template.rest_seconds,
            rounds=template.rounds,
            target_zone=f"Z{zone}",
            notes=exercise.name,
            exercise_id=exercise.id,
        ),
    )


# ---------------------------------------------------------------------------
# Cooldown / assembly
# ---------------------------------------------------------------------------


def build_cooldown_block(day_date: str, day_index: int) -> CooldownBlock:
    return CooldownBlock(
        id=_block_id("cooldown", day_date, day_index),
        title="Cooldown",
        estimated_duration_minutes=COOLDOWN_MINUTES,
        items=list(COOLDOWN_ITEMS),
    )


def focus_tags_for(goal: str, has_strength: bool) -> list[str]:
    """Focus tags from goal and whether a strength block was generated."""
    tags: list[str] = ["strength"] if has_strength else []
    if goal == "conditioning":
        extra = ["engine"]
    elif goal == "hybrid":
        extra = ["hybrid", "engine"]
    elif goal == "strength":
        extra = ["strength"]
    else:
        extra = ["general"]
    for tag in extra:
        if tag not in tags:
            tags.append(tag)
    return tags


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def generate_daily_workout(
    params: GenerationParams,
    day_index: int = 0,
    date: str | None = None,
    pattern: str | None = None,
    created_at: str | None = None,
) -> WorkoutPlanDay:
    """
    Generate one day's workout.

    Args:
        params: Goal, experience, equipment, units and known strength numbers
        day_index: Position of the day in its cycle; drives all rotation
        date: Calendar day (YYYY-MM-DD); today if omitted
        pattern: Movement pattern for the main lift; rotated by day if omitted
        created_at: Creation timestamp; now if omitted

    Returns:
        Unsaved WorkoutPlanDay with blocks in canonical order
    """
    day_date = date or date_cls.today().isoformat()
    primary = pattern or primary_pattern_for_day(day_index)

    blocks: list[WorkoutBlock] = [build_warmup_block(params, day_date, day_index)]

    strength = build_strength_block(params, primary, day_date, day_index)
    if strength is not None:
        blocks.append(strength)
        accessory = build_accessory_block(params, primary, strength, day_date, day_index)
        if accessory is not None:
            blocks.append(accessory)

    if includes_conditioning(params.goal, day_index):
        conditioning = build_conditioning_block(params, day_date, day_index)
        if conditioning is not None:
            blocks.append(conditioning)

    blocks.append(build_cooldown_block(day_date, day_index))

    day = WorkoutPlanDay(
        id=f"workout-{day_date}",
        user_id=params.user_id,
        date=day_date,
        day_index=day_index,
        focus_tags=focus_tags_for(params.goal, strength is not None),
        blocks=blocks,
        estimated_duration_minutes=sum(b.estimated_duration_minutes for b in blocks),
        adjusted_for_readiness=False,
        created_at=created_at or now_iso(),
    )
    logger.debug(
        "daily workout %s: %s, %d min",
        day.id,
        [b.block_type for b in blocks],
        day.estimated_duration_minutes,
    )
    return day
