"""
Readiness adaptation: rescale a planned day to how the athlete feels.

    final scaler = base scaler(readiness) × mode multiplier

    readiness  < 40      → 0.75
    40 ≤ r < 60          → 0.90
    60 ≤ r ≤ 80          → 1.00
    r > 80               → 1.10

    conservative 0.90 · automatic 1.00 · aggressive 1.15

Strength sets scale percent-1RM (re-quantized to 2.5), reps below 20 and
RPE (clamped to 1–10).  Accessory reps scale with half the effect.
Conditioning zones scale and clamp to Z1–Z5.  Warm-up and cooldown are
never touched, and neither is the day's estimated duration.

Adjustment always derives from the day it is given and returns a new
value; callers should adapt the original planned day, not an already
adjusted one.
"""

import logging
import re
from dataclasses import replace

from .config import (
    ACCESSORY_DAMPING,
    ADAPTATION_MODE_MULTIPLIERS,
    DEFAULT_ZONE,
    PERCENT_1RM_INCREMENT,
    READINESS_HIGH_SCALER,
    READINESS_HIGH_THRESHOLD,
    READINESS_LOW_SCALER,
    READINESS_LOW_THRESHOLD,
    READINESS_MID_SCALER,
    READINESS_MID_THRESHOLD,
    READINESS_NORMAL_SCALER,
    REP_SCALING_CEILING,
    RPE_MAX,
    RPE_MIN,
    ZONE_MAX,
    ZONE_MIN,
)
from .metrics import clamp, round_half_up, round_to_increment
from .models import (
    AccessoryBlock,
    ConditioningBlock,
    ConditioningPrescription,
    ExercisePrescription,
    SetPrescription,
    StrengthBlock,
    WorkoutBlock,
    WorkoutPlanDay,
)

logger = logging.getLogger(__name__)

_ZONE_RE = re.compile(r"Z(\d)")


def base_scaler(readiness_score: float) -> float:
    """Scaler from the readiness score alone."""
    if readiness_score < READINESS_LOW_THRESHOLD:
        return READINESS_LOW_SCALER
    if readiness_score < READINESS_MID_THRESHOLD:
        return READINESS_MID_SCALER
    if readiness_score <= READINESS_HIGH_THRESHOLD:
        return READINESS_NORMAL_SCALER
    return READINESS_HIGH_SCALER


def mode_multiplier(mode: str) -> float:
    """Aggressiveness multiplier; unknown modes behave like automatic."""
    return ADAPTATION_MODE_MULTIPLIERS.get(mode, 1.0)


def final_scaler(readiness_score: float, mode: str) -> float:
    return base_scaler(readiness_score) * mode_multiplier(mode)


def zone_to_intensity(zone: str) -> int:
    """'Z4' → 4; anything unparsable counts as Z3."""
    match = _ZONE_RE.search(zone)
    return int(match.group(1)) if match else DEFAULT_ZONE


def intensity_to_zone(intensity: float) -> str:
    return f"Z{round_half_up(clamp(intensity, ZONE_MIN, ZONE_MAX))}"


def scale_strength_set(s: SetPrescription, scaler: float) -> SetPrescription:
    percent = s.target_percent_1rm
    if percent is not None:
        percent = round_to_increment(percent * scaler, PERCENT_1RM_INCREMENT)
    reps = s.target_reps
    if reps < REP_SCALING_CEILING:
        reps = round_half_up(reps * scaler)
    rpe = s.target_rpe
    if rpe is not None:
        rpe = clamp(rpe * scaler, RPE_MIN, RPE_MAX)
    return replace(s, target_reps=reps, target_percent_1rm=percent, target_rpe=rpe)


def scale_accessory_set(s: SetPrescription, scaler: float) -> SetPrescription:
    volume_scaler = (scaler - 1.0) * ACCESSORY_DAMPING + 1.0
    return replace(s, target_reps=round_half_up(s.target_reps * volume_scaler))


def _scale_prescription(p: ExercisePrescription, scale_set, scaler: float) -> ExercisePrescription:
    return replace(p, sets=[scale_set(s, scaler) for s in p.sets])


def scale_conditioning(c: ConditioningPrescription, scaler: float) -> ConditioningPrescription:
    if not c.target_zone:
        return c
    return replace(c, target_zone=intensity_to_zone(zone_to_intensity(c.target_zone) * scaler))


def adjust_block(block: WorkoutBlock, scaler: float) -> WorkoutBlock:
    """Scale one block; warm-up and cooldown pass through unchanged."""
    if isinstance(block, StrengthBlock):
        return replace(
            block,
            main=_scale_prescription(block.main, scale_strength_set, scaler),
            secondary=[_scale_prescription(p, scale_strength_set, scaler) for p in block.secondary],
        )
    if isinstance(block, AccessoryBlock):
        return replace(
            block,
            exercises=[_scale_prescription(p, scale_accessory_set, scaler) for p in block.exercises],
        )
    if isinstance(block, ConditioningBlock):
        return replace(block, conditioning=scale_conditioning(block.conditioning, scaler))
    return block


def adjust_workout_for_today(
    day: WorkoutPlanDay,
    readiness_score: float,
    mode: str = "automatic",
    scaling_enabled: bool = True,
) -> WorkoutPlanDay:
    """
    Return the day rescaled for today's readiness.

    Args:
        day: The planned (unadjusted) day
        readiness_score: 0–100
        mode: "conservative", "automatic" or "aggressive"
        scaling_enabled: When False the day is returned as-is

    Returns:
        A new WorkoutPlanDay with adjusted_for_readiness=True, or the input
        unchanged when scaling is disabled
    """
    if not scaling_enabled:
        return day

    scaler = final_scaler(readiness_score, mode)
    logger.debug(
        "adapting %s: readiness %s, mode %s, scaler %.3f", day.id, readiness_score, mode, scaler
    )
    return replace(
        day,
        blocks=[adjust_block(b, scaler) for b in day.blocks],
        adjusted_for_readiness=True,
    )
