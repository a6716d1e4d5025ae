"""
Daily readiness scoring.

Four subjective 1–5 ratings are rescaled to 0–100, soreness and stress are
inverted (a high rating is bad), and the four are combined with fixed
weights:

    score = 0.30·sleep + 0.30·energy + 0.20·(100 − soreness) + 0.20·(100 − stress)

Out-of-range ratings extrapolate; validate at the boundary with
io.serializers.validate_readiness_input when that matters.
"""

import logging

from .config import (
    ENERGY_WEIGHT,
    READINESS_SCALE_MAX,
    READINESS_SCALE_MIN,
    SLEEP_WEIGHT,
    SORENESS_WEIGHT,
    STRESS_WEIGHT,
)
from .metrics import round_half_up
from .models import ReadinessFactors, ReadinessInput, ReadinessScore

logger = logging.getLogger(__name__)


def normalize_rating(value: float) -> float:
    """Map a 1–5 rating linearly onto 0–100."""
    span = READINESS_SCALE_MAX - READINESS_SCALE_MIN
    return (value - READINESS_SCALE_MIN) / span * 100.0


def calculate_readiness(readiness: ReadinessInput) -> ReadinessScore:
    """
    Compute the 0–100 readiness score.

    Args:
        readiness: The four 1–5 ratings

    Returns:
        ReadinessScore with the rounded score and the normalized factors
        that went into the weighted sum
    """
    factors = ReadinessFactors(
        sleep=normalize_rating(readiness.sleep_quality),
        energy=normalize_rating(readiness.energy),
        soreness=100.0 - normalize_rating(readiness.soreness),
        stress=100.0 - normalize_rating(readiness.stress),
    )
    raw = (
        factors.sleep * SLEEP_WEIGHT
        + factors.energy * ENERGY_WEIGHT
        + factors.soreness * SORENESS_WEIGHT
        + factors.stress * STRESS_WEIGHT
    )
    score = round_half_up(raw)
    logger.debug("readiness %s -> raw %.2f, score %d", readiness, raw, score)
    return ReadinessScore(score=score, factors=factors)
