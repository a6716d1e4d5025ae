"""
Pure numeric helpers and session metrics.

All functions are pure and typed for testability.  Rounding is half-up
(2.5 → 3) everywhere a prescription value is rounded, never banker's
rounding.
"""

import math
from datetime import datetime

from .config import LOAD_INCREMENT
from .models import WorkoutSessionLog


def clamp(value: float, low: float, high: float) -> float:
    """Constrain value to [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity."""
    return math.floor(value + 0.5)


def round_to_increment(value: float, increment: float) -> float:
    """
    Round value to the nearest multiple of increment (half-up).

    >>> round_to_increment(47.25, 2.5)
    47.5
    """
    return round_half_up(value / increment) * increment


def load_for_percent(one_rm: float, percent: float, units: str = "metric") -> float:
    """
    Working load for a percent-of-1RM target, rounded to a loadable plate step.

    Args:
        one_rm: Known one-rep max in the user's units
        percent: Target on the 0–100 scale
        units: "metric" (2.5 kg steps) or "imperial" (5 lb steps)

    Returns:
        Rounded load; 0.0 when one_rm is not positive
    """
    if one_rm <= 0:
        return 0.0
    increment = LOAD_INCREMENT.get(units, LOAD_INCREMENT["metric"])
    return round_to_increment(one_rm * percent / 100.0, increment)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing 'Z'."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def session_total_volume(session: WorkoutSessionLog) -> float:
    """
    Total tonnage of a session: Σ weight × reps.

    Sets without a recorded weight or rep count contribute nothing.
    """
    return sum(
        s.weight * s.reps
        for s in session.completed_sets
        if s.weight is not None and s.reps is not None
    )


def session_duration_minutes(session: WorkoutSessionLog) -> int | None:
    """Whole minutes between start and completion, or None if unfinished."""
    if not session.completed_at:
        return None
    start = parse_timestamp(session.started_at)
    end = parse_timestamp(session.completed_at)
    seconds = (end - start).total_seconds()
    return max(0, round_half_up(seconds / 60.0))
