"""
One-rep-max estimation and personal-record detection.

Epley formula:

    1RM = weight × (1 + reps / 30)

A set with no load yields no estimate (0.0).  For any weight > 0 and
reps > 0 the estimate is strictly greater than the weight lifted.

A session produces at most one new record per exercise: its best set,
and only if that set strictly beats the best record already held.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .config import EPLEY_DIVISOR
from .models import CompletedSet, PersonalRecord, WorkoutSessionLog

logger = logging.getLogger(__name__)


def estimate_1rm(weight: float, reps: float) -> float:
    """
    Estimate one-rep max from a single set.

    Args:
        weight: Load lifted
        reps: Repetitions completed (negative values are treated as 0)

    Returns:
        Estimated 1RM, or 0.0 when weight is not positive
    """
    if weight <= 0:
        return 0.0
    reps = max(0.0, reps)
    return weight * (1.0 + reps / EPLEY_DIVISOR)


def set_estimate(completed: CompletedSet) -> float:
    """Estimated 1RM of a logged set; 0.0 if weight or reps were not recorded."""
    if completed.weight is None or completed.reps is None:
        return 0.0
    return estimate_1rm(completed.weight, completed.reps)


def best_sets_by_exercise(session: WorkoutSessionLog) -> dict[str, CompletedSet]:
    """
    Best set per exercise id, ranked by estimated 1RM.

    Sets that yield no estimate are ignored.  On ties the earlier set wins.
    """
    best: dict[str, tuple[float, CompletedSet]] = {}
    for completed in session.completed_sets:
        est = set_estimate(completed)
        if est <= 0:
            continue
        current = best.get(completed.exercise_id)
        if current is None or est > current[0]:
            best[completed.exercise_id] = (est, completed)
    return {ex_id: s for ex_id, (_, s) in best.items()}


def best_record_by_exercise(records: Iterable[PersonalRecord]) -> dict[str, float]:
    """Highest estimated 1RM already held per exercise id."""
    best: dict[str, float] = {}
    for pr in records:
        if pr.estimated_1rm > best.get(pr.exercise_id, float("-inf")):
            best[pr.exercise_id] = pr.estimated_1rm
    return best


def detect_new_prs(
    session: WorkoutSessionLog,
    existing_records: Iterable[PersonalRecord],
) -> list[PersonalRecord]:
    """
    Return the new personal records set in a session.

    Args:
        session: The logged session
        existing_records: Records already held (any order, any exercises)

    Returns:
        One PersonalRecord per exercise whose best set strictly exceeds the
        best existing estimate, in order of first appearance in the session
    """
    previous = best_record_by_exercise(existing_records)
    new_records: list[PersonalRecord] = []

    for exercise_id, completed in best_sets_by_exercise(session).items():
        est = set_estimate(completed)
        prior = previous.get(exercise_id)
        if prior is not None and est <= prior:
            continue

        new_records.append(
            PersonalRecord(
                id=f"{session.id}-{exercise_id}-{completed.set_index}",
                user_id=session.user_id,
                exercise_id=exercise_id,
                estimated_1rm=est,
                date=session.date,
                achieved_at=completed.completed_at or session.completed_at or session.started_at,
                weight=completed.weight or 0.0,
                reps=completed.reps or 0,
                set_index=completed.set_index,
                block_id=completed.block_id,
                session_id=session.id,
                change_from_previous=None if prior is None else est - prior,
            )
        )
        logger.debug(
            "new PR %s: %.1f (previous %s)", exercise_id, est, prior
        )

    return new_records
