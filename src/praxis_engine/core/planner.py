"""
Microcycle and training-cycle planning.

A microcycle is always seven consecutive calendar days.  Which offsets
train, and with what focus, is a fixed lookup keyed by the weekly
training-day count; every other offset is a rest day.  Training days are
generated by the daily generator (focus → goal: mixed trains as hybrid)
and then re-labelled with microcycle-specific id, focus and duration.

A training cycle stacks microcycles week after week with identical inputs.
There is no periodization across weeks.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, timedelta

from .config import (
    DAYS_PER_WEEK,
    DEFAULT_CYCLE_WEEKS,
    FOCUS_DURATION_MINUTES,
    FOCUS_PATTERN_3_DAYS,
    FOCUS_PATTERN_4_DAYS,
    FOCUS_PATTERN_5_DAYS,
    FOCUS_PATTERN_6_PLUS_EXTRA,
    FOCUS_TO_GOAL,
    MAX_TRAINING_DAYS,
    MIN_TRAINING_DAYS,
)
from .errors import InvalidTrainingDayCount
from .models import GenerationParams, TrainingCycle, UserProfile, WorkoutPlanDay
from .workout import generate_daily_workout, now_iso

logger = logging.getLogger(__name__)


def validate_training_days(training_days_per_week: int) -> None:
    """Raise InvalidTrainingDayCount unless 3 <= days <= 7."""
    if not MIN_TRAINING_DAYS <= training_days_per_week <= MAX_TRAINING_DAYS:
        raise InvalidTrainingDayCount(
            f"training_days_per_week must be between {MIN_TRAINING_DAYS} and "
            f"{MAX_TRAINING_DAYS}, got {training_days_per_week}"
        )


def focus_pattern(training_days_per_week: int) -> dict[int, str]:
    """
    Offset → focus for a weekly training-day count.

    3 days: mixed / strength / conditioning on offsets 0, 2, 4.
    4 days: mixed / strength / conditioning / mixed on 0, 1, 3, 5.
    5+ days: strength / mixed / conditioning / strength / mixed on 0–4,
    plus conditioning on offset 5 from six days up.
    """
    validate_training_days(training_days_per_week)
    if training_days_per_week == 3:
        return dict(FOCUS_PATTERN_3_DAYS)
    if training_days_per_week == 4:
        return dict(FOCUS_PATTERN_4_DAYS)
    pattern = dict(FOCUS_PATTERN_5_DAYS)
    if training_days_per_week >= 6:
        pattern.update(FOCUS_PATTERN_6_PLUS_EXTRA)
    return pattern


def weekly_focus(training_days_per_week: int) -> list[str]:
    """The seven focus labels of a week, rest included."""
    pattern = focus_pattern(training_days_per_week)
    return [pattern.get(offset, "rest") for offset in range(DAYS_PER_WEEK)]


def _rest_day(user_id: str, day_date: str, day_index: int, created_at: str) -> WorkoutPlanDay:
    return WorkoutPlanDay(
        id=f"rest-{day_date}",
        user_id=user_id,
        date=day_date,
        day_index=day_index,
        focus_tags=["rest"],
        blocks=[],
        estimated_duration_minutes=FOCUS_DURATION_MINUTES["rest"],
        adjusted_for_readiness=False,
        created_at=created_at,
    )


def generate_microcycle(
    params: GenerationParams,
    start_date: str,
    training_days_per_week: int,
    created_at: str | None = None,
) -> list[WorkoutPlanDay]:
    """
    Generate the seven days starting at start_date.

    Args:
        params: Generation inputs shared by every training day
        start_date: First calendar day (YYYY-MM-DD)
        training_days_per_week: 3–7
        created_at: Timestamp stamped on every day; now if omitted

    Returns:
        Exactly seven WorkoutPlanDay records, day_index 0..6 in date order

    Raises:
        InvalidTrainingDayCount: training_days_per_week outside 3–7
    """
    focuses = weekly_focus(training_days_per_week)
    start = date.fromisoformat(start_date)
    stamp = created_at or now_iso()

    days: list[WorkoutPlanDay] = []
    for offset, focus in enumerate(focuses):
        day_date = (start + timedelta(days=offset)).isoformat()
        if focus == "rest":
            days.append(_rest_day(params.user_id, day_date, offset, stamp))
            continue

        day_params = replace(params, goal=FOCUS_TO_GOAL[focus])
        generated = generate_daily_workout(
            day_params, day_index=offset, date=day_date, created_at=stamp
        )
        days.append(
            replace(
                generated,
                id=f"{focus}-{day_date}",
                date=day_date,
                day_index=offset,
                focus_tags=[focus],
                estimated_duration_minutes=FOCUS_DURATION_MINUTES[focus],
            )
        )

    logger.debug("microcycle from %s: %s", start_date, focuses)
    return days


def generate_training_cycle(
    params: GenerationParams,
    start_date: str,
    training_days_per_week: int,
    weeks: int = DEFAULT_CYCLE_WEEKS,
    created_at: str | None = None,
) -> TrainingCycle:
    """
    Stack `weeks` microcycles, week i starting 7·i days after start_date.

    Raises:
        InvalidTrainingDayCount: training_days_per_week outside 3–7
        ValueError: weeks < 1
    """
    validate_training_days(training_days_per_week)
    if weeks < 1:
        raise ValueError("weeks must be at least 1")

    start = date.fromisoformat(start_date)
    stamp = created_at or now_iso()
    all_weeks = [
        generate_microcycle(
            params,
            (start + timedelta(days=DAYS_PER_WEEK * week)).isoformat(),
            training_days_per_week,
            created_at=stamp,
        )
        for week in range(weeks)
    ]
    return TrainingCycle(
        id=f"cycle-{start_date}",
        start_date=start_date,
        end_date=all_weeks[-1][-1].date,
        weeks=all_weeks,
    )


def generate_initial_plan(
    profile: UserProfile,
    start_date: str,
    created_at: str | None = None,
) -> list[WorkoutPlanDay]:
    """
    First week for a new profile: its training days only.

    The underlying microcycle keeps its seven-day shape; this entry point
    drops the rest days so the plan length equals the stated weekly
    training-day count.
    """
    week = generate_microcycle(
        GenerationParams.from_profile(profile),
        start_date,
        profile.preferences.training_days_per_week,
        created_at=created_at,
    )
    return [day for day in week if not day.is_rest_day]
