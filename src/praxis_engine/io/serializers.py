"""
JSON serialization for engine data models.

Handles conversion between dataclasses and JSON-compatible dicts
(snake_case keys, dates as YYYY-MM-DD, timestamps as ISO-8601 strings),
plus boundary validation for collaborator input.
"""

import re
from datetime import datetime
from typing import Any

from ..core.errors import InvalidReadinessInput, UnknownExerciseError
from ..core.exercises import EXERCISE_REGISTRY, Exercise
from ..core.models import (
    BLOCK_TYPES,
    AccessoryBlock,
    CompletedSet,
    ConditioningBlock,
    ConditioningPrescription,
    ConditioningRoundLog,
    CooldownBlock,
    ExercisePrescription,
    PersonalRecord,
    Preferences,
    ReadinessInput,
    ReadinessScore,
    SetPrescription,
    StrengthBlock,
    TrainingCycle,
    UserProfile,
    WarmupBlock,
    WorkoutBlock,
    WorkoutPlanDay,
    WorkoutSessionLog,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_date(date_str: str) -> str:
    """
    Validate a calendar date string.

    Returns:
        The YYYY-MM-DD string unchanged

    Raises:
        ValidationError: If the format or the date itself is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_non_negative(value: int | float, name: str) -> int | float:
    """
    Validate that a value is non-negative.

    Raises:
        ValidationError: If value is negative
    """
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def _require(data: dict[str, Any], *keys: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a JSON object, got {type(data).__name__}")
    missing = [k for k in keys if k not in data]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def validate_readiness_input(readiness: ReadinessInput) -> ReadinessInput:
    """
    Reject readiness ratings outside the 1–5 scale.

    The scorer itself extrapolates; this is the strict boundary check.

    Raises:
        InvalidReadinessInput: If any rating is outside [1, 5]
    """
    for name in ("sleep_quality", "energy", "soreness", "stress"):
        value = getattr(readiness, name)
        if not 1 <= value <= 5:
            raise InvalidReadinessInput(f"{name} must be between 1 and 5, got {value}")
    return readiness


def _day_exercise_ids(day: WorkoutPlanDay) -> list[str]:
    ids: list[str] = []
    for block in day.blocks:
        if isinstance(block, StrengthBlock):
            ids.append(block.main.exercise_id)
            ids.extend(p.exercise_id for p in block.secondary)
        elif isinstance(block, AccessoryBlock):
            ids.extend(p.exercise_id for p in block.exercises)
        elif isinstance(block, ConditioningBlock) and block.conditioning.exercise_id:
            ids.append(block.conditioning.exercise_id)
    return ids


def check_known_exercises(
    item: WorkoutPlanDay | WorkoutSessionLog,
    catalog: dict[str, Exercise] | None = None,
) -> None:
    """
    Ensure every exercise id a plan day or session log references is in the catalog.

    Raises:
        UnknownExerciseError: Naming the unknown ids
    """
    known = EXERCISE_REGISTRY if catalog is None else catalog
    if isinstance(item, WorkoutPlanDay):
        ids = _day_exercise_ids(item)
    else:
        ids = [s.exercise_id for s in item.completed_sets]
    unknown = sorted({i for i in ids if i not in known})
    if unknown:
        raise UnknownExerciseError(f"Unknown exercise id(s): {', '.join(unknown)}")


# ---------------------------------------------------------------------------
# Prescriptions and blocks
# ---------------------------------------------------------------------------


def set_prescription_to_dict(s: SetPrescription) -> dict[str, Any]:
    d: dict[str, Any] = {"target_reps": s.target_reps}
    if s.target_percent_1rm is not None:
        d["target_percent_1rm"] = s.target_percent_1rm
    if s.target_rpe is not None:
        d["target_rpe"] = s.target_rpe
    return d


def dict_to_set_prescription(data: dict[str, Any]) -> SetPrescription:
    _require(data, "target_reps")
    validate_non_negative(data["target_reps"], "target_reps")
    percent = data.get("target_percent_1rm")
    rpe = data.get("target_rpe")
    if percent is not None:
        validate_non_negative(percent, "target_percent_1rm")
    return SetPrescription(
        target_reps=int(data["target_reps"]),
        target_percent_1rm=float(percent) if percent is not None else None,
        target_rpe=float(rpe) if rpe is not None else None,
    )


def exercise_prescription_to_dict(p: ExercisePrescription) -> dict[str, Any]:
    return {
        "exercise_id": p.exercise_id,
        "sets": [set_prescription_to_dict(s) for s in p.sets],
    }


def dict_to_exercise_prescription(data: dict[str, Any]) -> ExercisePrescription:
    _require(data, "exercise_id")
    return ExercisePrescription(
        exercise_id=str(data["exercise_id"]),
        sets=[dict_to_set_prescription(s) for s in data.get("sets", [])],
    )


def conditioning_to_dict(c: ConditioningPrescription) -> dict[str, Any]:
    return {
        "mode": c.mode,
        "work_seconds": c.work_seconds,
        "rest_seconds": c.rest_seconds,
        "rounds": c.rounds,
        "target_zone": c.target_zone,
        "notes": c.notes,
        "exercise_id": c.exercise_id,
    }


def dict_to_conditioning(data: dict[str, Any]) -> ConditioningPrescription:
    _require(data, "mode")
    try:
        return ConditioningPrescription(
            mode=data["mode"],
            work_seconds=data.get("work_seconds"),
            rest_seconds=data.get("rest_seconds"),
            rounds=data.get("rounds"),
            target_zone=data.get("target_zone"),
            notes=data.get("notes"),
            exercise_id=data.get("exercise_id"),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def block_to_dict(block: WorkoutBlock) -> dict[str, Any]:
    """
    Convert any block variant to a dict tagged with its "type".
    """
    d: dict[str, Any] = {
        "type": block.block_type,
        "id": block.id,
        "title": block.title,
        "estimated_duration_minutes": block.estimated_duration_minutes,
    }
    if isinstance(block, (WarmupBlock, CooldownBlock)):
        d["items"] = list(block.items)
    elif isinstance(block, StrengthBlock):
        d["main"] = exercise_prescription_to_dict(block.main)
        d["secondary"] = [exercise_prescription_to_dict(p) for p in block.secondary]
    elif isinstance(block, AccessoryBlock):
        d["exercises"] = [exercise_prescription_to_dict(p) for p in block.exercises]
    elif isinstance(block, ConditioningBlock):
        d["conditioning"] = conditioning_to_dict(block.conditioning)
    return d


def dict_to_block(data: dict[str, Any]) -> WorkoutBlock:
    """
    Convert a tagged dict back to its block variant.

    Raises:
        ValidationError: If the type tag is unknown or a field is missing
    """
    _require(data, "type", "id", "title")
    block_type = data["type"]
    if block_type not in BLOCK_TYPES:
        raise ValidationError(
            f"Invalid block type: {block_type}. Must be one of {tuple(BLOCK_TYPES)}"
        )
    common: dict[str, Any] = {
        "id": str(data["id"]),
        "title": str(data["title"]),
        "estimated_duration_minutes": int(data.get("estimated_duration_minutes", 0)),
    }
    if block_type == "warmup":
        return WarmupBlock(**common, items=list(data.get("items", [])))
    if block_type == "cooldown":
        return CooldownBlock(**common, items=list(data.get("items", [])))
    if block_type == "strength":
        _require(data, "main")
        return StrengthBlock(
            **common,
            main=dict_to_exercise_prescription(data["main"]),
            secondary=[dict_to_exercise_prescription(p) for p in data.get("secondary", [])],
        )
    if block_type == "accessory":
        return AccessoryBlock(
            **common,
            exercises=[dict_to_exercise_prescription(p) for p in data.get("exercises", [])],
        )
    _require(data, "conditioning")
    return ConditioningBlock(**common, conditioning=dict_to_conditioning(data["conditioning"]))


# ---------------------------------------------------------------------------
# Plan days and cycles
# ---------------------------------------------------------------------------


def plan_day_to_dict(day: WorkoutPlanDay) -> dict[str, Any]:
    return {
        "id": day.id,
        "user_id": day.user_id,
        "date": day.date,
        "day_index": day.day_index,
        "focus_tags": list(day.focus_tags),
        "blocks": [block_to_dict(b) for b in day.blocks],
        "estimated_duration_minutes": day.estimated_duration_minutes,
        "adjusted_for_readiness": day.adjusted_for_readiness,
        "created_at": day.created_at,
    }


def dict_to_plan_day(data: dict[str, Any]) -> WorkoutPlanDay:
    """
    Convert dict to WorkoutPlanDay.

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, "id", "date")
    validate_date(data["date"])
    validate_non_negative(data.get("day_index", 0), "day_index")
    validate_non_negative(data.get("estimated_duration_minutes", 0), "estimated_duration_minutes")

    return WorkoutPlanDay(
        id=str(data["id"]),
        user_id=str(data.get("user_id", "")),
        date=data["date"],
        day_index=int(data.get("day_index", 0)),
        focus_tags=list(data.get("focus_tags", [])),
        blocks=[dict_to_block(b) for b in data.get("blocks", [])],
        estimated_duration_minutes=int(data.get("estimated_duration_minutes", 0)),
        adjusted_for_readiness=bool(data.get("adjusted_for_readiness", False)),
        created_at=str(data.get("created_at", "")),
    )


def training_cycle_to_dict(cycle: TrainingCycle) -> dict[str, Any]:
    return {
        "id": cycle.id,
        "start_date": cycle.start_date,
        "end_date": cycle.end_date,
        "weeks": [[plan_day_to_dict(d) for d in week] for week in cycle.weeks],
    }


# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------


def dict_to_readiness_input(data: dict[str, Any]) -> ReadinessInput:
    """
    Convert dict to ReadinessInput and check every rating is within 1–5.

    Raises:
        ValidationError: If a field is missing or not a number
        InvalidReadinessInput: If a rating is out of range
    """
    _require(data, "sleep_quality", "energy", "soreness", "stress")
    try:
        readiness = ReadinessInput(
            sleep_quality=int(data["sleep_quality"]),
            energy=int(data["energy"]),
            soreness=int(data["soreness"]),
            stress=int(data["stress"]),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Readiness ratings must be integers: {e}") from e
    return validate_readiness_input(readiness)


def readiness_score_to_dict(result: ReadinessScore) -> dict[str, Any]:
    return {
        "score": result.score,
        "factors": {
            "sleep": result.factors.sleep,
            "energy": result.factors.energy,
            "soreness": result.factors.soreness,
            "stress": result.factors.stress,
        },
    }


# ---------------------------------------------------------------------------
# Session logs and records
# ---------------------------------------------------------------------------


def completed_set_to_dict(s: CompletedSet) -> dict[str, Any]:
    d: dict[str, Any] = {
        "block_id": s.block_id,
        "exercise_id": s.exercise_id,
        "set_index": s.set_index,
        "weight": s.weight,
        "reps": s.reps,
        "completed_at": s.completed_at,
    }
    if s.rpe is not None:
        d["rpe"] = s.rpe
    return d


def dict_to_completed_set(data: dict[str, Any]) -> CompletedSet:
    _require(data, "exercise_id", "set_index")
    validate_non_negative(data["set_index"], "set_index")
    if data.get("weight") is not None:
        validate_non_negative(data["weight"], "weight")
    if data.get("reps") is not None:
        validate_non_negative(data["reps"], "reps")

    return CompletedSet(
        block_id=str(data.get("block_id", "")),
        exercise_id=str(data["exercise_id"]),
        set_index=int(data["set_index"]),
        weight=float(data["weight"]) if data.get("weight") is not None else None,
        reps=int(data["reps"]) if data.get("reps") is not None else None,
        rpe=float(data["rpe"]) if data.get("rpe") is not None else None,
        completed_at=str(data.get("completed_at", "")),
    )


def round_log_to_dict(r: ConditioningRoundLog) -> dict[str, Any]:
    return {
        "block_id": r.block_id,
        "round_index": r.round_index,
        "work_seconds": r.work_seconds,
        "rest_seconds": r.rest_seconds,
        "perceived_intensity": r.perceived_intensity,
    }


def dict_to_round_log(data: dict[str, Any]) -> ConditioningRoundLog:
    _require(data, "round_index")
    validate_non_negative(data["round_index"], "round_index")
    return ConditioningRoundLog(
        block_id=str(data.get("block_id", "")),
        round_index=int(data["round_index"]),
        work_seconds=data.get("work_seconds"),
        rest_seconds=data.get("rest_seconds"),
        perceived_intensity=data.get("perceived_intensity"),
    )


def session_log_to_dict(session: WorkoutSessionLog) -> dict[str, Any]:
    return {
        "id": session.id,
        "user_id": session.user_id,
        "date": session.date,
        "started_at": session.started_at,
        "completed_at": session.completed_at,
        "plan_day_id": session.plan_day_id,
        "completed_sets": [completed_set_to_dict(s) for s in session.completed_sets],
        "conditioning_rounds": [round_log_to_dict(r) for r in session.conditioning_rounds],
        "session_rpe": session.session_rpe,
        "notes": session.notes,
        "created_at": session.created_at,
    }


def dict_to_session_log(data: dict[str, Any]) -> WorkoutSessionLog:
    """
    Convert dict to WorkoutSessionLog.

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, "id", "date")
    validate_date(data["date"])

    return WorkoutSessionLog(
        id=str(data["id"]),
        user_id=str(data.get("user_id", "")),
        date=data["date"],
        started_at=str(data.get("started_at", "")),
        completed_at=data.get("completed_at"),
        plan_day_id=data.get("plan_day_id"),
        completed_sets=[dict_to_completed_set(s) for s in data.get("completed_sets", [])],
        conditioning_rounds=[dict_to_round_log(r) for r in data.get("conditioning_rounds", [])],
        session_rpe=data.get("session_rpe"),
        notes=data.get("notes"),
        created_at=str(data.get("created_at", "")),
    )


def personal_record_to_dict(pr: PersonalRecord) -> dict[str, Any]:
    return {
        "id": pr.id,
        "user_id": pr.user_id,
        "exercise_id": pr.exercise_id,
        "estimated_1rm": pr.estimated_1rm,
        "date": pr.date,
        "achieved_at": pr.achieved_at,
        "weight": pr.weight,
        "reps": pr.reps,
        "set_index": pr.set_index,
        "block_id": pr.block_id,
        "session_id": pr.session_id,
        "change_from_previous": pr.change_from_previous,
    }


def dict_to_personal_record(data: dict[str, Any]) -> PersonalRecord:
    """
    Convert dict to PersonalRecord.

    Only exercise_id and estimated_1rm are required; the rest default so
    that minimal record lists ("best so far") can be supplied by hand.
    """
    _require(data, "exercise_id", "estimated_1rm")
    validate_non_negative(data["estimated_1rm"], "estimated_1rm")
    exercise_id = str(data["exercise_id"])
    return PersonalRecord(
        id=str(data.get("id", f"pr-{exercise_id}")),
        user_id=str(data.get("user_id", "")),
        exercise_id=exercise_id,
        estimated_1rm=float(data["estimated_1rm"]),
        date=str(data.get("date", "")),
        achieved_at=str(data.get("achieved_at", "")),
        weight=float(data.get("weight", 0.0)),
        reps=int(data.get("reps", 0)),
        set_index=int(data.get("set_index", 0)),
        block_id=str(data.get("block_id", "")),
        session_id=str(data.get("session_id", "")),
        change_from_previous=data.get("change_from_previous"),
    )


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


def preferences_to_dict(prefs: Preferences) -> dict[str, Any]:
    return {
        "goal": prefs.goal,
        "experience_level": prefs.experience_level,
        "training_days_per_week": prefs.training_days_per_week,
        "time_availability": prefs.time_availability,
        "equipment_ids": list(prefs.equipment_ids),
        "adaptation_mode": prefs.adaptation_mode,
        "readiness_scaling_enabled": prefs.readiness_scaling_enabled,
    }


def dict_to_preferences(data: dict[str, Any]) -> Preferences:
    """
    Convert dict to Preferences.

    Raises:
        ValidationError: If a field is missing or an enumerated value is invalid
    """
    _require(data, "goal", "experience_level", "training_days_per_week")
    try:
        return Preferences(
            goal=data["goal"],
            experience_level=data["experience_level"],
            training_days_per_week=int(data["training_days_per_week"]),
            time_availability=data.get("time_availability", "standard"),
            equipment_ids=[str(e) for e in data.get("equipment_ids") or []],
            adaptation_mode=data.get("adaptation_mode", "automatic"),
            readiness_scaling_enabled=bool(data.get("readiness_scaling_enabled", True)),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def user_profile_to_dict(profile: UserProfile) -> dict[str, Any]:
    return {
        "id": profile.id,
        "name": profile.name,
        "email": profile.email,
        "units": profile.units,
        "preferences": preferences_to_dict(profile.preferences),
        "strength_numbers": dict(profile.strength_numbers),
        "created_at": profile.created_at,
        "updated_at": profile.updated_at,
    }


def dict_to_user_profile(data: dict[str, Any]) -> UserProfile:
    """
    Convert dict to UserProfile.

    Raises:
        ValidationError: If data is invalid
    """
    _require(data, "id", "preferences")
    strength_numbers = {str(k): float(v) for k, v in (data.get("strength_numbers") or {}).items()}
    for lift, value in strength_numbers.items():
        validate_non_negative(value, f"strength_numbers.{lift}")
    try:
        return UserProfile(
            id=str(data["id"]),
            preferences=dict_to_preferences(data["preferences"]),
            name=data.get("name"),
            email=data.get("email"),
            units=data.get("units", "metric"),
            strength_numbers=strength_numbers,
            created_at=str(data.get("created_at", "")),
            updated_at=str(data.get("updated_at", "")),
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


def exercise_to_dict(ex: Exercise) -> dict[str, Any]:
    return {
        "id": ex.id,
        "name": ex.name,
        "pattern": ex.pattern,
        "modality": ex.modality,
        "difficulty": ex.difficulty,
        "equipment_ids": list(ex.equipment_ids),
        "primary_muscles": list(ex.primary_muscles),
        "tags": list(ex.tags),
        "description": ex.description,
    }
