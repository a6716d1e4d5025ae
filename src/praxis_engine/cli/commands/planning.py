"""Planning commands: plan, adjust."""

import json
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.adaptation import adjust_workout_for_today
from ...core.errors import PraxisError
from ...core.models import GenerationParams, Preferences, UserProfile
from ...core.planner import generate_initial_plan, generate_training_cycle
from ...core.readiness import calculate_readiness
from ...io.serializers import (
    ValidationError,
    check_known_exercises,
    dict_to_plan_day,
    dict_to_readiness_input,
    dict_to_user_profile,
    plan_day_to_dict,
    training_cycle_to_dict,
    validate_date,
)
from .. import views
from ..app import JsonOption, app, defaults, parse_one_rm_options, read_json_file, split_csv


def _profile_from_options(
    profile_path: Path | None,
    goal: str | None,
    experience: str | None,
    days: int | None,
    time_availability: str | None,
    equipment: str | None,
    units: str | None,
    one_rm: list[str] | None,
) -> UserProfile:
    """
    Build the profile for a plan run.

    Precedence: command-line flags, then the --profile file, then the
    YAML defaults.
    """
    if profile_path is not None:
        profile = dict_to_user_profile(read_json_file(profile_path))
        prefs = profile.preferences
        pref_values = {
            "goal": prefs.goal,
            "experience_level": prefs.experience_level,
            "training_days_per_week": prefs.training_days_per_week,
            "time_availability": prefs.time_availability,
            "equipment_ids": list(prefs.equipment_ids),
        }
        user_id, profile_units = profile.id, profile.units
        strength_numbers = dict(profile.strength_numbers)
    else:
        cfg = defaults()
        pref_values = {
            "goal": cfg["preferences"].get("goal", "hybrid"),
            "experience_level": cfg["preferences"].get("experience_level", "beginner"),
            "training_days_per_week": int(cfg["preferences"].get("training_days_per_week", 3)),
            "time_availability": cfg["preferences"].get("time_availability", "standard"),
            "equipment_ids": list(cfg["preferences"].get("equipment_ids") or []),
        }
        user_id = str(cfg["profile"].get("user_id", "local-user"))
        profile_units = cfg["profile"].get("units", "metric")
        strength_numbers = {
            str(k): float(v) for k, v in (cfg["profile"].get("strength_numbers") or {}).items()
        }

    overrides = {
        "goal": goal,
        "experience_level": experience,
        "training_days_per_week": days,
        "time_availability": time_availability,
        "equipment_ids": split_csv(equipment),
    }
    pref_values.update({k: v for k, v in overrides.items() if v is not None})
    strength_numbers.update(parse_one_rm_options(one_rm))

    try:
        return UserProfile(
            id=user_id,
            preferences=Preferences(**pref_values),
            units=units or profile_units,
            strength_numbers=strength_numbers,
        )
    except ValueError as e:
        raise ValidationError(str(e)) from e


@app.command()
def plan(
    start: Annotated[
        Optional[str],
        typer.Option("--start", "-s", help="First day of the plan (YYYY-MM-DD, default today)"),
    ] = None,
    weeks: Annotated[
        int,
        typer.Option("--weeks", "-w", help="Number of microcycles to generate", min=1),
    ] = 1,
    days: Annotated[
        Optional[int],
        typer.Option("--days", "-d", help="Training days per week (3-7)"),
    ] = None,
    goal: Annotated[
        Optional[str],
        typer.Option("--goal", "-g", help="strength | conditioning | hybrid | general"),
    ] = None,
    experience: Annotated[
        Optional[str],
        typer.Option("--experience", "-x", help="beginner | intermediate | advanced"),
    ] = None,
    time_availability: Annotated[
        Optional[str],
        typer.Option("--time", "-t", help="short | standard | full"),
    ] = None,
    equipment: Annotated[
        Optional[str],
        typer.Option("--equipment", "-e", help="Comma-separated equipment ids, e.g. barbell,rower"),
    ] = None,
    units: Annotated[
        Optional[str],
        typer.Option("--units", "-u", help="metric | imperial"),
    ] = None,
    one_rm: Annotated[
        Optional[list[str]],
        typer.Option("--one-rm", help="Known 1RM as LIFT=VALUE (repeatable), e.g. squat=120"),
    ] = None,
    profile_path: Annotated[
        Optional[Path],
        typer.Option("--profile", "-p", help="Profile JSON file to plan from"),
    ] = None,
    initial: Annotated[
        bool,
        typer.Option("--initial", help="First week only, training days only"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Generate a training plan (seven days per week, rest days included).
    """
    start_date = start or date.today().isoformat()
    try:
        validate_date(start_date)
        profile = _profile_from_options(
            profile_path, goal, experience, days, time_availability, equipment, units, one_rm
        )
        if initial:
            plan_days = generate_initial_plan(profile, start_date)
            payload: object = [plan_day_to_dict(d) for d in plan_days]
        else:
            cycle = generate_training_cycle(
                GenerationParams.from_profile(profile),
                start_date,
                profile.preferences.training_days_per_week,
                weeks=weeks,
            )
            plan_days = cycle.days
            payload = training_cycle_to_dict(cycle)
    except (ValidationError, PraxisError, OSError, json.JSONDecodeError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    prefs = profile.preferences
    views.print_plan_days(
        plan_days,
        title=(
            f"{prefs.goal} · {prefs.experience_level} · "
            f"{prefs.training_days_per_week} days/week from {start_date}"
        ),
        strength_numbers=profile.strength_numbers,
        units=profile.units,
    )


@app.command()
def adjust(
    day_file: Annotated[Path, typer.Argument(help="Plan day JSON (as produced by `plan --json`)")],
    readiness: Annotated[
        Optional[int],
        typer.Option("--readiness", "-r", help="Readiness score 0-100"),
    ] = None,
    readiness_file: Annotated[
        Optional[Path],
        typer.Option("--readiness-file", help="Readiness ratings JSON (sleep_quality, energy, soreness, stress)"),
    ] = None,
    mode: Annotated[
        Optional[str],
        typer.Option("--mode", "-m", help="conservative | automatic | aggressive"),
    ] = None,
    no_scaling: Annotated[
        bool,
        typer.Option("--no-scaling", help="Disable readiness scaling (day is returned unchanged)"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Rescale a planned day for today's readiness.
    """
    cfg = defaults()["preferences"]
    mode = mode or cfg.get("adaptation_mode", "automatic")
    scaling_enabled = bool(cfg.get("readiness_scaling_enabled", True)) and not no_scaling

    try:
        if mode not in ("conservative", "automatic", "aggressive"):
            raise ValidationError(f"Invalid mode: {mode}")
        if (readiness is None) == (readiness_file is None):
            raise ValidationError("give exactly one of --readiness or --readiness-file")
        if readiness is not None:
            if not 0 <= readiness <= 100:
                raise ValidationError(f"readiness must be between 0 and 100, got {readiness}")
            score = readiness
        else:
            score = calculate_readiness(
                dict_to_readiness_input(read_json_file(readiness_file))
            ).score

        day = dict_to_plan_day(read_json_file(day_file))
        check_known_exercises(day)
        adjusted = adjust_workout_for_today(day, score, mode, scaling_enabled)
    except (ValidationError, PraxisError, OSError, json.JSONDecodeError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    if json_out:
        print(json.dumps(plan_day_to_dict(adjusted), indent=2, ensure_ascii=False))
        return

    if not scaling_enabled:
        views.print_warning("readiness scaling disabled, showing the planned day")
    views.print_plan_days([adjusted], title=f"Readiness {score} · {mode}")
