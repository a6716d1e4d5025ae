"""Analysis commands: readiness, prs, one-rm."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.errors import PraxisError
from ...core.max_estimator import detect_new_prs, estimate_1rm
from ...core.metrics import load_for_percent, session_duration_minutes, session_total_volume
from ...core.models import ReadinessInput
from ...core.readiness import calculate_readiness
from ...io.serializers import (
    ValidationError,
    check_known_exercises,
    dict_to_personal_record,
    dict_to_session_log,
    personal_record_to_dict,
    readiness_score_to_dict,
    validate_readiness_input,
)
from .. import views
from ..app import JsonOption, app, read_json_file

# Percentages shown under an estimated 1RM
ONE_RM_TABLE_PERCENTS = (95.0, 90.0, 85.0, 80.0, 75.0, 70.0, 65.0, 60.0)


@app.command()
def readiness(
    sleep: Annotated[int, typer.Option("--sleep", help="Sleep quality 1-5 (5 = great)")],
    energy: Annotated[int, typer.Option("--energy", help="Energy 1-5 (5 = high)")],
    soreness: Annotated[int, typer.Option("--soreness", help="Soreness 1-5 (5 = very sore)")],
    stress: Annotated[int, typer.Option("--stress", help="Stress 1-5 (5 = very stressed)")],
    json_out: JsonOption = False,
) -> None:
    """
    Score today's readiness (0-100) from four 1-5 ratings.
    """
    try:
        ratings = validate_readiness_input(
            ReadinessInput(sleep_quality=sleep, energy=energy, soreness=soreness, stress=stress)
        )
    except PraxisError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    result = calculate_readiness(ratings)
    if json_out:
        print(json.dumps(readiness_score_to_dict(result), indent=2))
        return
    views.print_readiness(result)


@app.command()
def prs(
    session_file: Annotated[Path, typer.Argument(help="Session log JSON")],
    records_file: Annotated[
        Optional[Path],
        typer.Option("--records", "-r", help="JSON list of existing personal records"),
    ] = None,
    allow_unknown: Annotated[
        bool,
        typer.Option("--allow-unknown", help="Accept exercise ids that are not in the catalog"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Detect new personal records in a logged session.
    """
    try:
        session = dict_to_session_log(read_json_file(session_file))
        if not allow_unknown:
            check_known_exercises(session)
        existing = []
        if records_file is not None:
            raw_records = read_json_file(records_file)
            if not isinstance(raw_records, list):
                raise ValidationError("records file must contain a JSON list")
            existing = [dict_to_personal_record(r) for r in raw_records]
    except (ValidationError, PraxisError, OSError, json.JSONDecodeError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    new_records = detect_new_prs(session, existing)

    if json_out:
        print(json.dumps([personal_record_to_dict(pr) for pr in new_records], indent=2))
        return

    duration = session_duration_minutes(session)
    summary = f"Session {session.id} ({session.date}): volume {session_total_volume(session):g}"
    if duration is not None:
        summary += f", {duration} min"
    views.console.print(summary)
    views.print_personal_records(new_records)


@app.command("one-rm")
def one_rm(
    weight: Annotated[float, typer.Argument(help="Load lifted", min=0)],
    reps: Annotated[int, typer.Argument(help="Reps completed", min=0)],
    units: Annotated[
        str,
        typer.Option("--units", "-u", help="metric | imperial (sets load rounding)"),
    ] = "metric",
    json_out: JsonOption = False,
) -> None:
    """
    Estimate a one-rep max (Epley) and show working loads.
    """
    if units not in ("metric", "imperial"):
        views.print_error(f"Invalid units: {units}")
        raise typer.Exit(1)

    estimate = estimate_1rm(weight, reps)
    rows = [(p, load_for_percent(estimate, p, units)) for p in ONE_RM_TABLE_PERCENTS] if estimate > 0 else []

    if json_out:
        print(json.dumps({
            "weight": weight,
            "reps": reps,
            "estimated_1rm": round(estimate, 2),
            "loads": {f"{p:g}": load for p, load in rows},
        }, indent=2))
        return
    views.print_one_rm(estimate, rows, units)
