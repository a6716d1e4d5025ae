"""Catalog command: exercises."""

import json
from typing import Annotated, Optional

import typer

from ...core.equipment import filter_usable
from ...core.exercises import all_exercises
from ...io.serializers import exercise_to_dict
from .. import views
from ..app import JsonOption, app, split_csv


@app.command()
def exercises(
    tag: Annotated[
        Optional[str],
        typer.Option("--tag", help="Only exercises carrying this tag"),
    ] = None,
    pattern: Annotated[
        Optional[str],
        typer.Option("--pattern", help="Only this movement pattern, e.g. squat"),
    ] = None,
    equipment: Annotated[
        Optional[str],
        typer.Option("--equipment", "-e", help="Only exercises usable with these comma-separated ids"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    List the exercise catalog.
    """
    found = all_exercises()
    if tag:
        found = [ex for ex in found if ex.has_tag(tag)]
    if pattern:
        found = [ex for ex in found if ex.pattern == pattern]
    owned = split_csv(equipment)
    if owned is not None:
        found = filter_usable(found, owned)

    if json_out:
        print(json.dumps([exercise_to_dict(ex) for ex in found], indent=2))
        return
    views.print_exercises(found)
