"""Shared Typer app object, shared option types, and input helpers."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.logging import RichHandler

from ..core.engine.config_loader import load_user_defaults

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="praxis",
    help="Workout plan generation, readiness adaptation and PR detection.",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show engine selection decisions (DEBUG logging)"),
    ] = False,
) -> None:
    """
    Training engine command line. Nothing is persisted: inputs are JSON files
    and flags, outputs go to the terminal.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
            force=True,
        )


def read_json_file(path: Path) -> Any:
    """Load a JSON input file (OSError / JSONDecodeError propagate to the command)."""
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def defaults() -> dict[str, Any]:
    """CLI defaults: bundled defaults.yaml merged with the user's config.yaml."""
    cfg = load_user_defaults()
    return {
        "preferences": dict(cfg.get("preferences") or {}),
        "profile": dict(cfg.get("profile") or {}),
    }


def split_csv(value: str | None) -> list[str] | None:
    """'barbell, dumbbell' → ['barbell', 'dumbbell']; None stays None."""
    if value is None:
        return None
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_one_rm_options(values: list[str] | None) -> dict[str, float]:
    """
    Parse repeated --one-rm LIFT=KG options.

    Raises:
        typer.BadParameter: On a malformed entry
    """
    numbers: dict[str, float] = {}
    for raw in values or []:
        lift, sep, amount = raw.partition("=")
        if not sep or not lift.strip():
            raise typer.BadParameter(f"expected LIFT=VALUE, got {raw!r}", param_hint="--one-rm")
        try:
            numbers[lift.strip()] = float(amount)
        except ValueError as e:
            raise typer.BadParameter(f"not a number: {amount!r}", param_hint="--one-rm") from e
    return numbers
