"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, readiness and records.
"""

from rich.console import Console
from rich.table import Table

from ..core.exercises import EXERCISE_REGISTRY, Exercise
from ..core.metrics import load_for_percent
from ..core.models import (
    AccessoryBlock,
    ConditioningBlock,
    CooldownBlock,
    ExercisePrescription,
    PersonalRecord,
    ReadinessScore,
    SetPrescription,
    StrengthBlock,
    WarmupBlock,
    WorkoutBlock,
    WorkoutPlanDay,
)
from ..core.workout import one_rm_for

console = Console()


def exercise_name(exercise_id: str) -> str:
    ex = EXERCISE_REGISTRY.get(exercise_id)
    return ex.name if ex else exercise_id


def _fmt_load(s: SetPrescription, one_rm: float | None, units: str) -> str:
    """'70%' (with the load when a 1RM is known), 'RPE 7', or '-'."""
    if s.target_percent_1rm is not None:
        text = f"{s.target_percent_1rm:g}%"
        if one_rm:
            unit = "kg" if units == "metric" else "lb"
            text += f" ({load_for_percent(one_rm, s.target_percent_1rm, units):g} {unit})"
        return text
    if s.target_rpe is not None:
        return f"RPE {round(s.target_rpe, 1):g}"
    return "-"


def _fmt_prescription(
    p: ExercisePrescription, strength_numbers: dict[str, float] | None = None, units: str = "metric"
) -> str:
    """Compact 'Back Squat 3×8 @ RPE 7' summary; differing sets are listed."""
    if not p.sets:
        return exercise_name(p.exercise_id)
    one_rm = one_rm_for(p.exercise_id, strength_numbers)
    first = p.sets[0]
    if all(s == first for s in p.sets):
        return (
            f"{exercise_name(p.exercise_id)} {len(p.sets)}×{first.target_reps} "
            f"@ {_fmt_load(first, one_rm, units)}"
        )
    parts = ", ".join(f"{s.target_reps} @ {_fmt_load(s, one_rm, units)}" for s in p.sets)
    return f"{exercise_name(p.exercise_id)} {parts}"


def _fmt_block(block: WorkoutBlock, strength_numbers: dict[str, float] | None, units: str) -> str:
    if isinstance(block, (WarmupBlock, CooldownBlock)):
        return ", ".join(block.items) or "-"
    if isinstance(block, StrengthBlock):
        lines = [_fmt_prescription(block.main, strength_numbers, units)]
        lines += [f"+ {_fmt_prescription(p, strength_numbers, units)}" for p in block.secondary]
        return "\n".join(lines)
    if isinstance(block, AccessoryBlock):
        return "\n".join(_fmt_prescription(p) for p in block.exercises)
    if isinstance(block, ConditioningBlock):
        c = block.conditioning
        if c.mode == "steady":
            return f"{c.notes or ''} steady {((c.work_seconds or 0) // 60)} min {c.target_zone or ''}".strip()
        rest = f" / {c.rest_seconds}s rest" if c.rest_seconds else ""
        return f"{c.notes or ''} {c.rounds}× {c.work_seconds}s{rest} {c.target_zone or ''}".strip()
    return ""


def print_plan_days(
    days: list[WorkoutPlanDay],
    title: str = "Training plan",
    strength_numbers: dict[str, float] | None = None,
    units: str = "metric",
) -> None:
    """Print one row per block, grouped by day."""
    table = Table(title=title, show_lines=True)
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Focus", style="magenta")
    table.add_column("Block")
    table.add_column("Prescription")
    table.add_column("Min", justify="right")

    for day in days:
        focus = ", ".join(day.focus_tags)
        if day.adjusted_for_readiness:
            focus += " [yellow](adjusted)[/yellow]"
        if day.is_rest_day:
            table.add_row(day.date, focus, "[dim]rest[/dim]", "", "0")
            continue
        for i, block in enumerate(day.blocks):
            table.add_row(
                day.date if i == 0 else "",
                focus if i == 0 else "",
                block.title,
                _fmt_block(block, strength_numbers, units),
                str(block.estimated_duration_minutes),
            )
        table.add_row("", "", "[bold]Total[/bold]", "", f"[bold]{day.estimated_duration_minutes}[/bold]")

    console.print(table)


def print_readiness(result: ReadinessScore) -> None:
    colour = "green" if result.score > 80 else "yellow" if result.score >= 40 else "red"
    console.print(f"Readiness: [bold {colour}]{result.score}[/bold {colour}] / 100")

    table = Table(show_header=True)
    table.add_column("Factor")
    table.add_column("Normalized", justify="right")
    table.add_row("Sleep", f"{result.factors.sleep:.0f}")
    table.add_row("Energy", f"{result.factors.energy:.0f}")
    table.add_row("Soreness (inverted)", f"{result.factors.soreness:.0f}")
    table.add_row("Stress (inverted)", f"{result.factors.stress:.0f}")
    console.print(table)


def print_personal_records(records: list[PersonalRecord]) -> None:
    if not records:
        console.print("[dim]No new personal records.[/dim]")
        return

    table = Table(title="New personal records")
    table.add_column("Exercise", style="cyan")
    table.add_column("Set", justify="right")
    table.add_column("Est. 1RM", justify="right", style="bold green")
    table.add_column("Change", justify="right")

    for pr in records:
        change = "first" if pr.change_from_previous is None else f"+{pr.change_from_previous:.1f}"
        table.add_row(
            exercise_name(pr.exercise_id),
            f"{pr.weight:g} × {pr.reps}",
            f"{pr.estimated_1rm:.1f}",
            change,
        )
    console.print(table)


def print_one_rm(estimate: float, rows: list[tuple[float, float]], units: str) -> None:
    unit = "kg" if units == "metric" else "lb"
    console.print(f"Estimated 1RM: [bold green]{estimate:.1f} {unit}[/bold green]")
    if not rows:
        return
    table = Table(show_header=True)
    table.add_column("% 1RM", justify="right")
    table.add_column(f"Load ({unit})", justify="right")
    for percent, load in rows:
        table.add_row(f"{percent:g}%", f"{load:g}")
    console.print(table)


def print_exercises(exercises: list[Exercise]) -> None:
    table = Table(title=f"Exercises ({len(exercises)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Pattern")
    table.add_column("Difficulty")
    table.add_column("Equipment")
    table.add_column("Tags", style="dim")
    for ex in exercises:
        table.add_row(
            ex.id,
            ex.name,
            ex.pattern,
            ex.difficulty,
            ", ".join(ex.equipment_ids) or "none",
            ", ".join(ex.tags),
        )
    console.print(table)


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {message}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {message}[/yellow]")
