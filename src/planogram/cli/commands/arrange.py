"""Bulk arrangement commands.

This module provides the `metrics` command, a bounds-only check of an
arrangement configuration, the `arrange` command, which places or extends
a block of units, and the `plan` command, which places several blocks from
a plan file. Both writing commands save the updated document.
"""

from pathlib import Path
from typing import Annotated

import typer

from planogram.application import PlanogramError, PlanogramSession
from planogram.application.config import (
    ConfigError,
    config_to_plan_entries,
    config_to_planogram,
    config_to_scale,
    load_arrangement_plan,
    load_planogram,
    save_planogram,
)
from planogram.cli.commands.validate import display_load_error
from planogram.domain.value_objects import ArrangementConfig

PlanogramFile = Annotated[
    Path,
    typer.Argument(help="Path to the JSON planogram document"),
]
TypeOption = Annotated[
    str,
    typer.Option("--type", "-t", help="Product type id"),
]
FacingOption = Annotated[
    int,
    typer.Option("--facing", "-f", min=1, help="Units side by side across the row"),
]
GapOption = Annotated[
    int,
    typer.Option("--gap", "-g", min=0, help="Gap between facings in display px"),
]
CapacityOption = Annotated[
    int,
    typer.Option("--capacity", "-c", min=1, help="Units front to back along the depth"),
]
StackOption = Annotated[
    int,
    typer.Option("--stack", "-s", min=1, help="Units stacked vertically"),
]


def _open_session(planogram_file: Path) -> PlanogramSession:
    try:
        document = load_planogram(planogram_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    return PlanogramSession(config_to_planogram(document), config_to_scale(document))


def metrics_command(
    planogram_file: PlanogramFile,
    type_id: TypeOption,
    row: Annotated[
        int,
        typer.Option("--row", "-r", min=0, help="Row index to check against"),
    ] = 0,
    facing: FacingOption = 1,
    gap: GapOption = 0,
    capacity: CapacityOption = 1,
    stack: StackOption = 1,
) -> None:
    """Check an arrangement against a row's bounds.

    Existing items are not considered. Exits with code 1 when any axis
    exceeds its bound.

    Example:
        planogram metrics shelf.json --type cereal -f 3 -c 2 -s 2
    """
    session = _open_session(planogram_file)
    config = ArrangementConfig(facing=facing, gap_display=gap, capacity=capacity, stack=stack)
    try:
        metrics = session.check_arrangement(type_id, config, row_index=row)
    except PlanogramError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    shelf = session.planogram.shelf
    target = shelf.rows[row]
    typer.echo(f"Arrangement {facing}x{capacity}x{stack} on row {row}:")
    typer.echo(_axis_line("Width", metrics.used_width, shelf.width, metrics.valid_width))
    typer.echo(_axis_line("Height", metrics.used_height, target.height, metrics.valid_height))
    typer.echo(_axis_line("Depth", metrics.used_depth, target.depth, metrics.valid_depth))
    typer.echo(f"  Total units: {metrics.total_units}")

    if not metrics.valid:
        typer.echo(
            f"Arrangement exceeds row bounds ({', '.join(metrics.failed_axes)})",
            err=True,
        )
        raise typer.Exit(code=1)


def arrange_command(
    planogram_file: PlanogramFile,
    type_id: TypeOption,
    row: Annotated[
        int | None,
        typer.Option(
            "--row",
            "-r",
            min=0,
            help="Extend the arrangement already on this row instead of placing a new block",
        ),
    ] = None,
    facing: FacingOption = 1,
    gap: GapOption = 0,
    capacity: CapacityOption = 1,
    stack: StackOption = 1,
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of in place"),
    ] = None,
) -> None:
    """Place a block of units, or extend an existing arrangement.

    Without --row the whole shelf is searched for a free block and nothing
    is written unless every unit fits. With --row only missing cells of the
    product's arrangement on that row are added.

    Example:
        planogram arrange shelf.json --type cereal -f 2 -c 3 -o out.json
    """
    session = _open_session(planogram_file)
    config = ArrangementConfig(facing=facing, gap_display=gap, capacity=capacity, stack=stack)
    try:
        if row is None:
            result = session.arrange(type_id, config)
        else:
            result = session.extend_row(row, type_id, config)
    except PlanogramError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not result.success:
        typer.echo(f"Arrangement rejected: {result.reason}", err=True)
        raise typer.Exit(code=1)

    target = output_file or planogram_file
    try:
        save_planogram(target, session.planogram, session.scale)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        f"Added {result.added} of {result.requested} unit(s) on row {result.row_index} "
        f"(batch {result.group})"
    )
    typer.echo(f"Saved to {target}")


def plan_command(
    planogram_file: PlanogramFile,
    plan_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON arrangement plan"),
    ],
    output_file: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of in place"),
    ] = None,
) -> None:
    """Place one block per plan entry, all or nothing.

    The plan file lists entries of type_id, facing, gap_display, capacity
    and stack. Nothing is written unless every block fits.

    Example:
        planogram plan shelf.json plan.json -o out.json
    """
    session = _open_session(planogram_file)
    try:
        entries = config_to_plan_entries(load_arrangement_plan(plan_file))
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    try:
        result = session.arrange_plan(entries)
    except PlanogramError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not result.success:
        typer.echo(f"Plan rejected at entry {result.failed_index}: {result.reason}", err=True)
        raise typer.Exit(code=1)

    target = output_file or planogram_file
    try:
        save_planogram(target, session.planogram, session.scale)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for (type_id, _), block in zip(entries, result.blocks):
        typer.echo(f"  {type_id}: {block.added} unit(s) on row {block.row_index} (batch {block.group})")
    typer.echo(f"Placed {len(result.blocks)} block(s), {result.added} unit(s) in total")
    typer.echo(f"Saved to {target}")


def _axis_line(label: str, used: float, limit: float, ok: bool) -> str:
    status = "ok" if ok else "EXCEEDS"
    return f"  {label}: {used:.1f} / {limit:.1f} cm [{status}]"
