"""Validate command for checking planogram documents.

This module provides the `validate` command that loads a planogram
document and runs the layout revalidation pass over it.
"""

from pathlib import Path
from typing import Annotated

import typer

from planogram.application.config import (
    ConfigError,
    config_to_planogram,
    load_planogram,
)
from planogram.domain.services import LayoutRevalidator


def validate_command(
    planogram_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON planogram document to validate"),
    ],
) -> None:
    """Validate a planogram document.

    Checks the document for:
    - JSON syntax errors
    - Schema validation errors (missing fields, invalid types, duplicate ids)
    - Placed items that violate shelf bounds, collide, or overflow a stack

    Exit codes:
        0 - Every placed item is legal
        1 - The document cannot be loaded
        2 - The document loads but some items would move to the pile

    Example:
        planogram validate my-shelf.json
    """
    typer.echo(f"Validating {planogram_file}...")
    typer.echo()

    try:
        document = load_planogram(planogram_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)

    planogram = config_to_planogram(document)
    _, report = LayoutRevalidator().revalidate(planogram)

    inert = [i.id for i in planogram.items if planogram.type_of(i) is None]
    if inert:
        typer.echo("Warnings:")
        for item_id in inert:
            typer.echo(f"  items.{item_id}: unknown product type, item is ignored")
        typer.echo()

    if report.moved:
        typer.echo("Items that no longer fit:", err=True)
        for item_id in report.moved_ids:
            item = planogram.get_item(item_id)
            row = item.row if item is not None else "?"
            typer.echo(f"  {item_id} (row {row})", err=True)
        typer.echo()
        typer.echo(
            f"Validation found {report.moved} of {report.checked} placed item(s) out of place",
            err=True,
        )
        raise typer.Exit(code=2)

    typer.echo(f"Validation passed. {report.checked} placed item(s) fit.")


def display_load_error(error: ConfigError) -> None:
    """Display a document loading error.

    Args:
        error: The ConfigError to display
    """
    typer.echo("Errors:", err=True)
    if error.error_type == "file_not_found":
        typer.echo(f"  File not found: {error.path}", err=True)
    elif error.error_type == "json_parse":
        typer.echo("  Invalid JSON syntax", err=True)
        for detail in error.details:
            line = detail.get("line", "?")
            column = detail.get("column", "?")
            message = detail.get("message", "Unknown error")
            typer.echo(f"    Line {line}, Column {column}: {message}", err=True)
    elif error.error_type == "validation":
        for detail in error.details:
            path = detail.get("path", "unknown")
            message = detail.get("message", "Unknown error")
            typer.echo(f"  {path}: {message}", err=True)
            value = detail.get("value")
            if value is not None:
                typer.echo(f"    Value: {value!r}", err=True)
    else:
        typer.echo(f"  {error.message}", err=True)

    typer.echo()
    typer.echo("Validation failed.", err=True)
