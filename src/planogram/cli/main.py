"""Typer CLI for shelf planograms."""

import typer

from planogram.cli.commands import (
    arrange_command,
    metrics_command,
    plan_command,
    validate_command,
)

app = typer.Typer(
    name="planogram",
    help="Lay out product units on multi-row shelves.",
    no_args_is_help=True,
)

app.command(name="validate")(validate_command)
app.command(name="metrics")(metrics_command)
app.command(name="arrange")(arrange_command)
app.command(name="plan")(plan_command)


if __name__ == "__main__":
    app()
