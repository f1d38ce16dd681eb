"""CLI command implementations for the planogram application.

This package contains subcommands for the planogram CLI, including:
- validate: Validate a planogram document
- metrics: Check an arrangement against row bounds
- arrange: Place or extend a block of units
- plan: Place several blocks from a plan file
"""

from planogram.cli.commands.arrange import (
    arrange_command,
    metrics_command,
    plan_command,
)
from planogram.cli.commands.validate import validate_command

__all__ = ["arrange_command", "metrics_command", "plan_command", "validate_command"]
