"""Reading and writing JSON planogram documents and arrangement plans.

Every failure surfaces as a ConfigError whose error_type names the stage
that failed: file_not_found, permission_denied, file_read_error,
json_parse, validation or file_write_error.
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from planogram.application.config.adapter import planogram_to_config
from planogram.application.config.schema import ArrangementPlanDocument, PlanogramDocument
from planogram.domain.entities import Planogram
from planogram.domain.value_objects import LengthScale

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """A document could not be read, parsed, validated or written.

    Attributes:
        message: Human-readable summary, one line per problem.
        error_type: Stage that failed.
        path: Document path, None for in-memory data.
        details: Per-problem dicts (line/column for JSON, path/message for schema).
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """('items', 3, 'x') -> 'items[3].x'."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path


def _read_json(path: Path, label: str) -> Any:
    if not path.exists():
        raise ConfigError(f"{label} file not found: {path}", "file_not_found", path)
    try:
        content = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading {label.lower()} file: {path}", "permission_denied", path
        )
    except OSError as e:
        raise ConfigError(
            f"Error reading {label.lower()} file: {path}: {e}", "file_read_error", path
        )

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in {label.lower()} file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(model: type[ModelT], data: Any, path: Path | None, label: str) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _format_json_path(err["loc"]) or "(root)",
                "message": err["msg"],
                "value": err.get("input") if err["loc"] else None,
            }
            for err in e.errors()
        ]
        lines = [f"{label} validation failed:"]
        for detail in details:
            suffix = f" (got: {detail['value']!r})" if detail["value"] is not None else ""
            lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")
        raise ConfigError("\n".join(lines), "validation", path, details)


def load_planogram(path: Path) -> PlanogramDocument:
    """Load and validate a planogram document from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    document = _validate(PlanogramDocument, _read_json(path, "Planogram"), path, "Planogram")
    logger.debug(
        "Loaded %s: %d row(s), %d type(s), %d item(s)",
        path,
        len(document.shelf.rows),
        len(document.types),
        len(document.items),
    )
    return document


def load_planogram_from_dict(data: dict[str, Any]) -> PlanogramDocument:
    """Validate an in-memory planogram document."""
    return _validate(PlanogramDocument, data, None, "Planogram")


def load_arrangement_plan(path: Path) -> ArrangementPlanDocument:
    """Load and validate an arrangement plan from a JSON file.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    plan = _validate(ArrangementPlanDocument, _read_json(path, "Plan"), path, "Plan")
    logger.debug("Loaded plan %s with %d block(s)", path, len(plan.entries))
    return plan


def save_planogram(
    path: Path, planogram: Planogram, scale: LengthScale | None = None
) -> None:
    """Write a planogram snapshot as an indented JSON document.

    Raises:
        ConfigError: If the file cannot be written.
    """
    document = planogram_to_config(planogram, scale)
    try:
        path.write_text(document.model_dump_json(indent=2) + "\n", encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Error writing planogram file: {path}: {e}", "file_write_error", path)
    logger.info("Saved planogram to %s", path)
