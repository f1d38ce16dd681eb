"""Bulk arrangement configuration and metrics value objects."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping


def _parse_count(value: Any, fallback: int, minimum: int) -> int:
    """Floor a raw numeric input, substituting fallback when it is unusable."""
    if value is None or isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return max(minimum, math.floor(number))


@dataclass(frozen=True)
class ArrangementConfig:
    """Facing x capacity x stack block configuration.

    Attributes:
        facing: Units side by side across the row width.
        gap_display: Gap between facings in display units (px).
        capacity: Units front to back along the row depth.
        stack: Units stacked vertically within the row height.
    """

    facing: int = 1
    gap_display: int = 0
    capacity: int = 1
    stack: int = 1

    def __post_init__(self) -> None:
        if self.facing < 1:
            raise ValueError("Facing must be at least 1")
        if self.gap_display < 0:
            raise ValueError("Gap must be non-negative")
        if self.capacity < 1:
            raise ValueError("Capacity must be at least 1")
        if self.stack < 1:
            raise ValueError("Stack must be at least 1")

    @property
    def total_units(self) -> int:
        """Number of units the block contains."""
        return self.facing * self.capacity * self.stack

    @classmethod
    def sanitize(
        cls,
        raw: Mapping[str, Any],
        previous: "ArrangementConfig | None" = None,
    ) -> "ArrangementConfig":
        """Build a config from raw dialog input.

        Missing, unparsable or non-finite values keep the previous valid
        value. Everything else is floored and clamped to its minimum.

        Args:
            raw: Mapping with any of facing, gap_display, capacity, stack.
            previous: Last valid configuration (defaults to 1/0/1/1).

        Returns:
            A valid ArrangementConfig.
        """
        prior = previous or cls()
        return cls(
            facing=_parse_count(raw.get("facing"), prior.facing, 1),
            gap_display=_parse_count(raw.get("gap_display"), prior.gap_display, 0),
            capacity=_parse_count(raw.get("capacity"), prior.capacity, 1),
            stack=_parse_count(raw.get("stack"), prior.stack, 1),
        )


@dataclass(frozen=True)
class ArrangementMetrics:
    """Bounds-only evaluation of an arrangement against a row.

    Attributes:
        used_width: Block width in cm, gaps included.
        used_height: Block height in cm.
        used_depth: Block depth in cm.
        total_units: facing x capacity x stack.
        valid_width: Block width fits the shelf width.
        valid_height: Block height fits the row height.
        valid_depth: Block depth fits the row depth.
    """

    used_width: float
    used_height: float
    used_depth: float
    total_units: int
    valid_width: bool
    valid_height: bool
    valid_depth: bool

    @property
    def valid(self) -> bool:
        """True when every axis fits."""
        return self.valid_width and self.valid_height and self.valid_depth

    @property
    def failed_axes(self) -> tuple[str, ...]:
        """Names of the axes that exceed their bound."""
        axes = (
            ("width", self.valid_width),
            ("height", self.valid_height),
            ("depth", self.valid_depth),
        )
        return tuple(name for name, ok in axes if not ok)
