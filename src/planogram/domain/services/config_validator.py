"""Bounds-only validation of a bulk arrangement configuration."""

from __future__ import annotations

from ..value_objects import (
    GEOMETRY_TOLERANCE,
    ArrangementConfig,
    ArrangementMetrics,
    Dimensions,
    LengthScale,
)

__all__ = ["ConfigurationValidator", "compute_metrics"]


def compute_metrics(
    config: ArrangementConfig,
    product: Dimensions,
    bounds: Dimensions,
    scale: LengthScale | None = None,
) -> ArrangementMetrics:
    """Compute block size and per-axis validity.

    Existing occupants are not considered.

    Args:
        config: Facing/gap/capacity/stack configuration.
        product: Effective unit dimensions in cm.
        bounds: Shelf width, row height and row depth in cm.
        scale: Display scale used to convert the gap to cm.

    Returns:
        ArrangementMetrics for the block.
    """
    gap = (scale or LengthScale()).to_length(config.gap_display)
    used_width = config.facing * product.width + (config.facing - 1) * gap
    used_height = config.stack * product.height
    used_depth = config.capacity * product.depth
    return ArrangementMetrics(
        used_width=used_width,
        used_height=used_height,
        used_depth=used_depth,
        total_units=config.total_units,
        valid_width=used_width <= bounds.width + GEOMETRY_TOLERANCE,
        valid_height=used_height <= bounds.height + GEOMETRY_TOLERANCE,
        valid_depth=used_depth <= bounds.depth + GEOMETRY_TOLERANCE,
    )


class ConfigurationValidator:
    """Gates the arrangement dialog before the planner runs."""

    def __init__(self, scale: LengthScale | None = None) -> None:
        self.scale = scale or LengthScale()

    def validate(
        self,
        config: ArrangementConfig,
        product: Dimensions,
        bounds: Dimensions,
    ) -> ArrangementMetrics:
        """Validate config against the given bounds at this validator's scale."""
        return compute_metrics(config, product, bounds, self.scale)
