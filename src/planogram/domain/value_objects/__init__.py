"""Value objects for the planogram domain.

This module provides immutable data types used throughout the placement
engine. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Geometry and unit conversion
from ._geometry import (
    DEFAULT_PX_PER_CM,
    Dimensions,
    GEOMETRY_TOLERANCE,
    MIN_PX_PER_CM,
    Footprint,
    LengthScale,
    Rect,
    StackCell,
    clamp,
    nearly_equal,
)

# Bulk arrangement
from ._arrangement import (
    ArrangementConfig,
    ArrangementMetrics,
)

# Placement outcomes
from ._placement import (
    ArrangementPlanResult,
    ArrangementResult,
    DisplayRect,
    PlacementProposal,
    Pointer,
    RevalidationReport,
    RotationResult,
    RowContext,
)

__all__ = [
    "ArrangementConfig",
    "ArrangementMetrics",
    "ArrangementPlanResult",
    "ArrangementResult",
    "DEFAULT_PX_PER_CM",
    "Dimensions",
    "DisplayRect",
    "Footprint",
    "GEOMETRY_TOLERANCE",
    "LengthScale",
    "MIN_PX_PER_CM",
    "PlacementProposal",
    "Pointer",
    "Rect",
    "RevalidationReport",
    "RotationResult",
    "RowContext",
    "StackCell",
    "clamp",
    "nearly_equal",
]
