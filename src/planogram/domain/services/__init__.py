"""Domain services for the shelf placement engine.

This package provides one service per engine concern:
- Fit checking and depth-slot search
- Pointer-driven placement previews and rotation
- Bulk block arrangement and bounds-only configuration validation
- Shelf reconfiguration and layout revalidation

Every service reads a Planogram snapshot and returns a decision; none of
them mutates shared state.
"""

from .arrangement import BulkArrangementPlanner, new_id
from .config_validator import ConfigurationValidator, compute_metrics
from .depth_slot import DepthSlotResolver
from .fit_checker import FitChecker
from .placement import PlacementProposer, row_under_pointer
from .reconfiguration import (
    MIN_ROW_DEPTH,
    MIN_ROW_DIMENSION,
    MIN_SHELF_WIDTH,
    ShelfReconfigurationService,
    majority_depth,
)
from .revalidation import LayoutRevalidator
from .rotation import RotationResolver

__all__ = [
    "BulkArrangementPlanner",
    "ConfigurationValidator",
    "DepthSlotResolver",
    "FitChecker",
    "LayoutRevalidator",
    "MIN_ROW_DEPTH",
    "MIN_ROW_DIMENSION",
    "MIN_SHELF_WIDTH",
    "PlacementProposer",
    "RotationResolver",
    "ShelfReconfigurationService",
    "compute_metrics",
    "majority_depth",
    "new_id",
    "row_under_pointer",
]
