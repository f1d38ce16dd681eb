"""Domain layer - shelf model and placement engine."""

from .entities import Item, Planogram, ProductType, Row, Shelf
from .services import (
    BulkArrangementPlanner,
    ConfigurationValidator,
    DepthSlotResolver,
    FitChecker,
    LayoutRevalidator,
    PlacementProposer,
    RotationResolver,
    ShelfReconfigurationService,
)
from .value_objects import (
    ArrangementConfig,
    ArrangementMetrics,
    ArrangementResult,
    Dimensions,
    DisplayRect,
    Footprint,
    LengthScale,
    PlacementProposal,
    Pointer,
    RotationResult,
    RowContext,
    StackCell,
)

__all__ = [
    "ArrangementConfig",
    "ArrangementMetrics",
    "ArrangementResult",
    "BulkArrangementPlanner",
    "ConfigurationValidator",
    "DepthSlotResolver",
    "Dimensions",
    "DisplayRect",
    "FitChecker",
    "Footprint",
    "Item",
    "LayoutRevalidator",
    "LengthScale",
    "PlacementProposal",
    "PlacementProposer",
    "Planogram",
    "Pointer",
    "ProductType",
    "RotationResolver",
    "RotationResult",
    "Row",
    "RowContext",
    "Shelf",
    "ShelfReconfigurationService",
    "StackCell",
]
