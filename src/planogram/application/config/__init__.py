"""Planogram document configuration.

Provides the Pydantic document schema, JSON loading/saving, and adapters
between documents and domain snapshots.
"""

from planogram.application.config.adapter import (
    config_to_arrangement,
    config_to_plan_entries,
    config_to_planogram,
    config_to_scale,
    planogram_to_config,
)
from planogram.application.config.loader import (
    ConfigError,
    load_arrangement_plan,
    load_planogram,
    load_planogram_from_dict,
    save_planogram,
)
from planogram.application.config.schema import (
    CURRENT_VERSION,
    SUPPORTED_VERSIONS,
    ArrangementConfigSchema,
    ArrangementPlanDocument,
    ItemConfig,
    PlanEntryConfig,
    PlanogramDocument,
    ProductTypeConfig,
    RowConfig,
    ShelfConfig,
)

__all__ = [
    "ArrangementConfigSchema",
    "ArrangementPlanDocument",
    "CURRENT_VERSION",
    "ConfigError",
    "ItemConfig",
    "PlanEntryConfig",
    "PlanogramDocument",
    "ProductTypeConfig",
    "RowConfig",
    "SUPPORTED_VERSIONS",
    "ShelfConfig",
    "config_to_arrangement",
    "config_to_plan_entries",
    "config_to_planogram",
    "config_to_scale",
    "load_arrangement_plan",
    "load_planogram",
    "load_planogram_from_dict",
    "planogram_to_config",
    "save_planogram",
]
