"""Pydantic models for planogram documents.

A planogram document captures the display scale, the shelf, the product
library and every item. Dimensions are in centimeters.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from planogram.domain.entities import DEFAULT_COLOR
from planogram.domain.value_objects import DEFAULT_PX_PER_CM, MIN_PX_PER_CM

# Supported schema versions for planogram documents
# Version 1.0: Shelf, product types, items with rotation and stacking
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})
CURRENT_VERSION = "1.0"


class RowConfig(BaseModel):
    """One shelf deck."""

    model_config = ConfigDict(extra="forbid")

    height: float = Field(..., gt=0, description="Clear height in cm")
    depth: float = Field(..., gt=0, description="Deck depth in cm")


class ShelfConfig(BaseModel):
    """Shelf width and ordered rows."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(..., gt=0, description="Shelf width in cm")
    rows: list[RowConfig] = Field(..., min_length=1)


class ProductTypeConfig(BaseModel):
    """A product type in the library.

    Attributes:
        id: Unique product type id.
        name: Display name.
        w: Width in cm.
        h: Height in cm.
        d: Depth in cm.
        color: Fallback display color.
        image: Optional image reference.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = "Product"
    w: float = Field(..., gt=0)
    h: float = Field(..., gt=0)
    d: float = Field(..., gt=0)
    color: str = DEFAULT_COLOR
    image: str | None = None


class ItemConfig(BaseModel):
    """A placed or unplaced unit.

    A type_id with no matching product type is accepted; such items are
    inert until removed.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    type_id: str = Field(..., min_length=1)
    row: int | None = Field(default=None, ge=0, description="Row index, null for the pile")
    x: float = 0.0
    z: float = 0.0
    rotated: bool = False
    group: str | None = None
    stack_layer: int = Field(default=0, ge=0)


class ArrangementConfigSchema(BaseModel):
    """Facing/gap/capacity/stack block configuration."""

    model_config = ConfigDict(extra="forbid")

    facing: int = Field(default=1, ge=1)
    gap_display: int = Field(default=0, ge=0, description="Gap between facings in px")
    capacity: int = Field(default=1, ge=1)
    stack: int = Field(default=1, ge=1)


class PlanogramDocument(BaseModel):
    """Root planogram document."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = CURRENT_VERSION
    scale: float = Field(default=DEFAULT_PX_PER_CM, ge=MIN_PX_PER_CM, description="Pixels per cm")
    shelf: ShelfConfig
    types: list[ProductTypeConfig] = Field(default_factory=list)
    items: list[ItemConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Reject unknown schema versions."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported schema version '{v}' (supported: {supported})")
        return v

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "PlanogramDocument":
        """Product type ids and item ids must each be unique."""
        type_ids = [t.id for t in self.types]
        duplicates = sorted({i for i in type_ids if type_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate product type ids: {', '.join(duplicates)}")
        item_ids = [i.id for i in self.items]
        duplicates = sorted({i for i in item_ids if item_ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate item ids: {', '.join(duplicates)}")
        return self


class PlanEntryConfig(ArrangementConfigSchema):
    """One block of an arrangement plan."""

    type_id: str = Field(..., min_length=1)


class ArrangementPlanDocument(BaseModel):
    """Blocks to place together, in order."""

    model_config = ConfigDict(extra="forbid")

    entries: list[PlanEntryConfig] = Field(..., min_length=1)
