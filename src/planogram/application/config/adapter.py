"""Conversion between planogram documents and domain objects."""

from __future__ import annotations

from planogram.domain.entities import Item, Planogram, ProductType, Row, Shelf
from planogram.domain.value_objects import ArrangementConfig, LengthScale

from .schema import (
    CURRENT_VERSION,
    ArrangementConfigSchema,
    ArrangementPlanDocument,
    ItemConfig,
    PlanogramDocument,
    ProductTypeConfig,
    RowConfig,
    ShelfConfig,
)

__all__ = [
    "config_to_arrangement",
    "config_to_plan_entries",
    "config_to_planogram",
    "config_to_scale",
    "planogram_to_config",
]


def config_to_planogram(document: PlanogramDocument) -> Planogram:
    """Build a domain snapshot from a validated document."""
    shelf = Shelf(
        width=document.shelf.width,
        rows=tuple(Row(height=r.height, depth=r.depth) for r in document.shelf.rows),
    )
    types = tuple(
        ProductType(id=t.id, name=t.name, w=t.w, h=t.h, d=t.d, color=t.color, image=t.image)
        for t in document.types
    )
    items = tuple(
        Item(
            id=i.id,
            type_id=i.type_id,
            row=i.row,
            x=i.x,
            z=i.z,
            rotated=i.rotated,
            group=i.group,
            stack_layer=i.stack_layer,
        )
        for i in document.items
    )
    return Planogram(shelf=shelf, types=types, items=items)


def config_to_scale(document: PlanogramDocument) -> LengthScale:
    """Display scale stored in a document."""
    return LengthScale(px_per_cm=document.scale)


def config_to_arrangement(config: ArrangementConfigSchema) -> ArrangementConfig:
    """Domain arrangement configuration from its schema model."""
    return ArrangementConfig(
        facing=config.facing,
        gap_display=config.gap_display,
        capacity=config.capacity,
        stack=config.stack,
    )


def planogram_to_config(
    planogram: Planogram, scale: LengthScale | None = None
) -> PlanogramDocument:
    """Document for a domain snapshot."""
    return PlanogramDocument(
        schema_version=CURRENT_VERSION,
        scale=(scale or LengthScale()).px_per_cm,
        shelf=ShelfConfig(
            width=planogram.shelf.width,
            rows=[RowConfig(height=r.height, depth=r.depth) for r in planogram.shelf.rows],
        ),
        types=[
            ProductTypeConfig(
                id=t.id, name=t.name, w=t.w, h=t.h, d=t.d, color=t.color, image=t.image
            )
            for t in planogram.types
        ],
        items=[
            ItemConfig(
                id=i.id,
                type_id=i.type_id,
                row=i.row,
                x=i.x,
                z=i.z,
                rotated=i.rotated,
                group=i.group,
                stack_layer=i.stack_layer,
            )
            for i in planogram.items
        ],
    )


def config_to_plan_entries(
    document: ArrangementPlanDocument,
) -> list[tuple[str, ArrangementConfig]]:
    """(type id, configuration) pairs of an arrangement plan."""
    return [(entry.type_id, config_to_arrangement(entry)) for entry in document.entries]
