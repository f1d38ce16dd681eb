"""Planogram session: the authoritative item collection and its commit points.

The placement engine only ever reads snapshots. This session owns the
current snapshot and replaces it at well-defined commit points: a drop, a
rotation, an applied arrangement, a library edit or a shelf edit. Every
shelf edit is followed by a full revalidation pass.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping, Sequence

from planogram.domain.entities import (
    DEFAULT_COLOR,
    Item,
    Planogram,
    ProductType,
    Shelf,
)
from planogram.domain.services import (
    BulkArrangementPlanner,
    ConfigurationValidator,
    FitChecker,
    LayoutRevalidator,
    PlacementProposer,
    RotationResolver,
    ShelfReconfigurationService,
    new_id,
    row_under_pointer,
)
from planogram.domain.value_objects import (
    ArrangementConfig,
    ArrangementMetrics,
    ArrangementPlanResult,
    ArrangementResult,
    Dimensions,
    LengthScale,
    PlacementProposal,
    Pointer,
    RevalidationReport,
    RotationResult,
    RowContext,
)

logger = logging.getLogger(__name__)

__all__ = ["PlanogramError", "PlanogramSession"]


class PlanogramError(LookupError):
    """Raised when a session operation references an unknown item, type or row."""


class PlanogramSession:
    """Holds the current planogram and applies committed changes.

    Attributes:
        planogram: Current snapshot.
        scale: Display scale used for pointer and gap conversion.
    """

    def __init__(
        self,
        planogram: Planogram | None = None,
        scale: LengthScale | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.planogram = planogram or Planogram(shelf=Shelf.default())
        self.scale = scale or LengthScale()
        self.id_factory = id_factory or new_id
        self.revalidator = LayoutRevalidator()
        self.reconfiguration = ShelfReconfigurationService()

    # ------------------------------------------------------------------
    # Product library and pile
    # ------------------------------------------------------------------

    def set_scale(self, value: object) -> LengthScale:
        """Set the display scale from raw input."""
        self.scale = LengthScale.from_input(value)
        return self.scale

    def add_type(
        self,
        name: str,
        w: float,
        h: float,
        d: float,
        color: str = DEFAULT_COLOR,
        image: str | None = None,
    ) -> ProductType:
        """Add a product type to the library."""
        product = ProductType(
            id=self.id_factory(),
            name=name.strip() or "Product",
            w=w,
            h=h,
            d=d,
            color=color,
            image=image or None,
        )
        self.planogram = self.planogram.with_types([*self.planogram.types, product])
        logger.info("Added product type %s (%sx%sx%s cm)", product.name, w, h, d)
        return product

    def remove_type(self, type_id: str) -> int:
        """Remove a product type and every item of it.

        Returns:
            Number of items removed.
        """
        self._require_type(type_id)
        kept = [i for i in self.planogram.items if i.type_id != type_id]
        removed = len(self.planogram.items) - len(kept)
        types = [t for t in self.planogram.types if t.id != type_id]
        self.planogram = Planogram(shelf=self.planogram.shelf, types=tuple(types), items=tuple(kept))
        logger.info("Removed product type %s and %d item(s)", type_id, removed)
        return removed

    def clear_types(self) -> None:
        """Remove the whole library and every item."""
        self.planogram = Planogram(shelf=self.planogram.shelf)

    def spawn(self, type_id: str) -> Item:
        """Create an unplaced item of a product type."""
        self._require_type(type_id)
        item = Item(id=self.id_factory(), type_id=type_id)
        self.planogram = self.planogram.apply(created=(item,))
        return item

    def remove_item(self, item_id: str) -> None:
        """Delete an item."""
        self._require_item(item_id)
        self.planogram = self.planogram.apply(removed_ids=(item_id,))

    def drop_to_pile(self, item_id: str) -> Item:
        """Move an item off the shelf."""
        item = self._require_item(item_id).to_pile()
        self.planogram = self.planogram.apply(updated=(item,))
        return item

    # ------------------------------------------------------------------
    # Drag and drop
    # ------------------------------------------------------------------

    def preview(
        self, item_id: str, row_context: RowContext, pointer: Pointer
    ) -> PlacementProposal:
        """Read-only placement preview for a drag in progress."""
        item = self._require_item(item_id)
        return PlacementProposer(self.planogram, self.scale).propose(item, row_context, pointer)

    def preview_at(
        self, item_id: str, rows: Sequence[RowContext], pointer: Pointer
    ) -> PlacementProposal | None:
        """Preview over whichever row is under the pointer, None between rows."""
        row_context = row_under_pointer(rows, pointer)
        if row_context is None:
            return None
        return self.preview(item_id, row_context, pointer)

    def drop(
        self, item_id: str, row_context: RowContext, pointer: Pointer
    ) -> PlacementProposal:
        """Commit a drop if the proposal under the pointer is valid."""
        proposal = self.preview(item_id, row_context, pointer)
        if proposal.valid:
            self._commit_move(self._require_item(item_id), proposal.row_index, proposal.x, proposal.z)
        else:
            logger.debug("Rejected drop of %s on row %d", item_id, proposal.row_index)
        return proposal

    def move(self, item_id: str, row_index: int, x: float, z: float) -> bool:
        """Commit an explicit position if the Fit Checker accepts it."""
        item = self._require_item(item_id)
        if not FitChecker(self.planogram).fits(item, row_index, x, z):
            return False
        self._commit_move(item, row_index, x, z)
        return True

    def rotate(self, item_id: str) -> RotationResult:
        """Toggle an item's orientation; nothing changes on rejection."""
        item = self._require_item(item_id)
        result = RotationResolver(self.planogram).rotate(item)
        if result.accepted:
            rotated = replace(item, rotated=not item.rotated, x=result.x, z=result.z)
            if rotated.row is not None:
                layer = FitChecker(self.planogram).free_layer(rotated, rotated.row, rotated.x, rotated.z)
                rotated = replace(rotated, stack_layer=layer)
            self.planogram = self.planogram.apply(updated=(rotated,))
        else:
            logger.debug("Rejected rotation of %s: %s", item_id, result.reason)
        return result

    # ------------------------------------------------------------------
    # Bulk arrangement
    # ------------------------------------------------------------------

    def check_arrangement(
        self,
        type_id: str,
        config: ArrangementConfig,
        row_index: int = 0,
        rotated: bool = False,
    ) -> ArrangementMetrics:
        """Bounds-only validation of a configuration against one row."""
        product = self._require_type(type_id)
        row = self.planogram.shelf.row(row_index)
        if row is None:
            raise PlanogramError(f"Unknown row: {row_index}")
        bounds = Dimensions(width=self.planogram.shelf.width, height=row.height, depth=row.depth)
        return ConfigurationValidator(self.scale).validate(config, product.footprint(rotated), bounds)

    def sanitize_config(
        self, raw: Mapping[str, Any], previous: ArrangementConfig | None = None
    ) -> ArrangementConfig:
        """Turn raw dialog input into a valid configuration."""
        return ArrangementConfig.sanitize(raw, previous)

    def arrange(
        self,
        type_id: str,
        config: ArrangementConfig,
        item_id: str | None = None,
    ) -> ArrangementResult:
        """Place a new block, replacing the operating item's batch."""
        product = self._require_type(type_id)
        operating = self._require_item(item_id) if item_id is not None else None
        result = self._planner().arrange_block(product, config, operating)
        self._commit_arrangement(result)
        return result

    def arrange_plan(
        self, entries: Sequence[tuple[str, ArrangementConfig]]
    ) -> ArrangementPlanResult:
        """Place a block for every (type id, config) entry, or none at all."""
        resolved = [(self._require_type(type_id), config) for type_id, config in entries]
        result = self._planner().arrange_plan(resolved)
        if not result.success:
            logger.debug("Plan rejected at entry %s: %s", result.failed_index, result.reason)
            return result
        self.planogram = self.planogram.apply(
            created=result.created, removed_ids=result.removed_ids
        )
        logger.info(
            "Arranged %d block(s) with %d unit(s) in total", len(result.blocks), result.added
        )
        return result

    def extend_row(
        self, row_index: int, type_id: str, config: ArrangementConfig
    ) -> ArrangementResult:
        """Grow the arrangement of a product on a row."""
        product = self._require_type(type_id)
        result = self._planner().extend_row(row_index, product, config)
        self._commit_arrangement(result)
        return result

    # ------------------------------------------------------------------
    # Shelf edits
    # ------------------------------------------------------------------

    def set_width(self, width: float) -> RevalidationReport:
        """Change the shelf width."""
        return self._reconfigure(self.reconfiguration.set_width(self.planogram, width))

    def set_all_depths(self, depth: float) -> RevalidationReport:
        """Apply one depth to every row."""
        return self._reconfigure(self.reconfiguration.set_all_depths(self.planogram, depth))

    def set_row_dimensions(
        self, index: int, height: float | None = None, depth: float | None = None
    ) -> RevalidationReport:
        """Change one row's height and/or depth."""
        self._require_row(index)
        return self._reconfigure(
            self.reconfiguration.set_row_dimensions(self.planogram, index, height, depth)
        )

    def rebuild_rows(self, count: int, depth: float | None = None) -> RevalidationReport:
        """Replace every row with count default-height rows."""
        return self._reconfigure(self.reconfiguration.rebuild_rows(self.planogram, count, depth))

    def duplicate_row(self, index: int) -> RevalidationReport:
        """Insert a copy of a row right after it."""
        self._require_row(index)
        return self._reconfigure(self.reconfiguration.duplicate_row(self.planogram, index))

    def delete_row(self, index: int) -> RevalidationReport:
        """Remove a row, sending its items to the pile."""
        self._require_row(index)
        return self._reconfigure(self.reconfiguration.delete_row(self.planogram, index))

    def revalidate(self) -> RevalidationReport:
        """Move every item that no longer fits to the pile."""
        self.planogram, report = self.revalidator.revalidate(self.planogram)
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _planner(self) -> BulkArrangementPlanner:
        return BulkArrangementPlanner(self.planogram, self.scale, self.id_factory)

    def _commit_move(self, item: Item, row_index: int, x: float, z: float) -> None:
        layer = FitChecker(self.planogram).free_layer(item, row_index, x, z)
        moved = item.placed_at(row_index, x, z, stack_layer=layer)
        self.planogram = self.planogram.apply(updated=(moved,))
        logger.info("Placed %s on row %d at x=%.1f z=%.1f", item.id, row_index, x, z)

    def _commit_arrangement(self, result: ArrangementResult) -> None:
        if not result.success:
            logger.debug("Arrangement rejected: %s", result.reason)
            return
        self.planogram = self.planogram.apply(
            created=result.created,
            updated=result.updated,
            removed_ids=result.removed_ids,
        )
        logger.info(
            "Arranged %d of %d unit(s) on row %s (batch %s)",
            result.added,
            result.requested,
            result.row_index,
            result.group,
        )

    def _reconfigure(self, planogram: Planogram) -> RevalidationReport:
        self.planogram, report = self.revalidator.revalidate(planogram)
        return report

    def _require_item(self, item_id: str) -> Item:
        item = self.planogram.get_item(item_id)
        if item is None:
            raise PlanogramError(f"Unknown item: {item_id}")
        return item

    def _require_type(self, type_id: str) -> ProductType:
        product = self.planogram.get_type(type_id)
        if product is None:
            raise PlanogramError(f"Unknown product type: {type_id}")
        return product

    def _require_row(self, index: int) -> None:
        if self.planogram.shelf.row(index) is None:
            raise PlanogramError(f"Unknown row: {index}")
