"""Bulk block arrangement of product units.

A block is ``facing`` units across the row width, ``capacity`` units front
to back and ``stack`` units high. The planner searches the shelf for a free
rectangle large enough for the whole block and materializes every unit of
it, or extends an arrangement that already exists on a row.

Search runs at a fixed 1 cm horizontal step. Product dimensions are
centimeter-grained, so a finer step would not find additional anchors in
practice.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from dataclasses import replace
from typing import Callable, Iterable, Sequence

from ..entities import Item, Planogram, ProductType
from ..value_objects import (
    GEOMETRY_TOLERANCE,
    ArrangementConfig,
    ArrangementPlanResult,
    ArrangementResult,
    Dimensions,
    Footprint,
    LengthScale,
    StackCell,
)
from .config_validator import compute_metrics
from .depth_slot import DepthSlotResolver
from .fit_checker import FitChecker

logger = logging.getLogger(__name__)

__all__ = ["BulkArrangementPlanner", "new_id"]

SEARCH_STEP = 1.0


def new_id() -> str:
    """Short random id for items and batches."""
    return uuid.uuid4().hex[:8]


class BulkArrangementPlanner:
    """Plans facing x capacity x stack blocks on a planogram snapshot.

    Attributes:
        planogram: Snapshot to plan against; never mutated.
        scale: Display scale used to convert the configured gap.
        id_factory: Callable producing new item and batch ids.
    """

    def __init__(
        self,
        planogram: Planogram,
        scale: LengthScale | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.planogram = planogram
        self.scale = scale or LengthScale()
        self.id_factory = id_factory or new_id

    def arrange_block(
        self,
        product: ProductType,
        config: ArrangementConfig,
        operating_item: Item | None = None,
        rows: Sequence[int] | None = None,
    ) -> ArrangementResult:
        """Find a free block and create all of its units.

        The operating item (the unit the dialog was opened on) and, when it
        belongs to a batch, every other member of that batch are replaced by
        the new block. The operating item's row is tried first.

        Args:
            product: Product type to arrange.
            config: Block configuration.
            operating_item: Optional unit the arrangement replaces.
            rows: Restrict the search to these row indices.

        Returns:
            ArrangementResult with every unit of the block, or a rejection
            that commits nothing.
        """
        requested = config.total_units
        rotated = operating_item.rotated if operating_item is not None else False
        footprint = product.footprint(rotated)
        shelf = self.planogram.shelf

        replaced = self._replaced_ids(operating_item)
        candidates = self._candidate_rows(footprint, config, operating_item, rows)
        if not candidates:
            return ArrangementResult.rejected(
                f"A {self._describe(config)} block exceeds every row's bounds",
                requested,
            )

        gap = self.scale.to_length(config.gap_display)
        used_width = config.facing * footprint.width + (config.facing - 1) * gap
        used_depth = config.capacity * footprint.depth
        resolver = DepthSlotResolver(self.planogram)

        for row_index in candidates:
            logger.debug("Searching row %d for a %.1fx%.1f cm block", row_index, used_width, used_depth)
            x0 = 0.0
            limit = shelf.width - used_width + GEOMETRY_TOLERANCE
            while x0 <= limit:
                z0 = resolver.find_depth(row_index, x0, used_width, used_depth, exclude_ids=replaced)
                if z0 is not None:
                    logger.debug("Block anchored on row %d at x=%.1f z=%.1f", row_index, x0, z0)
                    return self._materialize(
                        product, config, footprint, gap, row_index, x0, z0, rotated, replaced
                    )
                x0 += SEARCH_STEP

        return ArrangementResult.rejected(
            f"No free space for a {self._describe(config)} block", requested
        )

    def arrange_plan(
        self, entries: Sequence[tuple[ProductType, ArrangementConfig]]
    ) -> ArrangementPlanResult:
        """Place one new block per entry, all or nothing.

        Each block is searched against a working snapshot that already
        holds the blocks placed for earlier entries, so blocks of one plan
        never collide with each other.

        Args:
            entries: (product type, configuration) pairs in placement order.

        Returns:
            ArrangementPlanResult with every block, or the first failure.
        """
        if not entries:
            return ArrangementPlanResult(success=False, reason="The plan is empty")

        working = self.planogram
        blocks: list[ArrangementResult] = []
        for index, (product, config) in enumerate(entries):
            planner = BulkArrangementPlanner(working, self.scale, self.id_factory)
            result = planner.arrange_block(product, config)
            if not result.success:
                logger.debug("Plan entry %d (%s) rejected: %s", index, product.id, result.reason)
                return ArrangementPlanResult(
                    success=False,
                    reason=f"{product.name}: {result.reason}",
                    failed_index=index,
                )
            blocks.append(result)
            working = working.apply(created=result.created)

        return ArrangementPlanResult(success=True, blocks=tuple(blocks))

    def extend_row(
        self,
        row_index: int,
        product: ProductType,
        config: ArrangementConfig,
    ) -> ArrangementResult:
        """Grow the arrangement of product on a row up to config.

        Anchors at the minimum x and z of the product's units on the row and
        adds only the cells that are not occupied yet, skipping any the Fit
        Checker rejects. Ungrouped units of the product sitting on a cell of
        the extended grid join the reused batch; units elsewhere on the row
        are left alone. Without existing units this falls back to a block
        search on that row alone.

        Returns:
            ArrangementResult whose added count may be below the requested
            count; zero added is a failure.
        """
        requested = config.total_units
        row = self.planogram.shelf.row(row_index)
        if row is None:
            return ArrangementResult.rejected(f"Row {row_index} does not exist", requested)

        existing = [
            item
            for item, _ in self.planogram.placed_in_row(row_index)
            if item.type_id == product.id
        ]
        if not existing:
            return self.arrange_block(product, config, rows=(row_index,))

        anchor_x = min(i.x for i in existing)
        anchor_z = min(i.z for i in existing)
        anchor = min(existing, key=lambda i: (i.x, i.z))
        footprint = product.footprint(anchor.rotated)
        gap = self.scale.to_length(config.gap_display)

        groups = Counter(i.group for i in existing if i.group is not None)
        group = groups.most_common(1)[0][0] if groups else self.id_factory()
        cells = [
            StackCell(
                row=row_index,
                x=anchor_x + f * (footprint.width + gap),
                z=anchor_z + c * footprint.depth,
                width=footprint.width,
                depth=footprint.depth,
            )
            for f in range(config.facing)
            for c in range(config.capacity)
        ]
        regrouped = tuple(
            replace(i, group=group)
            for i in existing
            if i.group is None and self._on_grid(i, cells)
        )
        working = self.planogram.apply(updated=regrouped)
        layers = footprint.layers_in(row.height)

        created: list[Item] = []
        for cell in cells:
            x, z = cell.x, cell.z
            for s in range(config.stack):
                if s >= layers:
                    break
                if self._layer_taken(working, cell, product.id, s):
                    continue
                candidate = Item(
                    id=self.id_factory(),
                    type_id=product.id,
                    row=row_index,
                    x=x,
                    z=z,
                    rotated=anchor.rotated,
                    group=group,
                    stack_layer=s,
                )
                if not FitChecker(working).fits(candidate, row_index, x, z):
                    continue
                created.append(candidate)
                working = working.apply(created=(candidate,))

        logger.debug(
            "Extended row %d with %d of %d requested units", row_index, len(created), requested
        )
        if not created:
            return ArrangementResult.rejected("No free cells left to extend", requested)
        return ArrangementResult(
            success=True,
            created=tuple(created),
            updated=regrouped,
            group=group,
            row_index=row_index,
            requested=requested,
        )

    def _candidate_rows(
        self,
        footprint: Footprint,
        config: ArrangementConfig,
        operating_item: Item | None,
        rows: Sequence[int] | None,
    ) -> list[int]:
        """Rows whose bounds admit the block, operating row first."""
        shelf = self.planogram.shelf
        order = list(rows) if rows is not None else list(range(len(shelf.rows)))
        if operating_item is not None and operating_item.row in order:
            order.remove(operating_item.row)
            order.insert(0, operating_item.row)

        admitted = []
        for index in order:
            row = shelf.row(index)
            if row is None:
                continue
            metrics = compute_metrics(
                config,
                footprint,
                Dimensions(width=shelf.width, height=row.height, depth=row.depth),
                self.scale,
            )
            if metrics.valid:
                admitted.append(index)
        return admitted

    def _replaced_ids(self, operating_item: Item | None) -> frozenset[str]:
        if operating_item is None:
            return frozenset()
        ids = {operating_item.id}
        if operating_item.group is not None:
            ids.update(i.id for i in self.planogram.items if i.group == operating_item.group)
        return frozenset(ids)

    def _materialize(
        self,
        product: ProductType,
        config: ArrangementConfig,
        footprint: Footprint,
        gap: float,
        row_index: int,
        x0: float,
        z0: float,
        rotated: bool,
        replaced: Iterable[str],
    ) -> ArrangementResult:
        group = self.id_factory()
        created = tuple(
            Item(
                id=self.id_factory(),
                type_id=product.id,
                row=row_index,
                x=x0 + f * (footprint.width + gap),
                z=z0 + c * footprint.depth,
                rotated=rotated,
                group=group,
                stack_layer=s,
            )
            for f in range(config.facing)
            for c in range(config.capacity)
            for s in range(config.stack)
        )
        return ArrangementResult(
            success=True,
            created=created,
            removed_ids=frozenset(replaced),
            group=group,
            row_index=row_index,
            requested=config.total_units,
        )

    def _on_grid(self, item: Item, cells: Iterable[StackCell]) -> bool:
        own = self.planogram.stack_cell_of(item)
        return own is not None and any(own.matches(cell) for cell in cells)

    @staticmethod
    def _layer_taken(planogram: Planogram, cell: StackCell, type_id: str, layer: int) -> bool:
        for item in planogram.items:
            if item.type_id != type_id or item.stack_layer != layer:
                continue
            other = planogram.stack_cell_of(item)
            if other is not None and cell.matches(other):
                return True
        return False

    @staticmethod
    def _describe(config: ArrangementConfig) -> str:
        return f"{config.facing}x{config.capacity}x{config.stack}"
