"""Pointer-driven placement previews.

The proposer turns a pointer position over a row into a concrete
(row, x, z) candidate and reports whether the Fit Checker accepts it. It
never mutates anything, so the shell may call it on every pointer move.
"""

from __future__ import annotations

from typing import Iterable

from ..entities import Item, Planogram
from ..value_objects import (
    LengthScale,
    PlacementProposal,
    Pointer,
    RowContext,
    StackCell,
    clamp,
    nearly_equal,
)
from .depth_slot import DepthSlotResolver
from .fit_checker import FitChecker

__all__ = ["PlacementProposer", "row_under_pointer"]


class PlacementProposer:
    """Composes pointer input into legality-checked placement proposals."""

    def __init__(self, planogram: Planogram, scale: LengthScale | None = None) -> None:
        self.planogram = planogram
        self.scale = scale or LengthScale()
        self.fit_checker = FitChecker(planogram)
        self.depth_resolver = DepthSlotResolver(planogram)

    def propose(
        self, item: Item, row_context: RowContext, pointer: Pointer
    ) -> PlacementProposal:
        """Propose a placement for item under the pointer.

        The item is centered horizontally under the pointer. Batched items
        snap onto the nearest matching stack cell with a free layer;
        otherwise the frontmost free depth is used, falling back to the
        pointer's depth (which may be an invalid position).

        Args:
            item: Item being dragged.
            row_context: Target row index, on-screen extent and dimensions.
            pointer: Pointer position in display space.

        Returns:
            A PlacementProposal; valid reflects true legality.
        """
        index = row_context.index
        footprint = self.planogram.footprint_of(item)
        if footprint is None:
            return PlacementProposal(valid=False, row_index=index, x=0.0, z=0.0)

        bounds = row_context.bounds
        local_x = clamp(pointer.x - bounds.left, 0.0, bounds.width)
        x = self.scale.to_length(local_x) - footprint.width / 2
        x = clamp(x, 0.0, self.planogram.shelf.width - footprint.width)

        snap = self._snap_to_stack(item, index, x)
        if snap is not None:
            x, z = snap
            valid = self.fit_checker.fits(item, index, x, z)
            return PlacementProposal(valid=valid, row_index=index, x=x, z=z, snapped=True)

        z = self.depth_resolver.find_depth(index, x, footprint.width, footprint.depth, item.id)
        if z is None:
            local_y = clamp(pointer.y - bounds.top, 0.0, bounds.height)
            from_front = bounds.height - local_y
            z = clamp(
                self.scale.to_length(from_front) - footprint.depth / 2,
                0.0,
                row_context.depth - footprint.depth,
            )

        valid = self.fit_checker.fits(item, index, x, z)
        return PlacementProposal(valid=valid, row_index=index, x=x, z=z)

    def _snap_to_stack(
        self, item: Item, row_index: int, x: float
    ) -> tuple[float, float] | None:
        """Nearest same-batch cell with a free layer, as (x, z)."""
        if item.group is None:
            return None
        footprint = self.planogram.footprint_of(item)
        row = self.planogram.shelf.row(row_index)
        if footprint is None or row is None:
            return None

        best: Item | None = None
        for other, other_fp in self.planogram.placed_in_row(row_index, (item.id,)):
            if other.group != item.group:
                continue
            if not (
                nearly_equal(other_fp.width, footprint.width)
                and nearly_equal(other_fp.depth, footprint.depth)
            ):
                continue
            if best is None or abs(other.x - x) < abs(best.x - x):
                best = other
        if best is None:
            return None

        cell = StackCell(
            row=row_index, x=best.x, z=best.z, width=footprint.width, depth=footprint.depth
        )
        occupancy = len(self.fit_checker.stack_occupancy(cell, item.group, (item.id,)))
        if occupancy >= footprint.layers_in(row.height):
            return None
        return best.x, best.z


def row_under_pointer(
    rows: Iterable[RowContext], pointer: Pointer
) -> RowContext | None:
    """First row whose on-screen extent contains the pointer."""
    for context in rows:
        if context.bounds.contains(pointer):
            return context
    return None
