"""Legality checks for placing an item on a row.

A position is legal when the item's effective footprint stays inside the
shelf width, the row depth and the row height, and it does not overlap any
other placed item on the row. The only permitted overlap is vertical
stacking: both items belong to the same batch, occupy an identical stack
cell, and the cell still has a free layer.
"""

from __future__ import annotations

from ..entities import Item, Planogram
from ..value_objects import GEOMETRY_TOLERANCE, Footprint, StackCell

__all__ = ["FitChecker"]


class FitChecker:
    """Pure predicate over a planogram snapshot."""

    def __init__(self, planogram: Planogram) -> None:
        self.planogram = planogram

    def fits(
        self,
        item: Item,
        row_index: int,
        x: float,
        z: float,
        rotated: bool | None = None,
    ) -> bool:
        """Check whether item may occupy (row_index, x, z).

        Args:
            item: The candidate item. Its own current position is ignored.
            row_index: Target row index.
            x: Candidate horizontal offset in cm.
            z: Candidate depth offset in cm.
            rotated: Orientation override; defaults to the item's own.

        Returns:
            True if the position is within bounds and collision-free, or
            collides only with stack mates that leave room for one more layer.
        """
        footprint = self.planogram.footprint_of(item, rotated)
        if footprint is None:
            return False
        row = self.planogram.shelf.row(row_index)
        if row is None:
            return False
        if not self.within_bounds(footprint, row_index, x, z):
            return False

        target = footprint.rect_at(x, z)
        cell = StackCell(row=row_index, x=x, z=z, width=footprint.width, depth=footprint.depth)
        stack_mates = 0
        for other, other_fp in self.planogram.placed_in_row(row_index, exclude_ids=(item.id,)):
            if not target.overlaps(other_fp.rect_at(other.x, other.z)):
                continue
            if not self._can_share_cell(item, cell, other, other_fp, row_index):
                return False
            stack_mates += 1

        if stack_mates and stack_mates + 1 > footprint.layers_in(row.height):
            return False
        return True

    def within_bounds(
        self, footprint: Footprint, row_index: int, x: float, z: float
    ) -> bool:
        """Check shelf/row bounds only, ignoring other items."""
        row = self.planogram.shelf.row(row_index)
        if row is None:
            return False
        width = self.planogram.shelf.width
        tol = GEOMETRY_TOLERANCE
        if footprint.height > row.height + tol:
            return False
        if footprint.width > width + tol or footprint.depth > row.depth + tol:
            return False
        if x < -tol or z < -tol:
            return False
        if x + footprint.width > width + tol:
            return False
        if z + footprint.depth > row.depth + tol:
            return False
        return True

    def stack_occupancy(
        self, cell: StackCell, group: str | None, exclude_ids: tuple[str, ...] = ()
    ) -> list[Item]:
        """Items of the given batch occupying exactly this cell."""
        if group is None:
            return []
        occupants = []
        for other, other_fp in self.planogram.placed_in_row(cell.row, exclude_ids):
            if other.group != group:
                continue
            other_cell = StackCell(
                row=cell.row,
                x=other.x,
                z=other.z,
                width=other_fp.width,
                depth=other_fp.depth,
            )
            if cell.matches(other_cell):
                occupants.append(other)
        return occupants

    def free_layer(self, item: Item, row_index: int, x: float, z: float) -> int:
        """Lowest stack layer not used by the item's stack mates at a cell."""
        footprint = self.planogram.footprint_of(item)
        if footprint is None or item.group is None:
            return 0
        cell = StackCell(row=row_index, x=x, z=z, width=footprint.width, depth=footprint.depth)
        used = {m.stack_layer for m in self.stack_occupancy(cell, item.group, (item.id,))}
        layer = 0
        while layer in used:
            layer += 1
        return layer

    @staticmethod
    def _can_share_cell(
        item: Item,
        cell: StackCell,
        other: Item,
        other_fp: Footprint,
        row_index: int,
    ) -> bool:
        if item.group is None or other.group != item.group:
            return False
        other_cell = StackCell(
            row=row_index,
            x=other.x,
            z=other.z,
            width=other_fp.width,
            depth=other_fp.depth,
        )
        return cell.matches(other_cell)
