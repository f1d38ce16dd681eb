"""Shelf and row edits.

Rows are identified by position only, so inserting or deleting a row
re-derives the row index of every item below it. None of these edits
checks item legality; callers run LayoutRevalidator afterwards.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import replace

from ..entities import (
    DEFAULT_ROW_DEPTH,
    DEFAULT_ROW_HEIGHT,
    Planogram,
    Row,
    Shelf,
)

__all__ = [
    "MIN_ROW_DEPTH",
    "MIN_ROW_DIMENSION",
    "MIN_SHELF_WIDTH",
    "ShelfReconfigurationService",
    "majority_depth",
]

MIN_SHELF_WIDTH = 10.0
MIN_ROW_DEPTH = 5.0
MIN_ROW_DIMENSION = 1.0


def majority_depth(shelf: Shelf | None) -> float:
    """Most common row depth; the first row's depth wins ties."""
    if shelf is None or not shelf.rows:
        return DEFAULT_ROW_DEPTH
    counts = Counter(r.depth for r in shelf.rows)
    best = shelf.rows[0].depth
    best_count = 0
    for depth, count in counts.items():
        if count > best_count:
            best, best_count = depth, count
    return best


class ShelfReconfigurationService:
    """Produces reconfigured planogram snapshots."""

    def set_width(self, planogram: Planogram, width: float) -> Planogram:
        """Change the shelf width (at least MIN_SHELF_WIDTH)."""
        shelf = replace(planogram.shelf, width=max(MIN_SHELF_WIDTH, width))
        return planogram.with_shelf(shelf)

    def set_all_depths(self, planogram: Planogram, depth: float) -> Planogram:
        """Apply one depth (at least MIN_ROW_DEPTH) to every row."""
        depth = max(MIN_ROW_DEPTH, depth)
        rows = tuple(replace(r, depth=depth) for r in planogram.shelf.rows)
        return planogram.with_shelf(replace(planogram.shelf, rows=rows))

    def set_row_dimensions(
        self,
        planogram: Planogram,
        index: int,
        height: float | None = None,
        depth: float | None = None,
    ) -> Planogram:
        """Change one row's height and/or depth (each at least MIN_ROW_DIMENSION)."""
        row = self._require_row(planogram.shelf, index)
        updated = Row(
            height=row.height if height is None else max(MIN_ROW_DIMENSION, height),
            depth=row.depth if depth is None else max(MIN_ROW_DIMENSION, depth),
        )
        rows = list(planogram.shelf.rows)
        rows[index] = updated
        return planogram.with_shelf(replace(planogram.shelf, rows=tuple(rows)))

    def rebuild_rows(
        self,
        planogram: Planogram,
        count: int,
        depth: float | None = None,
        height: float = DEFAULT_ROW_HEIGHT,
    ) -> Planogram:
        """Replace every row with count identical rows.

        Items keep their row index; those pointing past the new last row are
        left for revalidation to move to the pile.
        """
        count = max(1, int(count))
        depth = max(MIN_ROW_DEPTH, depth if depth is not None else majority_depth(planogram.shelf))
        rows = tuple(Row(height=height, depth=depth) for _ in range(count))
        return planogram.with_shelf(replace(planogram.shelf, rows=rows))

    def duplicate_row(self, planogram: Planogram, index: int) -> Planogram:
        """Insert a copy of row index right after it."""
        row = self._require_row(planogram.shelf, index)
        rows = list(planogram.shelf.rows)
        rows.insert(index + 1, Row(height=row.height, depth=row.depth))
        items = tuple(
            replace(i, row=i.row + 1) if i.row is not None and i.row > index else i
            for i in planogram.items
        )
        shelf = replace(planogram.shelf, rows=tuple(rows))
        return Planogram(shelf=shelf, types=planogram.types, items=items)

    def delete_row(self, planogram: Planogram, index: int) -> Planogram:
        """Remove row index; its items go to the pile.

        Deleting the only row leaves a single default row behind.
        """
        self._require_row(planogram.shelf, index)
        rows = list(planogram.shelf.rows)
        del rows[index]
        if not rows:
            rows = [Row(height=DEFAULT_ROW_HEIGHT, depth=majority_depth(planogram.shelf))]

        items = []
        for item in planogram.items:
            if item.row == index:
                items.append(item.to_pile())
            elif item.row is not None and item.row > index:
                items.append(replace(item, row=item.row - 1))
            else:
                items.append(item)
        shelf = replace(planogram.shelf, rows=tuple(rows))
        return Planogram(shelf=shelf, types=planogram.types, items=tuple(items))

    @staticmethod
    def _require_row(shelf: Shelf, index: int) -> Row:
        row = shelf.row(index)
        if row is None:
            raise IndexError(f"Row index {index} out of range (0-{len(shelf.rows) - 1})")
        return row
