"""Frontmost free depth slot search along a row."""

from __future__ import annotations

from typing import Iterable

from ..entities import Planogram
from ..value_objects import GEOMETRY_TOLERANCE

__all__ = ["DepthSlotResolver"]


class DepthSlotResolver:
    """Finds the smallest legal depth offset for a horizontal span.

    Only occupants whose horizontal span intersects the requested span
    constrain the result. The scan is first-fit: it returns the frontmost
    gap deep enough, not the largest one.
    """

    def __init__(self, planogram: Planogram) -> None:
        self.planogram = planogram

    def occupied_intervals(
        self,
        row_index: int,
        x: float,
        width: float,
        exclude_ids: Iterable[str] = (),
    ) -> list[tuple[float, float]]:
        """Depth intervals [z, z + depth) blocked within [x, x + width).

        Returns:
            Intervals sorted by start.
        """
        x1, x2 = x, x + width
        intervals = []
        for other, footprint in self.planogram.placed_in_row(row_index, exclude_ids):
            ox1, ox2 = other.x, other.x + footprint.width
            if x2 <= ox1 or x1 >= ox2:
                continue
            intervals.append((other.z, other.z + footprint.depth))
        intervals.sort(key=lambda span: span[0])
        return intervals

    def find_depth(
        self,
        row_index: int,
        x: float,
        width: float,
        depth: float,
        exclude_id: str | None = None,
        *,
        exclude_ids: Iterable[str] = (),
    ) -> float | None:
        """Find the frontmost depth offset where [x, x+width) x [z, z+depth) is free.

        Args:
            row_index: Row to search.
            x: Left edge of the span in cm.
            width: Span width in cm.
            depth: Required depth in cm.
            exclude_id: Item to ignore (typically the one being moved).
            exclude_ids: Further items to ignore.

        Returns:
            The depth offset, or None when no gap is deep enough.
        """
        row = self.planogram.shelf.row(row_index)
        if row is None:
            return None
        excluded = set(exclude_ids)
        if exclude_id is not None:
            excluded.add(exclude_id)

        cursor = 0.0
        for start, end in self.occupied_intervals(row_index, x, width, excluded):
            if cursor + depth <= start + GEOMETRY_TOLERANCE:
                break
            cursor = max(cursor, end)
            if cursor > row.depth:
                return None
        if cursor + depth <= row.depth + GEOMETRY_TOLERANCE:
            return cursor
        return None
