"""Layout revalidation after shelf or row changes."""

from __future__ import annotations

import logging

from ..entities import Item, Planogram
from ..value_objects import GEOMETRY_TOLERANCE, RevalidationReport
from .fit_checker import FitChecker

logger = logging.getLogger(__name__)

__all__ = ["LayoutRevalidator"]


class LayoutRevalidator:
    """Moves items that no longer satisfy the placement invariants to the pile.

    Placed items are re-admitted one at a time, lowest stack layer first,
    against the items already re-admitted. An item is kept when its row
    still exists, its stack layer still fits under the row height, and the
    Fit Checker accepts its position. Items with a dangling product type
    are inert and left as they are.
    """

    def revalidate(self, planogram: Planogram) -> tuple[Planogram, RevalidationReport]:
        """Run the pass.

        Returns:
            The revalidated snapshot (item order preserved) and a report of
            the moved items.
        """
        order = sorted(
            (
                (position, item)
                for position, item in enumerate(planogram.items)
                if item.row is not None and planogram.type_of(item) is not None
            ),
            key=lambda entry: (entry[1].row, entry[1].stack_layer, entry[0]),
        )
        placed_ids = {item.id for _, item in order}

        # Start from everything except the placed items under review.
        accepted = planogram.with_items(i for i in planogram.items if i.id not in placed_ids)
        moved: dict[str, Item] = {}
        for _, item in order:
            if self._still_fits(accepted, item):
                accepted = accepted.apply(created=(item,))
            else:
                moved[item.id] = item.to_pile()

        if moved:
            logger.info("Revalidation moved %d item(s) to the pile", len(moved))
        items = tuple(moved.get(i.id, i) for i in planogram.items)
        report = RevalidationReport(
            moved_ids=tuple(i.id for _, i in order if i.id in moved),
            checked=len(order),
        )
        return planogram.with_items(items), report

    @staticmethod
    def _still_fits(accepted: Planogram, item: Item) -> bool:
        row = accepted.shelf.row(item.row)
        footprint = accepted.footprint_of(item)
        if row is None or footprint is None:
            return False
        if (item.stack_layer + 1) * footprint.height > row.height + GEOMETRY_TOLERANCE:
            return False
        return FitChecker(accepted).fits(item, item.row or 0, item.x, item.z)
