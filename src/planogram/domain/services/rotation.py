"""Orientation toggling with re-validation."""

from __future__ import annotations

from ..entities import Item, Planogram
from ..value_objects import RotationResult, clamp
from .depth_slot import DepthSlotResolver
from .fit_checker import FitChecker

__all__ = ["RotationResolver"]


class RotationResolver:
    """Decides where a rotated item can stay, if anywhere."""

    def __init__(self, planogram: Planogram) -> None:
        self.planogram = planogram
        self.fit_checker = FitChecker(planogram)
        self.depth_resolver = DepthSlotResolver(planogram)

    def rotate(self, item: Item) -> RotationResult:
        """Resolve the position of item with its orientation flipped.

        Unplaced items always rotate. Placed items keep their depth when the
        new footprint fits there (after clamping x into the shelf); otherwise
        the frontmost free depth at that x is tried.

        Returns:
            RotationResult with the position to commit, or a rejection.
        """
        if item.row is None:
            return RotationResult(accepted=True, x=item.x, z=item.z)

        flipped = not item.rotated
        footprint = self.planogram.footprint_of(item, rotated=flipped)
        if footprint is None:
            return RotationResult(accepted=False, reason="Unknown product type")

        row_index = item.row
        x = clamp(item.x, 0.0, self.planogram.shelf.width - footprint.width)
        if self.fit_checker.fits(item, row_index, x, item.z, rotated=flipped):
            return RotationResult(accepted=True, x=x, z=item.z)

        z = self.depth_resolver.find_depth(
            row_index, x, footprint.width, footprint.depth, item.id
        )
        if z is not None and self.fit_checker.fits(item, row_index, x, z, rotated=flipped):
            return RotationResult(accepted=True, x=x, z=z)

        return RotationResult(accepted=False, reason="No room to rotate here")
