"""Placement, rotation and arrangement outcome value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..entities import Item


@dataclass(frozen=True)
class Pointer:
    """Pointer position in display space."""

    x: float
    y: float


@dataclass(frozen=True)
class DisplayRect:
    """On-screen extent of a row, in display units.

    Attributes:
        left: Left edge.
        top: Top edge (the back of the row).
        width: Extent along the shelf width.
        height: Extent along the row depth; the bottom edge is the front.
    """

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Display extent must be non-negative")

    def contains(self, pointer: Pointer) -> bool:
        """Check whether the pointer lies inside this extent (edges included)."""
        return (
            self.left <= pointer.x <= self.left + self.width
            and self.top <= pointer.y <= self.top + self.height
        )


@dataclass(frozen=True)
class RowContext:
    """Target row as seen by the shell during a drag.

    Attributes:
        index: Row index in the shelf.
        bounds: On-screen extent of the row.
        height: Physical row height in cm.
        depth: Physical row depth in cm.
    """

    index: int
    bounds: DisplayRect
    height: float
    depth: float


@dataclass(frozen=True)
class PlacementProposal:
    """Read-only placement preview.

    Attributes:
        valid: Whether the Fit Checker accepts the position.
        row_index: Target row index.
        x: Horizontal offset in cm.
        z: Depth offset in cm.
        snapped: True when the position was snapped onto a stack cell.
    """

    valid: bool
    row_index: int
    x: float
    z: float
    snapped: bool = False


@dataclass(frozen=True)
class RotationResult:
    """Outcome of a rotation toggle.

    Attributes:
        accepted: Whether the rotation can be committed.
        x: Horizontal offset to commit (unchanged for unplaced items).
        z: Depth offset to commit (unchanged for unplaced items).
        reason: Human-readable rejection reason, empty when accepted.
    """

    accepted: bool
    x: float = 0.0
    z: float = 0.0
    reason: str = ""


@dataclass(frozen=True)
class ArrangementResult:
    """Outcome of a bulk arrangement.

    Attributes:
        success: Whether anything is to be committed.
        created: New items to add.
        updated: Existing items whose fields changed (for example regrouped).
        removed_ids: Ids of existing items replaced by this arrangement.
        group: Batch id shared by the arranged items.
        row_index: Row the block was anchored on.
        requested: Units the configuration asked for.
        reason: Human-readable rejection reason, empty on success.
    """

    success: bool
    created: tuple["Item", ...] = ()
    updated: tuple["Item", ...] = ()
    removed_ids: frozenset[str] = field(default_factory=frozenset)
    group: str | None = None
    row_index: int | None = None
    requested: int = 0
    reason: str = ""

    @property
    def added(self) -> int:
        """Number of units actually added."""
        return len(self.created)

    @classmethod
    def rejected(cls, reason: str, requested: int = 0) -> "ArrangementResult":
        """Build a failure result that commits nothing."""
        return cls(success=False, requested=requested, reason=reason)


@dataclass(frozen=True)
class RevalidationReport:
    """Items moved to the pile by a revalidation pass.

    Attributes:
        moved_ids: Ids of items that no longer fit, in scan order.
        checked: Number of placed items examined.
    """

    moved_ids: tuple[str, ...] = ()
    checked: int = 0

    @property
    def moved(self) -> int:
        """Number of items moved to the pile."""
        return len(self.moved_ids)


@dataclass(frozen=True)
class ArrangementPlanResult:
    """Outcome of applying several block arrangements together.

    Attributes:
        success: Whether every block was placed.
        blocks: One successful ArrangementResult per plan entry, in order.
        reason: Rejection reason of the failing entry, empty on success.
        failed_index: Index of the entry that could not be placed.
    """

    success: bool
    blocks: tuple[ArrangementResult, ...] = ()
    reason: str = ""
    failed_index: int | None = None

    @property
    def created(self) -> tuple["Item", ...]:
        """Every unit created by the plan."""
        return tuple(item for block in self.blocks for item in block.created)

    @property
    def removed_ids(self) -> frozenset[str]:
        """Ids replaced by any block of the plan."""
        return frozenset().union(*(block.removed_ids for block in self.blocks))

    @property
    def added(self) -> int:
        """Number of units actually added."""
        return len(self.created)
