"""Core geometry value objects for shelf placement."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Absolute tolerance (cm) used when comparing coordinates and dimensions.
GEOMETRY_TOLERANCE = 1e-6

DEFAULT_PX_PER_CM = 4.0
MIN_PX_PER_CM = 0.5


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]; low wins when the range is empty."""
    return max(low, min(high, value))


def nearly_equal(a: float, b: float, tolerance: float = GEOMETRY_TOLERANCE) -> bool:
    """Check whether two lengths are equal within tolerance."""
    return abs(a - b) <= tolerance


@dataclass(frozen=True)
class Rect:
    """Axis-aligned footprint rectangle in the x (width) by z (depth) plane.

    Attributes:
        x1: Left edge in cm.
        x2: Right edge in cm.
        z1: Front edge in cm.
        z2: Back edge in cm.
    """

    x1: float
    x2: float
    z1: float
    z2: float

    @classmethod
    def at(cls, x: float, z: float, width: float, depth: float) -> "Rect":
        """Build a rectangle from its front-left corner and size."""
        return cls(x1=x, x2=x + width, z1=z, z2=z + depth)

    def overlaps(self, other: "Rect") -> bool:
        """Check for a strictly positive-area intersection.

        Rectangles that only touch along an edge do not overlap.
        """
        return (
            self.x1 < other.x2
            and self.x2 > other.x1
            and self.z1 < other.z2
            and self.z2 > other.z1
        )


@dataclass(frozen=True)
class Dimensions:
    """Immutable width x height x depth in cm."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0 or self.depth <= 0:
            raise ValueError("All dimensions must be positive")


@dataclass(frozen=True)
class Footprint(Dimensions):
    """Effective dimensions of an item as oriented on the shelf.

    Width runs along x, depth along z.
    """

    def rect_at(self, x: float, z: float) -> Rect:
        """Footprint rectangle with front-left corner at (x, z)."""
        return Rect.at(x, z, self.width, self.depth)

    def layers_in(self, row_height: float) -> int:
        """Number of vertical layers of this footprint a row can hold."""
        return int((row_height + GEOMETRY_TOLERANCE) // self.height)


@dataclass(frozen=True)
class LengthScale:
    """Conversion between physical length (cm) and display units (px).

    Attributes:
        px_per_cm: Display units per centimeter.
    """

    px_per_cm: float = DEFAULT_PX_PER_CM

    def __post_init__(self) -> None:
        if self.px_per_cm <= 0:
            raise ValueError("Scale must be positive")

    @classmethod
    def from_input(cls, value: object) -> "LengthScale":
        """Build a scale from raw user input, clamping to the minimum zoom."""
        try:
            px = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return cls()
        if not math.isfinite(px) or px == 0:
            return cls()
        return cls(px_per_cm=max(MIN_PX_PER_CM, px))

    def to_display(self, cm: float) -> float:
        """Convert centimeters to display units."""
        return cm * self.px_per_cm

    def to_length(self, px: float) -> float:
        """Convert display units to centimeters."""
        return px / max(0.0001, self.px_per_cm)


@dataclass(frozen=True)
class StackCell:
    """Identity of a footprint cell that vertical layers may share.

    Two cells match when they are on the same row and their position and
    size agree within GEOMETRY_TOLERANCE. Near misses never match.

    Attributes:
        row: Row index.
        x: Left edge in cm.
        z: Front edge in cm.
        width: Effective width in cm.
        depth: Effective depth in cm.
    """

    row: int
    x: float
    z: float
    width: float
    depth: float

    def matches(self, other: "StackCell") -> bool:
        """Check whether both cells describe the same footprint."""
        return (
            self.row == other.row
            and nearly_equal(self.x, other.x)
            and nearly_equal(self.z, other.z)
            and nearly_equal(self.width, other.width)
            and nearly_equal(self.depth, other.depth)
        )
