"""Domain entities for shelf layouts."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator

from .value_objects import Footprint, StackCell

DEFAULT_ROW_HEIGHT = 40.0
DEFAULT_ROW_DEPTH = 50.0
DEFAULT_SHELF_WIDTH = 200.0
DEFAULT_COLOR = "#6aa8ff"


@dataclass(frozen=True)
class Row:
    """One physical shelf deck.

    Attributes:
        height: Clear height above the deck in cm.
        depth: Deck depth in cm.
    """

    height: float
    depth: float

    def __post_init__(self) -> None:
        if self.height <= 0 or self.depth <= 0:
            raise ValueError("Row height and depth must be positive")


@dataclass(frozen=True)
class Shelf:
    """A shelf unit: a common width and an ordered stack of rows.

    Row order is the physical order of the decks, and rows are identified
    by their position only.
    """

    width: float
    rows: tuple[Row, ...]

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("Shelf width must be positive")
        if not self.rows:
            raise ValueError("Shelf must have at least one row")

    @classmethod
    def default(cls) -> "Shelf":
        """The out-of-the-box four-row shelf."""
        return cls(
            width=DEFAULT_SHELF_WIDTH,
            rows=(
                Row(height=40.0, depth=50.0),
                Row(height=40.0, depth=50.0),
                Row(height=50.0, depth=50.0),
                Row(height=50.0, depth=50.0),
            ),
        )

    def row(self, index: int | None) -> Row | None:
        """Row at index, or None when the index is out of range."""
        if index is None or index < 0 or index >= len(self.rows):
            return None
        return self.rows[index]


@dataclass(frozen=True)
class ProductType:
    """A product definition with nominal dimensions.

    Color and image are display attributes only.

    Attributes:
        id: Unique type id.
        name: Display name.
        w: Nominal width in cm.
        h: Nominal height in cm.
        d: Nominal depth in cm.
        color: Fallback display color.
        image: Optional image reference.
    """

    id: str
    name: str
    w: float
    h: float
    d: float
    color: str = DEFAULT_COLOR
    image: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Product type id must not be empty")
        if self.w <= 0 or self.h <= 0 or self.d <= 0:
            raise ValueError("Product dimensions must be positive")

    def footprint(self, rotated: bool = False) -> Footprint:
        """Effective dimensions; rotation swaps width and height."""
        if rotated:
            return Footprint(width=self.h, height=self.w, depth=self.d)
        return Footprint(width=self.w, height=self.h, depth=self.d)


@dataclass(frozen=True)
class Item:
    """A physical unit, either on a row or in the pile.

    Attributes:
        id: Unique item id.
        type_id: Referenced product type; a dangling reference makes the
            item inert.
        row: Row index, or None while the item is in the pile.
        x: Offset from the row's left edge in cm.
        z: Offset from the row's front edge in cm.
        rotated: Width and height swapped when True.
        group: Batch id shared by units arranged together.
        stack_layer: Vertical layer within a stack cell.
    """

    id: str
    type_id: str
    row: int | None = None
    x: float = 0.0
    z: float = 0.0
    rotated: bool = False
    group: str | None = None
    stack_layer: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Item id must not be empty")
        if self.row is not None and self.row < 0:
            raise ValueError("Row index must be non-negative")
        if self.stack_layer < 0:
            raise ValueError("Stack layer must be non-negative")

    @property
    def is_placed(self) -> bool:
        """True when the item sits on a row."""
        return self.row is not None

    def placed_at(
        self, row: int, x: float, z: float, stack_layer: int = 0
    ) -> "Item":
        """Copy of this item at a new row position."""
        return replace(self, row=row, x=x, z=z, stack_layer=stack_layer)

    def to_pile(self) -> "Item":
        """Copy of this item moved to the pile."""
        return replace(self, row=None, x=0.0, z=0.0, stack_layer=0)


@dataclass(frozen=True)
class Planogram:
    """Snapshot of a shelf, its product library and all items.

    Engine services only read snapshots; changes produce new snapshots.
    """

    shelf: Shelf
    types: tuple[ProductType, ...] = ()
    items: tuple[Item, ...] = ()
    _types_by_id: dict[str, ProductType] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "_types_by_id", {t.id: t for t in self.types})

    def type_of(self, item: Item) -> ProductType | None:
        """Product type of an item, or None for a dangling reference."""
        return self._types_by_id.get(item.type_id)

    def get_type(self, type_id: str) -> ProductType | None:
        """Product type by id."""
        return self._types_by_id.get(type_id)

    def get_item(self, item_id: str) -> Item | None:
        """Item by id."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def footprint_of(self, item: Item, rotated: bool | None = None) -> Footprint | None:
        """Effective footprint of an item, optionally with an orientation override."""
        product = self.type_of(item)
        if product is None:
            return None
        return product.footprint(item.rotated if rotated is None else rotated)

    def stack_cell_of(self, item: Item) -> StackCell | None:
        """Stack cell a placed item occupies."""
        footprint = self.footprint_of(item)
        if footprint is None or item.row is None:
            return None
        return StackCell(
            row=item.row,
            x=item.x,
            z=item.z,
            width=footprint.width,
            depth=footprint.depth,
        )

    def placed_in_row(
        self, row_index: int, exclude_ids: Iterable[str] = ()
    ) -> Iterator[tuple[Item, Footprint]]:
        """Yield resolvable items on a row with their footprints."""
        excluded = set(exclude_ids)
        for item in self.items:
            if item.row != row_index or item.id in excluded:
                continue
            footprint = self.footprint_of(item)
            if footprint is None:
                continue
            yield item, footprint

    @property
    def pile(self) -> tuple[Item, ...]:
        """Items without a row assignment."""
        return tuple(i for i in self.items if i.row is None)

    def with_shelf(self, shelf: Shelf) -> "Planogram":
        """Copy with a different shelf."""
        return Planogram(shelf=shelf, types=self.types, items=self.items)

    def with_types(self, types: Iterable[ProductType]) -> "Planogram":
        """Copy with a different product library."""
        return Planogram(shelf=self.shelf, types=tuple(types), items=self.items)

    def with_items(self, items: Iterable[Item]) -> "Planogram":
        """Copy with a different item collection."""
        return Planogram(shelf=self.shelf, types=self.types, items=tuple(items))

    def apply(
        self,
        created: Iterable[Item] = (),
        updated: Iterable[Item] = (),
        removed_ids: Iterable[str] = (),
    ) -> "Planogram":
        """Copy with items removed, replaced by id, and appended."""
        removed = set(removed_ids)
        replacements = {i.id: i for i in updated}
        kept = [
            replacements.get(i.id, i) for i in self.items if i.id not in removed
        ]
        return self.with_items([*kept, *created])
