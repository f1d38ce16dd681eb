"""Tests for FitChecker bounds, collision and stacking rules."""

from __future__ import annotations

import pytest

from planogram.domain.entities import Item, ProductType, Shelf
from planogram.domain.services import FitChecker
from planogram.domain.value_objects import StackCell


class TestBounds:
    """Tests for shelf and row bounds."""

    @pytest.fixture
    def checker(self, single_row_shelf: Shelf, make_planogram) -> FitChecker:
        return FitChecker(make_planogram(single_row_shelf))

    @pytest.mark.parametrize(
        "x,z,expected",
        [
            (0, 0, True),
            (180, 40, True),
            (-0.5, 0, False),
            (0, -0.5, False),
            (181, 0, False),
            (0, 41, False),
        ],
    )
    def test_position_bounds(
        self, checker: FitChecker, x: float, z: float, expected: bool
    ) -> None:
        item = Item(id="a", type_id="box")
        assert checker.fits(item, 0, x, z) is expected

    def test_unknown_row(self, checker: FitChecker) -> None:
        assert not checker.fits(Item(id="a", type_id="box"), 3, 0, 0)

    def test_too_tall_for_row(self, single_row_shelf: Shelf, make_planogram) -> None:
        tall = ProductType(id="tall", name="Tall", w=10, h=45, d=10)
        checker = FitChecker(make_planogram(single_row_shelf, types=[tall]))
        assert not checker.fits(Item(id="a", type_id="tall"), 0, 0, 0)

    def test_rotated_override(self, single_row_shelf: Shelf, make_planogram) -> None:
        """Rotated, the 20 cm wide box is 30 cm wide and no longer fits at x=175."""
        checker = FitChecker(make_planogram(single_row_shelf))
        item = Item(id="a", type_id="box")
        assert checker.fits(item, 0, 175, 0, rotated=False)
        assert not checker.fits(item, 0, 175, 0, rotated=True)

    def test_dangling_type_never_fits(self, checker: FitChecker) -> None:
        assert not checker.fits(Item(id="a", type_id="gone"), 0, 0, 0)


class TestCollisions:
    """Tests for collisions with other placed items."""

    def test_overlap_rejected(self, single_row_shelf: Shelf, make_planogram) -> None:
        occupant = Item(id="a", type_id="box", row=0, x=0, z=0)
        checker = FitChecker(make_planogram(single_row_shelf, [occupant]))
        assert not checker.fits(Item(id="b", type_id="box"), 0, 10, 5)

    def test_touching_is_allowed(self, single_row_shelf: Shelf, make_planogram) -> None:
        occupant = Item(id="a", type_id="box", row=0, x=0, z=0)
        checker = FitChecker(make_planogram(single_row_shelf, [occupant]))
        assert checker.fits(Item(id="b", type_id="box"), 0, 20, 0)
        assert checker.fits(Item(id="b", type_id="box"), 0, 0, 10)

    def test_item_ignores_its_own_position(
        self, single_row_shelf: Shelf, make_planogram
    ) -> None:
        item = Item(id="a", type_id="box", row=0, x=0, z=0)
        checker = FitChecker(make_planogram(single_row_shelf, [item]))
        assert checker.fits(item, 0, 5, 0)

    def test_dangling_occupant_is_inert(self, single_row_shelf: Shelf, make_planogram) -> None:
        ghost = Item(id="ghost", type_id="gone", row=0, x=0, z=0)
        checker = FitChecker(make_planogram(single_row_shelf, [ghost]))
        assert checker.fits(Item(id="b", type_id="box"), 0, 0, 0)

    def test_other_rows_do_not_collide(self, make_planogram) -> None:
        occupant = Item(id="a", type_id="box", row=1, x=0, z=0)
        checker = FitChecker(make_planogram(Shelf.default(), [occupant]))
        assert checker.fits(Item(id="b", type_id="box"), 0, 0, 0)


class TestStacking:
    """Tests for the vertical stacking exception."""

    def _stack(self, count: int, group: str = "g") -> list[Item]:
        return [
            Item(id=f"s{layer}", type_id="box", row=0, x=40, z=10, group=group, stack_layer=layer)
            for layer in range(count)
        ]

    def test_same_batch_same_cell_stacks(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(2)))
        assert checker.fits(Item(id="new", type_id="box", group="g"), 0, 40, 10)

    def test_fourth_layer_rejected(self, tall_row_shelf: Shelf, make_planogram) -> None:
        """A 100 cm row holds floor(100/30) = 3 layers of a 30 cm unit."""
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(3)))
        assert not checker.fits(Item(id="new", type_id="box", group="g"), 0, 40, 10)

    def test_different_batch_rejected(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(1)))
        assert not checker.fits(Item(id="new", type_id="box", group="other"), 0, 40, 10)

    def test_ungrouped_rejected(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(1)))
        assert not checker.fits(Item(id="new", type_id="box"), 0, 40, 10)

    def test_near_miss_cell_rejected(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(1)))
        assert not checker.fits(Item(id="new", type_id="box", group="g"), 0, 40.0001, 10)

    def test_different_footprint_rejected(self, tall_row_shelf: Shelf, make_planogram) -> None:
        """A rotated unit of the same batch has a different cell size."""
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(1)))
        candidate = Item(id="new", type_id="box", group="g", rotated=True)
        assert not checker.fits(candidate, 0, 40, 10)

    def test_no_stacking_when_row_holds_one_layer(
        self, single_row_shelf: Shelf, make_planogram
    ) -> None:
        checker = FitChecker(make_planogram(single_row_shelf, self._stack(1)))
        assert not checker.fits(Item(id="new", type_id="box", group="g"), 0, 40, 10)

    def test_stack_occupancy(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(3)))
        cell = StackCell(row=0, x=40, z=10, width=20, depth=10)
        assert len(checker.stack_occupancy(cell, "g")) == 3
        assert len(checker.stack_occupancy(cell, "g", exclude_ids=("s0",))) == 2
        assert checker.stack_occupancy(cell, None) == []

    def test_free_layer_fills_lowest_gap(self, tall_row_shelf: Shelf, make_planogram) -> None:
        items = [i for i in self._stack(3) if i.stack_layer != 1]
        checker = FitChecker(make_planogram(tall_row_shelf, items))
        candidate = Item(id="new", type_id="box", group="g")
        assert checker.free_layer(candidate, 0, 40, 10) == 1

    def test_free_layer_ungrouped_is_zero(self, tall_row_shelf: Shelf, make_planogram) -> None:
        checker = FitChecker(make_planogram(tall_row_shelf, self._stack(2)))
        assert checker.free_layer(Item(id="new", type_id="box"), 0, 40, 10) == 0
