"""Tests for LayoutRevalidator."""

from __future__ import annotations

from dataclasses import replace

from planogram.domain.entities import Item, Row, Shelf
from planogram.domain.services import LayoutRevalidator


class TestLayoutRevalidator:
    """Tests for moving out-of-place items to the pile."""

    def test_legal_layout_is_untouched(self, single_row_shelf: Shelf, make_planogram) -> None:
        planogram = make_planogram(
            single_row_shelf,
            [
                Item(id="a", type_id="box", row=0, x=0, z=0),
                Item(id="b", type_id="box", row=0, x=20, z=0),
                Item(id="pile", type_id="box"),
            ],
        )
        result, report = LayoutRevalidator().revalidate(planogram)
        assert report.moved == 0
        assert report.checked == 2
        assert result.items == planogram.items

    def test_narrower_shelf_pushes_out_overhanging_items(
        self, single_row_shelf: Shelf, make_planogram
    ) -> None:
        planogram = make_planogram(
            replace(single_row_shelf, width=190),
            [
                Item(id="a", type_id="box", row=0, x=0, z=0),
                Item(id="edge", type_id="box", row=0, x=180, z=20, group="g"),
            ],
        )
        result, report = LayoutRevalidator().revalidate(planogram)
        assert report.moved_ids == ("edge",)
        moved = result.get_item("edge")
        assert (moved.row, moved.x, moved.z, moved.stack_layer) == (None, 0.0, 0.0, 0)
        assert moved.group == "g"

    def test_first_of_two_overlapping_items_is_kept(
        self, single_row_shelf: Shelf, make_planogram
    ) -> None:
        planogram = make_planogram(
            single_row_shelf,
            [
                Item(id="first", type_id="box", row=0, x=0, z=0),
                Item(id="second", type_id="box", row=0, x=10, z=5),
            ],
        )
        result, report = LayoutRevalidator().revalidate(planogram)
        assert report.moved_ids == ("second",)
        assert result.get_item("first").row == 0

    def test_lower_row_height_trims_stack_from_the_top(self, make_planogram) -> None:
        """At 60 cm only two 30 cm layers remain."""
        shelf = Shelf(width=200, rows=(Row(height=60, depth=50),))
        stack = [
            Item(id=f"s{n}", type_id="box", row=0, x=0, z=0, group="g", stack_layer=n)
            for n in (2, 0, 1)
        ]
        result, report = LayoutRevalidator().revalidate(make_planogram(shelf, stack))
        assert report.moved_ids == ("s2",)
        assert [i.id for i in result.items] == ["s2", "s0", "s1"]
        assert result.get_item("s0").row == 0
        assert result.get_item("s1").row == 0

    def test_missing_row_goes_to_pile(self, single_row_shelf: Shelf, make_planogram) -> None:
        planogram = make_planogram(
            single_row_shelf, [Item(id="lost", type_id="box", row=3, x=0, z=0)]
        )
        result, report = LayoutRevalidator().revalidate(planogram)
        assert report.moved_ids == ("lost",)
        assert result.get_item("lost").row is None

    def test_dangling_items_are_left_alone(
        self, single_row_shelf: Shelf, make_planogram
    ) -> None:
        ghost = Item(id="ghost", type_id="gone", row=0, x=500, z=0)
        result, report = LayoutRevalidator().revalidate(make_planogram(single_row_shelf, [ghost]))
        assert report.checked == 0
        assert result.get_item("ghost") == ghost
