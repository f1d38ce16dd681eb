"""Pytest configuration and shared fixtures for planogram tests."""

from __future__ import annotations

import itertools
from typing import Callable, Iterable

import pytest

from planogram.domain.entities import Item, Planogram, ProductType, Row, Shelf


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "integration: end-to-end tests through the CLI and document files"
    )
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures for shelves and product types
# =============================================================================


@pytest.fixture
def box_type() -> ProductType:
    """A 20 x 30 x 10 cm (w x h x d) product."""
    return ProductType(id="box", name="Box", w=20, h=30, d=10)


@pytest.fixture
def wall_type() -> ProductType:
    """A 20 x 10 x 10 cm product used as an obstacle."""
    return ProductType(id="wall", name="Wall", w=20, h=10, d=10)


@pytest.fixture
def single_row_shelf() -> Shelf:
    """200 cm wide shelf with one 40 x 50 cm row."""
    return Shelf(width=200, rows=(Row(height=40, depth=50),))


@pytest.fixture
def tall_row_shelf() -> Shelf:
    """200 cm wide shelf with one 100 x 50 cm row (three layers of box_type)."""
    return Shelf(width=200, rows=(Row(height=100, depth=50),))


@pytest.fixture
def id_factory() -> Callable[[], str]:
    """Deterministic id factory yielding id-1, id-2, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter)}"


@pytest.fixture
def make_planogram(
    box_type: ProductType, wall_type: ProductType
) -> Callable[..., Planogram]:
    """Factory building a planogram with the box and wall types.

    Usage:
        planogram = make_planogram(shelf, [Item(...), ...])
    """

    def _make(
        shelf: Shelf,
        items: Iterable[Item] = (),
        types: Iterable[ProductType] | None = None,
    ) -> Planogram:
        library = tuple(types) if types is not None else (box_type, wall_type)
        return Planogram(shelf=shelf, types=library, items=tuple(items))

    return _make
