"""Shared fixtures: the Red/Blue x S/M reference feed."""

import pytest

from variant_selector.services.catalog import Variant


@pytest.fixture
def scenario_variants() -> list[Variant]:
    """Red/S in stock, Red/M unavailable, Blue/S in stock."""
    return [
        Variant(
            id="1",
            option_values=("Red", "S"),
            price=19.0,
            compare_at_price=25.0,
            inventory_quantity=5,
            available=True,
            image="red-s.jpg",
        ),
        Variant(
            id="2",
            option_values=("Red", "M"),
            price=19.0,
            inventory_quantity=0,
            available=False,
            image="red-m.jpg",
        ),
        Variant(
            id="3",
            option_values=("Blue", "S"),
            price=21.0,
            inventory_quantity=3,
            available=True,
            image="blue-s.jpg",
        ),
    ]
