"""Tests for the variant catalog."""

import pytest

from variant_selector.services.catalog import (
    UNDEFINED_VARIANT,
    Variant,
    VariantCatalog,
    VariantFeedError,
)
from variant_selector.services.options import OptionModel


def _variant(id: str, *options: str, available: bool = True, qty: int = 1, **kwargs) -> Variant:
    return Variant(
        id=id,
        option_values=options,
        price=kwargs.pop("price", 10.0),
        available=available,
        inventory_quantity=qty,
        **kwargs,
    )


class TestVariantFlags:
    """Derived commerce flags."""

    def test_on_sale(self):
        assert _variant("1", "Red", price=10.0, compare_at_price=12.0).on_sale is True
        assert _variant("2", "Red", price=12.0, compare_at_price=12.0).on_sale is False
        assert _variant("3", "Red", price=10.0).on_sale is False

    def test_sold_out_requires_available(self):
        variant = _variant("1", "Red", available=True, qty=0)
        assert variant.sold_out is True
        assert variant.unavailable is False

    def test_unavailable_requires_not_available(self):
        variant = _variant("1", "Red", available=False, qty=0)
        assert variant.sold_out is False
        assert variant.unavailable is True

    def test_in_stock_has_no_stock_flags(self):
        variant = _variant("1", "Red", available=False, qty=4)
        assert variant.sold_out is False
        assert variant.unavailable is False

    def test_key_uses_normalized_values(self):
        variant = _variant("1", "Dark Blue", "Größe 4.5")
        assert variant.option_keys == ("DarkBlue", "Groesse45")
        assert variant.key == "DarkBlue-Groesse45"

    def test_id_is_stringified(self):
        assert Variant(id=42, option_values=("Red",), price=1.0, available=True).id == "42"  # type: ignore[arg-type]


class TestVariantCatalog:
    """Insertion, lookup and default-variant rules."""

    def test_lookup_round_trip(self, scenario_variants: list[Variant]):
        catalog = VariantCatalog(OptionModel(["Color", "Size"]))
        for variant in scenario_variants:
            assert catalog.insert(variant) is True

        for variant in scenario_variants:
            assert catalog.lookup(variant.key) is variant
        assert len(catalog) == 3
        assert "Red-S" in catalog

    def test_lookup_miss_returns_sentinel(self, scenario_variants: list[Variant]):
        catalog = VariantCatalog(OptionModel(["Color", "Size"]))
        for variant in scenario_variants:
            catalog.insert(variant)

        missing = catalog.lookup("Green-S")
        assert missing is UNDEFINED_VARIANT
        assert missing.id == "undefined"
        assert missing.is_undefined is True
        assert catalog.lookup(None) is UNDEFINED_VARIANT

    def test_duplicate_key_first_wins(self):
        options = OptionModel(["Color", "Size"])
        catalog = VariantCatalog(options)
        first = _variant("1", "Dark Blue", "S")
        duplicate = _variant("2", "DarkBlue", "S")

        assert catalog.insert(first) is True
        assert catalog.insert(duplicate) is False
        assert catalog.lookup("DarkBlue-S") is first
        assert catalog.all() == (first,)
        assert options.group(0).values["DarkBlue"].display_label == "Dark Blue"

    def test_all_keeps_insertion_order(self):
        catalog = VariantCatalog(OptionModel(["Size"]))
        variants = [_variant("1", "M"), _variant("2", "S"), _variant("3", "L")]
        for variant in variants:
            catalog.insert(variant)
        assert [v.id for v in catalog.all()] == ["1", "2", "3"]

    def test_default_variant_locks_on_first_available(self):
        catalog = VariantCatalog(OptionModel(["Size"]))
        catalog.insert(_variant("1", "S", available=False, qty=0))
        assert catalog.default_variant.id == "1"
        catalog.insert(_variant("2", "M", available=True))
        catalog.insert(_variant("3", "L", available=True))
        assert catalog.default_variant.id == "2"

    def test_default_variant_follows_unavailable_insertions(self):
        catalog = VariantCatalog(OptionModel(["Size"]))
        catalog.insert(_variant("1", "S", available=False, qty=0))
        catalog.insert(_variant("2", "M", available=False, qty=0))
        assert catalog.default_variant.id == "2"

    def test_insert_registers_option_values(self, scenario_variants: list[Variant]):
        options = OptionModel(["Color", "Size"])
        catalog = VariantCatalog(options)
        for variant in scenario_variants:
            catalog.insert(variant)

        assert list(options.group(0).values) == ["Red", "Blue"]
        assert list(options.group(1).values) == ["S", "M"]
        for group in options:
            for state in group.values.values():
                assert state.unavailable is False
                assert state.sold_out is False

    def test_arity_mismatch_is_skipped(self):
        options = OptionModel(["Color", "Size"])
        catalog = VariantCatalog(options)
        assert catalog.insert(_variant("1", "Red")) is False
        assert catalog.insert(_variant("2", "Red", "S", "Cotton")) is False
        assert len(catalog) == 0
        assert catalog.default_variant is None
        assert options.group(0).values == {}

    def test_arity_mismatch_raises_when_strict(self):
        catalog = VariantCatalog(OptionModel(["Color", "Size"]), strict=True)
        with pytest.raises(VariantFeedError):
            catalog.insert(_variant("1", "Red"))

    def test_image_refs_are_distinct_and_ordered(self):
        catalog = VariantCatalog(OptionModel(["Size"]))
        catalog.insert(_variant("1", "S", image="a.jpg"))
        catalog.insert(_variant("2", "M", image="b.jpg"))
        catalog.insert(_variant("3", "L", image="a.jpg"))
        catalog.insert(_variant("4", "XL"))
        assert catalog.image_refs() == ["a.jpg", "b.jpg"]
