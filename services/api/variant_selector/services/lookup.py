"""Active variant lookup and the "variant changed" notification payload."""

from dataclasses import dataclass

from variant_selector.services.catalog import UNDEFINED_VARIANT, UndefinedVariant, Variant, VariantCatalog
from variant_selector.services.options import OptionModel


@dataclass(frozen=True)
class VariantChange:
    """Notification emitted to the view after every interaction.

    For the undefined sentinel `unavailable` is True ("product unavailable")
    and the other flags are False.
    """

    variant: Variant | UndefinedVariant
    key: str | None
    on_sale: bool
    sold_out: bool
    unavailable: bool

    @property
    def found(self) -> bool:
        return not self.variant.is_undefined

    @classmethod
    def for_variant(cls, variant: Variant | UndefinedVariant, key: str | None) -> "VariantChange":
        if variant.is_undefined:
            return cls(variant=variant, key=key, on_sale=False, sold_out=False, unavailable=True)
        return cls(
            variant=variant,
            key=key,
            on_sale=variant.on_sale,
            sold_out=variant.sold_out,
            unavailable=variant.unavailable,
        )


class VariantLookup:
    """Derives the active variant from the option model and the catalog."""

    def __init__(self, catalog: VariantCatalog, options: OptionModel) -> None:
        self._catalog = catalog
        self._options = options

    def resolve(self) -> Variant | UndefinedVariant:
        key = self._options.current_key()
        if key is None:
            return UNDEFINED_VARIANT
        return self._catalog.lookup(key)

    def change(self) -> VariantChange:
        return VariantChange.for_variant(self.resolve(), self._options.current_key())
