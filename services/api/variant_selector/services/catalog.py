"""Variant catalog: normalized option key -> Variant.

Keys are computed with the same normalizer used for UI values:
  key = "-".join(normalize(v) for v in option_values)

Loading rules:
- Keys are unique, the first variant offering a key wins (later ones are dropped)
- default_variant follows insertion until an available variant is found, then locks
- Each stored variant registers its option values into the OptionModel
"""

from dataclasses import dataclass, field
import logging

from variant_selector.services.normalize import join_key, normalize
from variant_selector.services.options import OptionModel

logger = logging.getLogger("uvicorn.error")


class VariantFeedError(ValueError):
    """Raised for malformed feed entries when strict loading is enabled."""


@dataclass(frozen=True)
class Variant:
    """A purchasable combination of option values.

    Commerce flags are derived once, at construction.
    """

    id: str
    option_values: tuple[str, ...]
    price: float
    available: bool
    inventory_quantity: int = 0
    compare_at_price: float | None = None
    image: str | None = None

    option_keys: tuple[str, ...] = field(init=False, repr=False)
    key: str = field(init=False)
    on_sale: bool = field(init=False)
    sold_out: bool = field(init=False)
    unavailable: bool = field(init=False)

    is_undefined = False

    def __post_init__(self) -> None:
        option_values = tuple(self.option_values)
        option_keys = tuple(normalize(value) for value in option_values)
        out_of_stock = self.inventory_quantity < 1

        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "option_values", option_values)
        object.__setattr__(self, "option_keys", option_keys)
        object.__setattr__(self, "key", join_key(option_keys))
        object.__setattr__(
            self,
            "on_sale",
            self.compare_at_price is not None and self.price < self.compare_at_price,
        )
        object.__setattr__(self, "sold_out", out_of_stock and self.available)
        object.__setattr__(self, "unavailable", out_of_stock and not self.available)


@dataclass(frozen=True)
class UndefinedVariant:
    """Sentinel for an option combination with no catalog entry."""

    id: str = "undefined"
    option_values: tuple[str, ...] = ()
    price: float | None = None
    compare_at_price: float | None = None
    image: str | None = None

    is_undefined = True


UNDEFINED_VARIANT = UndefinedVariant()


class VariantCatalog:
    """Immutable-after-load mapping of variant keys to variants."""

    def __init__(self, options: OptionModel, *, strict: bool = False) -> None:
        self._options = options
        self._strict = strict
        self._variants: dict[str, Variant] = {}
        self.default_variant: Variant | None = None

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, key: object) -> bool:
        return key in self._variants

    def insert(self, variant: Variant) -> bool:
        """Store a variant unless its key is taken or its arity is wrong.

        Returns:
            True if the variant was stored.

        Raises:
            VariantFeedError: on arity mismatch when the catalog is strict.
        """
        expected = len(self._options)
        arity = len(variant.option_values)
        if arity != expected:
            message = f"Variant {variant.id} has {arity} option values, expected {expected}"
            if self._strict:
                raise VariantFeedError(message)
            logger.warning(f"{message}; skipped")
            return False

        if variant.key in self._variants:
            logger.debug(f"Variant {variant.id} duplicates key {variant.key!r}; ignored")
            return False

        self._variants[variant.key] = variant
        if self.default_variant is None or not self.default_variant.available:
            self.default_variant = variant
        self._options.register(variant.option_values)
        return True

    def lookup(self, key: str | None) -> Variant | UndefinedVariant:
        """Return the variant for `key`, or the UNDEFINED_VARIANT sentinel."""
        if key is None:
            return UNDEFINED_VARIANT
        return self._variants.get(key, UNDEFINED_VARIANT)

    def all(self) -> tuple[Variant, ...]:
        """All variants in insertion order."""
        return tuple(self._variants.values())

    def image_refs(self) -> list[str]:
        """Distinct image references in insertion order."""
        seen: dict[str, None] = {}
        for variant in self._variants.values():
            if variant.image:
                seen.setdefault(variant.image, None)
        return list(seen)
