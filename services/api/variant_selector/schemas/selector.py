"""Schemas for the variant selector: feed input, configuration, events and view payload."""

from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from variant_selector.services.catalog import UndefinedVariant, Variant
from variant_selector.services.lookup import VariantChange


class SelectorConfig(BaseModel):
    """Per-widget configuration.

    `hide_single_options_from_level` and `select_sold_out` only affect
    rendering hints; they never change availability flags.
    """

    hide_single_options_from_level: int | None = Field(
        alias="hideSingleOptionsFromLevel", default=None, ge=0
    )
    resolve_availability_conflict: bool = Field(alias="resolveAvailabilityConflict", default=True)
    select_sold_out: bool = Field(alias="selectSoldOut", default=False)
    strict_feed: bool = Field(alias="strictFeed", default=False)

    model_config = {"populate_by_name": True}


class VariantFeedItem(BaseModel):
    """A raw variant record as found in a product feed.

    Accepts Shopify-style snake_case keys or camelCase keys, and either an
    `options` list or `option1`..`option3`.
    """

    id: str | int
    options: list[str] = Field(default_factory=list)
    option1: str | None = None
    option2: str | None = None
    option3: str | None = None
    price: float
    compare_at_price: float | None = Field(
        default=None,
        validation_alias=AliasChoices("compare_at_price", "compareAtPrice"),
    )
    inventory_quantity: int = Field(
        default=0,
        validation_alias=AliasChoices("inventory_quantity", "inventoryQuantity"),
    )
    available: bool = True
    image: str | None = Field(
        default=None,
        validation_alias=AliasChoices("image", "featured_image", "featuredImage"),
    )

    @field_validator("image", mode="before")
    @classmethod
    def _parse_image(cls, v: object) -> str | None:
        """Shopify's featured_image is an object; keep its `src`."""
        if isinstance(v, dict):
            src = v.get("src")
            return str(src) if src else None
        return v  # type: ignore[return-value]

    def option_values(self) -> tuple[str, ...]:
        if self.options:
            return tuple(self.options)
        # A gap ends the list so later values never shift onto an earlier axis.
        values: list[str] = []
        for option in (self.option1, self.option2, self.option3):
            if option is None:
                break
            values.append(option)
        return tuple(values)

    def to_variant(self) -> Variant:
        return Variant(
            id=str(self.id),
            option_values=self.option_values(),
            price=self.price,
            compare_at_price=self.compare_at_price,
            inventory_quantity=self.inventory_quantity,
            available=self.available,
            image=self.image,
        )


class SelectionEvent(BaseModel):
    """A shopper interaction translated by the view into a model call."""

    action: Literal["select", "hover", "unhover"]
    group: int = Field(ge=0)
    value: str | None = None

    @model_validator(mode="after")
    def _require_value(self) -> "SelectionEvent":
        if self.action != "unhover" and self.value is None:
            raise ValueError(f"'{self.action}' requires a value")
        return self


class OptionValueView(BaseModel):
    """Render state of one option value."""

    value: str
    label: str
    selected: bool
    hovered: bool
    unavailable: bool
    sold_out: bool = Field(alias="soldOut")
    disabled: bool

    model_config = {"populate_by_name": True}


class OptionGroupView(BaseModel):
    """Render state of one option group."""

    index: int
    name: str
    hidden: bool = False
    values: list[OptionValueView] = Field(default_factory=list)


class VariantOut(BaseModel):
    """Variant as exposed to the view (the sentinel has id "undefined" and no data)."""

    id: str
    options: list[str] = Field(default_factory=list)
    price: float | None = None
    compare_at_price: float | None = Field(alias="compareAtPrice", default=None)
    inventory_quantity: int | None = Field(alias="inventoryQuantity", default=None)
    available: bool | None = None
    image: str | None = None

    model_config = {"populate_by_name": True}

    @classmethod
    def from_variant(cls, variant: Variant | UndefinedVariant) -> "VariantOut":
        if variant.is_undefined:
            return cls(id=variant.id)
        return cls(
            id=variant.id,
            options=list(variant.option_values),
            price=variant.price,
            compare_at_price=variant.compare_at_price,
            inventory_quantity=variant.inventory_quantity,
            available=variant.available,
            image=variant.image,
        )


class VariantChangeOut(BaseModel):
    """The "variant changed" notification."""

    variant: VariantOut
    key: str | None = None
    found: bool
    on_sale: bool = Field(alias="onSale")
    sold_out: bool = Field(alias="soldOut")
    unavailable: bool

    model_config = {"populate_by_name": True}

    @classmethod
    def from_change(cls, change: VariantChange) -> "VariantChangeOut":
        return cls(
            variant=VariantOut.from_variant(change.variant),
            key=change.key,
            found=change.found,
            on_sale=change.on_sale,
            sold_out=change.sold_out,
            unavailable=change.unavailable,
        )


class ResolveRequest(BaseModel):
    """Request body for POST /v1/selector/resolve."""

    option_group_names: list[str] = Field(alias="optionGroupNames", max_length=3)
    variants: list[VariantFeedItem]
    config: SelectorConfig | None = None
    events: list[SelectionEvent] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class ResolveResponse(BaseModel):
    """Final widget state after replaying the events."""

    current: VariantChangeOut
    variant_id: str | None = Field(alias="variantId", default=None)
    groups: list[OptionGroupView]
    notifications: list[VariantChangeOut] = Field(default_factory=list)
    skipped_variants: list[str] = Field(alias="skippedVariants", default_factory=list)
    images: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

