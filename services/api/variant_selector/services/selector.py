"""Variant selector widget model.

One VariantSelector is one widget instance: it owns its option model, catalog
and listeners, and shares none of them with other instances.

Every interaction (select / hover / unhover) is handled atomically:
mutate flags -> resolve availability to a fixpoint -> notify listeners.
Listeners therefore never observe intermediate flag state.
"""

from collections.abc import Callable, Iterable
import logging

from variant_selector.schemas.selector import OptionGroupView, OptionValueView, SelectorConfig
from variant_selector.services.availability import ResolutionReport, resolve_availability
from variant_selector.services.catalog import Variant, VariantCatalog
from variant_selector.services.lookup import VariantChange, VariantLookup
from variant_selector.services.options import OptionModel, OptionValueState

logger = logging.getLogger("uvicorn.error")

Listener = Callable[[VariantChange], None]


class VariantSelector:
    """Variant availability engine for a single product widget."""

    def __init__(self, option_group_names: list[str], config: SelectorConfig | None = None) -> None:
        self.config = config or SelectorConfig()
        self.options = OptionModel(list(option_group_names))
        self.catalog = VariantCatalog(self.options, strict=self.config.strict_feed)
        self.lookup = VariantLookup(self.catalog, self.options)

        self.skipped: list[str] = []
        # Id of the last resolved variant; kept when the active key misses.
        self.variant_id: str | None = None
        self.last_report: ResolutionReport | None = None
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a "variant changed" listener; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self, variants: Iterable[Variant]) -> VariantChange | None:
        """Insert a variant feed and commit the default variant as the selection.

        Returns:
            The resulting notification, or None if no variant was stored.
        """
        stored = 0
        for variant in variants:
            if self.catalog.insert(variant):
                stored += 1
            else:
                self.skipped.append(variant.id)

        logger.info(
            f"Variant feed loaded: {stored} stored, {len(self.skipped)} skipped, "
            f"{len(self.catalog)} total"
        )

        default = self.catalog.default_variant
        if default is None:
            return None

        for index, value in enumerate(default.option_keys):
            self.options.select(index, value)
        return self._commit()

    def select(self, group_index: int, value: str) -> VariantChange:
        self.options.select(group_index, value)
        return self._commit()

    def hover(self, group_index: int, value: str) -> VariantChange:
        self.options.hover(group_index, value)
        return self._commit()

    def unhover(self, group_index: int) -> VariantChange:
        self.options.unhover(group_index)
        return self._commit()

    def current(self) -> VariantChange:
        """Notification payload for the current state, without notifying."""
        return self.lookup.change()

    def view(self) -> list[OptionGroupView]:
        """Per-group render state for the view collaborator."""
        hidden = self.options.hidden_group_indices(self.config.hide_single_options_from_level)
        return [
            OptionGroupView(
                index=group.index,
                name=group.name,
                hidden=group.index in hidden,
                values=[self._value_view(state) for state in group.values.values()],
            )
            for group in self.options
        ]

    def _value_view(self, state: OptionValueState) -> OptionValueView:
        disabled = state.unavailable or (state.sold_out and not self.config.select_sold_out)
        return OptionValueView(
            value=state.value,
            label=state.display_label,
            selected=state.selected,
            hovered=state.hovered,
            unavailable=state.unavailable,
            sold_out=state.sold_out,
            disabled=disabled,
        )

    def _commit(self) -> VariantChange:
        self.last_report = resolve_availability(
            self.catalog.all(),
            self.options.groups,
            resolve_conflicts=self.config.resolve_availability_conflict,
        )
        change = self.lookup.change()
        if change.found:
            self.variant_id = change.variant.id

        logger.debug(
            f"Resolved key={change.key!r} variant={change.variant.id} "
            f"passes={self.last_report.passes} forced={len(self.last_report.forced)}"
        )
        for listener in list(self._listeners):
            listener(change)
        return change
