"""Option groups and the shopper's selection state.

Each option axis (color, size, ...) is an OptionGroup holding the distinct
normalized values seen in the feed, in first-seen order, with a per-value
state. Selection is not stored anywhere else: the active value of a group is
derived from the `hovered` / `selected` flags, so there is nothing to
desynchronize.
"""

from dataclasses import dataclass, field
import logging

from variant_selector.services.normalize import join_key, normalize

MAX_OPTION_GROUPS = 3

logger = logging.getLogger("uvicorn.error")


class SelectionError(ValueError):
    """Raised for a group index outside the declared option groups."""


@dataclass
class OptionValueState:
    """UI state of one option value."""

    value: str  # normalized
    display_label: str
    selected: bool = False
    hovered: bool = False
    unavailable: bool = False
    sold_out: bool = False


@dataclass
class OptionGroup:
    """One option axis and its values in first-seen order."""

    name: str
    index: int
    values: dict[str, OptionValueState] = field(default_factory=dict)

    def add_value(self, raw: str) -> OptionValueState:
        """Register a raw value; values start optimistically available."""
        normalized = normalize(raw)
        state = self.values.get(normalized)
        if state is None:
            state = OptionValueState(value=normalized, display_label=raw)
            self.values[normalized] = state
        return state

    @property
    def selected_value(self) -> str | None:
        return next((s.value for s in self.values.values() if s.selected), None)

    @property
    def hovered_value(self) -> str | None:
        return next((s.value for s in self.values.values() if s.hovered), None)

    @property
    def active_value(self) -> str | None:
        """Hovered value if any, else the selected value."""
        hovered = self.hovered_value
        return hovered if hovered is not None else self.selected_value

    def mark_selected(self, value: str | None) -> bool:
        return self._mark("selected", value)

    def mark_hovered(self, value: str | None) -> bool:
        return self._mark("hovered", value)

    def _mark(self, flag: str, value: str | None) -> bool:
        """Set `flag` on `value` and clear it on every sibling.

        Returns False when the value is not part of the group; the flag is then
        cleared on the whole group.
        """
        normalized = normalize(value) if value is not None else None
        known = normalized is not None and normalized in self.values
        for state in self.values.values():
            setattr(state, flag, known and state.value == normalized)
        return known


class OptionModel:
    """Ordered option groups of one widget instance."""

    def __init__(self, group_names: list[str]) -> None:
        if len(group_names) > MAX_OPTION_GROUPS:
            raise ValueError(
                f"At most {MAX_OPTION_GROUPS} option groups are supported, got {len(group_names)}"
            )
        self.groups: list[OptionGroup] = [
            OptionGroup(name=name, index=index) for index, name in enumerate(group_names)
        ]

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self):
        return iter(self.groups)

    def group(self, index: int) -> OptionGroup:
        if not 0 <= index < len(self.groups):
            raise SelectionError(f"Option group {index} does not exist ({len(self.groups)} groups)")
        return self.groups[index]

    def register(self, option_values: tuple[str, ...]) -> None:
        """Register one variant's raw option values into their groups."""
        for group, raw in zip(self.groups, option_values):
            group.add_value(raw)

    def select(self, group_index: int, value: str) -> bool:
        group = self.group(group_index)
        known = group.mark_selected(value)
        if not known:
            logger.debug(f"Selected unknown value {value!r} in group {group.name!r}, selection cleared")
        return known

    def hover(self, group_index: int, value: str) -> bool:
        return self.group(group_index).mark_hovered(value)

    def unhover(self, group_index: int) -> None:
        self.group(group_index).mark_hovered(None)

    def active_values(self) -> list[str | None]:
        return [group.active_value for group in self.groups]

    def selected_values(self) -> list[str | None]:
        return [group.selected_value for group in self.groups]

    def current_key(self) -> str | None:
        """Key of the active combination, or None if any group has no active value."""
        values = self.active_values()
        if any(value is None for value in values):
            return None
        return join_key(values)

    def hidden_group_indices(self, level: int | None) -> set[int]:
        """Groups to hide for the `hideSingleOptionsFromLevel` rendering hint.

        A group at or beyond `level` is hidden when it and every higher-index
        group offer a single distinct value.
        """
        if level is None:
            return set()

        hidden: set[int] = set()
        for group in reversed(self.groups):
            if len(group.values) != 1:
                break
            if group.index >= level:
                hidden.add(group.index)
        return hidden
