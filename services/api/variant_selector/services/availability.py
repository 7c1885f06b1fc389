"""Availability resolution across option groups.

Groups are walked in index order carrying the set of variants still reachable
through the upstream active values ("possible"):
1. Every value of the group is reset to unavailable + sold out
2. Each possible variant clears `unavailable` on its value if it is available,
   and `sold_out` if it is not sold out
3. `possible` is narrowed to variants matching the group's active value
4. With conflict resolution on, a selected value left unavailable is replaced by
   the first sibling that is not, and the whole pass starts over

Conflict resolution only applies to committed state: once an upstream group is
hovered the downstream flags describe a preview, and `selected` is left alone.

A selection in group i only constrains groups j > i.

Forced re-selections happen at strictly increasing group indices across
restarts (groups before the forced one are untouched by it), so a pass count of
len(groups) + 1 is enough; the loop is bounded by that count.
"""

from dataclasses import dataclass, field
import logging

from variant_selector.services.catalog import Variant
from variant_selector.services.options import OptionGroup

logger = logging.getLogger("uvicorn.error")


@dataclass(frozen=True)
class ForcedSelection:
    """A selection changed by conflict resolution."""

    group_index: int
    previous: str
    replacement: str


@dataclass
class ResolutionReport:
    """Outcome of one resolution run."""

    passes: int = 0
    forced: list[ForcedSelection] = field(default_factory=list)
    # Variants entering each group on the final pass.
    candidates: list[tuple[Variant, ...]] = field(default_factory=list)
    converged: bool = True


def resolve_availability(
    variants: tuple[Variant, ...],
    groups: list[OptionGroup],
    *,
    resolve_conflicts: bool = True,
) -> ResolutionReport:
    """Recompute unavailable/sold-out flags until no selection is forced.

    Args:
        variants: All catalog variants, in insertion order.
        groups: Option groups, in index order.
        resolve_conflicts: Replace selected values that became unavailable.

    Returns:
        ResolutionReport with passes, forced selections and per-group candidates.
    """
    report = ResolutionReport()
    max_passes = len(groups) + 1

    while report.passes < max_passes:
        report.passes += 1
        forced = _run_pass(variants, groups, resolve_conflicts, report)
        if forced is None:
            return report
        report.forced.append(forced)
        logger.debug(
            f"Group {forced.group_index}: {forced.previous!r} unavailable, "
            f"selected {forced.replacement!r}"
        )

    report.converged = False
    logger.warning(f"Availability resolution stopped after {report.passes} passes without settling")
    return report


def _run_pass(
    variants: tuple[Variant, ...],
    groups: list[OptionGroup],
    resolve_conflicts: bool,
    report: ResolutionReport,
) -> ForcedSelection | None:
    """Run one pass; stop at the first forced re-selection and return it."""
    possible = variants
    previewing = False
    report.candidates = []

    for group in groups:
        report.candidates.append(possible)
        _apply_flags(group, possible)

        active = group.active_value
        possible = tuple(v for v in possible if v.option_keys[group.index] == active)

        if resolve_conflicts and not previewing:
            forced = _resolve_conflict(group)
            if forced is not None:
                return forced

        previewing = previewing or group.hovered_value is not None

    return None


def _apply_flags(group: OptionGroup, possible: tuple[Variant, ...]) -> None:
    for state in group.values.values():
        state.unavailable = True
        state.sold_out = True

    for variant in possible:
        state = group.values.get(variant.option_keys[group.index])
        if state is None:
            continue
        if variant.available:
            state.unavailable = False
        if not variant.sold_out:
            state.sold_out = False


def _resolve_conflict(group: OptionGroup) -> ForcedSelection | None:
    selected = group.selected_value
    if selected is None or not group.values[selected].unavailable:
        return None

    replacement = next(
        (state.value for state in group.values.values() if not state.unavailable),
        None,
    )
    if replacement is None:
        # Nothing selectable; the key will not resolve to a variant.
        return None

    group.mark_selected(replacement)
    return ForcedSelection(group_index=group.index, previous=selected, replacement=replacement)
