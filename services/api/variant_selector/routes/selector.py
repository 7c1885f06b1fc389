"""Variant selector endpoints.

POST /v1/selector/resolve - Load a variant feed, replay shopper interactions
against a fresh widget and return the notifications and final render state.

Routers are thin: call services for business logic. Nothing is kept between
requests.
"""

import logging

from fastapi import APIRouter

from variant_selector.schemas import (
    ResolveRequest,
    ResolveResponse,
    SelectionEvent,
    SelectorConfig,
    VariantChangeOut,
)
from variant_selector.services.lookup import VariantChange
from variant_selector.services.selector import VariantSelector
from variant_selector.settings import get_settings

router = APIRouter()
logger = logging.getLogger("uvicorn.error")


@router.post("/resolve", response_model=ResolveResponse)
async def resolve_selection(request: ResolveRequest) -> ResolveResponse:
    """Resolve the active variant for a sequence of interactions.

    The default variant is selected on load, then each event is applied in
    order. Every load/interaction produces one notification.

    Returns:
        ResolveResponse with the current variant, render state and notifications.
    """
    config = request.config if request.config is not None else _default_config()
    selector = VariantSelector(request.option_group_names, config)

    notifications: list[VariantChange] = []
    selector.subscribe(notifications.append)

    selector.load(item.to_variant() for item in request.variants)
    for event in request.events:
        _apply_event(selector, event)

    logger.info(
        f"Resolved {len(request.events)} events over {len(selector.catalog)} variants "
        f"-> {selector.current().variant.id}"
    )

    return ResolveResponse(
        current=VariantChangeOut.from_change(selector.current()),
        variant_id=selector.variant_id,
        groups=selector.view(),
        notifications=[VariantChangeOut.from_change(change) for change in notifications],
        skipped_variants=selector.skipped,
        images=selector.catalog.image_refs(),
    )


def _apply_event(selector: VariantSelector, event: SelectionEvent) -> None:
    if event.action == "select":
        selector.select(event.group, event.value or "")
    elif event.action == "hover":
        selector.hover(event.group, event.value or "")
    else:
        selector.unhover(event.group)


def _default_config() -> SelectorConfig:
    settings = get_settings()
    return SelectorConfig(
        hide_single_options_from_level=settings.selector_hide_single_options_from_level,
        resolve_availability_conflict=settings.selector_resolve_availability_conflict,
        select_sold_out=settings.selector_select_sold_out,
        strict_feed=settings.selector_strict_feed,
    )
