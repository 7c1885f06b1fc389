"""Pydantic schemas for API request/response validation."""

from variant_selector.schemas.common import ErrorDetail, ErrorResponse
from variant_selector.schemas.selector import (
    OptionGroupView,
    OptionValueView,
    ResolveRequest,
    ResolveResponse,
    SelectionEvent,
    SelectorConfig,
    VariantChangeOut,
    VariantFeedItem,
    VariantOut,
)

__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "OptionGroupView",
    "OptionValueView",
    "ResolveRequest",
    "ResolveResponse",
    "SelectionEvent",
    "SelectorConfig",
    "VariantChangeOut",
    "VariantFeedItem",
    "VariantOut",
]
