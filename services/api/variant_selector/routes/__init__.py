"""API routes."""

from fastapi import APIRouter

from variant_selector.routes import selector

api_router = APIRouter()

# Selector endpoints (feed + interaction replay)
api_router.include_router(selector.router, prefix="/v1/selector", tags=["selector"])
