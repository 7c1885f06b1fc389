"""FastAPI application entry point.

Variant Selector API - option availability and variant resolution.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from variant_selector.routes import api_router
from variant_selector.schemas import ErrorDetail, ErrorResponse
from variant_selector.services.catalog import VariantFeedError
from variant_selector.services.options import SelectionError
from variant_selector.settings import get_settings

logger = logging.getLogger("uvicorn.error")


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Variant availability resolution API",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VariantFeedError)
    async def variant_feed_error_handler(request: Request, exc: VariantFeedError) -> JSONResponse:
        """Malformed feed rejected by a strict catalog."""
        logger.warning(f"Variant feed rejected: {exc}")
        return _error_response(422, "INVALID_VARIANT_FEED", str(exc))

    @app.exception_handler(SelectionError)
    async def selection_error_handler(request: Request, exc: SelectionError) -> JSONResponse:
        """Interaction referring to an option group that does not exist."""
        return _error_response(422, "INVALID_SELECTION", str(exc))

    # Exception handler for structured error format
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler returning structured error format."""
        logger.exception("Unhandled error")
        return _error_response(
            500,
            "INTERNAL_ERROR",
            str(exc) if settings.debug else "Internal server error",
        )

    # Health check endpoint
    @app.get("/health", tags=["health"])
    async def health_check() -> dict[str, bool]:
        """Health check endpoint."""
        return {"ok": True}

    # Include API routes
    app.include_router(api_router)

    return app


# Application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "variant_selector.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
