"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopverse_listing.api.routes import health, pagination, storefront
from shopverse_listing.config import settings
from shopverse_listing.domain.errors import ValidationError
from shopverse_listing.logging_config import configure_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level)
    logger.info("listing_api_starting")
    yield
    logger.info("listing_api_stopping")


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("listing_query_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"error": str(exc)},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="ShopVerse Listing API",
        description="Paginated, filterable product listings for the ShopVerse storefront.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)

    app.include_router(health.router)
    app.include_router(storefront.router)
    app.include_router(pagination.router)

    return app


app = create_app()
