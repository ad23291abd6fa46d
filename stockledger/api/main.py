"""
FastAPI application for the stock ledger.

``create_app`` wires settings, logging, middleware and routers; the
module-level ``app`` is what uvicorn serves and ``run`` is the console
entry point.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockledger import __version__
from stockledger.api.middleware import ErrorHandlerMiddleware, RequestLoggingMiddleware
from stockledger.api.middleware.error_handler import setup_exception_handlers
from stockledger.api.routes import (
    consumptions_router,
    health_router,
    inventory_router,
    material_requests_router,
    receipts_router,
    reports_router,
)
from stockledger.config import Settings, configure_logging, get_logger, get_settings
from stockledger.infrastructure.storage.memory import (
    get_inventory_store,
    get_material_request_store,
)

logger = get_logger(__name__)

ROUTERS: tuple[APIRouter, ...] = (
    health_router,
    inventory_router,
    receipts_router,
    consumptions_router,
    material_requests_router,
    reports_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the in-memory stores before serving and log the ledger settings."""
    settings = get_settings()
    await get_inventory_store()
    await get_material_request_store()
    logger.info(
        "ledger_ready",
        environment=settings.environment,
        currency=settings.inventory.currency,
        warning_margin=settings.inventory.low_stock_warning_margin,
        kardex_page_limit=settings.inventory.kardex_page_limit,
        storage="memory",
    )
    yield
    logger.info("ledger_stopped")


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: CORS, then request logging, then error handling
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Response-Time"],
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the API application."""
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Weighted-average inventory costing, Kardex and material requests",
        version=__version__,
        docs_url="/docs" if settings.api.debug else None,
        redoc_url="/redoc" if settings.api.debug else None,
        lifespan=lifespan,
    )
    _add_middleware(app, settings)
    setup_exception_handlers(app)
    for router in ROUTERS:
        app.include_router(router)

    @app.get("/health", include_in_schema=False)
    async def root_health() -> dict[str, str]:
        """Liveness check for container orchestrators."""
        return {"status": "healthy", "version": __version__}

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "stockledger.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.debug,
        log_config=None,
    )


if __name__ == "__main__":
    run()
