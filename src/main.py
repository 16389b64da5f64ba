"""FastAPI application entry point"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api import system as system_router
from src.core.config import Settings, get_settings
from src.core.middleware import RequestContextMiddleware
from src.shared.errors import MessageCatalog, set_message_catalog, setup_exception_handlers
from src.shared.logging import get_logger, setup_logger

logger = get_logger(__name__)


def load_message_catalog(settings: Settings) -> MessageCatalog | None:
    """Load the configured message catalog, or ``None`` for pass-through."""
    if not settings.i18n.catalog_dir:
        return None
    return MessageCatalog.from_directory(
        settings.i18n.catalog_dir,
        default_locale=settings.i18n.default_locale,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager for startup and shutdown events."""
        setup_logger(settings)
        logger.info(f"Starting {settings.app.name}...")

        catalog = load_message_catalog(settings)
        set_message_catalog(catalog)
        if catalog is None:
            logger.info("No message catalog configured, error messages are pass-through")

        yield

        logger.info("Shutting down...")
        set_message_catalog(None)

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        debug=settings.app.debug,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.app.debug else None,
        redoc_url="/api/redoc" if settings.app.debug else None,
        openapi_url="/api/openapi.json" if settings.app.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestContextMiddleware)

    setup_exception_handlers(app)

    app.include_router(system_router.router)

    return app


# Create the application instance
app = create_app()
