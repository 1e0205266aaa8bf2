"""FastAPI application entry point"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from deckoracle.api import system as system_router
from deckoracle.api import transfer as transfer_router
from deckoracle.core.config import settings
from deckoracle.core.database import db_manager
from deckoracle.core.exceptions import setup_exception_handlers
from deckoracle.core.middleware import setup_middleware

# Import all models first to ensure proper mapper configuration
# This prevents "Foreign key could not find table" errors
from deckoracle.modules.cards.models import Card  # noqa: F401
from deckoracle.modules.decks.models import Deck  # noqa: F401
from deckoracle.modules.folders.models import Folder  # noqa: F401
from deckoracle.shared.logging import get_logger, setup_logger

logger = get_logger(__name__)

TAGS_METADATA = [
    {
        "name": "Импорт и экспорт",
        "description": "Импорт колод из JSON, CSV, Anki и Markdown, экспорт и шаблоны файлов.",
    },
    {
        "name": "Системные",
        "description": "Проверки здоровья сервиса.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    setup_logger()
    logger.info(f"Starting {settings.app.name}...")

    db_manager.init()
    logger.info("Database connection pool initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await db_manager.close()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app.name,
        description="Импорт и экспорт колод карточек между форматами.",
        version=settings.app.version,
        openapi_tags=TAGS_METADATA,
        debug=settings.app.debug,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.app.debug else None,
        redoc_url="/api/redoc" if settings.app.debug else None,
        openapi_url="/api/openapi.json" if settings.app.debug else None,
        redirect_slashes=False,
    )

    # CORS and request tracing
    setup_middleware(app)

    # Register exception handlers
    setup_exception_handlers(app)

    # Include API routers with /api prefix
    app.include_router(transfer_router.router, prefix="/api")

    # System router (no /api prefix - accessible at root)
    app.include_router(system_router.router)

    return app


# Create the application instance
app = create_app()
