from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.studio.api.middlewares import setup_middlewares
from src.studio.api.v1.router import api_router
from src.studio.core.config import get_settings
from src.studio.core.db import dispose_engine
from src.studio.core.exceptions import setup_exception_handlers
from src.studio.core.health import setup_health_endpoint, setup_metrics
from src.studio.core.logging import get_logger, setup_logging
from src.studio.services.invoice_service import InvoiceNumberCache

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", app_env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Project list, priorities, status and attachments"},
    {"name": "invoices", "description": "Per-brand pending invoices, export and history"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Creative project tracking with per-brand invoicing",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    # Fallback invoice numbers when the counter table is unreachable
    app.state.invoice_numbers = InvoiceNumberCache()

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Serve uploaded attachments
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(settings.media_url, StaticFiles(directory=upload_dir), name="media")

    setup_metrics(app)
    setup_health_endpoint(app)

    return app


app = create_app()
