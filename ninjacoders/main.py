"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers (HTML pages, JSON API, health)
- Error handlers (centralized domain-to-HTTP mapping)
- Session, security, and access log middleware
- Logging configuration
- Store schema and catalogue seed on startup

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from ninjacoders.core.config import settings
from ninjacoders.infrastructure.storefront.schema import init_schema, seed_catalogue
from ninjacoders.interfaces.health import router as health_router
from ninjacoders.interfaces.rendering import STATIC_DIR
from ninjacoders.interfaces.storefront.api import router as api_router
from ninjacoders.interfaces.storefront.dependencies import get_db_engine
from ninjacoders.interfaces.storefront.pages import router as pages_router
from ninjacoders.shared.errors.handlers import register_error_handlers
from ninjacoders.shared.logging import RequestLoggingMiddleware, configure_logging
from ninjacoders.shared.security.headers import SecurityHeadersMiddleware
from ninjacoders.shared.security.rate_limiting import (
    limiter,
    rate_limit_exceeded_handler,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the store and the upload directory."""
    engine = get_db_engine()
    init_schema(engine)
    if settings.seed_catalogue:
        seed_catalogue(engine)
    settings.contest_upload_dir.mkdir(parents=True, exist_ok=True)
    logger.info(
        "%s started in %s mode.", settings.project_name, settings.environment
    )

    yield

    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers, error handlers, and middleware.
    This is the composition root of the application.

    Returns:
        A fully configured FastAPI application instance.
    """
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan,
    )

    # --- Rate Limiting ---
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # --- Middleware ---
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.cookie_secret,
        max_age=settings.session_max_age,
        same_site="lax",
        https_only=settings.is_production,
    )
    app.add_middleware(RequestLoggingMiddleware, verbose=settings.is_production)

    # --- Error Handlers ---
    register_error_handlers(app)

    # --- Static files ---
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.mount(
        "/contest-uploads",
        StaticFiles(directory=str(settings.contest_upload_dir), check_dir=False),
        name="contest-uploads",
    )

    # --- Routers ---
    app.include_router(health_router, prefix="/api")
    app.include_router(api_router)
    app.include_router(pages_router)

    return app


app = create_app()
