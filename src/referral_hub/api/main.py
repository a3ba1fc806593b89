"""Main FastAPI application for the referral API."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from referral_hub import __version__
from referral_hub.api.errors import register_exception_handlers
from referral_hub.api.v1.referrals import router as referrals_router
from referral_hub.email.transport import build_transport
from referral_hub.exceptions import StorageError
from referral_hub.logging_config import configure_logging, get_logger
from referral_hub.referral.notifier import ReferralNotifier
from referral_hub.referral.service import ReferralService
from referral_hub.referral.store import ReferralStore
from referral_hub.settings import Settings, settings as default_settings
from referral_hub.storage.db import Database

logger = get_logger(__name__)


def build_referral_service(app_settings: Settings) -> ReferralService:
    """Wire the store and notifier from configuration."""
    database = Database(app_settings.database_url)
    notifier = ReferralNotifier(
        transport=build_transport(app_settings),
        website_url=app_settings.website_url,
    )
    return ReferralService(store=ReferralStore(database), notifier=notifier)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    app_settings: Settings = app.state.settings
    if not structlog.is_configured():
        configure_logging(app_settings.log_level, app_settings.log_format)
    logger.info("app_starting", env=app_settings.env, mail_transport=app_settings.mail_transport)

    database = app.state.referral_service.store.db
    database.create_tables()
    logger.info("database_tables_created")

    yield

    # Shutdown
    logger.info("app_shutting_down")
    database.dispose()


def create_app(
    app_settings: Settings | None = None,
    referral_service: ReferralService | None = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        app_settings: Configuration (defaults to environment settings)
        referral_service: Pre-built service, e.g. with substitute store or notifier

    Returns:
        Configured FastAPI app
    """
    app_settings = app_settings or default_settings
    is_production = app_settings.is_production

    app = FastAPI(
        title="Referral Hub API",
        description="Program referral intake",
        version=__version__,
        docs_url=None if is_production else "/api/docs",
        redoc_url=None if is_production else "/api/redoc",
        openapi_url=None if is_production else "/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.referral_service = referral_service or build_referral_service(app_settings)

    allowed_origins = [
        origin.strip()
        for origin in app_settings.allowed_origins.split(",")
        if origin.strip()
    ]

    # Block wildcard in production
    if is_production and "*" in allowed_origins:
        logger.error("cors_wildcard_blocked", message="Wildcard CORS not allowed in production")
        allowed_origins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Accept"],
        max_age=3600,
    )

    register_exception_handlers(app, expose_errors=app_settings.env == "development")

    app.include_router(referrals_router, prefix="/api")

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        try:
            app.state.referral_service.store.count()
            database = "ok"
        except StorageError:
            database = "unavailable"

        return {
            "status": "healthy" if database == "ok" else "degraded",
            "version": __version__,
            "env": app_settings.env,
            "database": database,
        }

    return app
