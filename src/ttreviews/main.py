"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ttreviews.config import settings
from ttreviews.db.engine import create_db_engine, create_session_factory, create_tables
from ttreviews.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=not settings.local_mode)

logger = logging.getLogger(__name__)


def build_notifier():
    """Discord webhook sink, or None when no webhook is configured."""
    if not settings.discord_webhook_url:
        return None
    from ttreviews.events.discord_notifier import DiscordWebhookNotifier

    return DiscordWebhookNotifier(
        settings.discord_webhook_url,
        site_url=settings.site_url,
        timeout=settings.discord_notification_timeout,
    )


def build_asset_store():
    if not settings.asset_dir:
        return None
    from ttreviews.services.asset_store import LocalAssetStore

    return LocalAssetStore(settings.asset_dir)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)
    await create_tables(engine)

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)
    app.state.notifier = build_notifier()
    app.state.asset_store = build_asset_store()

    logger.info(
        "TT Reviews moderation API started (db=%s, discord=%s)",
        "sqlite" if "sqlite" in db_url else "postgresql",
        "on" if app.state.notifier else "off",
    )
    yield

    await engine.dispose()
    logger.info("TT Reviews moderation API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="TT Reviews Moderation API",
        version="1.0.0",
        description="Two-moderator approval workflow for TT Reviews submissions.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from ttreviews.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from ttreviews.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from ttreviews.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
