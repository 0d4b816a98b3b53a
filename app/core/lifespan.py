"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring (SRP): the notification
dispatcher and the Redis cache live on app.state for the process lifetime;
on shutdown pending notifications are drained, the cache is disconnected
and the SQL engine is disposed.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.application.services.notification_dispatcher import NotificationDispatcher
from app.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: notification dispatcher, Redis cache (if enabled). Shutdown
    order: drain notifications (bounded by notification_drain_timeout_seconds),
    cache disconnect, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.notification_dispatcher = NotificationDispatcher(
        enabled=settings.notifications_enabled
    )
    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import RedisCacheService

        cache = RedisCacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
    logger.info(
        "%s %s starting (notifications_enabled=%s, cache_available=%s)",
        settings.app_name,
        settings.app_version,
        settings.notifications_enabled,
        app.state.cache is not None and app.state.cache.is_available(),
    )

    yield

    # ---- Shutdown ----
    dispatcher: NotificationDispatcher = app.state.notification_dispatcher
    await dispatcher.drain(timeout=settings.notification_drain_timeout_seconds)

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()

    from app.infrastructure.persistence import database

    await database.dispose_engine()
