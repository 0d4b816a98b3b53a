"""Lifespan wiring: cache connect on startup, ordered shutdown."""

import pytest
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.lifespan import create_lifespan
from app.infrastructure.cache import redis_cache
from app.infrastructure.persistence import database


@pytest.mark.skipif(not get_settings().redis_enabled, reason="REDIS_ENABLED is off")
async def test_cache_connects_on_startup_and_closes_before_engine(monkeypatch) -> None:
    events: list[str] = []

    class _Cache:
        async def connect(self) -> None:
            events.append("connect")

        async def disconnect(self) -> None:
            events.append("disconnect")

        def is_available(self) -> bool:
            return True

    async def _dispose() -> None:
        events.append("dispose")

    monkeypatch.setattr(redis_cache, "RedisCacheService", _Cache)
    monkeypatch.setattr(database, "dispose_engine", _dispose)

    app = FastAPI()
    async with create_lifespan(app):
        assert isinstance(app.state.cache, _Cache)
        assert app.state.notification_dispatcher.pending_count == 0
    assert events == ["connect", "disconnect", "dispose"]
