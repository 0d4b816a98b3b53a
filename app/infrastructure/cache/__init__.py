"""Cache: Redis-backed implementation of ICacheService (task read cache)."""

from app.infrastructure.cache.redis_cache import RedisCacheService

__all__ = ["RedisCacheService"]
