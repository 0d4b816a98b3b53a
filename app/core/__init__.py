"""Core: config, exception handlers, lifespan, rate limiter."""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
