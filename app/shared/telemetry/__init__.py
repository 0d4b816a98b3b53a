"""Shared telemetry: logging setup and helpers."""

from app.shared.telemetry.logging import get_logger, log_context, setup_logging

__all__ = [
    "get_logger",
    "log_context",
    "setup_logging",
]
