"""Logging configuration for the application."""

import logging
import sys
from typing import Any

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Third-party loggers that are too chatty at DEBUG.
_QUIET_LOGGERS = ("asyncio", "httpx", "httpcore")


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO. Output goes to
    stdout. SQLAlchemy engine logging follows settings.database_echo.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.INFO))
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.
    """
    return logging.getLogger(name)


def log_context(**fields: Any) -> str:
    """Render fields as 'key=value' pairs for log messages, skipping None values.

    Example:
        logger.warning("Task update rejected %s", log_context(task_id=tid, actor_id=aid))
    """
    return " ".join(f"{key}={value}" for key, value in fields.items() if value is not None)
