"""Health check endpoints: liveness and readiness (database reachability)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.api.v1.dependencies import get_notification_dispatcher
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.core.config import get_settings
from app.schemas.health import HealthResponse, ReadinessResponse
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessResponse}},
)
async def readiness_check(
    dispatcher: Annotated[NotificationDispatcher, Depends(get_notification_dispatcher)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers (or none is configured); 503 otherwise."""
    from app.infrastructure.persistence import database

    database._ensure_engine()
    if database.engine is None:
        return ReadinessResponse(
            database="not_configured", pending_notifications=dispatcher.pending_count
        )
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content=ReadinessResponse(
                status="not_ready",
                database="unavailable",
                pending_notifications=dispatcher.pending_count,
            ).model_dump(),
        )
    return ReadinessResponse(
        database="ok", pending_notifications=dispatcher.pending_count
    )
