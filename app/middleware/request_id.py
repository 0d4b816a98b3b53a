"""Request ID and access-log middleware.

Forwards a client X-Request-ID when it is safe to log, otherwise generates
one; echoes it on the response and logs one line per request with method,
path, status and duration. Raw ASGI (no BaseHTTPMiddleware).
"""

import re
import time
import uuid
from typing import Callable

from app.shared.telemetry.logging import get_logger

logger = get_logger("app.access")

# Alphanumeric, hyphen, underscore only; bounded length.
REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace")
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw (stripped) if it is a safe id, else a fresh uuid4 hex."""
    candidate = (raw or "").strip()
    if _REQUEST_ID_RE.match(candidate):
        return candidate
    return uuid.uuid4().hex


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap app: set scope state request_id, echo it as header_name, log the request."""
    encoded_header = header_name.lower().encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        started = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: dict) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
                headers = [
                    (k, v) for k, v in message.get("headers", []) if k.lower() != encoded_header
                ]
                headers.append((encoded_header, request_id.encode()))
                message["headers"] = headers
            await send(message)

        try:
            await app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "%s %s status=%d duration_ms=%.1f request_id=%s",
                scope.get("method", "-"),
                scope.get("path", "-"),
                status_code,
                (time.perf_counter() - started) * 1000,
                request_id,
            )

    return asgi_app
