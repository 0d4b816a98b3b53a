"""HTTP middleware: request ID and access log.

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
