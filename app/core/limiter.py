"""Rate limiter instance for SlowAPI.

Shared so main (app.state.limiter) and route modules use the same instance
without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Limit strings for task writes (create, update, status, assign, delete).
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)

# Login and sign-up (POST /users/login, POST /users).
LOGIN_LIMIT = "10/minute"

limit_auth = limiter.limit(LOGIN_LIMIT)
