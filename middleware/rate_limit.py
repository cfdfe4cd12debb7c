# middleware/rate_limit.py
"""
Rate limiting for the unauthenticated account endpoints using slowapi.

Usage in route files:
    from middleware.rate_limit import limiter

    @router.post("/login")
    @limiter.limit(AUTH_LIMIT)
    def login(request: Request, ...):
        ...
"""
import logging

from fastapi import Request
from jose import jwt, JWTError
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings

logger = logging.getLogger(__name__)


def _get_rate_limit_key(request: Request) -> str:
    """
    Identify the caller for rate-limiting.

    Bearer callers are bucketed by the token subject so the limit is per-user
    regardless of IP; everyone else by client IP. The token is not verified
    here; auth is enforced separately by get_current_principal.
    """
    auth = request.headers.get("Authorization", "")
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        try:
            sub = jwt.get_unverified_claims(token).get("sub")
        except JWTError:
            sub = None
        if sub:
            return f"user:{sub}"

    return get_remote_address(request)


AUTH_LIMIT = settings.RATE_LIMIT_AUTH

limiter = Limiter(
    key_func=_get_rate_limit_key,
    enabled=settings.RATE_LIMIT_ENABLED,
    storage_uri="memory://",
    strategy="fixed-window",
)
