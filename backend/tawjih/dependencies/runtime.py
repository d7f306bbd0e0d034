"""Per-process runtime objects (rate limiter, response cache) exposed as dependencies."""

import logging

from fastapi import HTTPException, Request

from tawjih.services.cache import TTLCache
from tawjih.services.rate_limit import RateLimiter, client_ip

logger = logging.getLogger(__name__)


def get_response_cache(request: Request) -> TTLCache:
    return request.app.state.response_cache


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def enforce_rate_limit(request: Request) -> None:
    """Count the request against the caller's IP; 429 once the window is exhausted."""
    limiter = get_rate_limiter(request)
    peer = request.client.host if request.client else None
    ip = client_ip(request.headers, peer)
    if not limiter.hit(ip):
        logger.warning("Rate limit exceeded for %s on %s", ip, request.url.path)
        raise HTTPException(status_code=429, detail="Too many requests")
