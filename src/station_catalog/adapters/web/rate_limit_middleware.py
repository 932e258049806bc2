"""Per-client rate limiting middleware for Starlette using throttled-py."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from throttled import RateLimiterType, Throttled, rate_limiter, store

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER_SECONDS = 60.0

# Probes from load balancers are never throttled
EXEMPT_PATHS = frozenset({"/healthz"})


def extract_client_ip(request: Request) -> str:
    """Identify the client, preferring the first X-Forwarded-For entry.

    Falls back to the direct peer address, then to "unknown".
    """
    forwarded_for = request.headers.get("X-Forwarded-For", "")
    first_hop = forwarded_for.split(",")[0].strip()
    if first_hop:
        return first_hop

    if request.client and request.client.host:
        return request.client.host

    logger.warning("Could not determine client IP, using 'unknown'")
    return "unknown"


def retry_after_seconds(result: Any) -> float:
    """Read the retry-after hint from a throttled-py result."""
    state = getattr(result, "state", None)
    retry_after = getattr(state, "retry_after", None)
    if retry_after is None:
        return DEFAULT_RETRY_AFTER_SECONDS
    return float(retry_after)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Token bucket rate limit keyed by client IP."""

    def __init__(self, app: Callable, requests_per_minute: int = 100) -> None:
        """Initialize rate limiting middleware.

        Args:
            app: The ASGI application to wrap.
            requests_per_minute: Requests allowed per client IP per minute.
        """
        super().__init__(app)
        self.requests_per_minute = requests_per_minute
        self.quota = rate_limiter.per_min(requests_per_minute, burst=requests_per_minute)
        self.rate_limiter_store = store.MemoryStore()
        logger.info(f"Rate limiting enabled: {requests_per_minute} requests per minute per IP")

    def _throttle_for(self, client_ip: str) -> Throttled:
        # Buckets live in the shared store, so a fresh Throttled per request is cheap
        return Throttled(
            key=client_ip,
            using=RateLimiterType.TOKEN_BUCKET.value,
            quota=self.quota,
            store=self.rate_limiter_store,
        )

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Reject the request with 429 once the client's bucket is empty."""
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        result = self._throttle_for(client_ip).limit()
        if result.limited:
            retry_after = retry_after_seconds(result)
            logger.warning(f"Rate limit exceeded for IP {client_ip}, retry after {retry_after}s")
            return PlainTextResponse(
                "Rate limit exceeded. Please try again later.",
                status_code=429,
                headers={"Retry-After": str(int(retry_after))},
            )

        response: Response = await call_next(request)
        return response
