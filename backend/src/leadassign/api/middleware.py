"""API middleware for rate limiting and request logging.

Rate limiting uses an in-process sliding window, keyed by client and
endpoint category.
"""

import asyncio
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from ..config import get_settings
from ..logging import get_context_logger, log_api_request
from . import RateLimitError, error_response

logger = get_context_logger(__name__)

# Rate limit configurations by endpoint category
RATE_LIMITS = {
    # Format: (requests, window_seconds)
    "default": (100, 60),  # 100 requests per minute
    "intake": (5, 60),  # 5 lead submissions per minute
    "admin": (60, 60),  # 60 admin calls per minute
}

# Route patterns to rate limit categories
ROUTE_CATEGORIES = {
    "/api/v1/get-started": "intake",
    "/api/v1/admin": "admin",
}


def get_rate_limit_category(path: str) -> str:
    """Determine rate limit category for a path.

    Args:
        path: Request path

    Returns:
        Rate limit category name
    """
    for pattern, category in ROUTE_CATEGORIES.items():
        if path.startswith(pattern):
            return category
    return "default"


def get_client_identifier(request: Request) -> str:
    """Get unique identifier for rate limiting.

    Uses user ID if authenticated, otherwise falls back to IP.

    Args:
        request: FastAPI request

    Returns:
        Client identifier string
    """
    user_id = getattr(request.state, "user_id", None)
    if user_id:
        return f"user:{user_id}"

    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
    else:
        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            ip = real_ip
        elif request.client:
            ip = request.client.host
        else:
            ip = "unknown"

    return f"ip:{ip}"


class InMemoryRateLimiter:
    """Sliding window rate limiter kept in process memory.

    Keys whose windows have lapsed are swept at most every
    ``CLEANUP_INTERVAL`` seconds while requests are being checked.
    """

    CLEANUP_INTERVAL = 300

    def __init__(self):
        self._windows: dict[str, list[float]] = {}
        self._lock = asyncio.Lock()
        self._last_cleanup = time.time()

    def __len__(self) -> int:
        return len(self._windows)

    async def check_rate_limit(
        self, key: str, max_requests: int, window_seconds: int
    ) -> tuple[bool, int, int]:
        """Check if request is within rate limit.

        Args:
            key: Rate limit key (client + category)
            max_requests: Maximum requests in window
            window_seconds: Window size in seconds

        Returns:
            Tuple of (allowed, remaining, reset_seconds)
        """
        now = time.time()
        window_start = now - window_seconds

        async with self._lock:
            if now - self._last_cleanup >= self.CLEANUP_INTERVAL:
                self._sweep(now)

            timestamps = [ts for ts in self._windows.get(key, []) if ts > window_start]
            if timestamps:
                self._windows[key] = timestamps
            else:
                self._windows.pop(key, None)

            current_count = len(timestamps)
            if current_count >= max_requests:
                reset_seconds = int(min(timestamps) + window_seconds - now)
                return False, 0, max(1, reset_seconds)

            timestamps.append(now)
            self._windows[key] = timestamps
            remaining = max(0, max_requests - current_count - 1)
            return True, remaining, window_seconds

    async def cleanup(self):
        """Remove expired entries to prevent memory growth."""
        async with self._lock:
            self._sweep(time.time())

    def _sweep(self, now: float) -> None:
        # Caller holds the lock
        max_window = max(limit[1] for limit in RATE_LIMITS.values())
        for key in list(self._windows):
            self._windows[key] = [
                ts for ts in self._windows[key] if ts > now - max_window
            ]
            if not self._windows[key]:
                del self._windows[key]
        self._last_cleanup = now

    def reset(self) -> None:
        """Forget all recorded requests."""
        self._windows.clear()


_rate_limiter: InMemoryRateLimiter | None = None


def get_rate_limiter() -> InMemoryRateLimiter:
    """Get or create the process-wide rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        _rate_limiter = InMemoryRateLimiter()
    return _rate_limiter


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Middleware for API rate limiting.

    Implements sliding window rate limiting with different limits
    for different endpoint categories.
    """

    # Paths to skip rate limiting
    SKIP_PATHS = {
        "/health",
        "/docs",
        "/redoc",
        "/openapi.json",
    }

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with rate limiting.

        Args:
            request: Incoming request
            call_next: Next middleware/handler

        Returns:
            Response from handler or 429 error
        """
        if (
            not get_settings().rate_limit_enabled
            or request.url.path in self.SKIP_PATHS
            or not request.url.path.startswith("/api/")
        ):
            return await call_next(request)

        client_id = get_client_identifier(request)
        category = get_rate_limit_category(request.url.path)
        max_requests, window_seconds = RATE_LIMITS.get(category, RATE_LIMITS["default"])

        allowed, remaining, reset_seconds = await get_rate_limiter().check_rate_limit(
            f"{client_id}:{category}", max_requests, window_seconds
        )

        if not allowed:
            logger.warning(
                "rate_limit_exceeded",
                extra={
                    "client": client_id,
                    "category": category,
                    "path": request.url.path,
                },
            )
            # Exceptions raised in middleware bypass the app's handlers
            return error_response(RateLimitError(retry_after=reset_seconds))

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(max_requests)
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        response.headers["X-RateLimit-Reset"] = str(reset_seconds)

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration of each API request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            log_api_request(
                request.method,
                request.url.path,
                status_code,
                round((time.perf_counter() - start) * 1000, 2),
                user_id=getattr(request.state, "user_id", None),
            )
