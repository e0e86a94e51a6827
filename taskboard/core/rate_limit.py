import logging
import time
from dataclasses import dataclass
from typing import Dict, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from taskboard.utils.envelope import failure

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


@dataclass
class WindowState:
    window_start: float = 0.0
    window_requests: int = 0


class FixedWindowLimiter:
    """Counts requests per client in fixed windows of `window_seconds`."""

    def __init__(self, max_requests: int, window_seconds: int):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._states: Dict[str, WindowState] = {}
        self._last_prune = 0.0

    def _prune(self, current_time: float) -> None:
        # At most one sweep per window; only windows that already ended are dropped.
        if current_time - self._last_prune < self.window_seconds:
            return
        self._last_prune = current_time
        expired = [
            client for client, state in self._states.items()
            if state.window_start + self.window_seconds <= current_time
        ]
        for client in expired:
            del self._states[client]

    def hit(self, client: str, current_time: float) -> Tuple[bool, int, int]:
        """Register one request. Returns (allowed, remaining, retry_after)."""
        self._prune(current_time)
        state = self._states.setdefault(client, WindowState())

        if current_time - state.window_start >= self.window_seconds:
            state.window_start = current_time
            state.window_requests = 0

        retry_after = int(max(0, state.window_start + self.window_seconds - current_time)) or 1
        if state.window_requests >= self.max_requests:
            return False, 0, retry_after

        state.window_requests += 1
        return True, self.max_requests - state.window_requests, retry_after


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, max_requests: int, window_seconds: int, path_prefix: str = "/api"):
        super().__init__(app)
        self.limiter = FixedWindowLimiter(max_requests, window_seconds)
        self.path_prefix = path_prefix.rstrip("/") + "/"

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client = request.client.host if request.client else "unknown"
        allowed, remaining, retry_after = self.limiter.hit(client, time.monotonic())
        limit = str(self.limiter.max_requests)

        if not allowed:
            logger.warning("Rate limit exceeded for %s on %s", client, request.url.path)
            return JSONResponse(
                status_code=429,
                content=failure(RATE_LIMIT_MESSAGE),
                headers={
                    "Retry-After": str(retry_after),
                    "X-RateLimit-Limit": limit,
                    "X-RateLimit-Remaining": "0",
                },
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = limit
        response.headers["X-RateLimit-Remaining"] = str(remaining)
        return response
