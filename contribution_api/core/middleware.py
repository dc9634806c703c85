from collections import deque
from collections.abc import Awaitable
from collections.abc import Callable
from threading import RLock
from time import monotonic

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response


CONTRIBUTIONS_PATH_PREFIX = "/api/github-contributions"


class ContributionsRateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window, per-client limiter for the contribution endpoints."""

    def __init__(
        self, app, requests_per_window: int = 30, window_seconds: int = 60
    ) -> None:
        super().__init__(app)
        self.max_requests = max(1, requests_per_window)
        self.window_seconds = max(1, window_seconds)
        # One queue of request timestamps per client key.
        self._ip_buckets: dict[str, deque[float]] = {}
        self._last_sweep = 0.0
        self._lock = RLock()

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method != "GET" or not request.url.path.startswith(
            CONTRIBUTIONS_PATH_PREFIX
        ):
            return await call_next(request)

        ip = self._client_ip(request)
        retry_after = self.register_request(ip, monotonic())
        if retry_after is not None:
            logger.warning(f"Rate limit exceeded for client {ip}")
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests."},
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)

    def register_request(self, ip: str, now: float) -> int | None:
        """Count a request from `ip`; return Retry-After seconds when over the limit."""

        cutoff = now - self.window_seconds

        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._drop_idle_buckets(cutoff)
                self._last_sweep = now

            bucket = self._ip_buckets.setdefault(ip, deque())
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()

            if len(bucket) >= self.max_requests:
                return max(1, int(self.window_seconds - (now - bucket[0])))

            bucket.append(now)
            return None

    def tracked_clients(self) -> int:
        with self._lock:
            return len(self._ip_buckets)

    def _drop_idle_buckets(self, cutoff: float) -> None:
        # A bucket whose newest timestamp left the window holds nothing live.
        idle = [
            ip
            for ip, bucket in self._ip_buckets.items()
            if not bucket or bucket[-1] <= cutoff
        ]
        for ip in idle:
            del self._ip_buckets[ip]

    @staticmethod
    def _client_ip(request: Request) -> str:
        # Reverse proxies usually set X-Forwarded-For.
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip() or "unknown"

        if request.client and request.client.host:
            return request.client.host

        return "unknown"


async def log_requests(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Log every HTTP request and its response status."""

    logger.debug(f"Request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.debug(
        f"Response: {response.status_code} for {request.method} {request.url.path}"
    )
    return response
