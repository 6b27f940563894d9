"""
Cross-cutting HTTP policies applied before routing.

- SecurityHeadersMiddleware: conservative response headers for a JSON API.
- RateLimitMiddleware: fixed-window request budget per client address.
"""

import math
import time
from typing import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from meeting_api.core.errors import error_body

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to every response that does not set its own."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Fixed-window limiter keyed by client address.

    Only paths under `path_prefix` are counted. Counters live in this
    process; each window starts with a client's first request in it, and
    closed windows are dropped at most once per window length.
    """

    def __init__(
        self,
        app: ASGIApp,
        max_requests: int,
        window_seconds: int,
        path_prefix: str = "/api",
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(app)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.path_prefix = path_prefix
        self.clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def _client_key(self, request: Request) -> str:
        return request.client.host if request.client else "unknown"

    def _hit(self, key: str) -> tuple[int, float]:
        """Count one request; return (requests in window, seconds until reset)."""
        now = self.clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)
        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0
        count += 1
        self._windows[key] = (started, count)
        return count, started + self.window_seconds - now

    def _sweep(self, now: float) -> None:
        """Forget clients whose window has closed."""
        expired = [
            key for key, (started, _) in self._windows.items()
            if now - started >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now

    def _headers(self, count: int, reset_in: float) -> dict[str, str]:
        return {
            "RateLimit-Limit": str(self.max_requests),
            "RateLimit-Remaining": str(max(0, self.max_requests - count)),
            "RateLimit-Reset": str(max(0, math.ceil(reset_in))),
        }

    async def dispatch(self, request: Request, call_next):
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        count, reset_in = self._hit(self._client_key(request))
        headers = self._headers(count, reset_in)

        if count > self.max_requests:
            headers["Retry-After"] = headers["RateLimit-Reset"]
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content=error_body(
                    "TooManyRequests",
                    "Too many requests from this IP, please try again later.",
                ),
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
