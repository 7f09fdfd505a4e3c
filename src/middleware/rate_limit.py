from __future__ import annotations

import asyncio
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, Iterable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

DEFAULT_PROTECTED_PATHS = frozenset({"/submit"})


class SubmissionRateLimitMiddleware(BaseHTTPMiddleware):
    """
    Per-client sliding-window limiter for grading endpoints.

    Every submission costs two calls to the third-party execution provider,
    which throttles aggressively, so only ``protected_paths`` are counted.
    """

    def __init__(
        self,
        app,
        *,
        requests: int = 30,
        window_seconds: int = 60,
        protected_paths: Iterable[str] = DEFAULT_PROTECTED_PATHS,
        key_func: Callable[[Request], str] | None = None,
    ):
        super().__init__(app)
        self.requests = max(1, requests)
        self.window = max(1, window_seconds)
        self.protected_paths = frozenset(protected_paths)
        self.key_func = key_func or self._default_key
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._last_cleanup = time.monotonic()

    @staticmethod
    def _default_key(request: Request) -> str:
        client = request.client
        return client.host if client else "unknown"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path not in self.protected_paths:
            return await call_next(request)

        identifier = self.key_func(request)
        now = time.monotonic()
        earliest = now - self.window

        async with self._lock:
            self._maybe_cleanup(now)
            timestamps = self._hits[identifier]
            while timestamps and timestamps[0] < earliest:
                timestamps.popleft()

            if len(timestamps) >= self.requests:
                return JSONResponse(
                    {"detail": "Too many submissions. Wait a moment and try again."},
                    status_code=429,
                )
            timestamps.append(now)

        return await call_next(request)

    def _maybe_cleanup(self, now: float) -> None:
        """Drop clients with no hits inside the last two windows."""
        if now - self._last_cleanup < self.window:
            return
        cutoff = now - self.window * 2
        stale = [key for key, stamps in self._hits.items() if not stamps or stamps[-1] < cutoff]
        for key in stale:
            del self._hits[key]
        self._last_cleanup = now
