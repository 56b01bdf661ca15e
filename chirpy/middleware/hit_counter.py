"""Counts requests served by the static file server."""

import threading

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp


class HitCounter:
    """Thread-safe counter shared between the middleware and the metrics endpoints."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    def reset(self) -> None:
        with self._lock:
            self._value = 0


class HitCounterMiddleware(BaseHTTPMiddleware):
    """Increment ``counter`` for every request under ``path_prefix``."""

    def __init__(self, app: ASGIApp, counter: HitCounter, path_prefix: str = "/app"):
        super().__init__(app)
        self.counter = counter
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path == self.path_prefix or path.startswith(self.path_prefix + "/"):
            self.counter.increment()
        return await call_next(request)
