"""Request middleware: error boundary and cache-aside."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Protocol
from urllib.parse import parse_qsl, urlencode

from starlette.datastructures import URL
from starlette.requests import Request
from starlette.responses import HTMLResponse, Response

from dining_menu.services.cache import CachedResponse, ResponseCache

Handler = Callable[[Request], Awaitable[Response]]

_logger = logging.getLogger(__name__)


class Middleware(Protocol):
    """Wraps a handler and returns a new handler."""

    def __call__(self, handler: Handler) -> Handler:
        """Return the wrapped handler."""


def compose(handler: Handler, middlewares: Sequence[Middleware]) -> Handler:
    """Wrap a handler so the first middleware in the list runs outermost."""
    for middleware in reversed(middlewares):
        handler = middleware(handler)
    return handler


@dataclass
class ErrorBoundary(Middleware):
    """Turns any handler failure into the fixed error page."""

    error_body: str
    status_code: int = 500

    def __call__(self, handler: Handler) -> Handler:
        async def guarded(request: Request) -> Response:
            try:
                return await handler(request)
            except Exception:
                _logger.exception("Request failed: %s %s", request.method, request.url)
                return HTMLResponse(self.error_body, status_code=self.status_code)

        return guarded


def cache_key(url: URL) -> str:
    """Normalize a request URL into a cache key.

    Scheme and host are lowercased, query parameters sorted and the fragment
    dropped. Method, headers and body are not part of the key.
    """
    query = urlencode(sorted(parse_qsl(url.query, keep_blank_values=True)))
    key = f"{url.scheme.lower()}://{url.netloc.lower()}{url.path or '/'}"
    return f"{key}?{query}" if query else key


def snapshot_response(response: Response) -> CachedResponse:
    """Copy status, headers and body out of a rendered response."""
    return CachedResponse(
        status_code=response.status_code,
        headers=tuple(
            (name.decode("latin-1"), value.decode("latin-1"))
            for name, value in response.raw_headers
        ),
        body=bytes(response.body),
    )


def restore_response(cached: CachedResponse) -> Response:
    """Rebuild a response from its cached copy."""
    response = Response(content=cached.body, status_code=cached.status_code)
    response.raw_headers = [
        (name.encode("latin-1"), value.encode("latin-1"))
        for name, value in cached.headers
    ]
    return response


@dataclass
class CacheAside(Middleware):
    """Serves fresh cached responses and stores successful ones."""

    cache: ResponseCache
    ttl_seconds: int = 300
    _pending: set[asyncio.Task[None]] = field(
        default_factory=set, init=False, repr=False
    )

    def __call__(self, handler: Handler) -> Handler:
        async def cached(request: Request) -> Response:
            key = cache_key(request.url)
            hit = await self.cache.get(key)
            if hit is not None:
                _logger.debug("Cache hit: %s", key)
                return restore_response(hit)

            response = await handler(request)
            if response.status_code == 200:
                response.headers.append("Cache-Control", f"s-maxage={self.ttl_seconds}")
                self._schedule_store(key, snapshot_response(response))
            return response

        return cached

    async def wait_for_pending(self) -> None:
        """Wait for in-flight cache stores to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def _schedule_store(self, key: str, value: CachedResponse) -> None:
        task = asyncio.create_task(self.cache.set(key, value, self.ttl_seconds))
        self._pending.add(task)
        task.add_done_callback(self._store_done)

    def _store_done(self, task: "asyncio.Task[None]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            _logger.warning("Cache store failed: %s", error, exc_info=error)
        else:
            _logger.info("Cached response stored for %ss", self.ttl_seconds)
