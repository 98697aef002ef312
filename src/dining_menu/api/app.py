"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response

from dining_menu.api.middleware import CacheAside, ErrorBoundary, Handler, compose
from dining_menu.app_logging import configure_logging
from dining_menu.containers import AppContainer

_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def build_handler(container: AppContainer, cache_aside: CacheAside) -> Handler:
    """Compose the menu handler with its middleware, outermost first."""

    async def menu_page(request: Request) -> Response:
        html = await container.menu_service.render_page()
        return HTMLResponse(html)

    return compose(
        menu_page,
        [ErrorBoundary(error_body=container.renderer.error_page()), cache_aside],
    )


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    cache_aside = CacheAside(
        cache=container.cache, ttl_seconds=container.settings.cache_ttl_seconds
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Serving menu from %s (%s)",
            container.settings.feed_url,
            container.settings.environment,
        )
        yield
        await cache_aside.wait_for_pending()
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.container = container
    app.state.handler = build_handler(container, cache_aside)

    @app.api_route("/{path:path}", methods=_METHODS, include_in_schema=False)
    async def menu(path: str, request: Request) -> Response:
        """Serve the menu page for every path and method."""
        return await request.app.state.handler(request)

    return app
