"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from zoneinfo import ZoneInfo

from dining_menu.adapters.feed_client import FeedClient, HttpxFeedClient
from dining_menu.config import Settings
from dining_menu.services.cache import InMemoryResponseCache, ResponseCache
from dining_menu.services.meals import item_splitter_for
from dining_menu.services.orchestrator import MenuService
from dining_menu.services.rendering import MenuRenderer


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    feed_client: FeedClient
    cache: ResponseCache
    renderer: MenuRenderer
    menu_service: MenuService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    feed_client = HttpxFeedClient.create(
        feed_url=resolved_settings.feed_url,
        timeout_seconds=resolved_settings.feed_timeout_seconds,
    )
    renderer = MenuRenderer.create()
    menu_service = MenuService(
        feed_client=feed_client,
        renderer=renderer,
        timezone=ZoneInfo(resolved_settings.timezone),
        lookahead_days=resolved_settings.lookahead_days,
        splitter=item_splitter_for(resolved_settings.feed_format),
    )

    async def close_resources() -> None:
        await feed_client.close()

    return AppContainer(
        settings=resolved_settings,
        feed_client=feed_client,
        cache=InMemoryResponseCache(),
        renderer=renderer,
        menu_service=menu_service,
        close_resources=close_resources,
    )
