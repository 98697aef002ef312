"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from dining_menu.adapters.feed_client import FeedClient
from dining_menu.adapters.feed_models import RawMeal
from dining_menu.config import Settings
from dining_menu.containers import AppContainer
from dining_menu.services.cache import InMemoryResponseCache
from dining_menu.services.meals import TaggedItemSplitter
from dining_menu.services.orchestrator import MenuService
from dining_menu.services.rendering import MenuRenderer

EASTERN = ZoneInfo("America/New_York")

# Monday, March 4 2024.
NOW = datetime(2024, 3, 4, 9, 30, tzinfo=EASTERN)


def raw_meal(
    title: str,
    startdate: str,
    enddate: str,
    description: str = "",
) -> dict[str, object]:
    """Build a feed record the way the upstream sends it."""
    return {
        "title": title,
        "startdate": startdate,
        "enddate": enddate,
        "short_time": "",
        "description": description,
        "html_description": description,
    }


def make_raw(title: str, description: str, day: int = 4) -> RawMeal:
    return RawMeal.model_validate(
        raw_meal(
            title,
            f"2024-03-{day:02d} 11:05:00",
            f"2024-03-{day:02d} 14:00:00",
            description,
        )
    )


def sample_payload() -> dict[str, object]:
    return {
        "today": {
            "data": [
                raw_meal(
                    "Breakfast",
                    "2024-03-04 07:30:00",
                    "2024-03-04 10:00:00",
                    "<br>",
                ),
                raw_meal(
                    "Lunch",
                    "2024-03-04 11:05:00",
                    "2024-03-04 14:00:00",
                    "Tomato Soup ::vegan::<br>Mac &amp; Cheese ::vegetarian::",
                ),
                raw_meal(
                    "Dinner",
                    "2024-03-04 17:00:00",
                    "2024-03-04 20:00:00",
                    "<li>Roast Chicken ::halal::</li><li>Rice ::gluten-free::</li>",
                ),
            ]
        },
        "upcoming": {
            "data": [
                raw_meal(
                    "Lunch",
                    "2024-03-05 11:05:00",
                    "2024-03-05 14:00:00",
                    "Falafel ::vegan::",
                ),
                raw_meal(
                    "Dinner",
                    "2024-03-05 17:00:00",
                    "2024-03-05 20:00:00",
                    "Lasagna",
                ),
                raw_meal(
                    "Brunch",
                    "2024-03-09 10:00:00",
                    "2024-03-09 13:30:00",
                    "Waffles<br />Fruit",
                ),
            ]
        },
        "essies": {
            "data": [
                raw_meal(
                    "Essie's",
                    "2024-03-04 08:00:00",
                    "2024-03-04 22:00:00",
                    "<b>Hours</b> 8am to 10pm <b>Special</b>: Grilled Cheese",
                )
            ]
        },
    }


@dataclass
class FakeFeedClient(FeedClient):
    """Feed client that returns a fixed payload and records queries."""

    payload: dict[str, object] = field(default_factory=sample_payload)
    error: Exception | None = None
    queries: list[str] = field(default_factory=list)

    async def fetch_menu(self, query: str) -> dict[str, object]:
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        feed_url="https://feed.test/graphql",
        timezone="America/New_York",
        cache_ttl_seconds=300,
    )


@pytest.fixture
def feed_client() -> FakeFeedClient:
    return FakeFeedClient()


@pytest.fixture
def renderer() -> MenuRenderer:
    return MenuRenderer.create()


@pytest.fixture
def menu_service(feed_client: FakeFeedClient, renderer: MenuRenderer) -> MenuService:
    return MenuService(
        feed_client=feed_client,
        renderer=renderer,
        timezone=EASTERN,
        splitter=TaggedItemSplitter(),
    )


@pytest.fixture
def container(
    settings: Settings,
    feed_client: FakeFeedClient,
    renderer: MenuRenderer,
    menu_service: MenuService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        feed_client=feed_client,
        cache=InMemoryResponseCache(),
        renderer=renderer,
        menu_service=menu_service,
        close_resources=close_resources,
    )
