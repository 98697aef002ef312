"""Menu page orchestration: query, fetch, normalize, render."""

import logging
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from zoneinfo import ZoneInfo

from dining_menu.adapters.feed_client import FeedClient
from dining_menu.adapters.feed_models import MenuFeed
from dining_menu.domain.menu import RenderModel
from dining_menu.services.meals import ItemSplitter, TaggedItemSplitter
from dining_menu.services.menu import extract_special, filter_meals, group_by_day
from dining_menu.services.rendering import MenuRenderer

DEFAULT_LOOKAHEAD_DAYS = 7
MAIN_CALENDAR = "sharples"
SPECIAL_CALENDAR = "essies"

_logger = logging.getLogger(__name__)

_EVENT_FIELDS = "data { title startdate enddate description }"


@dataclass(frozen=True)
class FeedQuery:
    """Time bounds for one feed request."""

    today_start: datetime
    today_end: datetime
    upcoming_start: datetime
    upcoming_end: datetime

    def to_graphql(self) -> str:
        """Render the query with ISO-8601 bounds for each sub-feed."""
        today = _events_selection(MAIN_CALENDAR, self.today_start, self.today_end)
        upcoming = _events_selection(
            MAIN_CALENDAR, self.upcoming_start, self.upcoming_end
        )
        essies = _events_selection(SPECIAL_CALENDAR, self.today_start, self.today_end)
        return f"{{ today: {today} upcoming: {upcoming} essies: {essies} }}"


def _events_selection(calendar: str, start: datetime, end: datetime) -> str:
    return (
        f'events(calendar: "{calendar}", start: "{start.isoformat()}", '
        f'end: "{end.isoformat()}") {{ {_EVENT_FIELDS} }}'
    )


def _start_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time.min, tzinfo=moment.tzinfo)


def _end_of_day(moment: datetime) -> datetime:
    return datetime.combine(moment.date(), time(23, 59, 59), tzinfo=moment.tzinfo)


def build_feed_query(
    now: datetime, lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
) -> FeedQuery:
    """Build today's and the upcoming window's bounds from a single instant."""
    tomorrow = now + timedelta(days=1)
    return FeedQuery(
        today_start=_start_of_day(now),
        today_end=_end_of_day(now),
        upcoming_start=_start_of_day(tomorrow),
        upcoming_end=_end_of_day(now + timedelta(days=lookahead_days)),
    )


def format_page_date(moment: datetime) -> str:
    """Format the page heading date like ``Mar 4``."""
    return f"{moment:%b} {moment.day}"


@dataclass
class MenuService:
    """Builds the menu page for the current day."""

    feed_client: FeedClient
    renderer: MenuRenderer
    timezone: ZoneInfo
    lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS
    splitter: ItemSplitter = TaggedItemSplitter()

    def now(self) -> datetime:
        return datetime.now(tz=self.timezone)

    async def build_menu(self, now: datetime | None = None) -> RenderModel:
        """Fetch the feed and normalize every sub-feed."""
        now = now or self.now()
        query = build_feed_query(now, self.lookahead_days)
        payload = await self.feed_client.fetch_menu(query.to_graphql())
        feed = MenuFeed.model_validate(payload)

        meals = filter_meals(feed.today.data, self.timezone, self.splitter)
        upcoming = filter_meals(feed.upcoming.data, self.timezone, self.splitter)
        days = group_by_day(upcoming)
        special = extract_special(feed.essies.data)
        _logger.info(
            "Menu built: date=%s meals=%s days=%s special=%s",
            now.date().isoformat(),
            len(meals),
            len(days),
            special is not None,
        )
        return RenderModel(
            date=format_page_date(now),
            meals=tuple(meals),
            days=tuple(days),
            special=special,
        )

    async def render_page(self, now: datetime | None = None) -> str:
        """Return the rendered HTML menu page."""
        model = await self.build_menu(now)
        return self.renderer.render_menu(model)
