"""Parsing of raw feed records into meals."""

import html
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from dining_menu.adapters.feed_models import RawMeal
from dining_menu.domain.menu import Meal
from dining_menu.services.text import normalize_text

_ITEM_BREAK_PATTERN = re.compile(r"<\s*/?\s*(?:br|li)\b[^>]*>", re.IGNORECASE)


class ItemSplitter(Protocol):
    """Strategy for cutting a meal description into item segments."""

    def split(self, description: str) -> list[str]:
        """Return raw item segments in feed order."""


@dataclass(frozen=True)
class TaggedItemSplitter(ItemSplitter):
    """Splits descriptions on ``<br>`` and ``<li>`` tags."""

    def split(self, description: str) -> list[str]:
        return _ITEM_BREAK_PATTERN.split(description)


@dataclass(frozen=True)
class SemicolonItemSplitter(ItemSplitter):
    """Splits entity-decoded descriptions on semicolons."""

    def split(self, description: str) -> list[str]:
        return html.unescape(description).split(";")


_SPLITTERS: dict[str, ItemSplitter] = {
    "tagged": TaggedItemSplitter(),
    "legacy": SemicolonItemSplitter(),
}


def item_splitter_for(feed_format: str) -> ItemSplitter:
    """Return the splitter for a configured feed format."""
    try:
        return _SPLITTERS[feed_format]
    except KeyError:
        raise ValueError(f"Unknown feed format: {feed_format!r}") from None


def parse_timestamp(value: str, tz: ZoneInfo) -> datetime:
    """Parse an ISO-8601 timestamp into the given zone.

    Naive timestamps are taken to already be local to ``tz``.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=tz)
    return parsed.astimezone(tz)


def format_clock(moment: datetime) -> str:
    """Format a time as ``H:MM`` on a 12-hour clock without a suffix."""
    return f"{moment.hour % 12 or 12}:{moment.minute:02d}"


def format_time_range(start: datetime, end: datetime) -> str:
    return f"{format_clock(start)} to {format_clock(end)}"


def format_short_date(moment: datetime) -> str:
    """Format a date like ``Mon 3/4``."""
    return f"{moment:%a} {moment.month}/{moment.day}"


def parse_items(description: str, splitter: ItemSplitter) -> tuple[str, ...]:
    """Split and clean a description, dropping empty entries."""
    cleaned = (normalize_text(segment) for segment in splitter.split(description))
    return tuple(item for item in cleaned if item)


def parse_meal(
    raw: RawMeal, tz: ZoneInfo, splitter: ItemSplitter | None = None
) -> Meal:
    """Build a meal from one feed record.

    Raises ``ValueError`` when either timestamp is not valid ISO-8601.
    """
    start = parse_timestamp(raw.startdate, tz)
    end = parse_timestamp(raw.enddate, tz)
    return Meal(
        title=raw.title,
        start=start,
        end=end,
        short_time=format_time_range(start, end),
        short_date=format_short_date(start),
        items=parse_items(raw.description, splitter or TaggedItemSplitter()),
    )
