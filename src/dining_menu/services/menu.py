"""Aggregation of parsed meals into the page structure."""

import re
from collections.abc import Iterable
from dataclasses import replace
from zoneinfo import ZoneInfo

from dining_menu.adapters.feed_models import RawMeal
from dining_menu.domain.menu import Day, Meal
from dining_menu.services.meals import ItemSplitter, parse_meal
from dining_menu.services.text import normalize_text

SERVING_PERIODS = frozenset({"Brunch", "Lunch", "Dinner"})
LUNCH_SLOT_TITLES = frozenset({"Brunch", "Lunch"})
DINNER_SLOT_TITLES = frozenset({"Dinner"})

_BOLD_OPEN_PATTERN = re.compile(r"<b\b[^>]*>", re.IGNORECASE)
_SPECIAL_PATTERN = re.compile("special", re.IGNORECASE)


def filter_meals(
    raw_meals: Iterable[RawMeal], tz: ZoneInfo, splitter: ItemSplitter | None = None
) -> list[Meal]:
    """Parse records and keep serving periods that have items."""
    meals = [parse_meal(raw, tz, splitter) for raw in raw_meals]
    return [meal for meal in meals if meal.title in SERVING_PERIODS and meal.items]


def group_by_day(meals: Iterable[Meal]) -> list[Day]:
    """Group meals into days keyed by their short date label.

    Brunch and Lunch share the lunch slot. A later meal for an occupied slot
    replaces the earlier one.
    """
    days: dict[str, Day] = {}
    for meal in meals:
        if meal.title in LUNCH_SLOT_TITLES:
            slot = "lunch"
        elif meal.title in DINNER_SLOT_TITLES:
            slot = "dinner"
        else:
            continue
        day = days.get(meal.short_date) or Day(short_date=meal.short_date)
        days[meal.short_date] = replace(day, **{slot: meal})
    return list(days.values())


def extract_special(raw_meals: list[RawMeal]) -> str | None:
    """Return the text following "special" in the first record, if any."""
    if not raw_meals:
        return None
    segments = _BOLD_OPEN_PATTERN.split(raw_meals[0].description)
    segment = next((s for s in segments if "special" in s.lower()), None)
    if segment is None:
        return None
    parts = _SPECIAL_PATTERN.split(segment, maxsplit=1)
    remainder = parts[1] if len(parts) > 1 else ""
    return normalize_text(remainder).removeprefix(":").strip()
