"""Domain models for the rendered dining menu."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Meal:
    """A normalized serving period with its menu items."""

    title: str
    start: datetime
    end: datetime
    short_time: str
    short_date: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class Day:
    """Lunch-slot and dinner meals sharing a date label."""

    short_date: str
    lunch: Meal | None = None
    dinner: Meal | None = None


@dataclass(frozen=True)
class RenderModel:
    """Context handed to the page template."""

    date: str
    meals: tuple[Meal, ...]
    days: tuple[Day, ...]
    special: str | None = None

    def to_context(self) -> dict[str, object]:
        return {
            "date": self.date,
            "meals": self.meals,
            "days": self.days,
            "special": self.special,
        }
