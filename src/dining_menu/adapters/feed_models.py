"""Pydantic models for the upstream dining calendar feed."""

from pydantic import BaseModel, ConfigDict


class RawMeal(BaseModel):
    """Calendar entry for a single serving period."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    startdate: str
    enddate: str
    description: str = ""


class FeedResult(BaseModel):
    """One calendar sub-feed."""

    model_config = ConfigDict(extra="ignore")

    data: list[RawMeal]


class MenuFeed(BaseModel):
    """Feed payload keyed by sub-feed name."""

    model_config = ConfigDict(extra="ignore")

    today: FeedResult
    upcoming: FeedResult
    essies: FeedResult
