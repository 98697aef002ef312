"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

FeedFormat = Literal["tagged", "legacy"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    feed_url: str = "https://dash.swarthmore.edu/calendar/graphql"
    timezone: str = "America/New_York"
    lookahead_days: int = 7
    feed_format: FeedFormat = "tagged"
    feed_timeout_seconds: float = 15.0
    cache_ttl_seconds: int = 300
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
