"""Dining calendar feed client."""

from dataclasses import dataclass
from typing import Protocol

import httpx


class FeedClient(Protocol):
    """Interface for the upstream dining calendar feed."""

    async def fetch_menu(self, query: str) -> dict[str, object]:
        """Run a feed query and return the decoded JSON body."""


@dataclass
class HttpxFeedClient(FeedClient):
    """HTTPX-backed feed client."""

    feed_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15.0

    @classmethod
    def create(cls, feed_url: str, timeout_seconds: float = 15.0) -> "HttpxFeedClient":
        """Create a feed client with a managed httpx session."""
        return cls(
            feed_url=feed_url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def fetch_menu(self, query: str) -> dict[str, object]:
        """Issue the query as a GET request."""
        response = await self.http_client.get(
            self.feed_url,
            params={"query": query},
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
