"""Feed listing retrieval with bounded exponential backoff."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx
from pydantic import ValidationError

from sfwallpaper.config import FetchConfig, RetryPolicy
from sfwallpaper.errors import FetchError
from sfwallpaper.models import FeedItem, Listing

logger = logging.getLogger(__name__)


def build_client(config: FetchConfig | None = None) -> httpx.Client:
    """HTTP client used for both listings and image bodies."""

    config = config or FetchConfig()
    return httpx.Client(
        timeout=config.timeout_seconds,
        follow_redirects=True,
        headers={"User-Agent": config.user_agent},
    )


class FeedFetcher:
    """Fetch and decode one feed's listing, retrying network and decode failures."""

    def __init__(
        self,
        client: httpx.Client,
        *,
        config: FetchConfig | None = None,
        policy: RetryPolicy | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.client = client
        self.config = config or FetchConfig()
        self.policy = policy or RetryPolicy()
        self._sleep = sleep or time.sleep

    def listing_url(self, feed: str) -> str:
        return self.config.listing_url.format(feed=feed)

    def _fetch_once(self, url: str) -> list[FeedItem]:
        response = self.client.get(url)
        response.raise_for_status()
        return Listing.model_validate(response.json()).items()

    def fetch(self, feed: str) -> list[FeedItem]:
        """Return the feed's listed posts in order, or raise FetchError when retries run out."""

        url = self.listing_url(feed)
        delays = self.policy.delays()

        for attempt in range(1, self.policy.max_attempts + 1):
            logger.info("Downloading feed %s (attempt %d/%d)", feed, attempt, self.policy.max_attempts)
            try:
                items = self._fetch_once(url)
            except (httpx.HTTPError, ValueError, ValidationError) as exc:
                if attempt > len(delays):
                    raise FetchError(
                        f"Failed to fetch feed '{feed}' after {attempt} attempt(s): {exc}"
                    ) from exc
                delay = delays[attempt - 1]
                logger.warning("Error getting feed %s: %s; retrying in %.1fs", feed, exc, delay)
                self._sleep(delay)
                continue

            logger.info("Done downloading feed %s: %d post(s)", feed, len(items))
            return items

        raise FetchError(f"Failed to fetch feed '{feed}'")
