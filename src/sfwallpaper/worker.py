"""Per-feed fetch, classify and download pipeline running on its own thread."""

from __future__ import annotations

import logging
import queue
import re
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

import httpx

from sfwallpaper.classifier import classify_items
from sfwallpaper.config import DEFAULT_IMAGE_PATTERNS, FetchConfig, RetryPolicy
from sfwallpaper.errors import DownloadError, FetchError, StoreError
from sfwallpaper.fetcher import FeedFetcher, build_client
from sfwallpaper.media import download_image
from sfwallpaper.store import ImageStore

logger = logging.getLogger(__name__)

ClientFactory = Callable[[], httpx.Client]


def collect_feed(
    feed: str,
    store: ImageStore,
    client: httpx.Client,
    *,
    config: FetchConfig | None = None,
    policy: RetryPolicy | None = None,
    patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
    sleep: Callable[[float], None] | None = None,
) -> list[Path]:
    """Download one feed's images and return their local paths in listing order.

    A feed whose listing cannot be fetched contributes nothing; individual
    images that fail to store or download are dropped.
    """

    fetcher = FeedFetcher(client, config=config, policy=policy, sleep=sleep)

    try:
        items = fetcher.fetch(feed)
    except FetchError as exc:
        logger.error("Giving up on feed %s: %s", feed, exc)
        return []

    paths: list[Path] = []
    for item in classify_items(items, patterns):
        try:
            paths.append(download_image(item, store, client))
        except (StoreError, DownloadError) as exc:
            logger.warning("%s", exc)
    logger.info("Feed %s produced %d image(s)", feed, len(paths))
    return paths


class FeedWorker(threading.Thread):
    """Thread driving one feed that sends its result once on ``results``."""

    def __init__(
        self,
        feed: str,
        store: ImageStore,
        results: queue.Queue[list[Path]],
        *,
        client_factory: ClientFactory | None = None,
        config: FetchConfig | None = None,
        policy: RetryPolicy | None = None,
        patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        super().__init__(name=f"feed-{feed}", daemon=True)
        self.feed = feed
        self.store = store
        self._results = results
        self._client_factory = client_factory or (lambda: build_client(config))
        self._config = config
        self._policy = policy
        self._patterns = tuple(patterns)
        self._sleep = sleep

    def run(self) -> None:
        try:
            with self._client_factory() as client:
                paths = collect_feed(
                    self.feed,
                    self.store,
                    client,
                    config=self._config,
                    policy=self._policy,
                    patterns=self._patterns,
                    sleep=self._sleep,
                )
        except Exception:
            logger.exception("Download thread for feed %s crashed", self.feed)
            return
        self._results.put(paths)
