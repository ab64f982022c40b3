"""Fan out one worker thread per feed and pool their results."""

from __future__ import annotations

import logging
import queue
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from sfwallpaper.config import DEFAULT_IMAGE_PATTERNS, FetchConfig, RetryPolicy
from sfwallpaper.errors import EmptyPoolError
from sfwallpaper.store import ImageStore
from sfwallpaper.worker import ClientFactory, FeedWorker

logger = logging.getLogger(__name__)


def drain(results: queue.Queue[list[Path]]) -> list[Path]:
    """Concatenate every result currently on the channel without blocking."""

    pool: list[Path] = []
    while True:
        try:
            pool.extend(results.get_nowait())
        except queue.Empty:
            return pool


def gather_candidates(
    feeds: Iterable[str],
    store: ImageStore,
    *,
    client_factory: ClientFactory | None = None,
    config: FetchConfig | None = None,
    policy: RetryPolicy | None = None,
    patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
    sleep: Callable[[float], None] | None = None,
) -> list[Path]:
    """Run every feed concurrently and return the pooled candidate paths.

    Workers are joined before the channel is read, so every result that will
    ever be sent is already queued. Raises EmptyPoolError when nothing came back.
    """

    results: queue.Queue[list[Path]] = queue.Queue()
    patterns = tuple(patterns)
    workers = [
        FeedWorker(
            feed,
            store,
            results,
            client_factory=client_factory,
            config=config,
            policy=policy,
            patterns=patterns,
            sleep=sleep,
        )
        for feed in feeds
    ]

    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    pool = drain(results)
    logger.info("Collected %d candidate(s) from %d feed(s)", len(pool), len(workers))
    if not pool:
        raise EmptyPoolError("No images were found in any feed")
    return pool
