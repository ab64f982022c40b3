"""Main orchestration for sfwallpaper."""

from __future__ import annotations

import random
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from sfwallpaper.aggregator import gather_candidates
from sfwallpaper.config import DEFAULT_IMAGE_PATTERNS, RunConfig
from sfwallpaper.display import Runner, run_shell, set_wallpaper
from sfwallpaper.models import RunReport
from sfwallpaper.store import ImageStore
from sfwallpaper.worker import ClientFactory


def download_candidates(
    config: RunConfig,
    *,
    client_factory: ClientFactory | None = None,
    patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
    sleep: Callable[[float], None] | None = None,
) -> list[Path]:
    """Fetch every configured feed and return the pooled local image paths."""

    config.out_dir.mkdir(parents=True, exist_ok=True)
    return gather_candidates(
        config.feeds,
        ImageStore(config.out_dir),
        client_factory=client_factory,
        config=config.fetch,
        policy=config.retry,
        patterns=patterns,
        sleep=sleep,
    )


def refresh_wallpaper(
    config: RunConfig,
    *,
    client_factory: ClientFactory | None = None,
    rng: random.Random | None = None,
    runner: Runner = run_shell,
    sleep: Callable[[float], None] | None = None,
) -> RunReport:
    """Download candidates from all feeds and display one of them."""

    candidates = download_candidates(config, client_factory=client_factory, sleep=sleep)
    outcome = set_wallpaper(
        candidates,
        config.command,
        policy=config.display,
        rng=rng,
        runner=runner,
    )
    return RunReport(feeds=config.feeds, candidates=candidates, display=outcome)
