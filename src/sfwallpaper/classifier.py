"""Decide whether a listed post links straight to image bytes."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

import httpx

from sfwallpaper.config import DEFAULT_IMAGE_PATTERNS
from sfwallpaper.errors import InvalidUrlError
from sfwallpaper.models import ClassifiedItem, FeedItem

logger = logging.getLogger(__name__)

IMAGE_POST_HINT = "image"


def normalize_url(url: str) -> str:
    """Undo the feed's HTML escaping of query-string separators."""

    return url.strip().replace("&amp;", "&")


def validate_url(url: str) -> str:
    """Return url unchanged if it is an absolute http(s) URL, else raise InvalidUrlError."""

    try:
        parsed = httpx.URL(url)
    except httpx.InvalidURL as exc:
        raise InvalidUrlError(f"Invalid URL '{url}': {exc}") from exc

    if parsed.scheme not in {"http", "https"}:
        raise InvalidUrlError(f"Unsupported URL scheme in '{url}'")
    if not parsed.host:
        raise InvalidUrlError(f"Missing host in '{url}'")
    return url


def is_valid_url(url: str) -> bool:
    try:
        validate_url(url)
    except InvalidUrlError:
        return False
    return True


def matches_image_pattern(url: str, patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS) -> bool:
    return any(pattern.search(url) for pattern in patterns)


def classify(
    url: str,
    post_hint: str | None,
    patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
) -> bool:
    """Return True when the post is an image worth downloading.

    The feed's ``post_hint`` wins when it says ``image``; otherwise the URL has
    to match one of the known bare-image hosts in ``patterns``. Unparsable URLs
    are rejected with a warning and never raise.
    """

    normalized = normalize_url(url)
    try:
        validate_url(normalized)
    except InvalidUrlError as exc:
        logger.warning("Skipping post with invalid url: %s", exc)
        return False

    if post_hint == IMAGE_POST_HINT:
        return True
    return matches_image_pattern(normalized, patterns)


def classify_items(
    items: Iterable[FeedItem],
    patterns: Iterable[re.Pattern[str]] = DEFAULT_IMAGE_PATTERNS,
) -> list[ClassifiedItem]:
    """Keep accepted items in listing order, with their URLs normalized."""

    patterns = tuple(patterns)
    return [
        ClassifiedItem(url=normalize_url(item.url))
        for item in items
        if classify(item.url, item.post_hint, patterns)
    ]
