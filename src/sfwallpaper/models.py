"""Domain models used by sfwallpaper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FeedItem(BaseModel):
    """One listed post: its link and the feed's own classification hint."""

    model_config = ConfigDict(frozen=True)

    url: str
    post_hint: str | None = None


class ClassifiedItem(BaseModel):
    """A feed item accepted as an image, carrying its normalized URL."""

    model_config = ConfigDict(frozen=True)

    url: str


class ListingData(BaseModel):
    children: list[Any] = Field(default_factory=list)


def _child_item(child: Any) -> FeedItem | None:
    data = child.get("data") if isinstance(child, dict) else None
    if not isinstance(data, dict):
        return None

    url = data.get("url")
    if not isinstance(url, str) or not url:
        return None

    post_hint = data.get("post_hint")
    return FeedItem(url=url, post_hint=post_hint if isinstance(post_hint, str) else None)


class Listing(BaseModel):
    """The subset of a feed listing document that sfwallpaper reads.

    Only the top-level shape is validated; malformed children are skipped one
    by one in items().
    """

    data: ListingData

    def items(self) -> list[FeedItem]:
        """Listed posts in feed order, skipping children without a string link."""

        items = (_child_item(child) for child in self.data.children)
        return [item for item in items if item is not None]


class DisplayAttempt(BaseModel):
    """One invocation of the display command."""

    path: Path
    returncode: int


class DisplayOutcome(BaseModel):
    """Result of the bounded display retry loop."""

    attempts: list[DisplayAttempt] = Field(default_factory=list)
    succeeded: bool = False

    @property
    def chosen(self) -> Path | None:
        if self.succeeded and self.attempts:
            return self.attempts[-1].path
        return None


class RunReport(BaseModel):
    """Final summary returned by refresh_wallpaper."""

    feeds: list[str]
    candidates: list[Path] = Field(default_factory=list)
    display: DisplayOutcome = Field(default_factory=DisplayOutcome)
