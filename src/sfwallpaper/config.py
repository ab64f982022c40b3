"""Configuration models and fixed policies for sfwallpaper."""

from __future__ import annotations

import re
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_FEED = "EarthPorn"
DEFAULT_OUT_DIR = Path("/tmp")
DEFAULT_COMMAND = "feh --bg-fill {}"
PATH_PLACEHOLDER = "{}"

# Hosts that serve bare image bytes without the feed declaring a post hint.
DEFAULT_IMAGE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^https?://(?:[A-Za-z0-9-]+\.)?imgur\.com/[A-Za-z0-9]+(?:\.[A-Za-z]{3})?$"),
    re.compile(r"^https?://i\.reddituploads\.com/[A-Za-z0-9]+\?.+$"),
    re.compile(r"^https?://i\.redd\.it/[A-Za-z0-9]+\.(?:jpe?g|png|gif|webp)$", re.IGNORECASE),
)


class RetryPolicy(BaseModel):
    """Bounded exponential backoff for feed listing requests."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=4, ge=1)
    base_delay: float = Field(default=5.0, ge=0)
    multiplier: float = Field(default=2.0, ge=1)

    def delays(self) -> list[float]:
        """Sleep durations between consecutive attempts (5s, 10s, 20s by default)."""

        return [self.base_delay * self.multiplier**index for index in range(self.max_attempts - 1)]


class DisplayPolicy(BaseModel):
    """How many random picks the display command gets before giving up."""

    model_config = ConfigDict(frozen=True)

    max_attempts: int = Field(default=3, ge=1)


class FetchConfig(BaseModel):
    """HTTP settings shared by listing and image requests."""

    model_config = ConfigDict(frozen=True)

    listing_url: str = "https://www.reddit.com/r/{feed}.json"
    user_agent: str = "sfwallpaper/0.1 (random wallpaper from image feeds)"
    timeout_seconds: float = Field(default=20.0, gt=0)

    @field_validator("listing_url")
    @classmethod
    def validate_listing_url(cls, value: str) -> str:
        if "{feed}" not in value:
            raise ValueError("listing_url must contain a '{feed}' placeholder")
        return value


class RunConfig(BaseModel):
    """Everything a single wallpaper refresh needs."""

    feeds: list[str] = Field(default_factory=lambda: [DEFAULT_FEED])
    out_dir: Path = DEFAULT_OUT_DIR
    command: str = DEFAULT_COMMAND
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    retry: RetryPolicy = Field(default_factory=RetryPolicy)
    display: DisplayPolicy = Field(default_factory=DisplayPolicy)

    @field_validator("feeds")
    @classmethod
    def validate_feeds(cls, value: list[str]) -> list[str]:
        feeds = [feed.strip() for feed in value if feed.strip()]
        return feeds or [DEFAULT_FEED]

    @model_validator(mode="after")
    def validate_command(self) -> "RunConfig":
        if not self.command.strip():
            raise ValueError("command must not be empty")
        if PATH_PLACEHOLDER not in self.command:
            self.command = f"{self.command} {PATH_PLACEHOLDER}"
        return self
