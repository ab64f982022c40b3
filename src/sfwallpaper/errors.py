"""Exception types raised by sfwallpaper."""

from __future__ import annotations


class SFWallpaperError(RuntimeError):
    """Base error for wallpaper fetching and display failures."""


class FetchError(SFWallpaperError):
    """Raised when a feed listing cannot be fetched or decoded after all retries."""


class InvalidUrlError(SFWallpaperError, ValueError):
    """Raised when a listed URL is not a usable http(s) URL."""


class StoreError(SFWallpaperError):
    """Raised when a content-addressed file cannot be created."""


class DownloadError(SFWallpaperError):
    """Raised when image bytes fail to download into a claimed file."""


class EmptyPoolError(SFWallpaperError):
    """Raised when no feed produced a single candidate image."""


class SpawnError(SFWallpaperError):
    """Raised when the display command cannot be launched at all."""
