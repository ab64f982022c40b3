"""Image downloading into the content-addressed store."""

from __future__ import annotations

import logging
from pathlib import Path

import httpx

from sfwallpaper.errors import DownloadError
from sfwallpaper.models import ClassifiedItem
from sfwallpaper.store import ImageStore

logger = logging.getLogger(__name__)


def download_image(item: ClassifiedItem, store: ImageStore, client: httpx.Client) -> Path:
    """Make sure item's bytes are on disk and return the stored path.

    Already-claimed paths are reused without touching the network. A fresh
    claim gets exactly one streamed GET; any failure raises DownloadError.
    The claimed file stays on disk either way, so a failed download leaves an
    empty or partial file that later runs reuse as already present; delete it
    from the output directory to fetch that image again.
    """

    claim = store.claim(item.url)
    if claim.already_present:
        logger.info("Already have %s", item.url)
        return claim.path

    with claim.handle as handle:
        try:
            with client.stream("GET", item.url) as response:
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    handle.write(chunk)
        except httpx.HTTPError as exc:
            raise DownloadError(f"Failed to download '{item.url}': {exc}") from exc
        except OSError as exc:
            raise DownloadError(f"Failed to copy '{item.url}' to '{claim.path}': {exc}") from exc

    logger.info("%s -> %s", item.url, claim.path)
    return claim.path
