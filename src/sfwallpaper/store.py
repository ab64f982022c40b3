"""Content-addressed image storage keyed by source URL."""

from __future__ import annotations

import base64
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from sfwallpaper.errors import StoreError


def encode_url(url: str) -> str:
    """URL-safe base64 of the URL bytes with the '=' padding stripped."""

    return base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii").rstrip("=")


def decode_name(name: str) -> str:
    """Recover the source URL from a stored file name."""

    padding = "=" * (-len(name) % 4)
    return base64.urlsafe_b64decode(name + padding).decode("utf-8")


@dataclass(frozen=True)
class Claim:
    """Outcome of claiming a stored path.

    ``handle`` is an open binary file when this call created the path; it is
    ``None`` when the file was already on disk and should simply be reused.
    """

    path: Path
    handle: BinaryIO | None = None

    @property
    def already_present(self) -> bool:
        return self.handle is None


class ImageStore:
    """Maps URLs to files under out_dir and claims them with exclusive create."""

    def __init__(self, out_dir: Path) -> None:
        self.out_dir = out_dir

    def path_for(self, url: str) -> Path:
        return self.out_dir / encode_url(url)

    def claim(self, url: str) -> Claim:
        """Atomically create the file for url, or report that it already exists.

        Exclusive create is the only guard against two workers downloading the
        same image; there is no existence check beforehand.
        """

        path = self.path_for(url)
        try:
            handle = open(path, "xb")
        except FileExistsError:
            return Claim(path=path)
        except OSError as exc:
            raise StoreError(f"Failed to create '{path}': {exc}") from exc
        return Claim(path=path, handle=handle)
