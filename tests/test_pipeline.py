import base64
from pathlib import Path

import httpx

from sfwallpaper.config import RunConfig
from sfwallpaper.pipeline import refresh_wallpaper

_IMAGE_URL = "https://i.imgur.com/abc.jpg"


class FakeFeedSite:
    def __init__(self) -> None:
        self.image_requests: list[str] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if str(request.url) == "https://www.reddit.com/r/foo.json":
            return httpx.Response(
                200,
                json={
                    "data": {
                        "children": [
                            {"data": {"url": _IMAGE_URL, "post_hint": "image"}},
                            {"data": {"url": "https://example.com/x", "post_hint": None}},
                        ]
                    }
                },
            )
        self.image_requests.append(str(request.url))
        return httpx.Response(200, content=b"jpeg")

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


def test_refresh_wallpaper_downloads_one_image_and_displays_it(tmp_path: Path) -> None:
    site = FakeFeedSite()
    commands: list[str] = []
    config = RunConfig(feeds=["foo"], out_dir=tmp_path, command="setbg {}")

    report = refresh_wallpaper(config, client_factory=site.client, runner=lambda cmd: commands.append(cmd) or 0)

    expected_name = base64.urlsafe_b64encode(_IMAGE_URL.encode()).decode().rstrip("=")
    assert [path.name for path in tmp_path.iterdir()] == [expected_name]
    assert (tmp_path / expected_name).read_bytes() == b"jpeg"
    assert site.image_requests == [_IMAGE_URL]
    assert report.candidates == [tmp_path / expected_name]
    assert report.display.chosen == tmp_path / expected_name
    assert commands == [f"setbg {tmp_path / expected_name}"]


def test_second_run_reuses_stored_image_without_downloading(tmp_path: Path) -> None:
    config = RunConfig(feeds=["foo"], out_dir=tmp_path, command="setbg {}")
    refresh_wallpaper(config, client_factory=FakeFeedSite().client, runner=lambda cmd: 0)

    site = FakeFeedSite()
    report = refresh_wallpaper(config, client_factory=site.client, runner=lambda cmd: 0)

    assert site.image_requests == []
    assert len(report.candidates) == 1
    assert report.display.succeeded


def test_output_directory_is_created(tmp_path: Path) -> None:
    out_dir = tmp_path / "walls" / "cache"
    config = RunConfig(feeds=["foo"], out_dir=out_dir)

    report = refresh_wallpaper(config, client_factory=FakeFeedSite().client, runner=lambda cmd: 0)

    assert report.candidates[0].parent == out_dir
