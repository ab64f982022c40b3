"""Typer CLI entrypoint for sfwallpaper."""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from sfwallpaper.config import DEFAULT_COMMAND, DEFAULT_FEED, DEFAULT_OUT_DIR, RunConfig
from sfwallpaper.errors import EmptyPoolError, SpawnError
from sfwallpaper.logger import configure
from sfwallpaper.pipeline import download_candidates, refresh_wallpaper
from sfwallpaper.store import encode_url

app = typer.Typer(help="Download top images from image feeds and set a random one as the wallpaper.")

_OUT_HELP = (
    "Directory to keep the wallpapers. Files are named after their source URL and reused "
    "across runs; remove an empty or truncated file left by a failed download to fetch it again."
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output."),
) -> None:
    """sfwallpaper command group; without a command, refresh from the default feed."""

    configure("DEBUG" if verbose else "INFO")
    if ctx.invoked_subcommand is None:
        _refresh(_load_config(None, DEFAULT_OUT_DIR, DEFAULT_COMMAND))


def _load_config(feeds: list[str] | None, out: Path, cmd: str) -> RunConfig:
    try:
        return RunConfig(feeds=feeds or [DEFAULT_FEED], out_dir=out, command=cmd)
    except ValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def run(
    feeds: list[str] | None = typer.Argument(None, help=f"Feeds to pull from [default: {DEFAULT_FEED}]."),
    out: Path = typer.Option(DEFAULT_OUT_DIR, "--out", "-o", file_okay=False, help=_OUT_HELP),
    cmd: str = typer.Option(DEFAULT_COMMAND, "--cmd", "-c", help="Command that changes the wallpaper; '{}' is the image path."),
) -> None:
    """Download images and set a random one as the wallpaper."""

    _refresh(_load_config(feeds, out, cmd))


def _refresh(config: RunConfig) -> None:
    try:
        report = refresh_wallpaper(config)
    except (EmptyPoolError, SpawnError) as exc:
        typer.echo(f"Wallpaper refresh failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(
        f"Pooled {len(report.candidates)} candidate(s) from {len(report.feeds)} feed(s); "
        f"{len(report.display.attempts)} display attempt(s)."
    )
    if report.display.chosen is not None:
        typer.echo(f"Wallpaper: {report.display.chosen}")
    else:
        typer.echo("Wallpaper was not changed.", err=True)


@app.command()
def fetch(
    feeds: list[str] | None = typer.Argument(None, help=f"Feeds to pull from [default: {DEFAULT_FEED}]."),
    out: Path = typer.Option(DEFAULT_OUT_DIR, "--out", "-o", file_okay=False, help=_OUT_HELP),
) -> None:
    """Download images without changing the wallpaper and list the local files."""

    config = _load_config(feeds, out, DEFAULT_COMMAND)

    try:
        candidates = download_candidates(config)
    except EmptyPoolError as exc:
        typer.echo(f"Fetch failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    for path in candidates:
        typer.echo(str(path))


@app.command()
def encode(url: str) -> None:
    """Print the stored file name used for an image URL."""

    typer.echo(encode_url(url))
