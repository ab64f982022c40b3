from pathlib import Path

import pytest
from pydantic import ValidationError

from sfwallpaper.config import DisplayPolicy, FetchConfig, RetryPolicy, RunConfig


def test_retry_policy_defaults() -> None:
    policy = RetryPolicy()
    assert policy.max_attempts == 4
    assert policy.delays() == [5.0, 10.0, 20.0]
    assert DisplayPolicy().max_attempts == 3


def test_run_config_defaults() -> None:
    config = RunConfig()
    assert config.feeds == ["EarthPorn"]
    assert config.out_dir == Path("/tmp")
    assert config.command == "feh --bg-fill {}"


def test_run_config_appends_placeholder_and_drops_blank_feeds() -> None:
    config = RunConfig(feeds=["  ", "wallpapers"], command="feh --bg-scale")
    assert config.feeds == ["wallpapers"]
    assert config.command == "feh --bg-scale {}"
    assert RunConfig(feeds=[]).feeds == ["EarthPorn"]


def test_run_config_rejects_empty_command() -> None:
    with pytest.raises(ValidationError):
        RunConfig(command="   ")


def test_fetch_config_requires_feed_placeholder() -> None:
    with pytest.raises(ValidationError):
        FetchConfig(listing_url="https://www.reddit.com/r/EarthPorn.json")


def test_retry_policy_requires_at_least_one_attempt() -> None:
    with pytest.raises(ValidationError):
        RetryPolicy(max_attempts=0)
