import re

from sfwallpaper.classifier import classify, classify_items, is_valid_url, normalize_url
from sfwallpaper.models import FeedItem


def test_image_hint_is_accepted_for_any_valid_url() -> None:
    assert classify("https://example.com/some/page", "image")
    assert classify("http://example.com/", "image")


def test_invalid_urls_are_rejected_even_with_image_hint() -> None:
    assert not classify("not a url", "image")
    assert not classify("ftp://example.com/a.jpg", "image")
    assert not classify("https://", "image")
    assert not is_valid_url("/relative/path.jpg")


def test_fallback_patterns_accept_known_image_hosts() -> None:
    assert classify("https://imgur.com/abc123", None)
    assert classify("https://i.imgur.com/abc.jpg", "link")
    assert classify("https://i.reddituploads.com/abc123?fit=max&amp;h=1536", None)
    assert classify("https://i.redd.it/x9y8z7.png", None)


def test_fallback_patterns_reject_other_urls() -> None:
    assert not classify("https://example.com/x", None)
    assert not classify("https://imgur.com/a/abc123", None)
    assert not classify("https://i.reddituploads.com/abc123", None)
    assert not classify("https://i.imgur.com/abc.jpeg.html", "link")


def test_classify_accepts_a_replacement_pattern_table() -> None:
    patterns = (re.compile(r"^https://images\.example\.org/"),)

    assert classify("https://images.example.org/cat", None, patterns)
    assert not classify("https://i.imgur.com/abc.jpg", None, patterns)


def test_classify_items_normalizes_escaped_ampersands_and_keeps_order() -> None:
    items = [
        FeedItem(url="https://i.reddituploads.com/abc?w=1&amp;h=2", post_hint=None),
        FeedItem(url="https://example.com/x", post_hint=None),
        FeedItem(url="https://example.com/photo?a=1&amp;b=2", post_hint="image"),
    ]

    classified = classify_items(items)

    assert [item.url for item in classified] == [
        "https://i.reddituploads.com/abc?w=1&h=2",
        "https://example.com/photo?a=1&b=2",
    ]
    assert normalize_url(" https://a.example/?x=1&amp;y=2 ") == "https://a.example/?x=1&y=2"
