"""Shared utility tests."""
import pytest

from shared.utils import (
    calculate_exponential_backoff,
    count_pages,
    normalize_url,
    truncate,
    validate_url,
)


class TestUrlHelpers:
    """Tests for URL normalization and validation."""

    @pytest.mark.parametrize("url,expected", [
        ("HTTPS://Example.COM/news/1/", "https://example.com/news/1"),
        ("https://example.com/news?id=3", "https://example.com/news?id=3"),
        ("  https://example.com/a  ", "https://example.com/a"),
    ])
    def test_normalize_url(self, url, expected):
        assert normalize_url(url) == expected

    @pytest.mark.parametrize("url,valid", [
        ("https://example.com", True),
        ("http://example.com/a", True),
        ("ftp://example.com", False),
        ("example.com", False),
        ("", False),
    ])
    def test_validate_url(self, url, valid):
        assert validate_url(url) is valid


def test_exponential_backoff_capped():
    assert calculate_exponential_backoff(0) == 1.0
    assert calculate_exponential_backoff(3) == 8.0
    assert calculate_exponential_backoff(10) == 60.0


def test_count_pages():
    assert count_pages(0, 20) == 0
    assert count_pages(20, 20) == 1
    assert count_pages(21, 20) == 2


def test_truncate():
    assert truncate(None, 5) == ""
    assert truncate("short", 10) == "short"
    assert truncate("abcdefgh", 3) == "abc..."
