"""Tests for outbound link checks."""

import pytest

from landing_publisher.validation import is_https_url, is_vimeo_url


class TestIsHttpsUrl:
    """Tests for is_https_url."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com",
            "HTTPS://Example.com/path?q=1",
            "https://example.com:8443/x",
            "  https://example.com  ",
        ],
    )
    def test_accepts_https(self, url):
        """Absolute https URLs are accepted."""
        assert is_https_url(url) is True

    @pytest.mark.parametrize(
        "url",
        [
            "http://example.com",
            "//example.com",
            "example.com",
            "javascript:alert(1)",
            "ftp://example.com",
            "https://",
            "https:///path-only",
            "https://exa mple.com",
            "https://example.com:notaport",
            "",
            None,
        ],
    )
    def test_rejects_everything_else(self, url):
        """Other schemes, relative and malformed URLs are rejected."""
        assert is_https_url(url) is False


class TestIsVimeoUrl:
    """Tests for is_vimeo_url."""

    def test_vimeo_link(self):
        """Vimeo links are embeddable."""
        assert is_vimeo_url("https://vimeo.com/123") is True
        assert is_vimeo_url("https://player.vimeo.com/video/123") is True

    def test_other_hosts(self):
        """Other hosts are not."""
        assert is_vimeo_url("https://youtube.com/watch?v=1") is False
        assert is_vimeo_url(None) is False
