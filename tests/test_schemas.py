"""Tests for request validation."""

import pytest
from pydantic import ValidationError

from streetwise.schemas import CrawlRequest, ProxyRequest, ThrottlingRequest


class TestCrawlRequest:
    """Tests for CrawlRequest."""

    def test_defaults(self):
        request = CrawlRequest(url="https://www.example.com/start")

        assert request.max_pages == 10
        assert request.include_external_links is False
        assert request.crawl_delay == 1000
        assert request.hostname == "www.example.com"

    @pytest.mark.parametrize("url", ["", "example.com", "ftp://example.com", "https://", "not a url"])
    def test_invalid_url(self, url):
        with pytest.raises(ValidationError):
            CrawlRequest(url=url)

    @pytest.mark.parametrize("max_pages", [0, 51])
    def test_max_pages_bounds(self, max_pages):
        with pytest.raises(ValidationError):
            CrawlRequest(url="https://example.com", max_pages=max_pages)

    @pytest.mark.parametrize("delay", [99, 5001])
    def test_crawl_delay_bounds(self, delay):
        with pytest.raises(ValidationError):
            CrawlRequest(url="https://example.com", crawl_delay=delay)

    def test_bounds_inclusive(self):
        request = CrawlRequest(url="http://example.com", max_pages=50, crawl_delay=100)

        assert request.max_pages == 50
        assert request.crawl_delay == 100


class TestProxyRequest:
    """Tests for ProxyRequest."""

    def test_defaults(self):
        request = ProxyRequest(server="10.0.0.1:8080")

        assert request.protocol == "http"
        assert request.username is None

    def test_empty_server_rejected(self):
        with pytest.raises(ValidationError):
            ProxyRequest(server="")

    def test_unknown_protocol_rejected(self):
        with pytest.raises(ValidationError):
            ProxyRequest(server="10.0.0.1:8080", protocol="ftp")


class TestThrottlingRequest:
    """Tests for ThrottlingRequest."""

    def test_all_optional(self):
        request = ThrottlingRequest()

        assert request.min_delay is None
        assert request.requests_per_minute is None

    def test_min_must_not_exceed_max(self):
        with pytest.raises(ValidationError):
            ThrottlingRequest(min_delay=5000, max_delay=2000)

    @pytest.mark.parametrize("field,value", [
        ("min_delay", 499),
        ("max_delay", 60001),
        ("requests_per_minute", 0),
        ("requests_per_hour", 1001),
    ])
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            ThrottlingRequest(**{field: value})
