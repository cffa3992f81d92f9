"""Validated request models for crawls and proxy management."""

from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator

from streetwise.constants import (
    DEFAULT_CRAWL_DELAY_MS,
    DEFAULT_MAX_PAGES,
    MAX_CRAWL_DELAY_MS,
    MAX_PAGES,
    MIN_CRAWL_DELAY_MS,
    MIN_PAGES,
)


class CrawlRequest(BaseModel):
    """Parameters of a single site crawl."""

    url: str = Field(description="Absolute http(s) URL to start crawling from")

    max_pages: int = Field(
        default=DEFAULT_MAX_PAGES,
        description="Maximum number of pages to crawl",
        ge=MIN_PAGES,
        le=MAX_PAGES,
    )

    include_external_links: bool = Field(
        default=False,
        description="Also queue links that leave the start URL's host",
    )

    crawl_delay: int = Field(
        default=DEFAULT_CRAWL_DELAY_MS,
        description="Pause between page fetches in milliseconds",
        ge=MIN_CRAWL_DELAY_MS,
        le=MAX_CRAWL_DELAY_MS,
    )

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, value: object) -> str:
        url = str(value or "").strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            raise ValueError(f"Invalid URL: {url!r}")
        return url

    @property
    def hostname(self) -> str:
        return urlparse(self.url).hostname or ""


class ProxyRequest(BaseModel):
    """A proxy definition supplied by a caller."""

    server: str = Field(min_length=1, description="host:port or full proxy URL")
    username: Optional[str] = None
    password: Optional[str] = None
    protocol: Literal["http", "https", "socks5"] = "http"
    country: Optional[str] = None

    @field_validator("server")
    @classmethod
    def strip_server(cls, value: str) -> str:
        server = value.strip()
        if not server:
            raise ValueError("Proxy server is required")
        return server


class ThrottlingRequest(BaseModel):
    """Partial update of the request throttler settings."""

    min_delay: Optional[int] = Field(default=None, ge=500, le=30000)
    max_delay: Optional[int] = Field(default=None, ge=1000, le=60000)
    requests_per_minute: Optional[int] = Field(default=None, ge=1, le=100)
    requests_per_hour: Optional[int] = Field(default=None, ge=10, le=1000)

    @model_validator(mode="after")
    def check_delay_order(self) -> "ThrottlingRequest":
        if (
            self.min_delay is not None
            and self.max_delay is not None
            and self.min_delay > self.max_delay
        ):
            raise ValueError("min_delay must not exceed max_delay")
        return self
