"""
Renderer configuration for Playwright-based and HTTP page fetching.

This module provides a validated Pydantic configuration model for the page
renderers and a couple of pre-configured instances.
"""
from typing import List, Literal

from pydantic import BaseModel, Field


# Desktop Chrome agent presented when no proxy fingerprint is applied
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

# Chromium flags for sandboxed/containerized hosts
DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--single-process",
    "--disable-gpu",
]


class BrowserConfig(BaseModel):
    """
    Configuration for the page renderers.

    All fields are validated by Pydantic to ensure type safety and valid values.
    """

    headless: bool = Field(
        default=True,
        description="Run browser in headless mode (no visible UI)"
    )

    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium",
        description="Browser engine to use for rendering"
    )

    timeout: int = Field(
        default=30000,
        description="Page load timeout in milliseconds",
        ge=1000,
        le=300000
    )

    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle",
        description="When to consider navigation complete"
    )

    settle_time: int = Field(
        default=2000,
        description="Extra wait after navigation for late JavaScript, in milliseconds",
        ge=0,
        le=60000
    )

    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        description="User agent for every page context"
    )

    viewport_width: int = Field(default=1920, ge=320, le=7680)
    viewport_height: int = Field(default=1080, ge=320, le=4320)

    locale: str = Field(default="en-US", description="Browser locale")

    timezone_id: str = Field(
        default="America/New_York",
        description="IANA timezone reported by the browser"
    )

    launch_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LAUNCH_ARGS),
        description="Browser launch arguments"
    )

    class Config:
        """Pydantic model configuration."""
        frozen = False
        validate_assignment = True

    @property
    def viewport(self) -> dict:
        return {"width": self.viewport_width, "height": self.viewport_height}


# --- Pre-configured Instances ---

DEFAULT_CONFIG = BrowserConfig()
"""
Default configuration: headless Chromium, networkidle, 30s timeout, 2s settle.
"""

FAST_CONFIG = BrowserConfig(
    wait_until="domcontentloaded",
    timeout=15000,
    settle_time=500,
)
"""
Fast configuration for static sites where late JavaScript does not matter.
"""
