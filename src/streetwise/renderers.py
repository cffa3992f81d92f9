"""
Page renderers: turn a URL into fully rendered HTML.

The crawler never talks to a browser directly. It receives a PageRenderer,
which is an async context manager owning whatever resources it needs:

    async with PlaywrightRenderer(config) as renderer:
        html = await renderer.render("https://example.com")

PlaywrightRenderer executes JavaScript in headless Chromium. HttpRenderer
fetches raw HTML with httpx and is used for static sites and tests.
"""
import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from streetwise.browser_config import BrowserConfig
from streetwise.constants import TRANSIENT_ERROR_MARKERS
from streetwise.errors import (
    BrowserLaunchError,
    CrawlerError,
    RendererNotStartedError,
    TransientFetchError,
)
from streetwise.infrastructure.proxy_manager import ProxyManager

logger = logging.getLogger(__name__)


def is_transient_error(error: BaseException) -> bool:
    """Whether an exception describes a navigation/network failure worth retrying."""
    if isinstance(error, TransientFetchError):
        return True
    message = str(error)
    return any(marker in message for marker in TRANSIENT_ERROR_MARKERS)


class PageRenderer(ABC):
    """Interface for anything that can render a URL to HTML."""

    async def start(self) -> None:
        """Acquire resources. Called once before the first render."""

    async def close(self) -> None:
        """Release resources. Safe to call more than once."""

    @abstractmethod
    async def render(self, url: str) -> str:
        """
        Render a URL and return its HTML.

        Raises:
            TransientFetchError: On timeouts and network errors
            CrawlerError: On any other render failure
        """

    @property
    def is_running(self) -> bool:
        return True

    async def __aenter__(self) -> "PageRenderer":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


class PlaywrightRenderer(PageRenderer):
    """
    Headless browser renderer.

    Each render gets its own browser context, closed afterwards, so no
    cookies or storage leak between pages. With a ProxyManager, every
    render is throttled, routed through the next proxy and given a fresh
    fingerprint; the proxy's health is updated from the outcome.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        proxy_manager: Optional[ProxyManager] = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: BrowserConfig instance with renderer settings
            proxy_manager: Optional proxy/throttle/fingerprint provider
        """
        self._config = config or BrowserConfig()
        self._proxy_manager = proxy_manager
        self._playwright = None
        self._browser = None

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def start(self) -> None:
        """Launch the browser."""
        if self._browser:
            return

        logger.info(f"Launching {self._config.browser_type} browser (headless={self._config.headless})")

        try:
            self._playwright = await async_playwright().start()
            browser_launcher = getattr(self._playwright, self._config.browser_type)
            self._browser = await browser_launcher.launch(
                headless=self._config.headless,
                args=self._config.launch_args,
            )
        except (PlaywrightError, OSError) as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e

        logger.info("Browser launched successfully")

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser:
            logger.info("Closing browser")
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    async def render(self, url: str) -> str:
        if not self._browser:
            raise RendererNotStartedError(
                "Browser is not running. Use PlaywrightRenderer as an async context manager: "
                "async with PlaywrightRenderer(config) as renderer:"
            )

        proxy = None
        context_options = {
            "viewport": self._config.viewport,
            "user_agent": self._config.user_agent,
            "locale": self._config.locale,
            "timezone_id": self._config.timezone_id,
        }

        if self._proxy_manager:
            proxy = await self._proxy_manager.get_proxy_with_rotation()
            fingerprint = self._proxy_manager.generate_browser_fingerprint()
            context_options.update(
                viewport=fingerprint.viewport,
                user_agent=fingerprint.user_agent,
                locale=fingerprint.locale,
                timezone_id=fingerprint.timezone,
                extra_http_headers={"Accept-Language": fingerprint.accept_language},
            )
            if proxy:
                context_options["proxy"] = proxy.playwright_proxy
                logger.debug(f"Rendering {url} via proxy {proxy.server}")

        context = await self._browser.new_context(**context_options)

        try:
            page = await context.new_page()
            await page.goto(
                url,
                wait_until=self._config.wait_until,
                timeout=self._config.timeout,
            )
            # Late JavaScript (lazy content, client-side routing) settles here
            if self._config.settle_time:
                await page.wait_for_timeout(self._config.settle_time)
            html = await page.content()

        except PlaywrightTimeoutError as e:
            self._report_proxy(proxy, success=False)
            raise TransientFetchError(url, f"Navigation timeout: {e}") from e

        except PlaywrightError as e:
            self._report_proxy(proxy, success=False)
            if is_transient_error(e):
                raise TransientFetchError(url, str(e)) from e
            raise CrawlerError(f"Render failed for {url}: {e}") from e

        finally:
            await context.close()

        self._report_proxy(proxy, success=True)
        return html

    def _report_proxy(self, proxy, success: bool) -> None:
        if not (self._proxy_manager and proxy):
            return
        if success:
            self._proxy_manager.mark_proxy_success(proxy.server)
        else:
            self._proxy_manager.mark_proxy_failed(proxy.server)


class HttpRenderer(PageRenderer):
    """
    Plain HTTP renderer using httpx.

    No JavaScript is executed. HTTP error statuses are not treated as
    failures; their body is returned like any other page.
    """

    def __init__(
        self,
        config: Optional[BrowserConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the renderer.

        Args:
            config: BrowserConfig supplying user agent, locale and timeout
            transport: Optional httpx transport (e.g. httpx.MockTransport)
        """
        self._config = config or BrowserConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_running(self) -> bool:
        return self._client is not None

    async def start(self) -> None:
        if self._client:
            return
        self._client = httpx.AsyncClient(
            headers={
                "User-Agent": self._config.user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": f"{self._config.locale},en;q=0.9",
            },
            timeout=self._config.timeout / 1000,
            follow_redirects=True,
            transport=self._transport,
        )

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def render(self, url: str) -> str:
        if not self._client:
            raise RendererNotStartedError(
                "HTTP client is not running. Use HttpRenderer as an async context manager."
            )

        try:
            response = await self._client.get(url)
        except httpx.TimeoutException as e:
            raise TransientFetchError(url, f"Timeout: {e}") from e
        except httpx.TransportError as e:
            raise TransientFetchError(url, f"net::ERR_CONNECTION: {e}") from e
        except httpx.HTTPError as e:
            raise CrawlerError(f"Request failed for {url}: {e}") from e

        logger.debug(f"Fetched {url} (status={response.status_code}, {len(response.content)} bytes)")
        return response.text
